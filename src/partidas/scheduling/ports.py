"""Store capabilities consumed by the scheduling engine and the query service."""

from __future__ import annotations

from typing import Protocol, Sequence

from partidas.domain import Club, Match, MatchDraft, MatchFilters, PageRequest, Stadium


class ClubReader(Protocol):
    """Resolves clubs by identifier."""

    async def club_by_id(self, club_id: int) -> Club | None:
        ...

    async def club_exists(self, club_id: int) -> bool:
        ...


class StadiumReader(Protocol):
    """Resolves stadiums by identifier."""

    async def stadium_by_id(self, stadium_id: int) -> Stadium | None:
        ...

    async def stadium_exists(self, stadium_id: int) -> bool:
        ...


class MatchReader(Protocol):
    """Read access to persisted matches."""

    async def match_by_id(self, match_id: int) -> Match | None:
        ...

    async def matches_where_club_is_mandante(self, club_id: int) -> Sequence[Match]:
        ...

    async def matches_where_club_is_visitante(self, club_id: int) -> Sequence[Match]:
        ...

    async def matches_at_stadium(self, stadium_id: int) -> Sequence[Match]:
        ...

    async def match_page(
        self, filters: MatchFilters, request: PageRequest
    ) -> tuple[list[Match], int]:
        """Return the requested slice ordered by id, plus the total row count."""
        ...


class MatchWriter(Protocol):
    """Write access to persisted matches. Each call commits or leaves no trace."""

    async def insert_match(self, draft: MatchDraft) -> Match:
        ...

    async def overwrite_match(self, match_id: int, draft: MatchDraft) -> Match:
        ...

    async def delete_match(self, match_id: int) -> None:
        ...


class SchedulingStore(ClubReader, StadiumReader, MatchReader, MatchWriter, Protocol):
    """Every capability the engine needs, as implemented by a concrete store."""


__all__ = [
    "ClubReader",
    "MatchReader",
    "MatchWriter",
    "SchedulingStore",
    "StadiumReader",
]
