"""Read-side service for fetching and listing matches."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from structlog import get_logger

from partidas.domain import Club, Match, MatchDetails, MatchFilters, Page, PageRequest, Stadium
from partidas.errors import Outcome, StoreError, internal, not_found
from partidas.scheduling.engine import describe_match
from partidas.scheduling.ports import ClubReader, MatchReader, StadiumReader

logger = get_logger(__name__)


class MatchQueryStore(ClubReader, StadiumReader, MatchReader, Protocol):
    """Readers needed to answer match queries."""


@dataclass(slots=True)
class MatchQueryService:
    """Fetches single matches and filtered, paginated match listings."""

    store: MatchQueryStore

    async def get_match(self, match_id: int) -> Outcome[MatchDetails]:
        try:
            match = await self.store.match_by_id(match_id)
            if match is None:
                return not_found("Match not found")
            return await self._describe(match, {}, {})
        except StoreError:
            logger.exception("match_query_failed", match_id=match_id)
            return internal()

    async def list_matches(
        self, filters: MatchFilters, request: PageRequest
    ) -> Outcome[Page[MatchDetails]]:
        """Return one page of matches equal to every non-null filter.

        Each filter id must reference an existing entity; otherwise the listing
        is rejected as not found instead of returning an empty page.
        """

        try:
            if filters.mandante_id is not None and not await self.store.club_exists(
                filters.mandante_id
            ):
                return not_found("Mandante club not found")
            if filters.visitante_id is not None and not await self.store.club_exists(
                filters.visitante_id
            ):
                return not_found("Visitante club not found")
            if filters.stadium_id is not None and not await self.store.stadium_exists(
                filters.stadium_id
            ):
                return not_found("Stadium not found")

            matches, total = await self.store.match_page(filters, request)
            clubs: dict[int, Club] = {}
            stadiums: dict[int, Stadium] = {}
            items = [await self._describe(match, clubs, stadiums) for match in matches]
        except StoreError:
            logger.exception("match_query_failed", filters=filters.model_dump())
            return internal()

        return Page[MatchDetails](items=items, page=request.page, size=request.size, total=total)

    async def _describe(
        self, match: Match, clubs: dict[int, Club], stadiums: dict[int, Stadium]
    ) -> MatchDetails:
        for club_id in (match.mandante_id, match.visitante_id):
            if club_id not in clubs:
                club = await self.store.club_by_id(club_id)
                if club is None:
                    raise StoreError(f"match {match.id} references missing club {club_id}")
                clubs[club_id] = club
        if match.stadium_id not in stadiums:
            stadium = await self.store.stadium_by_id(match.stadium_id)
            if stadium is None:
                raise StoreError(f"match {match.id} references missing stadium {match.stadium_id}")
            stadiums[match.stadium_id] = stadium
        return describe_match(
            match, clubs[match.mandante_id], clubs[match.visitante_id], stadiums[match.stadium_id]
        )


__all__ = ["MatchQueryService", "MatchQueryStore"]
