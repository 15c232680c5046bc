"""Store capabilities consumed by the club and stadium registry."""

from __future__ import annotations

from datetime import date
from typing import Protocol

from partidas.domain import Club, ClubFilters, PageRequest, Stadium


class ClubStore(Protocol):
    """Persistence for clubs."""

    async def club_by_id(self, club_id: int) -> Club | None:
        ...

    async def club_by_name_and_state(self, name: str, state: str) -> Club | None:
        ...

    async def insert_club(self, *, name: str, state: str, founded_on: date, active: bool) -> Club:
        ...

    async def save_club(self, club: Club) -> Club:
        ...

    async def club_page(self, filters: ClubFilters, request: PageRequest) -> tuple[list[Club], int]:
        ...


class StadiumStore(Protocol):
    """Persistence for stadiums."""

    async def stadium_by_id(self, stadium_id: int) -> Stadium | None:
        ...

    async def stadium_by_name(self, name: str) -> Stadium | None:
        ...

    async def insert_stadium(self, *, name: str) -> Stadium:
        ...

    async def save_stadium(self, stadium: Stadium) -> Stadium:
        ...

    async def stadium_page(
        self, name: str | None, request: PageRequest
    ) -> tuple[list[Stadium], int]:
        ...


__all__ = ["ClubStore", "StadiumStore"]
