"""Test configuration and fixtures."""

from __future__ import annotations

import asyncio
import itertools
import sys
from datetime import date, datetime
from pathlib import Path

import pytest

# Ensure the src/ directory is on sys.path so `import partidas` works without installation.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"
if SRC_PATH.exists():
    sys.path.insert(0, str(SRC_PATH))

from partidas.config.settings import ApiSettings, DatabaseSettings, SchedulingSettings, Settings  # noqa: E402
from partidas.domain import (  # noqa: E402
    Club,
    ClubFilters,
    Match,
    MatchDraft,
    MatchFilters,
    PageRequest,
    Stadium,
)
from partidas.scheduling import MatchEngine, MatchQueryService  # noqa: E402


class InMemoryStore:
    """Dict-backed store implementing every reader and writer contract.

    Each async method yields to the event loop once, the way a real store
    would suspend on I/O.
    """

    def __init__(self) -> None:
        self.clubs: dict[int, Club] = {}
        self.stadiums: dict[int, Stadium] = {}
        self.matches: dict[int, Match] = {}
        self._club_ids = itertools.count(1)
        self._stadium_ids = itertools.count(1)
        self._match_ids = itertools.count(1)

    async def _io(self) -> None:
        await asyncio.sleep(0)

    # Seeding helpers bypass every rule.

    def add_club(self, name: str, state: str, founded_on: date, active: bool = True) -> Club:
        club = Club(id=next(self._club_ids), name=name, state=state, founded_on=founded_on, active=active)
        self.clubs[club.id] = club
        return club

    def add_stadium(self, name: str) -> Stadium:
        stadium = Stadium(id=next(self._stadium_ids), name=name)
        self.stadiums[stadium.id] = stadium
        return stadium

    def add_match(
        self,
        mandante: Club,
        visitante: Club,
        stadium: Stadium,
        scheduled_at: datetime,
        goals: tuple[int, int] = (0, 0),
    ) -> Match:
        match = Match(
            id=next(self._match_ids),
            mandante_id=mandante.id,
            visitante_id=visitante.id,
            stadium_id=stadium.id,
            mandante_goals=goals[0],
            visitante_goals=goals[1],
            scheduled_at=scheduled_at,
        )
        self.matches[match.id] = match
        return match

    # Clubs

    async def club_by_id(self, club_id: int) -> Club | None:
        await self._io()
        return self.clubs.get(club_id)

    async def club_exists(self, club_id: int) -> bool:
        await self._io()
        return club_id in self.clubs

    async def club_by_name_and_state(self, name: str, state: str) -> Club | None:
        await self._io()
        for club in self.clubs.values():
            if club.name == name and club.state == state:
                return club
        return None

    async def insert_club(self, *, name: str, state: str, founded_on: date, active: bool) -> Club:
        await self._io()
        return self.add_club(name, state, founded_on, active)

    async def save_club(self, club: Club) -> Club:
        await self._io()
        self.clubs[club.id] = club
        return club

    async def club_page(self, filters: ClubFilters, request: PageRequest) -> tuple[list[Club], int]:
        await self._io()
        rows = [
            club
            for club in sorted(self.clubs.values(), key=lambda c: c.id)
            if (not filters.name or filters.name.lower() in club.name.lower())
            and (filters.state is None or club.state == filters.state)
            and (filters.active is None or club.active == filters.active)
        ]
        return rows[request.offset : request.offset + request.size], len(rows)

    # Stadiums

    async def stadium_by_id(self, stadium_id: int) -> Stadium | None:
        await self._io()
        return self.stadiums.get(stadium_id)

    async def stadium_exists(self, stadium_id: int) -> bool:
        await self._io()
        return stadium_id in self.stadiums

    async def stadium_by_name(self, name: str) -> Stadium | None:
        await self._io()
        for stadium in self.stadiums.values():
            if stadium.name == name:
                return stadium
        return None

    async def insert_stadium(self, *, name: str) -> Stadium:
        await self._io()
        return self.add_stadium(name)

    async def save_stadium(self, stadium: Stadium) -> Stadium:
        await self._io()
        self.stadiums[stadium.id] = stadium
        return stadium

    async def stadium_page(
        self, name: str | None, request: PageRequest
    ) -> tuple[list[Stadium], int]:
        await self._io()
        rows = [
            stadium
            for stadium in sorted(self.stadiums.values(), key=lambda s: s.id)
            if not name or name.lower() in stadium.name.lower()
        ]
        return rows[request.offset : request.offset + request.size], len(rows)

    # Matches

    async def match_by_id(self, match_id: int) -> Match | None:
        await self._io()
        return self.matches.get(match_id)

    async def matches_where_club_is_mandante(self, club_id: int) -> list[Match]:
        await self._io()
        return [m for m in self.matches.values() if m.mandante_id == club_id]

    async def matches_where_club_is_visitante(self, club_id: int) -> list[Match]:
        await self._io()
        return [m for m in self.matches.values() if m.visitante_id == club_id]

    async def matches_at_stadium(self, stadium_id: int) -> list[Match]:
        await self._io()
        return [m for m in self.matches.values() if m.stadium_id == stadium_id]

    async def match_page(
        self, filters: MatchFilters, request: PageRequest
    ) -> tuple[list[Match], int]:
        await self._io()
        rows = [
            match
            for match in sorted(self.matches.values(), key=lambda m: m.id)
            if (filters.mandante_id is None or match.mandante_id == filters.mandante_id)
            and (filters.visitante_id is None or match.visitante_id == filters.visitante_id)
            and (filters.stadium_id is None or match.stadium_id == filters.stadium_id)
        ]
        return rows[request.offset : request.offset + request.size], len(rows)

    async def insert_match(self, draft: MatchDraft) -> Match:
        await self._io()
        match = Match(id=next(self._match_ids), **draft.model_dump())
        self.matches[match.id] = match
        return match

    async def overwrite_match(self, match_id: int, draft: MatchDraft) -> Match:
        await self._io()
        match = Match(id=match_id, **draft.model_dump())
        self.matches[match_id] = match
        return match

    async def delete_match(self, match_id: int) -> None:
        await self._io()
        del self.matches[match_id]


@pytest.fixture
def store() -> InMemoryStore:
    """Store seeded with four clubs and two stadiums."""

    store = InMemoryStore()
    store.add_club("Corinthians", "SP", date(1910, 9, 1))
    store.add_club("São Paulo", "SP", date(1930, 1, 25))
    store.add_club("Palmeiras", "SP", date(1914, 8, 26))
    store.add_club("Santos", "SP", date(1912, 4, 14))
    store.add_stadium("Neo Química Arena")
    store.add_stadium("Morumbi")
    return store


@pytest.fixture
def engine(store: InMemoryStore) -> MatchEngine:
    return MatchEngine(store=store, write_lock=asyncio.Lock())


@pytest.fixture
def match_queries(store: InMemoryStore) -> MatchQueryService:
    return MatchQueryService(store=store)


@pytest.fixture
def api_settings() -> Settings:
    """Settings pointing at a private in-memory SQLite database."""

    return Settings(
        database=DatabaseSettings(dsn="sqlite+aiosqlite:///:memory:"),
        api=ApiSettings(default_page_size=10, max_page_size=50),
        scheduling=SchedulingSettings(),
        log_level="WARNING",
    )
