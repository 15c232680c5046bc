"""SQLAlchemy-backed implementation of the scheduling and registry stores."""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from datetime import date
from typing import AsyncIterator

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from partidas import domain
from partidas.errors import DuplicateError, StoreError

from . import queries

logger = get_logger(__name__)


def _club(row) -> domain.Club:
    return domain.Club.model_validate(row, from_attributes=True)


def _stadium(row) -> domain.Stadium:
    return domain.Stadium.model_validate(row, from_attributes=True)


def _match(row) -> domain.Match:
    return domain.Match.model_validate(row, from_attributes=True)


class SqlStore:
    """Store bound to one session. Every write commits or rolls back on its own."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @asynccontextmanager
    async def _reading(self) -> AsyncIterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            raise StoreError(f"read failed: {exc.__class__.__name__}") from exc

    @asynccontextmanager
    async def _writing(self) -> AsyncIterator[None]:
        try:
            yield
            await self._session.commit()
        except IntegrityError as exc:
            await self._session.rollback()
            raise DuplicateError(f"write rejected by constraint: {exc.orig}") from exc
        except SQLAlchemyError as exc:
            await self._session.rollback()
            raise StoreError(f"write failed: {exc.__class__.__name__}") from exc
        except StoreError:
            await self._session.rollback()
            raise
        except asyncio.CancelledError:
            await self._session.rollback()
            logger.warning("store_write_cancelled")
            raise

    # Clubs

    async def club_by_id(self, club_id: int) -> domain.Club | None:
        async with self._reading():
            row = await queries.get_club(self._session, club_id)
        return None if row is None else _club(row)

    async def club_exists(self, club_id: int) -> bool:
        async with self._reading():
            return await queries.club_exists(self._session, club_id)

    async def club_by_name_and_state(self, name: str, state: str) -> domain.Club | None:
        async with self._reading():
            row = await queries.find_club(self._session, name=name, state=state)
        return None if row is None else _club(row)

    async def insert_club(
        self, *, name: str, state: str, founded_on: date, active: bool
    ) -> domain.Club:
        async with self._writing():
            row = await queries.create_club(
                self._session, name=name, state=state, founded_on=founded_on, active=active
            )
        return _club(row)

    async def save_club(self, club: domain.Club) -> domain.Club:
        async with self._writing():
            row = await queries.update_club(
                self._session,
                club_id=club.id,
                name=club.name,
                state=club.state,
                founded_on=club.founded_on,
                active=club.active,
            )
            if row is None:
                raise StoreError(f"club {club.id} disappeared during update")
        return _club(row)

    async def club_page(
        self, filters: domain.ClubFilters, request: domain.PageRequest
    ) -> tuple[list[domain.Club], int]:
        async with self._reading():
            rows, total = await queries.list_clubs(
                self._session,
                name=filters.name,
                state=filters.state,
                active=filters.active,
                offset=request.offset,
                limit=request.size,
            )
        return [_club(row) for row in rows], total

    # Stadiums

    async def stadium_by_id(self, stadium_id: int) -> domain.Stadium | None:
        async with self._reading():
            row = await queries.get_stadium(self._session, stadium_id)
        return None if row is None else _stadium(row)

    async def stadium_exists(self, stadium_id: int) -> bool:
        async with self._reading():
            return await queries.stadium_exists(self._session, stadium_id)

    async def stadium_by_name(self, name: str) -> domain.Stadium | None:
        async with self._reading():
            row = await queries.find_stadium(self._session, name=name)
        return None if row is None else _stadium(row)

    async def insert_stadium(self, *, name: str) -> domain.Stadium:
        async with self._writing():
            row = await queries.create_stadium(self._session, name=name)
        return _stadium(row)

    async def save_stadium(self, stadium: domain.Stadium) -> domain.Stadium:
        async with self._writing():
            row = await queries.rename_stadium(
                self._session, stadium_id=stadium.id, name=stadium.name
            )
            if row is None:
                raise StoreError(f"stadium {stadium.id} disappeared during update")
        return _stadium(row)

    async def stadium_page(
        self, name: str | None, request: domain.PageRequest
    ) -> tuple[list[domain.Stadium], int]:
        async with self._reading():
            rows, total = await queries.list_stadiums(
                self._session, name=name, offset=request.offset, limit=request.size
            )
        return [_stadium(row) for row in rows], total

    # Matches

    async def match_by_id(self, match_id: int) -> domain.Match | None:
        async with self._reading():
            row = await queries.get_match(self._session, match_id)
        return None if row is None else _match(row)

    async def matches_where_club_is_mandante(self, club_id: int) -> list[domain.Match]:
        async with self._reading():
            rows = await queries.matches_for_mandante(self._session, club_id)
        return [_match(row) for row in rows]

    async def matches_where_club_is_visitante(self, club_id: int) -> list[domain.Match]:
        async with self._reading():
            rows = await queries.matches_for_visitante(self._session, club_id)
        return [_match(row) for row in rows]

    async def matches_at_stadium(self, stadium_id: int) -> list[domain.Match]:
        async with self._reading():
            rows = await queries.matches_for_stadium(self._session, stadium_id)
        return [_match(row) for row in rows]

    async def match_page(
        self, filters: domain.MatchFilters, request: domain.PageRequest
    ) -> tuple[list[domain.Match], int]:
        async with self._reading():
            rows, total = await queries.list_matches(
                self._session,
                mandante_id=filters.mandante_id,
                visitante_id=filters.visitante_id,
                stadium_id=filters.stadium_id,
                offset=request.offset,
                limit=request.size,
            )
        return [_match(row) for row in rows], total

    async def insert_match(self, draft: domain.MatchDraft) -> domain.Match:
        async with self._writing():
            row = await queries.create_match(self._session, **draft.model_dump())
        return _match(row)

    async def overwrite_match(self, match_id: int, draft: domain.MatchDraft) -> domain.Match:
        async with self._writing():
            row = await queries.update_match(self._session, match_id=match_id, **draft.model_dump())
            if row is None:
                raise StoreError(f"match {match_id} disappeared during update")
        return _match(row)

    async def delete_match(self, match_id: int) -> None:
        async with self._writing():
            if not await queries.delete_match(self._session, match_id):
                raise StoreError(f"match {match_id} disappeared before deletion")


__all__ = ["SqlStore"]
