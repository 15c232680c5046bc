"""High-level async helpers for interacting with the persistence layer."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Club, Match, Stadium


async def _paginate(
    session: AsyncSession, stmt: Select[Any], *, offset: int, limit: int
) -> tuple[list[Any], int]:
    """Run ``stmt`` for one page and count every row it would return."""

    count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
    total = (await session.execute(count_stmt)).scalar_one()
    rows = (await session.execute(stmt.offset(offset).limit(limit))).scalars().all()
    return list(rows), total


async def get_club(session: AsyncSession, club_id: int) -> Club | None:
    """Return a club by its identifier."""

    return await session.get(Club, club_id)


async def club_exists(session: AsyncSession, club_id: int) -> bool:
    stmt = select(Club.id).where(Club.id == club_id)
    return (await session.execute(stmt)).scalar_one_or_none() is not None


async def find_club(session: AsyncSession, *, name: str, state: str) -> Club | None:
    """Return the club registered under ``name`` in ``state``."""

    stmt = select(Club).where(Club.name == name, Club.state == state)
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


async def create_club(
    session: AsyncSession,
    *,
    name: str,
    state: str,
    founded_on: date,
    active: bool,
) -> Club:
    """Persist a new club."""

    club = Club(name=name, state=state, founded_on=founded_on, active=active)
    session.add(club)
    await session.flush()
    return club


async def update_club(
    session: AsyncSession,
    *,
    club_id: int,
    name: str,
    state: str,
    founded_on: date,
    active: bool,
) -> Club | None:
    """Overwrite every mutable club field."""

    club = await session.get(Club, club_id)
    if club is None:
        return None
    club.name = name
    club.state = state
    club.founded_on = founded_on
    club.active = active
    await session.flush()
    return club


async def list_clubs(
    session: AsyncSession,
    *,
    name: str | None,
    state: str | None,
    active: bool | None,
    offset: int,
    limit: int,
) -> tuple[list[Club], int]:
    """Return a page of clubs filtered by name substring, state and status."""

    stmt = select(Club)
    if name:
        stmt = stmt.where(func.lower(Club.name).contains(name.lower(), autoescape=True))
    if state is not None:
        stmt = stmt.where(Club.state == state)
    if active is not None:
        stmt = stmt.where(Club.active.is_(active))
    return await _paginate(session, stmt.order_by(Club.id), offset=offset, limit=limit)


async def get_stadium(session: AsyncSession, stadium_id: int) -> Stadium | None:
    """Return a stadium by its identifier."""

    return await session.get(Stadium, stadium_id)


async def stadium_exists(session: AsyncSession, stadium_id: int) -> bool:
    stmt = select(Stadium.id).where(Stadium.id == stadium_id)
    return (await session.execute(stmt)).scalar_one_or_none() is not None


async def find_stadium(session: AsyncSession, *, name: str) -> Stadium | None:
    stmt = select(Stadium).where(Stadium.name == name)
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


async def create_stadium(session: AsyncSession, *, name: str) -> Stadium:
    """Persist a new stadium."""

    stadium = Stadium(name=name)
    session.add(stadium)
    await session.flush()
    return stadium


async def rename_stadium(session: AsyncSession, *, stadium_id: int, name: str) -> Stadium | None:
    stadium = await session.get(Stadium, stadium_id)
    if stadium is None:
        return None
    stadium.name = name
    await session.flush()
    return stadium


async def list_stadiums(
    session: AsyncSession, *, name: str | None, offset: int, limit: int
) -> tuple[list[Stadium], int]:
    """Return a page of stadiums whose name contains ``name``, ignoring case."""

    stmt = select(Stadium)
    if name:
        stmt = stmt.where(func.lower(Stadium.name).contains(name.lower(), autoescape=True))
    return await _paginate(session, stmt.order_by(Stadium.id), offset=offset, limit=limit)


async def get_match(session: AsyncSession, match_id: int) -> Match | None:
    """Return a match by its identifier."""

    return await session.get(Match, match_id)


async def matches_for_mandante(session: AsyncSession, club_id: int) -> list[Match]:
    stmt = select(Match).where(Match.mandante_id == club_id).order_by(Match.scheduled_at)
    return list((await session.execute(stmt)).scalars().all())


async def matches_for_visitante(session: AsyncSession, club_id: int) -> list[Match]:
    stmt = select(Match).where(Match.visitante_id == club_id).order_by(Match.scheduled_at)
    return list((await session.execute(stmt)).scalars().all())


async def matches_for_stadium(session: AsyncSession, stadium_id: int) -> list[Match]:
    stmt = select(Match).where(Match.stadium_id == stadium_id).order_by(Match.scheduled_at)
    return list((await session.execute(stmt)).scalars().all())


async def list_matches(
    session: AsyncSession,
    *,
    mandante_id: int | None,
    visitante_id: int | None,
    stadium_id: int | None,
    offset: int,
    limit: int,
) -> tuple[list[Match], int]:
    """Return a page of matches equal to every provided filter."""

    stmt = select(Match)
    if mandante_id is not None:
        stmt = stmt.where(Match.mandante_id == mandante_id)
    if visitante_id is not None:
        stmt = stmt.where(Match.visitante_id == visitante_id)
    if stadium_id is not None:
        stmt = stmt.where(Match.stadium_id == stadium_id)
    return await _paginate(session, stmt.order_by(Match.id), offset=offset, limit=limit)


async def create_match(
    session: AsyncSession,
    *,
    mandante_id: int,
    visitante_id: int,
    stadium_id: int,
    mandante_goals: int,
    visitante_goals: int,
    scheduled_at: datetime,
) -> Match:
    """Persist a validated match."""

    match = Match(
        mandante_id=mandante_id,
        visitante_id=visitante_id,
        stadium_id=stadium_id,
        mandante_goals=mandante_goals,
        visitante_goals=visitante_goals,
        scheduled_at=scheduled_at,
    )
    session.add(match)
    await session.flush()
    return match


async def update_match(
    session: AsyncSession,
    *,
    match_id: int,
    mandante_id: int,
    visitante_id: int,
    stadium_id: int,
    mandante_goals: int,
    visitante_goals: int,
    scheduled_at: datetime,
) -> Match | None:
    """Overwrite every field of an existing match."""

    match = await session.get(Match, match_id)
    if match is None:
        return None
    match.mandante_id = mandante_id
    match.visitante_id = visitante_id
    match.stadium_id = stadium_id
    match.mandante_goals = mandante_goals
    match.visitante_goals = visitante_goals
    match.scheduled_at = scheduled_at
    await session.flush()
    return match


async def delete_match(session: AsyncSession, match_id: int) -> bool:
    """Remove a match. Returns ``False`` when it did not exist."""

    match = await session.get(Match, match_id)
    if match is None:
        return False
    await session.delete(match)
    await session.flush()
    return True


__all__ = [
    "club_exists",
    "create_club",
    "create_match",
    "create_stadium",
    "delete_match",
    "find_club",
    "find_stadium",
    "get_club",
    "get_match",
    "get_stadium",
    "list_clubs",
    "list_matches",
    "list_stadiums",
    "matches_for_mandante",
    "matches_for_stadium",
    "matches_for_visitante",
    "rename_stadium",
    "stadium_exists",
    "update_club",
    "update_match",
]
