"""FastAPI dependencies wiring sessions, stores and services per request."""

from __future__ import annotations

from typing import AsyncIterator

from fastapi import Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from partidas.config import Settings
from partidas.database import SqlStore
from partidas.domain import PageRequest
from partidas.registry import ClubService, StadiumService
from partidas.scheduling import MatchEngine, MatchQueryService


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


async def get_session(request: Request) -> AsyncIterator[AsyncSession]:
    """Open one session per request and close it when the response is sent."""

    async with request.app.state.session_factory() as session:
        yield session


def get_store(session: AsyncSession = Depends(get_session)) -> SqlStore:
    return SqlStore(session)


def get_match_engine(
    request: Request,
    store: SqlStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> MatchEngine:
    return MatchEngine(
        store=store,
        write_lock=request.app.state.match_write_lock,
        fatigue_window_hours=settings.scheduling.fatigue_window_hours,
        civil_timezone=settings.scheduling.civil_timezone,
    )


def get_match_queries(store: SqlStore = Depends(get_store)) -> MatchQueryService:
    return MatchQueryService(store=store)


def get_club_service(store: SqlStore = Depends(get_store)) -> ClubService:
    return ClubService(store=store)


def get_stadium_service(store: SqlStore = Depends(get_store)) -> StadiumService:
    return StadiumService(store=store)


def get_page_request(
    page: int = Query(0, ge=0, description="Zero-based page number"),
    size: int | None = Query(None, ge=1, description="Items per page"),
    settings: Settings = Depends(get_app_settings),
) -> PageRequest:
    """Build page coordinates, applying the configured default and ceiling."""

    if size is None:
        size = settings.api.default_page_size
    return PageRequest(page=page, size=min(size, settings.api.max_page_size))


__all__ = [
    "get_app_settings",
    "get_club_service",
    "get_match_engine",
    "get_match_queries",
    "get_page_request",
    "get_session",
    "get_stadium_service",
    "get_store",
]
