"""FastAPI application for the fixtures API."""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from structlog import get_logger

from partidas.config import Settings, get_settings
from partidas.database import build_engine, build_session_factory, create_schema
from partidas.services.base import create_app

from . import clubs, matches, stadiums
from .errors import install_error_handlers

logger = get_logger(__name__)


def build_app(settings: Settings | None = None) -> FastAPI:
    """Return configured FastAPI application."""

    settings = settings or get_settings()
    engine = build_engine(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        await create_schema(engine)
        logger.info("api_started", dsn_driver=engine.url.drivername)
        try:
            yield
        finally:
            await engine.dispose()
            logger.info("api_stopped")

    app = create_app("api", settings=settings, lifespan=lifespan)
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.match_write_lock = asyncio.Lock()

    install_error_handlers(app)
    app.include_router(clubs.router)
    app.include_router(stadiums.router)
    app.include_router(matches.router)
    return app
