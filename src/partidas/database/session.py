"""Async database engine and session management."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from partidas.config import Settings, get_settings

from .models import Base


def build_engine(settings: Settings | None = None) -> AsyncEngine:
    """Create an async SQLAlchemy engine for the configured DSN."""

    settings = settings or get_settings()
    return create_async_engine(settings.database.dsn, echo=settings.database.echo)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Return a session factory whose objects stay readable after commit."""

    return async_sessionmaker(engine, expire_on_commit=False)


async def create_schema(engine: AsyncEngine) -> None:
    """Create every table that does not exist yet."""

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
