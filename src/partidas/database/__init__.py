"""Database utilities for the fixtures service."""

from .models import Base, Club, Match, Stadium
from .session import build_engine, build_session_factory, create_schema
from .store import SqlStore

__all__ = [
    "build_engine",
    "build_session_factory",
    "create_schema",
    "Base",
    "Club",
    "Match",
    "SqlStore",
    "Stadium",
]
