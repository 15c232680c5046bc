"""HTTP API for clubs, stadiums and matches."""

from .app import build_app

__all__ = ["build_app"]
