"""Logging helpers for the fixtures service."""

from .setup import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
