"""Structured logging for the fixtures API.

Every event is rendered as one JSON object carrying the emitting module, the
package version and the log level, so that scheduling decisions
(``match_created``, ``match_rejected`` and friends) can be filtered by field.
"""

from __future__ import annotations

import logging

import structlog

from partidas import __version__
from partidas.config import Settings, get_settings

SERVICE_NAME = "partidas"


def _add_service(
    logger: logging.Logger, method_name: str, event_dict: structlog.types.EventDict
) -> structlog.types.EventDict:
    event_dict.setdefault("service", SERVICE_NAME)
    event_dict.setdefault("version", __version__)
    return event_dict


def _get_shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
        structlog.stdlib.add_logger_name,
        _add_service,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]


def configure_logging(settings: Settings | None = None) -> None:
    """Route structlog through stdlib logging at ``settings.log_level``.

    Club and stadium names are Portuguese, so JSON output keeps non-ASCII
    characters as they are.
    """

    settings = settings or get_settings()

    structlog.configure(
        processors=[
            *_get_shared_processors(),
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(message)s",
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
