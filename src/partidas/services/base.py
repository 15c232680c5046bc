"""Common helpers for FastAPI-based services."""

from __future__ import annotations

from contextlib import AbstractAsyncContextManager
from typing import Callable

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from partidas import __version__
from partidas.config import Settings, get_settings
from partidas.logging import configure_logging


SERVICE_DESCRIPTION = {
    "api": "Registers clubs and stadiums and schedules matches between them.",
}


def create_app(
    service_name: str,
    settings: Settings | None = None,
    lifespan: Callable[[FastAPI], AbstractAsyncContextManager[None]] | None = None,
) -> FastAPI:
    """Create a FastAPI app configured for the given service."""

    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=f"Partidas {service_name.title()} Service",
        description=SERVICE_DESCRIPTION.get(service_name, ""),
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health", tags=["Health"])
    async def health() -> dict[str, str]:
        """Basic health endpoint."""

        return {"status": "ok", "service": service_name}

    return app
