"""Main entry point for running the API server."""

import uvicorn

from partidas.config import get_settings
from partidas.logging import get_logger
from partidas.services.api.app import build_app

logger = get_logger(__name__)


def main() -> None:
    """Run the API server."""
    settings = get_settings()
    app = build_app(settings)
    logger.info("api_listening", host=settings.api.host, port=settings.api.port)
    uvicorn.run(app, host=settings.api.host, port=settings.api.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
