"""Process entry point for the follows graph service."""

import logging

import uvicorn

from .config import settings
from .logging_config import setup_logging
from .web.app import create_app

logger = logging.getLogger(__name__)


def main():
    """Run the HTTP server until interrupted."""
    setup_logging(settings.logging.level)

    host = settings.http.host
    port = settings.http.port
    logger.info(f"Starting follows graph service on {host}:{port}")
    logger.info(f"Graph store: {settings.falkordb.host}:{settings.falkordb.port}/{settings.falkordb.graph_name}")

    # uvicorn runs the lifespan shutdown on SIGINT/SIGTERM, which closes the store connection.
    uvicorn.run(create_app(settings), host=host, port=port, log_config=None)


if __name__ == "__main__":
    main()
