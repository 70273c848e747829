"""
FastAPI application for the follows graph service.

The graph client is opened in the lifespan before the first request is
served and closed exactly once when the app shuts down, whether shutdown
is orderly, signal-triggered or caused by an error.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..config import Settings
from ..config import settings as default_settings
from ..graph.factory import create_graph_client
from .api import follows, system

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Open the graph store connection for the lifetime of the app."""
    config: Settings = app.state.settings

    # A failed connectivity probe propagates and aborts startup.
    client = await create_graph_client(config.falkordb)
    app.state.graph_client = client

    try:
        yield
    finally:
        logger.info("Shutting down follows graph service...")
        app.state.graph_client = None
        await client.close()


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """Build the FastAPI app with routers, CORS and the store lifespan."""
    app_settings = app_settings or default_settings

    app = FastAPI(
        title="Follows Graph Service",
        description="Directed follow graph: users, follows, followers and recommendations",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.state.graph_client = None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.http.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(follows.router)
    app.include_router(system.router)

    return app


app = create_app()
