"""
Factory for creating the graph store client.

Creates a GraphClient from FalkorDBSettings, initializes it and verifies
connectivity. A failed probe propagates: the service must not start
without a reachable store.
"""

import logging

from ..config import FalkorDBSettings
from .client import GraphClient

logger = logging.getLogger(__name__)


def build_graph_client(config: FalkorDBSettings) -> GraphClient:
    """Construct an uninitialized GraphClient from settings."""
    password = config.password.get_secret_value() if config.password else None

    return GraphClient(
        host=config.host,
        port=config.port,
        username=config.username,
        password=password,
        graph_name=config.graph_name,
        max_connections=config.max_connections,
        query_timeout_ms=config.query_timeout_ms,
    )


async def create_graph_client(config: FalkorDBSettings) -> GraphClient:
    """
    Create, initialize and verify the graph client.

    Returns:
        A connected GraphClient.

    Raises:
        StoreError: If the connectivity probe fails. Whatever initialize
            created is closed before any error propagates.
    """
    client = build_graph_client(config)

    try:
        await client.initialize()
        await client.verify_connectivity()
    except Exception:
        await client.close()
        raise

    logger.info(f"Graph layer initialized: {config.host}:{config.port}/{config.graph_name}")
    return client
