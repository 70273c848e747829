"""
Liveness and health endpoints.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from ...errors import StoreError
from ...graph.client import GraphClient
from ..dependencies import get_graph_client

router = APIRouter(tags=["system"])
logger = logging.getLogger(__name__)


@router.get("/test")
async def liveness() -> Response:
    """Liveness probe. Does not touch the store."""
    return Response(status_code=200)


@router.get("/health")
async def health(client: GraphClient = Depends(get_graph_client)) -> dict[str, Any]:
    """Report store reachability and graph size."""
    try:
        await client.verify_connectivity()
        stats = await client.get_graph_stats()
    except StoreError as e:
        logger.error(f"Health check failed: {e}")
        raise HTTPException(status_code=503, detail=f"Graph store unavailable: {str(e)}") from e

    return {"status": "healthy", "graph": stats}
