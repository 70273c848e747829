"""
Graph layer for the follows graph service.

Provides the FalkorDB-backed follow graph:
- GraphClient owns the shared connection pool and query execution
- FollowRepository mutates and queries users and FOLLOWS edges
- RecommendationEngine computes two-hop follow recommendations
"""

from .client import GraphClient
from .recommendations import RecommendationEngine
from .repository import FollowRepository

__all__ = [
    "FollowRepository",
    "GraphClient",
    "RecommendationEngine",
]
