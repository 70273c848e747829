# Copyright 2024 Heinrich Krupp
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
FastAPI dependencies for the HTTP interface.

The graph client lives on ``app.state`` for the lifetime of the app; these
dependencies hand it, and the components built on it, to each handler.
"""

import logging

from fastapi import Depends, HTTPException, Request

from ..config import Settings
from ..graph.client import GraphClient
from ..graph.recommendations import RecommendationEngine
from ..graph.repository import FollowRepository

logger = logging.getLogger(__name__)


def get_settings(request: Request) -> Settings:
    """Get the settings the app was created with."""
    return request.app.state.settings


def get_graph_client(request: Request) -> GraphClient:
    """Get the graph client opened by the app lifespan."""
    client = getattr(request.app.state, "graph_client", None)
    if client is None:
        raise HTTPException(status_code=503, detail="Graph store not initialized")
    return client


def get_follow_repository(client: GraphClient = Depends(get_graph_client)) -> FollowRepository:
    """Get a FollowRepository bound to the shared graph client."""
    return FollowRepository(client)


def get_recommendation_engine(
    client: GraphClient = Depends(get_graph_client),
    settings: Settings = Depends(get_settings),
) -> RecommendationEngine:
    """Get a RecommendationEngine bound to the shared graph client."""
    return RecommendationEngine(client, target_count=settings.recommendation.target_count)
