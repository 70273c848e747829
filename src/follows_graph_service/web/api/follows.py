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
Follow graph endpoints for the HTTP interface.

Provides user creation, follow/unfollow, follow checks, following and
follower listings, and follow recommendations.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.responses import PlainTextResponse

from ...errors import DuplicateRelationshipError, StoreError, UserNotFoundError
from ...graph.recommendations import RecommendationEngine
from ...graph.repository import FollowRepository
from ...models import Follow, User
from ..dependencies import get_follow_repository, get_recommendation_engine

router = APIRouter(tags=["follows"])
logger = logging.getLogger(__name__)


@router.post("/user", status_code=status.HTTP_201_CREATED)
async def add_user(
    user: User,
    repo: FollowRepository = Depends(get_follow_repository),
) -> Response:
    """Create a user node with a caller-supplied id."""
    logger.info(f"User: {user}")
    try:
        await repo.add_user(user)
    except StoreError as e:
        logger.error(f"Error creating user: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to create user: {str(e)}") from e
    return Response(status_code=status.HTTP_201_CREATED)


@router.post("/follows", response_model=Follow, status_code=status.HTTP_201_CREATED)
async def follow_user(
    follow: Follow,
    repo: FollowRepository = Depends(get_follow_repository),
) -> Follow:
    """Create a FOLLOWS edge and return it."""
    logger.info(f"Follows: {follow}")
    try:
        return await repo.follow_user(follow.follower_id, follow.followed_id)
    except (DuplicateRelationshipError, UserNotFoundError, ValueError) as e:
        logger.error(f"Error creating follow: {e}")
        raise HTTPException(status_code=400, detail=str(e)) from e
    except StoreError as e:
        logger.error(f"Error creating follow: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to create follow: {str(e)}") from e


@router.delete("/unfollow/{followedId}/{followingId}")
async def unfollow_user(
    followedId: int,
    followingId: int,
    repo: FollowRepository = Depends(get_follow_repository),
) -> Response:
    """Remove the edge followingId -> followedId. Removing a missing edge succeeds."""
    try:
        await repo.unfollow_user(Follow(follower_id=followingId, followed_id=followedId))
    except StoreError as e:
        logger.error(f"Error unfollowing user: {e}")
        raise HTTPException(status_code=400, detail=f"Failed to unfollow user: {str(e)}") from e
    return Response(status_code=status.HTTP_200_OK)


@router.get("/check-following", response_class=PlainTextResponse)
async def check_follow(
    follow: Follow,
    repo: FollowRepository = Depends(get_follow_repository),
) -> PlainTextResponse:
    """
    Check whether followerID follows followedID.

    The pair is sent as a JSON body on GET, as existing clients do.
    """
    try:
        is_following = await repo.check_follow(follow.follower_id, follow.followed_id)
    except StoreError as e:
        logger.error(f"Error checking follow: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to check follow: {str(e)}") from e

    if is_following:
        return PlainTextResponse("User is following", status_code=200)
    return PlainTextResponse("User is not following", status_code=404)


@router.get("/user/following/{user_id}", response_model=list[Follow])
@router.get("/user/{user_id}", response_model=list[Follow], include_in_schema=False)
async def get_user_following(
    user_id: int,
    repo: FollowRepository = Depends(get_follow_repository),
) -> list[Follow]:
    """List the edges of users that user_id follows."""
    try:
        return await repo.get_user_following(user_id)
    except StoreError as e:
        logger.error(f"Error fetching user following: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to fetch following: {str(e)}") from e


@router.get("/user/following-ids/{user_id}", response_model=list[int])
async def get_user_following_ids(
    user_id: int,
    repo: FollowRepository = Depends(get_follow_repository),
) -> list[int]:
    """List the ids of users that user_id follows."""
    try:
        return await repo.get_user_following_ids(user_id)
    except StoreError as e:
        logger.error(f"Error fetching user following ids: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to fetch following ids: {str(e)}") from e


@router.get("/user/followers/{user_id}", response_model=list[Follow])
async def get_user_followers(
    user_id: int,
    repo: FollowRepository = Depends(get_follow_repository),
) -> list[Follow]:
    """List the edges of users following user_id."""
    try:
        return await repo.get_user_followers(user_id)
    except StoreError as e:
        logger.error(f"Error fetching user followers: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to fetch followers: {str(e)}") from e


@router.get("/recommendation/{user_id}", response_model=list[int])
async def get_follow_recommendations(
    user_id: int,
    engine: RecommendationEngine = Depends(get_recommendation_engine),
) -> list[int]:
    """Recommend user ids for user_id to follow."""
    try:
        return await engine.get_follow_recommendations(user_id)
    except StoreError as e:
        logger.error(f"Error getting follow recommendations: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to get recommendations: {str(e)}") from e
