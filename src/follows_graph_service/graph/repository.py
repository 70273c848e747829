"""
Follow graph repository.

Single source of truth for graph mutations and point queries. Every method
runs exactly one Cypher statement, which FalkorDB executes as its own
transaction; nothing is cached between calls.

Write path:
    add_user      CREATE a :User node (duplicate ids are not rejected)
    follow_user   MATCH both endpoints + MERGE the edge, in one statement
    unfollow_user MATCH + DELETE the edge (zero matches is a no-op)

Read path (ro_query):
    check_follow, get_user_following, get_user_following_ids,
    get_user_followers
"""

import logging

from ..errors import DuplicateRelationshipError, UserNotFoundError
from ..models import Follow, User
from .client import GraphClient

logger = logging.getLogger(__name__)


class FollowRepository:
    """Users and FOLLOWS edges stored in FalkorDB."""

    def __init__(self, client: GraphClient):
        self._client = client

    # ── Write operations ────────────────────────────────────────────────

    async def add_user(self, user: User) -> None:
        """
        Persist a :User node keyed by the caller-supplied id.

        No uniqueness check is performed: adding the same id twice creates
        two nodes.
        """
        await self._client.query(
            "CREATE (u:User {id: $id, username: $username})",
            params={"id": user.id, "username": user.username},
            operation="add user",
        )
        logger.info(f"Created user {user.id} ({user.username!r})")

    async def follow_user(self, follower_id: int, followed_id: int) -> Follow:
        """
        Create a FOLLOWS edge from ``follower_id`` to ``followed_id``.

        The existence check and the insert happen in one MERGE statement, so
        two concurrent calls for the same pair cannot both create an edge.

        Returns:
            The created Follow.

        Raises:
            ValueError: If a user tries to follow themself.
            UserNotFoundError: If either endpoint node does not exist.
            DuplicateRelationshipError: If the edge already exists.
            StoreError: On store failure.
        """
        if follower_id == followed_id:
            raise ValueError("Cannot create a relationship from a user to itself")

        result = await self._client.query(
            "MATCH (follower:User {id: $follower_id}), (followed:User {id: $followed_id}) "
            "MERGE (follower)-[:FOLLOWS]->(followed) "
            "RETURN count(*)",
            params={"follower_id": follower_id, "followed_id": followed_id},
            operation="follow user",
        )

        matched = int(result.result_set[0][0]) if result.result_set else 0
        if matched == 0:
            missing = await self._missing_users(follower_id, followed_id)
            raise UserNotFoundError(*(missing or (follower_id, followed_id)))

        if result.relationships_created == 0:
            raise DuplicateRelationshipError(follower_id, followed_id)

        logger.info(f"User {follower_id} now follows {followed_id}")
        return Follow(follower_id=follower_id, followed_id=followed_id)

    async def unfollow_user(self, follow: Follow) -> int:
        """
        Delete the FOLLOWS edge described by ``follow`` if present.

        Returns:
            Number of edges removed (0 when there was nothing to delete).
        """
        result = await self._client.query(
            "MATCH (follower:User {id: $follower_id})-[r:FOLLOWS]->(followed:User {id: $followed_id}) "
            "DELETE r",
            params={"follower_id": follow.follower_id, "followed_id": follow.followed_id},
            operation="unfollow user",
        )
        deleted = int(result.relationships_deleted)
        logger.info(f"User {follow.follower_id} unfollowed {follow.followed_id} ({deleted} edge(s) removed)")
        return deleted

    # ── Read operations ─────────────────────────────────────────────────

    async def check_follow(self, follower_id: int, followed_id: int) -> bool:
        """True iff ``follower_id`` follows ``followed_id`` (direction matters)."""
        result = await self._client.ro_query(
            "MATCH (follower:User {id: $follower_id})-[:FOLLOWS]->(followed:User {id: $followed_id}) "
            "RETURN count(*)",
            params={"follower_id": follower_id, "followed_id": followed_id},
            operation="check follow",
        )
        return bool(result.result_set) and int(result.result_set[0][0]) > 0

    async def get_user_following(self, user_id: int) -> list[Follow]:
        """Outgoing edges of ``user_id``. Empty when the user follows no one."""
        result = await self._client.ro_query(
            "MATCH (u:User {id: $user_id})-[:FOLLOWS]->(f:User) RETURN u.id, f.id",
            params={"user_id": user_id},
            operation="get following",
        )
        following = [Follow.from_row(row) for row in result.result_set]
        logger.debug(f"User {user_id} follows {len(following)} user(s)")
        return following

    async def get_user_following_ids(self, user_id: int) -> list[int]:
        """Ids of the users ``user_id`` follows."""
        result = await self._client.ro_query(
            "MATCH (u:User {id: $user_id})-[:FOLLOWS]->(f:User) RETURN f.id",
            params={"user_id": user_id},
            operation="get following ids",
        )
        return [int(row[0]) for row in result.result_set]

    async def get_user_followers(self, user_id: int) -> list[Follow]:
        """Incoming edges of ``user_id``, oriented (follower, followed)."""
        result = await self._client.ro_query(
            "MATCH (u:User {id: $user_id})<-[:FOLLOWS]-(f:User) RETURN f.id, u.id",
            params={"user_id": user_id},
            operation="get followers",
        )
        followers = [Follow.from_row(row) for row in result.result_set]
        logger.debug(f"User {user_id} has {len(followers)} follower(s)")
        return followers

    async def _missing_users(self, *user_ids: int) -> list[int]:
        result = await self._client.ro_query(
            "MATCH (u:User) WHERE u.id IN $ids RETURN DISTINCT u.id",
            params={"ids": list(user_ids)},
            operation="lookup users",
        )
        found = {int(row[0]) for row in result.result_set}
        return [uid for uid in user_ids if uid not in found]
