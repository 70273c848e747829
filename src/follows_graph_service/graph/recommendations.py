"""
Follow recommendations.

Candidates come from two passes over the follows graph:

1. Two-hop traversal: users followed by the people ``user`` follows, minus
   anyone ``user`` already follows and ``user`` itself.
2. Backfill, only when the first pass yields fewer than ``target_count``
   candidates: every other user that ``user`` does not follow yet.

Results are a set of user ids returned as a list. There is no score or
ranking; two-hop candidates come first, in store order.
"""

import logging

from .client import GraphClient

logger = logging.getLogger(__name__)

DEFAULT_TARGET_COUNT = 10

TWO_HOP_QUERY = (
    "MATCH (u:User {id: $user_id})-[:FOLLOWS]->(:User)-[:FOLLOWS]->(rec:User) "
    "WHERE NOT (u)-[:FOLLOWS]->(rec) AND rec.id <> $user_id "
    "RETURN DISTINCT rec.id"
)

BACKFILL_QUERY = (
    "MATCH (u:User {id: $user_id}) "
    "MATCH (rec:User) "
    "WHERE rec.id <> $user_id AND NOT (u)-[:FOLLOWS]->(rec) "
    "RETURN DISTINCT rec.id"
)


class RecommendationEngine:
    """Friend-of-friend recommendations with a backfill pass."""

    def __init__(self, client: GraphClient, target_count: int = DEFAULT_TARGET_COUNT):
        self._client = client
        self.target_count = target_count

    async def get_follow_recommendations(self, user_id: int) -> list[int]:
        """
        Recommend users for ``user_id`` to follow.

        The result never contains ``user_id`` or anyone it already follows.
        It may exceed ``target_count`` when the two-hop pass alone does, and
        is shorter only when the graph has fewer eligible users.

        Raises:
            StoreError: If either pass fails. No partial result is returned.
        """
        recommendations = await self._two_hop_candidates(user_id)

        if len(recommendations) < self.target_count:
            # The remaining count is not pushed into the query: the backfill
            # scans every eligible user and duplicates are dropped below.
            backfill = await self._backfill_candidates(user_id)
            seen = set(recommendations)
            for candidate in backfill:
                if candidate not in seen:
                    seen.add(candidate)
                    recommendations.append(candidate)

        logger.debug(f"Recommended {len(recommendations)} user(s) for {user_id}")
        return recommendations

    async def _two_hop_candidates(self, user_id: int) -> list[int]:
        result = await self._client.ro_query(
            TWO_HOP_QUERY,
            params={"user_id": user_id},
            operation="two-hop recommendations",
        )
        return [int(row[0]) for row in result.result_set if row[0] is not None]

    async def _backfill_candidates(self, user_id: int) -> list[int]:
        result = await self._client.ro_query(
            BACKFILL_QUERY,
            params={"user_id": user_id},
            operation="backfill recommendations",
        )
        return [int(row[0]) for row in result.result_set if row[0] is not None]
