import os
import sys
from typing import Any

import pytest

# Add src directory to Python path
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(__file__)), "src"))

from follows_graph_service.errors import StoreError  # noqa: E402


class FakeResult:
    """Stand-in for a FalkorDB QueryResult."""

    def __init__(self, result_set=None, relationships_created: int = 0, relationships_deleted: int = 0):
        self.result_set = result_set if result_set is not None else []
        self.relationships_created = relationships_created
        self.relationships_deleted = relationships_deleted


class FakeGraphClient:
    """
    In-memory GraphClient double.

    Interprets repository and recommendation queries by their ``operation``
    name against a list of user nodes and a set of (follower, followed)
    edges. Operations listed in ``failing`` raise StoreError.
    """

    def __init__(self):
        self.users: list[tuple[int, str]] = []
        self.edges: set[tuple[int, int]] = set()
        self.failing: set[str] = set()
        self.closed = False
        self.graph_name = "follows"
        self.target = "fake:6379"

    # ── Test helpers ────────────────────────────────────────────────────

    def seed(self, user_ids, edges=()):
        for uid in user_ids:
            self.users.append((uid, f"user{uid}"))
        self.edges.update(edges)

    def _ids(self) -> set[int]:
        return {uid for uid, _ in self.users}

    def _following(self, uid: int) -> set[int]:
        return {dst for src, dst in self.edges if src == uid}

    # ── GraphClient surface ─────────────────────────────────────────────

    async def verify_connectivity(self) -> None:
        if "connectivity check" in self.failing:
            raise StoreError("connectivity check", ConnectionError("refused"))

    async def get_graph_stats(self) -> dict[str, Any]:
        return {
            "graph_name": self.graph_name,
            "target": self.target,
            "user_count": len(self.users),
            "follow_count": len(self.edges),
        }

    async def close(self) -> None:
        self.closed = True

    async def query(self, cypher: str, params: dict[str, Any] | None = None, *, operation: str = "query"):
        return self._dispatch(operation, params or {})

    async def ro_query(self, cypher: str, params: dict[str, Any] | None = None, *, operation: str = "query"):
        return self._dispatch(operation, params or {})

    def _dispatch(self, operation: str, params: dict[str, Any]) -> FakeResult:
        if operation in self.failing:
            raise StoreError(operation, ConnectionError("connection reset"))

        if operation == "add user":
            self.users.append((params["id"], params["username"]))
            return FakeResult()

        if operation == "follow user":
            src, dst = params["follower_id"], params["followed_id"]
            ids = [uid for uid, _ in self.users]
            matched = ids.count(src) * ids.count(dst)
            created = 0
            if matched and (src, dst) not in self.edges:
                self.edges.add((src, dst))
                created = 1
            return FakeResult([[matched]], relationships_created=created)

        if operation == "unfollow user":
            pair = (params["follower_id"], params["followed_id"])
            if pair in self.edges:
                self.edges.discard(pair)
                return FakeResult(relationships_deleted=1)
            return FakeResult(relationships_deleted=0)

        if operation == "check follow":
            pair = (params["follower_id"], params["followed_id"])
            return FakeResult([[1 if pair in self.edges else 0]])

        if operation == "get following":
            uid = params["user_id"]
            return FakeResult([[uid, dst] for dst in self._following(uid)])

        if operation == "get following ids":
            return FakeResult([[dst] for dst in self._following(params["user_id"])])

        if operation == "get followers":
            uid = params["user_id"]
            return FakeResult([[src, uid] for src, dst in self.edges if dst == uid])

        if operation == "lookup users":
            present = self._ids()
            return FakeResult([[uid] for uid in params["ids"] if uid in present])

        if operation == "two-hop recommendations":
            uid = params["user_id"]
            direct = self._following(uid)
            found = []
            for mid in direct:
                for rec in self._following(mid):
                    if rec != uid and rec not in direct and rec not in found:
                        found.append(rec)
            return FakeResult([[rec] for rec in found])

        if operation == "backfill recommendations":
            uid = params["user_id"]
            if uid not in self._ids():
                return FakeResult()
            direct = self._following(uid)
            return FakeResult([[rec] for rec in sorted(self._ids()) if rec != uid and rec not in direct])

        raise AssertionError(f"Unexpected operation: {operation}")


@pytest.fixture
def fake_client():
    """An empty in-memory graph."""
    return FakeGraphClient()
