"""
FalkorDB graph client for the follows graph.

Owns the single long-lived connection pool to the graph store. The pool is
created once at startup, verified with a connectivity probe, and released
once at shutdown. All repository reads and writes go through ``query`` and
``ro_query``, which apply the configured server-side timeout and translate
driver failures into ``StoreError``.

The pool is safe for concurrent use: each in-flight query checks out its own
connection, so concurrent requests never share a socket.
"""

import logging
from typing import Any

import redis.asyncio as aioredis
from falkordb.asyncio import FalkorDB
from redis.asyncio import BlockingConnectionPool
from redis.exceptions import RedisError

from ..errors import StoreError
from .schema import SCHEMA_STATEMENTS

logger = logging.getLogger(__name__)


class GraphClient:
    """
    Async FalkorDB client for the follows graph.

    Manages a Redis connection pool and the selected graph handle. Instances
    are created once per process and passed explicitly to every component
    that needs the store.
    """

    def __init__(
        self,
        host: str = "localhost",
        port: int = 6379,
        username: str | None = None,
        password: str | None = None,
        graph_name: str = "follows",
        max_connections: int = 16,
        query_timeout_ms: int = 30_000,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.graph_name = graph_name
        self.max_connections = max_connections
        self.query_timeout_ms = query_timeout_ms

        self._pool: BlockingConnectionPool | None = None
        self._db: FalkorDB | None = None
        self._graph = None
        self._initialized = False

    async def initialize(self) -> None:
        """Initialize connection pool, select graph, and apply schema."""
        if self._initialized:
            return

        self._pool = BlockingConnectionPool(
            host=self.host,
            port=self.port,
            username=self.username,
            password=self.password,
            max_connections=self.max_connections,
            timeout=None,
            decode_responses=True,
        )

        self._db = FalkorDB(connection_pool=self._pool)
        self._graph = self._db.select_graph(self.graph_name)

        for stmt in SCHEMA_STATEMENTS:
            try:
                await self._graph.query(stmt)
            except RedisError as e:
                # Index already exists is not an error
                if "already indexed" not in str(e).lower():
                    logger.warning(f"Schema statement warning: {stmt} -> {e}")

        self._initialized = True
        logger.info(f"GraphClient initialized: {self.target}/{self.graph_name}")

    @property
    def target(self) -> str:
        """Address of the graph store, for logs and health output."""
        return f"{self.host}:{self.port}"

    @property
    def graph(self):
        """Expose graph for direct query access."""
        if self._graph is None:
            raise RuntimeError("GraphClient not initialized. Call initialize() first.")
        return self._graph

    async def verify_connectivity(self) -> None:
        """
        Probe the store with PING.

        Raises:
            StoreError: If the store cannot be reached.
        """
        if self._pool is None:
            raise RuntimeError("GraphClient not initialized. Call initialize() first.")

        conn = aioredis.Redis(connection_pool=self._pool)
        try:
            await conn.ping()
        except (RedisError, OSError) as e:
            logger.error(f"Graph store unreachable at {self.target}: {e}")
            raise StoreError("connectivity check", e) from e
        finally:
            await conn.aclose()

        logger.info(f"Graph store address: {self.target}")

    def _timeout(self) -> int | None:
        return self.query_timeout_ms or None

    async def query(self, cypher: str, params: dict[str, Any] | None = None, *, operation: str = "query"):
        """
        Run a write (or mixed) query in its own transaction.

        Args:
            cypher: Cypher statement
            params: Query parameters
            operation: Name used in logs and in the raised StoreError

        Returns:
            The FalkorDB QueryResult.

        Raises:
            StoreError: On connectivity or query failure.
        """
        try:
            return await self.graph.query(cypher, params=params, timeout=self._timeout())
        except (RedisError, OSError) as e:
            logger.error(f"Error during {operation}: {e}")
            raise StoreError(operation, e) from e

    async def ro_query(self, cypher: str, params: dict[str, Any] | None = None, *, operation: str = "query"):
        """Run a read-only query. Same contract as ``query``."""
        try:
            return await self.graph.ro_query(cypher, params=params, timeout=self._timeout())
        except (RedisError, OSError) as e:
            logger.error(f"Error during {operation}: {e}")
            raise StoreError(operation, e) from e

    async def get_graph_stats(self) -> dict[str, Any]:
        """Get graph statistics for health checks."""
        node_result = await self.ro_query("MATCH (u:User) RETURN count(u)", operation="graph stats")
        edge_result = await self.ro_query("MATCH ()-[f:FOLLOWS]->() RETURN count(f)", operation="graph stats")

        node_count = node_result.result_set[0][0] if node_result.result_set else 0
        edge_count = edge_result.result_set[0][0] if edge_result.result_set else 0

        return {
            "graph_name": self.graph_name,
            "target": self.target,
            "user_count": int(node_count),
            "follow_count": int(edge_count),
        }

    async def close(self) -> None:
        """Close the connection pool. Subsequent calls are no-ops."""
        if self._pool is not None:
            try:
                await self._pool.aclose()
                logger.info("GraphClient connection pool closed")
            except (RedisError, OSError) as e:
                logger.warning(f"Error closing GraphClient pool: {e}")
            finally:
                self._pool = None
                self._db = None
                self._graph = None
                self._initialized = False
