"""
Graph schema for the follows graph.

Defines the Cypher schema for FalkorDB: node label, relationship type and
indices. Schema is applied idempotently on startup.

Node Labels:
    :User     - A user, keyed by the caller-supplied ``id`` property.
                Also carries ``username``.

Relationship Types:
    :FOLLOWS  - Directed, property-less edge from follower to followed user.

Indices:
    User(id)  - Exact-match lookup used by every repository query.
"""

USER_LABEL = "User"

# Cypher statements executed idempotently on graph initialization.
SCHEMA_STATEMENTS: list[str] = [
    f"CREATE INDEX IF NOT EXISTS FOR (u:{USER_LABEL}) ON (u.id)",
]
