"""
Follows graph service.

A FalkorDB-backed directed "follows" graph with follower/following queries
and two-hop follow recommendations, exposed over HTTP with FastAPI.
"""

__version__ = "1.0.0"
