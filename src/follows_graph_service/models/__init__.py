"""Data models for the follows graph service."""

from .follow import Follow, User
from .validators import UserId, Username

__all__ = [
    "Follow",
    "User",
    "UserId",
    "Username",
]
