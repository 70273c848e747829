"""User and Follow models.

These are both the repository's value types and the HTTP wire format.
Wire keys keep the service's established JSON names (``Id``,
``Username``, ``followerID``, ``followedID``); the snake_case field
names are accepted on input as well.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .validators import UserId, Username


class User(BaseModel):
    """A user node in the follow graph."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: UserId = Field(..., alias="Id")
    username: Username = Field("", alias="Username")


class Follow(BaseModel):
    """A directed FOLLOWS edge: ``follower_id`` follows ``followed_id``."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    follower_id: UserId = Field(..., alias="followerID")
    followed_id: UserId = Field(..., alias="followedID")

    @classmethod
    def from_row(cls, row: list) -> Follow:
        """Build a Follow from a ``[follower_id, followed_id]`` result row."""
        return cls(follower_id=int(row[0]), followed_id=int(row[1]))
