"""Error taxonomy for the follow graph repository."""


class FollowGraphError(Exception):
    """Base class for every error raised by the repository layer."""


class StoreError(FollowGraphError):
    """Raised when the graph store is unreachable or a query fails."""

    def __init__(self, operation: str, cause: BaseException | None = None):
        self.operation = operation
        self.cause = cause

        message = f"Graph store failure during {operation}"
        if cause is not None:
            message += f": {cause}"

        super().__init__(message)


class DuplicateRelationshipError(FollowGraphError):
    """Raised when a FOLLOWS edge already exists for the ordered pair."""

    def __init__(self, follower_id: int, followed_id: int):
        self.follower_id = follower_id
        self.followed_id = followed_id
        super().__init__(f"User {follower_id} already follows user {followed_id}")


class NotFoundError(FollowGraphError):
    """Raised when an entity or relationship the caller relies on is absent."""


class UserNotFoundError(NotFoundError):
    """Raised when a follow names a user node that does not exist."""

    def __init__(self, *user_ids: int):
        self.user_ids = user_ids
        ids = ", ".join(str(uid) for uid in user_ids)
        super().__init__(f"User not found: {ids}")
