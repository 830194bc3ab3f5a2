"""
Error taxonomy for the ranking cache.

Recoverable conditions (cache miss, DecodeError) are absorbed by the
services; CacheUnavailable and StoreUnavailable always reach the caller.
"""

from typing import Optional


class TeamStatsError(Exception):
    """Base class for all Team Stats errors."""

    pass


class CacheUnavailable(TeamStatsError):
    """Raised when the Redis backend cannot be reached or times out."""

    def __init__(self, operation: str, key: Optional[str] = None, error: Optional[str] = None):
        self.operation = operation
        self.key = key
        self.error = error
        detail = f"Cache operation '{operation}' failed"
        if key:
            detail += f" for key '{key}'"
        if error:
            detail += f": {error}"
        super().__init__(detail)


class StoreUnavailable(TeamStatsError):
    """Raised when the team store fails during a read or write."""

    def __init__(self, operation: str, error: Optional[str] = None):
        self.operation = operation
        self.error = error
        detail = f"Store operation '{operation}' failed"
        if error:
            detail += f": {error}"
        super().__init__(detail)


class DecodeError(TeamStatsError, ValueError):
    """Raised when a cached payload cannot be decoded into teams."""

    pass


class TeamNotFound(TeamStatsError, LookupError):
    """Raised when a team id does not exist in the store."""

    def __init__(self, team_id: int):
        self.team_id = team_id
        super().__init__(f"Team {team_id} not found")


__all__ = [
    "TeamStatsError",
    "CacheUnavailable",
    "StoreUnavailable",
    "DecodeError",
    "TeamNotFound",
]
