"""
Cache key management.

Centralized cache key definitions to:
- Prevent key collisions
- Keep both ranking representations invalidated together
- Document cache structure
"""

from typing import Optional

from teamstats.config import Settings, get_settings


class CacheKeys:
    """
    Centralized cache key definitions.

    The ranking cache owns exactly two keys:
        - teamsList -> JSON array of all teams, wins descending
        - teamsSortedSet -> one member per team (JSON), scored by wins

    Key names come from settings so separate deployments can share a Redis.
    """

    def __init__(self, settings: Optional[Settings] = None):
        settings = settings or get_settings()
        self.teams_list = settings.teams_list_key
        self.teams_sorted_set = settings.teams_sorted_set_key

    def ranking_keys(self) -> tuple[str, str]:
        """Every key that must be deleted together on invalidation."""
        return (self.teams_list, self.teams_sorted_set)
