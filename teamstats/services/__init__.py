"""
Services with caching and business logic.

Services provide a clean interface for business operations,
with built-in caching and efficient database access.
"""

from teamstats.services.ranking_cache_service import CacheStats, RankingCacheService
from teamstats.services.team_service import TeamService

__all__ = [
    "CacheStats",
    "RankingCacheService",
    "TeamService",
]
