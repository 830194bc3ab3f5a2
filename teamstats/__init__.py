"""
Team Stats Core Library.

Keeps a ranked "teams by wins" view in Redis synchronized with the
relational team store, using cache-aside reads and invalidate-on-write.

Usage:
    # Database
    from teamstats.db import DatabaseManager
    from teamstats.models import Team
    from teamstats.repositories import TeamRepository

    # Cache
    from teamstats.cache import RedisCache, CacheKeys

    # Services
    from teamstats.services import RankingCacheService, TeamService

    # Config / Logging
    from teamstats.config import get_settings, Settings
    from teamstats.logging import get_logger, configure_logging
"""

__version__ = "1.0.0"

# Users should import directly from submodules:
#   from teamstats.services import RankingCacheService
#   from teamstats.config import get_settings
#   from teamstats.logging import get_logger
