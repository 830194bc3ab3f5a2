"""
Application constants for Team Stats.

Contains cache key defaults, ranking limits, sample data and season ranges.
"""

# =============================================================================
# Ranking Cache
# =============================================================================

# Key names kept compatible with caches populated by earlier deployments
DEFAULT_TEAMS_LIST_KEY = "teamsList"
DEFAULT_TEAMS_SORTED_SET_KEY = "teamsSortedSet"

TOP_TEAMS_DEFAULT = 5

# Redis rank range meaning "through the last member"
RANGE_END = -1

SOURCE_CACHE = "cache"
SOURCE_STORE = "store"


# =============================================================================
# Season Simulation
# =============================================================================

# Inclusive bounds for randomly generated season statistics
SEASON_WINS_RANGE = (0, 32)
SEASON_LOSSES_RANGE = (0, 32)
SEASON_TIES_RANGE = (0, 4)


# =============================================================================
# Sample Data
# =============================================================================

SEED_TEAM_NAMES = [
    "Adventure Works Cycles",
    "Alpine Ski House",
    "Blue Yonder Airlines",
    "Coho Vineyard",
    "Contoso, Ltd.",
    "Fabrikam, Inc.",
    "Lucerne Publishing",
    "Northwind Traders",
    "Consolidated Messenger",
    "Fourth Coffee",
    "Graphic Design Institute",
    "Nod Publishers",
]


# =============================================================================
# CLI
# =============================================================================

RESULT_FROM_DB = "from-db"
RESULT_LIST = "list"
RESULT_SORTED_SET = "sorted-set"
RESULT_TOP = "top5"

RESULT_TYPES = [RESULT_FROM_DB, RESULT_LIST, RESULT_SORTED_SET, RESULT_TOP]

ACTION_PLAY_GAMES = "play-games"
ACTION_CLEAR_CACHE = "clear-cache"
ACTION_REBUILD_DB = "rebuild-db"

ACTION_TYPES = [ACTION_PLAY_GAMES, ACTION_CLEAR_CACHE, ACTION_REBUILD_DB]
