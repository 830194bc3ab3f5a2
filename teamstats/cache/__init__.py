"""
Redis Ranking Cache Layer.

Provides the Redis backend, key names and codec for the two ranking
representations:
- A single serialized list of all teams (string key)
- A sorted set of teams scored by wins

Usage:
    from teamstats.cache import RedisCache, CacheKeys, codec

    cache = RedisCache()
    keys = CacheKeys()
    cache.string_set(keys.teams_list, codec.serialize_seq(teams))
    teams = codec.deserialize_seq(cache.string_get(keys.teams_list))
"""

from teamstats.cache import codec
from teamstats.cache.cache_keys import CacheKeys
from teamstats.cache.redis_client import RedisCache

__all__ = [
    "RedisCache",
    "CacheKeys",
    "codec",
]
