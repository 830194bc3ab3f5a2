"""
Ranking Cache Service.

Cache-aside reads of "teams by wins" over two Redis representations:
- teamsList: the whole ordered list serialized as one blob
- teamsSortedSet: one member per team, scored by wins

An empty lookup is always a miss and triggers a full repopulation from the
team store. Malformed cached payloads are discarded and treated as a miss.
Redis and store outages propagate as CacheUnavailable / StoreUnavailable.
"""

from dataclasses import dataclass
from typing import Optional

from teamstats.cache import CacheKeys, RedisCache, codec
from teamstats.config import Settings, get_settings
from teamstats.constants import RANGE_END, SOURCE_CACHE, SOURCE_STORE
from teamstats.db import DatabaseManager
from teamstats.exceptions import DecodeError
from teamstats.logging import get_logger
from teamstats.repositories import TeamRepository
from teamstats.schemas import TeamData

logger = get_logger("services.ranking_cache")


@dataclass
class CacheStats:
    """Counters for the read paths served by one service instance."""

    hits: int = 0
    misses: int = 0
    populations: int = 0
    invalidations: int = 0
    decode_errors: int = 0


class RankingCacheService:
    """
    Ranked team reads backed by Redis, with the team store as the source of truth.

    Usage:
        ranking = RankingCacheService(RedisCache(), db)

        teams = ranking.fetch_as_list()
        teams = ranking.fetch_as_sorted_set()
        top = ranking.fetch_top(5)

        # After any write to the team store
        ranking.invalidate()
    """

    def __init__(
        self,
        cache: RedisCache,
        db: DatabaseManager,
        settings: Optional[Settings] = None,
    ):
        self.cache = cache
        self.db = db
        self.settings = settings or get_settings()
        self.keys = CacheKeys(self.settings)
        self.stats = CacheStats()
        self.last_source: Optional[str] = None

    # =========================================================================
    # Read Paths
    # =========================================================================

    def fetch_from_store(self) -> list[TeamData]:
        """Read every team from the store, most wins first."""
        with self.db.session() as session:
            rows = TeamRepository(session).get_all_ordered_by_wins_desc()
            teams = [TeamData.model_validate(row) for row in rows]
        self.last_source = SOURCE_STORE
        logger.debug("store_read", count=len(teams))
        return teams

    def fetch_as_list(self) -> list[TeamData]:
        """
        Get all teams from the list representation.

        A present payload is a hit, including the serialized empty list
        written for an empty store. An absent or undecodable payload is
        repopulated from the store in a single write.
        """
        key = self.keys.teams_list
        payload = self.cache.string_get(key)

        if payload:
            try:
                teams = codec.deserialize_seq(payload)
            except DecodeError as e:
                self._record_decode_error(key, e)
                self.cache.key_delete(key)
            else:
                self._record_hit(key, len(teams))
                return teams

        self._record_miss(key)
        # Read the store completely before writing so a failed read leaves no blob
        teams = self.fetch_from_store()
        self.cache.string_set(key, codec.serialize_seq(teams), ttl=self.settings.ranking_cache_ttl)
        self._record_population(key, len(teams))
        return teams

    def fetch_as_sorted_set(self) -> list[TeamData]:
        """Get all teams from the sorted-set representation, most wins first."""
        key = self.keys.teams_sorted_set
        teams = self._read_sorted_set(key, 0, RANGE_END)
        if teams:
            self._record_hit(key, len(teams))
            return teams

        self._record_miss(key)
        return self._populate_sorted_set(key)

    def fetch_top(self, k: Optional[int] = None) -> list[TeamData]:
        """
        Get at most ``k`` teams with the most wins.

        On a miss the entire sorted set is repopulated before the bounded
        range is read again, so the result never comes from a partial set.

        Args:
            k: Number of teams, defaults to settings.top_teams_limit

        Raises:
            ValueError: If k is less than 1
        """
        if k is None:
            k = self.settings.top_teams_limit
        if k < 1:
            raise ValueError(f"k must be at least 1 (got {k})")

        key = self.keys.teams_sorted_set
        teams = self._read_sorted_set(key, 0, k - 1)
        if teams:
            self._record_hit(key, len(teams), limit=k)
            return teams

        self._record_miss(key, limit=k)
        populated = self._populate_sorted_set(key)
        teams = self._read_sorted_set(key, 0, k - 1)
        if not teams and populated:
            # Invalidated between population and re-read
            logger.info("cache_top_fallback", key=key, limit=k)
            return populated[:k]
        return teams or []

    # =========================================================================
    # Invalidation
    # =========================================================================

    def invalidate(self) -> None:
        """
        Remove both ranking representations.

        Both keys go in one DEL so neither representation can outlive the
        other. Invalidating an empty cache is a no-op.
        """
        keys = self.keys.ranking_keys()
        deleted = self.cache.key_delete(*keys)
        self.stats.invalidations += 1
        logger.info("cache_invalidated", keys=list(keys), deleted=deleted)

    # =========================================================================
    # Helpers
    # =========================================================================

    def _read_sorted_set(self, key: str, start: int, stop: int) -> list[TeamData] | None:
        """
        Decode a rank range.

        Returns:
            Teams in rank order, or None when any member is malformed
            (the corrupt set is deleted so it is rebuilt from the store)
        """
        members = self.cache.sorted_set_range(key, start, stop, descending=True)
        try:
            return [codec.deserialize(member) for member, _score in members]
        except DecodeError as e:
            self._record_decode_error(key, e)
            self.cache.key_delete(key)
            return None

    def _populate_sorted_set(self, key: str) -> list[TeamData]:
        """Add every team from the store, one member at a time, scored by wins."""
        teams = self.fetch_from_store()
        for team in teams:
            self.cache.sorted_set_add(key, codec.serialize(team), team.wins)
        ttl = self.settings.ranking_cache_ttl
        if teams and ttl:
            self.cache.expire(key, ttl)
        self._record_population(key, len(teams))
        return teams

    def _record_hit(self, key: str, count: int, **fields) -> None:
        self.stats.hits += 1
        self.last_source = SOURCE_CACHE
        logger.info("cache_hit", key=key, count=count, **fields)

    def _record_miss(self, key: str, **fields) -> None:
        self.stats.misses += 1
        logger.info("cache_miss", key=key, **fields)

    def _record_population(self, key: str, count: int) -> None:
        self.stats.populations += 1
        self.last_source = SOURCE_STORE
        logger.info("cache_populated", key=key, count=count)

    def _record_decode_error(self, key: str, error: DecodeError) -> None:
        self.stats.decode_errors += 1
        logger.warning("cache_decode_error", key=key, error=str(error))
