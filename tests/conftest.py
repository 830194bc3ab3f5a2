"""
Pytest fixtures for Team Stats tests.

Uses an in-memory SQLite database through the real DatabaseManager and an
in-process Redis double behind the real RedisCache.
"""

import random

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from teamstats.cache import RedisCache
from teamstats.config import Settings
from teamstats.db import DatabaseManager
from teamstats.models import Team
from teamstats.services import RankingCacheService, TeamService


class FakeRedis:
    """
    Minimal in-memory stand-in for redis.Redis.

    Implements the commands RedisCache uses with Redis semantics: absent keys
    read as None / empty, ZRANGE ranks are inclusive and accept negative
    indexes, and DEL reports how many keys existed. Set ``fail`` to make every
    command raise ConnectionError.
    """

    def __init__(self):
        self.strings: dict[str, bytes] = {}
        self.zsets: dict[str, dict[bytes, float]] = {}
        self.ttls: dict[str, int] = {}
        self.calls: list[tuple] = []
        self.fail = False

    def _record(self, *call):
        if self.fail:
            raise RedisConnectionError("Error 111 connecting to localhost:6379. Connection refused.")
        self.calls.append(call)

    def count(self, command: str) -> int:
        return sum(1 for call in self.calls if call[0] == command)

    def get(self, key):
        self._record("get", key)
        return self.strings.get(key)

    def set(self, key, value, ex=None):
        self._record("set", key)
        self.strings[key] = value if isinstance(value, bytes) else str(value).encode("utf-8")
        if ex is not None:
            self.ttls[key] = ex
        return True

    def delete(self, *keys):
        self._record("delete", *keys)
        deleted = 0
        for key in keys:
            found = key in self.strings or key in self.zsets
            self.strings.pop(key, None)
            self.zsets.pop(key, None)
            self.ttls.pop(key, None)
            deleted += int(found)
        return deleted

    def zadd(self, key, mapping):
        self._record("zadd", key)
        members = self.zsets.setdefault(key, {})
        added = sum(1 for member in mapping if member not in members)
        members.update({member: float(score) for member, score in mapping.items()})
        return added

    def zrange(self, key, start, end, desc=False, withscores=False):
        self._record("zrange", key, start, end)
        items = sorted(self.zsets.get(key, {}).items(), key=lambda item: (item[1], item[0]))
        if desc:
            items.reverse()
        size = len(items)
        if start < 0:
            start += size
        if end < 0:
            end += size
        start = max(start, 0)
        if start >= size or start > end:
            return []
        selected = items[start : end + 1]
        if withscores:
            return selected
        return [member for member, _ in selected]

    def expire(self, key, seconds):
        self._record("expire", key)
        if key in self.strings or key in self.zsets:
            self.ttls[key] = seconds
            return True
        return False

    def ping(self):
        self._record("ping")
        return True


@pytest.fixture
def settings():
    """Settings isolated from the developer's environment and .env file."""
    return Settings(_env_file=None, DATABASE_URL="sqlite://", DEBUG=False)


@pytest.fixture
def db(settings):
    """Fresh in-memory database with the team table created."""
    manager = DatabaseManager(settings)
    manager.initialize(settings.database_url)
    manager.create_all_tables()
    yield manager
    manager.reset()


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def cache(settings, fake_redis):
    return RedisCache(settings, client=fake_redis)


@pytest.fixture
def ranking(cache, db, settings):
    return RankingCacheService(cache, db, settings)


@pytest.fixture
def team_service(db, ranking):
    return TeamService(db, ranking, rng=random.Random(1234))


@pytest.fixture
def add_teams(db):
    """Insert teams directly into the store, bypassing cache invalidation."""

    def _add(*teams):
        ids = []
        with db.session() as session:
            for name, wins in teams:
                team = Team(name=name, wins=wins, losses=0, ties=0)
                session.add(team)
                session.flush()
                ids.append(team.id)
        return ids

    return _add


@pytest.fixture
def abc_teams(add_teams):
    """A(wins=10), B(wins=7), C(wins=7)."""
    return add_teams(("A", 10), ("B", 7), ("C", 7))
