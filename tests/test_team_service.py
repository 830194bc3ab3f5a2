"""Tests for team writes and their cache invalidation."""

import random

import pytest
from sqlalchemy import MetaData
from sqlalchemy.exc import OperationalError

from teamstats.constants import SEED_TEAM_NAMES
from teamstats.exceptions import StoreUnavailable, TeamNotFound
from teamstats.repositories import TeamRepository
from teamstats.schemas import TeamCreate, TeamUpdate
from teamstats.services import TeamService

LIST_KEY = "teamsList"
SET_KEY = "teamsSortedSet"


@pytest.fixture
def warm_cache(ranking, abc_teams):
    """Populate both representations."""
    ranking.fetch_as_list()
    ranking.fetch_as_sorted_set()
    return abc_teams


def _cache_is_empty(fake_redis):
    return LIST_KEY not in fake_redis.strings and SET_KEY not in fake_redis.zsets


def _cache_is_warm(fake_redis):
    return LIST_KEY in fake_redis.strings and SET_KEY in fake_redis.zsets


class TestCreate:
    def test_assigns_id_and_invalidates(self, team_service, ranking, fake_redis, warm_cache):
        created = team_service.create_team(TeamCreate(name="D", wins=20, losses=1, ties=0))

        assert created.id not in warm_cache
        assert _cache_is_empty(fake_redis)
        assert ranking.fetch_top(1)[0].name == "D"

    def test_failed_write_keeps_cache(self, team_service, fake_redis, monkeypatch, warm_cache):
        def broken_insert(self, data):
            raise OperationalError("INSERT INTO teams", {}, Exception("disk I/O error"))

        monkeypatch.setattr(TeamRepository, "insert", broken_insert)

        with pytest.raises(StoreUnavailable):
            team_service.create_team(TeamCreate(name="D"))

        assert _cache_is_warm(fake_redis)


class TestEdit:
    def test_updates_fields_and_invalidates(self, team_service, ranking, fake_redis, warm_cache):
        updated = team_service.edit_team(warm_cache[1], TeamUpdate(wins=30))

        assert updated.name == "B"
        assert updated.wins == 30
        assert _cache_is_empty(fake_redis)
        assert [t.name for t in ranking.fetch_as_list()][0] == "B"

    def test_partial_update_keeps_other_fields(self, team_service, warm_cache):
        team_service.edit_team(warm_cache[0], TeamUpdate(name="Alpha"))

        team = team_service.get_team(warm_cache[0])
        assert (team.name, team.wins) == ("Alpha", 10)

    def test_unknown_team_does_not_invalidate(self, team_service, fake_redis, warm_cache):
        with pytest.raises(TeamNotFound):
            team_service.edit_team(999, TeamUpdate(wins=1))

        assert _cache_is_warm(fake_redis)


class TestDelete:
    def test_removes_team_and_invalidates(self, team_service, ranking, fake_redis, warm_cache):
        team_service.delete_team(warm_cache[0])

        assert _cache_is_empty(fake_redis)
        assert [t.name for t in ranking.fetch_as_sorted_set()] != []
        assert "A" not in {t.name for t in ranking.fetch_as_list()}

    def test_unknown_team_raises(self, team_service, fake_redis, warm_cache):
        with pytest.raises(TeamNotFound) as exc_info:
            team_service.delete_team(999)

        assert exc_info.value.team_id == 999
        assert _cache_is_warm(fake_redis)


class TestSeason:
    def test_play_season_updates_all_and_invalidates(
        self, team_service, ranking, fake_redis, warm_cache
    ):
        played = team_service.play_season()

        assert played == 3
        assert _cache_is_empty(fake_redis)
        for team in ranking.fetch_as_list():
            assert 0 <= team.wins <= 32
            assert 0 <= team.losses <= 32
            assert 0 <= team.ties <= 4

    def test_seeded_seasons_repeat(self, db, ranking, abc_teams):
        TeamService(db, ranking, rng=random.Random(7)).play_season()
        first = ranking.fetch_as_list()

        TeamService(db, ranking, rng=random.Random(7)).play_season()
        second = ranking.fetch_as_list()

        assert first == second


class TestRebuild:
    def test_seeds_sample_teams(self, team_service, ranking, fake_redis, warm_cache):
        teams = team_service.rebuild()

        assert sorted(t.name for t in teams) == sorted(SEED_TEAM_NAMES)
        assert _cache_is_empty(fake_redis)
        assert ranking.fetch_as_list() == teams

    @pytest.mark.parametrize("step", ["drop_all", "create_all"])
    def test_schema_failure_raises_store_unavailable(
        self, step, team_service, fake_redis, monkeypatch, warm_cache
    ):
        def broken_ddl(self, *args, **kwargs):
            raise OperationalError("DDL", {}, Exception("db down"))

        monkeypatch.setattr(MetaData, step, broken_ddl)

        with pytest.raises(StoreUnavailable, match=f"Store operation '{step}' failed"):
            team_service.rebuild()

        assert _cache_is_warm(fake_redis)

    def test_clear_cache(self, team_service, fake_redis, warm_cache):
        team_service.clear_cache()

        assert _cache_is_empty(fake_redis)


class TestGetTeam:
    def test_returns_copy(self, team_service, abc_teams):
        team = team_service.get_team(abc_teams[0])

        assert team.name == "A"
        assert team.wins == 10

    def test_missing_team(self, team_service):
        with pytest.raises(TeamNotFound):
            team_service.get_team(42)
