import pytest
from pydantic import ValidationError

from teamstats.config import Settings


def _settings(**kwargs):
    return Settings(_env_file=None, **kwargs)


def test_defaults_match_existing_cache_keys(monkeypatch):
    for name in ("TEAMS_LIST_KEY", "TEAMS_SORTED_SET_KEY", "TOP_TEAMS_LIMIT", "RANKING_CACHE_TTL"):
        monkeypatch.delenv(name, raising=False)

    settings = _settings()

    assert settings.teams_list_key == "teamsList"
    assert settings.teams_sorted_set_key == "teamsSortedSet"
    assert settings.top_teams_limit == 5
    assert settings.ranking_cache_ttl is None


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("TOP_TEAMS_LIMIT", "10")
    monkeypatch.setenv("RANKING_CACHE_TTL", "300")
    monkeypatch.setenv("REDIS_PORT", "6380")

    settings = _settings()

    assert settings.top_teams_limit == 10
    assert settings.ranking_cache_ttl == 300
    assert settings.redis_port == 6380


@pytest.mark.parametrize(
    "overrides",
    [{"TOP_TEAMS_LIMIT": 0}, {"RANKING_CACHE_TTL": -5}, {"TEAMS_LIST_KEY": "  "}],
)
def test_invalid_values_rejected(overrides):
    with pytest.raises(ValidationError):
        _settings(**overrides)


def test_redis_url_includes_password():
    settings = _settings(REDIS_HOST="cache", REDIS_PORT=6390, REDIS_DB=2, REDIS_PASSWORD="pw")

    assert settings.redis_url == "redis://:pw@cache:6390/2"


def test_redis_url_without_password(monkeypatch):
    monkeypatch.delenv("REDIS_PASSWORD", raising=False)
    settings = _settings(REDIS_HOST="cache", REDIS_PORT=6379, REDIS_DB=0)

    assert settings.redis_url == "redis://cache:6379/0"


def test_production_validation_flags_shared_keys():
    settings = _settings(TEAMS_LIST_KEY="teams", TEAMS_SORTED_SET_KEY="teams")

    errors, _ = settings.validate_production_config()

    assert any("must be different" in error for error in errors)


def test_production_validation_warns_on_sqlite():
    settings = _settings(DATABASE_URL="sqlite:///teamstats.db", REDIS_PASSWORD="pw")

    errors, warnings = settings.validate_production_config()

    assert errors == []
    assert any("SQLite" in warning for warning in warnings)


def test_redis_url_quotes_password():
    settings = _settings(
        REDIS_HOST="cache", REDIS_PORT=6379, REDIS_DB=0, REDIS_PASSWORD="p@ss/word"
    )

    assert settings.redis_url == "redis://:p%40ss%2Fword@cache:6379/0"
