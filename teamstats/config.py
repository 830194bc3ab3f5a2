"""
Application configuration using Pydantic settings.

Usage:
    from teamstats.config import get_settings
    settings = get_settings()

For constants, import from teamstats.constants:
    from teamstats.constants import SEED_TEAM_NAMES, TOP_TEAMS_DEFAULT
"""

from functools import lru_cache
from typing import Optional
from urllib.parse import quote

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from teamstats.constants import (
    DEFAULT_TEAMS_LIST_KEY,
    DEFAULT_TEAMS_SORTED_SET_KEY,
    TOP_TEAMS_DEFAULT,
)


class Settings(BaseSettings):
    """
    Unified application settings loaded from environment variables and .env file.

    The Redis and database sections are the only ones needed in production;
    everything else has a working default.
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App settings
    app_name: str = "Team Stats"
    debug: bool = Field(default=False, validation_alias="DEBUG")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    # Database
    database_url: str = Field(default="sqlite:///teamstats.db", validation_alias="DATABASE_URL")
    db_pool_size: int = Field(default=10, validation_alias="DB_POOL_SIZE")
    db_max_overflow: int = Field(default=20, validation_alias="DB_MAX_OVERFLOW")
    db_pool_pre_ping: bool = Field(default=True, validation_alias="DB_POOL_PRE_PING")

    # Redis
    redis_host: str = Field(default="localhost", validation_alias="REDIS_HOST")
    redis_port: int = Field(default=6379, validation_alias="REDIS_PORT")
    redis_db: int = Field(default=0, validation_alias="REDIS_DB")
    redis_password: Optional[str] = Field(default=None, validation_alias="REDIS_PASSWORD")
    redis_socket_timeout: float = Field(default=5.0, validation_alias="REDIS_SOCKET_TIMEOUT")
    redis_max_connections: int = Field(default=50, validation_alias="REDIS_MAX_CONNECTIONS")

    @property
    def redis_url(self) -> str:
        """Construct Redis URL from components."""
        auth = f":{quote(self.redis_password, safe='')}@" if self.redis_password else ""
        return f"redis://{auth}{self.redis_host}:{self.redis_port}/{self.redis_db}"

    # Ranking cache
    teams_list_key: str = Field(default=DEFAULT_TEAMS_LIST_KEY, validation_alias="TEAMS_LIST_KEY")
    teams_sorted_set_key: str = Field(
        default=DEFAULT_TEAMS_SORTED_SET_KEY, validation_alias="TEAMS_SORTED_SET_KEY"
    )
    # None keeps entries until the next invalidation
    ranking_cache_ttl: Optional[int] = Field(default=None, validation_alias="RANKING_CACHE_TTL")
    top_teams_limit: int = Field(default=TOP_TEAMS_DEFAULT, validation_alias="TOP_TEAMS_LIMIT")

    @field_validator("top_teams_limit")
    @classmethod
    def validate_top_teams_limit(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"TOP_TEAMS_LIMIT must be at least 1 (got {v})")
        return v

    @field_validator("ranking_cache_ttl")
    @classmethod
    def validate_ranking_cache_ttl(cls, v: Optional[int]) -> Optional[int]:
        """A zero or negative TTL would expire keys as soon as they are written."""
        if v is not None and v <= 0:
            raise ValueError(f"RANKING_CACHE_TTL must be positive when set (got {v})")
        return v

    @field_validator("teams_list_key", "teams_sorted_set_key")
    @classmethod
    def validate_key_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Cache key names cannot be blank")
        return v

    def validate_production_config(self) -> tuple[list[str], list[str]]:
        """
        Validate configuration for production deployment.

        Returns:
            Tuple of (errors, warnings) - errors are fatal, warnings are advisory
        """
        errors = []
        warnings = []

        if self.teams_list_key == self.teams_sorted_set_key:
            errors.append("TEAMS_LIST_KEY and TEAMS_SORTED_SET_KEY must be different keys")

        if self.database_url.startswith("sqlite"):
            warnings.append("DATABASE_URL points at SQLite; use PostgreSQL for multi-process deployments")

        if not self.redis_password:
            warnings.append("REDIS_PASSWORD not set - Redis connection is unauthenticated")

        if self.debug:
            warnings.append("DEBUG is enabled")

        return errors, warnings


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()


__all__ = ["Settings", "get_settings"]
