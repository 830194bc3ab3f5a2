"""
Database Management Layer.

Provides a DatabaseManager owned by the hosting application for:
- Connection pooling (PostgreSQL) / StaticPool (SQLite)
- Session management with context managers
- Auto-commit/rollback behavior

Usage:
    from teamstats.db import DatabaseManager

    db = DatabaseManager()
    db.initialize()
    with db.session() as session:
        team = session.get(Team, 1)
"""

from collections.abc import Generator
from contextlib import contextmanager
from typing import Optional

from sqlalchemy import create_engine, event, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import QueuePool, StaticPool

from .config import Settings, get_settings
from .exceptions import StoreUnavailable
from .logging import get_logger

logger = get_logger("database")


class Base(DeclarativeBase):
    """SQLAlchemy declarative base for all models."""

    pass


class DatabaseManager:
    """
    Database manager with connection pooling and health checks.

    Features:
    - Connection pooling (QueuePool for PostgreSQL, StaticPool for SQLite)
    - Context manager for automatic commit/rollback
    - SQLAlchemy failures surfaced as StoreUnavailable
    - Health check support

    One instance is created by the hosting application (CLI, tests) and
    handed to the services that need it.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings
        self._initialized = False

    @property
    def settings(self) -> Settings:
        return self._settings or get_settings()

    def initialize(self, database_url: str | None = None) -> None:
        """
        Initialize database connection. Call once at app startup.

        Args:
            database_url: Optional override. Uses settings.database_url if not provided.
        """
        if self._initialized:
            return

        settings = self.settings
        url = database_url or settings.database_url
        is_sqlite = url.startswith("sqlite")

        if is_sqlite:
            connect_args = {"check_same_thread": False}
            pool_class: type[StaticPool | QueuePool] = StaticPool
            pool_config = {}
        else:
            connect_args = {}
            pool_class = QueuePool
            pool_config = {
                "pool_size": settings.db_pool_size,
                "max_overflow": settings.db_max_overflow,
                "pool_pre_ping": settings.db_pool_pre_ping,
            }

        self.engine = create_engine(
            url,
            poolclass=pool_class,
            connect_args=connect_args,
            echo=settings.debug,
            future=True,
            **pool_config,
        )

        # Enable foreign keys for SQLite
        if is_sqlite:

            @event.listens_for(self.engine, "connect")
            def set_sqlite_pragma(dbapi_connection, connection_record):
                cursor = dbapi_connection.cursor()
                cursor.execute("PRAGMA foreign_keys=ON")
                cursor.close()

        self.SessionLocal = sessionmaker(
            bind=self.engine,
            autoflush=False,
            autocommit=False,
            expire_on_commit=False,
            future=True,
        )

        self._initialized = True
        logger.info("database_initialized", dialect=self.engine.dialect.name)

    def create_all_tables(self) -> None:
        """Create all tables defined by models."""
        with self._ddl("create_all"):
            Base.metadata.create_all(bind=self.engine)

    def drop_all_tables(self) -> None:
        """Drop all tables. USE WITH CAUTION."""
        with self._ddl("drop_all"):
            Base.metadata.drop_all(bind=self.engine)

    @contextmanager
    def _ddl(self, operation: str) -> Generator[None, None, None]:
        """Run schema changes with SQLAlchemy failures raised as StoreUnavailable."""
        self._ensure_initialized()
        # Register models on Base.metadata
        from . import models  # noqa: F401

        try:
            yield
        except SQLAlchemyError as e:
            logger.error("schema_error", operation=operation, error=str(e))
            raise StoreUnavailable(operation, str(e)) from e

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """
        Context manager for database sessions with auto-commit/rollback.

        The commit happens before the block is considered finished, so code
        placed after the ``with`` statement only runs for committed writes.

        Usage:
            with db.session() as session:
                team = session.get(Team, 1)
        """
        self._ensure_initialized()
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.error("database_error", error=str(e), error_type=type(e).__name__)
            raise StoreUnavailable("session", str(e)) from e
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def health_check(self) -> dict:
        """
        Perform database health check.

        Returns:
            dict with 'healthy' (bool), 'latency_ms' (float), and 'error' (str or None)
        """
        import time

        if not self._initialized:
            return {"healthy": False, "latency_ms": 0, "error": "Database not initialized"}

        start = time.perf_counter()
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            latency = (time.perf_counter() - start) * 1000
            return {"healthy": True, "latency_ms": round(latency, 2), "error": None}
        except SQLAlchemyError as e:
            latency = (time.perf_counter() - start) * 1000
            return {"healthy": False, "latency_ms": round(latency, 2), "error": str(e)}

    def reset(self) -> None:
        """Dispose the engine and return to the uninitialized state."""
        if hasattr(self, "engine") and self.engine:
            self.engine.dispose()
        self._initialized = False

    def _ensure_initialized(self) -> None:
        """Raise error if not initialized."""
        if not self._initialized:
            raise RuntimeError("DatabaseManager not initialized. Call initialize() first.")


__all__ = ["Base", "DatabaseManager"]
