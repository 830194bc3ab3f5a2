"""
Repository pattern implementations for data access.

Repositories provide a clean abstraction over database operations.
TeamRepository is the authoritative record store behind the ranking cache.

Usage:
    from teamstats.repositories import TeamRepository

    with db.session() as session:
        repo = TeamRepository(session)
        teams = repo.get_all_ordered_by_wins_desc()
"""

from .base import BaseRepository
from .team_repository import TeamRepository

__all__ = [
    "BaseRepository",
    "TeamRepository",
]
