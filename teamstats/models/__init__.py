"""
SQLAlchemy models for Team Stats.

Single source of truth for the team store. Used by both CLI and services.

Usage:
    from teamstats.models import Team
"""

from .base import Base
from .team import Team

__all__ = [
    "Base",
    "Team",
]
