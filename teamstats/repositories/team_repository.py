"""Team repository, the authoritative store behind the ranking cache."""

import random
from collections.abc import Iterable
from typing import Optional

from teamstats.logging import get_logger
from teamstats.models import Team
from teamstats.schemas import TeamCreate
from teamstats.season import play_games

from .base import BaseRepository

logger = get_logger("repository.team")


class TeamRepository(BaseRepository[Team]):
    """Repository for Team operations."""

    model = Team

    def get_all_ordered_by_wins_desc(self) -> list[Team]:
        """
        Get every team, most wins first.

        Equal win counts fall back to insertion order (id ascending).
        """
        return self.session.query(Team).order_by(Team.wins.desc(), Team.id.asc()).all()

    def insert(self, data: TeamCreate) -> Team:
        """Insert a team; the store assigns its id."""
        return self.create(**data.model_dump())

    def apply_season_results(self, rng: Optional[random.Random] = None) -> int:
        """
        Play a season for every team in one flush.

        Returns:
            Number of teams updated
        """
        teams = self.session.query(Team).all()
        play_games(teams, rng=rng)
        self.session.flush()
        return len(teams)

    def replace_all(self, names: Iterable[str]) -> list[Team]:
        """Remove every team and insert fresh zero-record teams with the given names."""
        removed = self.session.query(Team).delete()
        teams = [Team(name=name, wins=0, losses=0, ties=0) for name in names]
        self.session.add_all(teams)
        self.session.flush()
        logger.info("teams_replaced", removed=removed, inserted=len(teams))
        return teams
