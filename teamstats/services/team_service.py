"""
Team Service.

Write paths for the team store. Every mutation commits first and then
invalidates the ranking cache, so a rolled-back write never clears it
and a committed one is never served stale by the next read.
"""

import random
from typing import Optional

from teamstats.constants import SEED_TEAM_NAMES
from teamstats.db import DatabaseManager
from teamstats.exceptions import TeamNotFound
from teamstats.logging import get_logger, timed
from teamstats.repositories import TeamRepository
from teamstats.schemas import TeamCreate, TeamData, TeamUpdate
from teamstats.services.ranking_cache_service import RankingCacheService

logger = get_logger("services.team")


class TeamService:
    """
    Team CRUD, season play and database rebuild.

    Usage:
        teams = TeamService(db, ranking)
        created = teams.create_team(TeamCreate(name="Fourth Coffee"))
        teams.play_season()
    """

    def __init__(
        self,
        db: DatabaseManager,
        ranking: RankingCacheService,
        rng: Optional[random.Random] = None,
    ):
        self.db = db
        self.ranking = ranking
        self.rng = rng

    # =========================================================================
    # Reads
    # =========================================================================

    def get_team(self, team_id: int) -> TeamData:
        with self.db.session() as session:
            team = TeamRepository(session).get_by_id(team_id)
            if team is None:
                raise TeamNotFound(team_id)
            return TeamData.model_validate(team)

    # =========================================================================
    # Writes
    # =========================================================================

    def create_team(self, data: TeamCreate) -> TeamData:
        with self.db.session() as session:
            created = TeamData.model_validate(TeamRepository(session).insert(data))
        self.ranking.invalidate()
        logger.info("team_created", team_id=created.id, name=created.name)
        return created

    def edit_team(self, team_id: int, changes: TeamUpdate) -> TeamData:
        fields = changes.model_dump(exclude_none=True)
        with self.db.session() as session:
            team = TeamRepository(session).update(team_id, **fields)
            if team is None:
                raise TeamNotFound(team_id)
            updated = TeamData.model_validate(team)
        self.ranking.invalidate()
        logger.info("team_updated", team_id=team_id, fields=sorted(fields))
        return updated

    def delete_team(self, team_id: int) -> None:
        with self.db.session() as session:
            if not TeamRepository(session).delete(team_id):
                raise TeamNotFound(team_id)
        self.ranking.invalidate()
        logger.info("team_deleted", team_id=team_id)

    def play_season(self) -> int:
        """
        Play a new season for every team.

        Returns:
            Number of teams updated
        """
        with timed("season_simulation", logger), self.db.session() as session:
            played = TeamRepository(session).apply_season_results(rng=self.rng)
        self.ranking.invalidate()
        logger.info("season_played", teams=played)
        return played

    def rebuild(self) -> list[TeamData]:
        """
        Drop and recreate the team table with the sample teams and one played season.

        Returns:
            The new teams, most wins first
        """
        self.db.drop_all_tables()
        self.db.create_all_tables()
        with self.db.session() as session:
            repo = TeamRepository(session)
            repo.replace_all(SEED_TEAM_NAMES)
            repo.apply_season_results(rng=self.rng)
            teams = [TeamData.model_validate(t) for t in repo.get_all_ordered_by_wins_desc()]
        self.ranking.invalidate()
        logger.info("database_rebuilt", teams=len(teams))
        return teams

    def clear_cache(self) -> None:
        """Administrative clear of both ranking representations."""
        self.ranking.invalidate()
