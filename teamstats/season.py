"""
Season simulator.

Generates a fresh set of standings for every team. Results are random and
independent per team, so the totals do not have to balance across the league.
"""

import random
from collections.abc import Iterable
from typing import Any, Optional

from teamstats.constants import SEASON_LOSSES_RANGE, SEASON_TIES_RANGE, SEASON_WINS_RANGE
from teamstats.logging import get_logger

logger = get_logger("season")


def play_games(teams: Iterable[Any], rng: Optional[random.Random] = None) -> None:
    """
    Play a "season" of games, overwriting wins, losses and ties in place.

    Args:
        teams: Objects with mutable wins/losses/ties attributes (ORM Team rows)
        rng: Random source; pass a seeded instance for repeatable seasons
    """
    rng = rng or random.Random()
    played = 0
    for team in teams:
        team.wins = rng.randint(*SEASON_WINS_RANGE)
        team.losses = rng.randint(*SEASON_LOSSES_RANGE)
        team.ties = rng.randint(*SEASON_TIES_RANGE)
        played += 1
    logger.debug("season_generated", teams=played)
