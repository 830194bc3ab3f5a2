import random

import pytest

from teamstats.models import Team
from teamstats.repositories import TeamRepository
from teamstats.schemas import TeamCreate


def test_ordered_by_wins_desc_then_id(db, add_teams):
    ids = add_teams(("Low", 1), ("TieFirst", 5), ("High", 9), ("TieSecond", 5))

    with db.session() as session:
        teams = TeamRepository(session).get_all_ordered_by_wins_desc()
        names = [t.name for t in teams]

    assert names == ["High", "TieFirst", "TieSecond", "Low"]
    assert len(ids) == 4


def test_insert_assigns_id(db):
    with db.session() as session:
        team = TeamRepository(session).insert(TeamCreate(name="Fourth Coffee", wins=3))
        team_id = team.id

    with db.session() as session:
        stored = TeamRepository(session).get_by_id(team_id)
        assert stored.name == "Fourth Coffee"
        assert (stored.wins, stored.losses, stored.ties) == (3, 0, 0)


def test_update_and_delete(db, abc_teams):
    with db.session() as session:
        repo = TeamRepository(session)
        assert repo.update(abc_teams[0], wins=1).wins == 1
        assert repo.update(999, wins=1) is None
        assert repo.delete(abc_teams[1]) is True
        assert repo.delete(abc_teams[1]) is False
        assert repo.count() == 2


def test_count_unknown_filter_key_raises(db):
    with db.session() as session:
        repo = TeamRepository(session)

        with pytest.raises(ValueError, match="Unknown filter key"):
            repo.count(typo_key=5)


def test_count_with_filter(db, abc_teams):
    with db.session() as session:
        assert TeamRepository(session).count(wins=7) == 2


def test_apply_season_results_touches_every_team(db, abc_teams):
    with db.session() as session:
        played = TeamRepository(session).apply_season_results(rng=random.Random(3))

    assert played == 3
    with db.session() as session:
        for team in session.query(Team).all():
            assert 0 <= team.wins <= 32
            assert 0 <= team.ties <= 4


def test_replace_all(db, abc_teams):
    with db.session() as session:
        teams = TeamRepository(session).replace_all(["X", "Y"])
        assert all(t.id is not None for t in teams)

    with db.session() as session:
        remaining = sorted(t.name for t in session.query(Team).all())

    assert remaining == ["X", "Y"]
