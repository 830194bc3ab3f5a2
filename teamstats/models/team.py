"""
Team SQLAlchemy model.
"""

from sqlalchemy import CheckConstraint, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class Team(Base):
    """
    Team record, the authoritative copy of a team's standings.

    Attributes:
        name: Display name
        wins: Games won, the ranking score
        losses: Games lost
        ties: Games tied
    """

    __tablename__ = "teams"
    __table_args__ = (
        CheckConstraint("wins >= 0", name="ck_teams_wins_non_negative"),
        CheckConstraint("losses >= 0", name="ck_teams_losses_non_negative"),
        CheckConstraint("ties >= 0", name="ck_teams_ties_non_negative"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    wins: Mapped[int] = mapped_column(Integer, default=0, nullable=False, index=True)
    losses: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    ties: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    def __repr__(self) -> str:
        return f"<Team id={self.id} name={self.name!r} wins={self.wins}>"
