"""Member ORM: the (team, user) membership relation.

Invariants:
    - (user_id, team_id) is the primary key: a user appears at most once per team
    - Rows are removed together with their team
"""

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from statusbot.db.base import Base
from statusbot.models.team import TeamIdType


class Member(Base):
    """Membership of one user in one team."""
    __tablename__ = "members"

    user_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("users.id"), primary_key=True,
    )
    team_id: Mapped[int] = mapped_column(
        TeamIdType, ForeignKey("teams.id", ondelete="CASCADE"), primary_key=True,
    )

    team: Mapped["Team"] = relationship("Team", back_populates="memberships")
