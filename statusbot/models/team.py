"""Team ORM: named groups of users used to fan out status queries.

Invariants:
    - name is unique (enforced by the database, not by a prior SELECT)
    - id is a surrogate key generated on insert
    - deleting a team deletes its memberships (ON DELETE CASCADE)
"""

from sqlalchemy import BigInteger, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from statusbot.db.base import Base

# SQLite only autoincrements INTEGER PRIMARY KEY columns
TeamIdType = BigInteger().with_variant(Integer, "sqlite")


class Team(Base):
    """Team registry row."""
    __tablename__ = "teams"

    id: Mapped[int] = mapped_column(
        TeamIdType, primary_key=True, autoincrement=True,
    )
    name: Mapped[str] = mapped_column(Text, nullable=False, unique=True)

    memberships: Mapped[list["Member"]] = relationship(
        "Member", back_populates="team",
        cascade="all, delete-orphan", passive_deletes=True,
    )
