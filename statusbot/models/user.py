"""User ORM: one row per Slack user with their last reported status.

Invariants:
    - id is the bare Slack user id (never mention markup)
    - status is NULL until the user reports one; overwritten on every report

Design Decisions:
    - No history table: last write wins
"""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from statusbot.db.base import Base


class User(Base):
    """Slack user and current status."""
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    status: Mapped[str | None] = mapped_column(Text, nullable=True)
