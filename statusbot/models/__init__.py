"""ORM Models: SQLAlchemy declarative models for users, teams and memberships.

Invariants:
    - All models inherit from Base (db/base.py)

Design Decisions:
    - One file per entity
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from statusbot.models.user import User  # noqa: F401
from statusbot.models.team import Team  # noqa: F401
from statusbot.models.member import Member  # noqa: F401
