"""Boundary Protocols: storage contracts between core/services and the SQL shell.

Invariants:
    - Services NEVER import SQL repositories directly; they receive these Protocols
    - Failures surface as StatusBotError subclasses (DatabaseError, DuplicateTeamError),
      never as driver exceptions
    - fetch-style methods return None for "absent"; an exception means the store failed
    - add_member / remove_member are idempotent

Design Decisions:
    - Protocol over ABC: structural subtyping, in-memory fakes in tests need no base class
    - Async in Protocol: implementations do IO
"""

from typing import Protocol

from statusbot.core.domain_types import TeamName, TeamRecord, UserId, UserRecord


class TeamRepository(Protocol):
    """Contract for team and membership persistence."""
    async def create(self, name: TeamName) -> TeamRecord: ...
    async def fetch(self, name: TeamName) -> TeamRecord | None: ...
    async def fetch_all(self) -> list[TeamRecord]: ...
    async def delete(self, team: TeamRecord) -> None: ...
    async def rename(self, team: TeamRecord, name: TeamName) -> TeamRecord: ...
    async def members(self, team_name: TeamName) -> list[UserRecord]: ...
    async def add_member(self, team: TeamRecord, user: UserRecord) -> None: ...
    async def remove_member(self, team: TeamRecord, user: UserRecord) -> None: ...


class UserRepository(Protocol):
    """Contract for user/status persistence."""
    async def fetch(self, user_id: UserId) -> UserRecord | None: ...
    async def fetch_or_create(self, user_id: UserId) -> UserRecord: ...
    async def save_status(self, user_id: UserId, status: str) -> UserRecord: ...
