"""Team Repository: SQL implementation of the TeamRepository protocol.

Invariants:
    - Team names are unique: a conflicting insert raises DuplicateTeamError and
      leaves the existing team and its members untouched
    - add_member is INSERT ... ON CONFLICT DO NOTHING (idempotent)
    - remove_member of a non-member deletes zero rows (idempotent)
    - delete removes memberships explicitly (SQLite does not enforce ON DELETE CASCADE
      unless foreign keys are switched on)
"""

import logging

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from statusbot.core.domain_types import TeamName, TeamRecord, UserId, UserRecord
from statusbot.core.errors import DatabaseError, DuplicateTeamError
from statusbot.infrastructure.sql_repository import SqlRepository
from statusbot.models.member import Member
from statusbot.models.team import Team
from statusbot.models.user import User

logger = logging.getLogger(__name__)


def _team_record(row) -> TeamRecord:
    return TeamRecord(id=row.id, name=TeamName(row.name))


class SqlTeamRepository(SqlRepository):
    """Teams and memberships stored in the `teams` and `members` tables."""

    async def create(self, name: TeamName) -> TeamRecord:
        team = Team(name=name)
        self._db.add(team)
        try:
            await self._db.commit()
        except IntegrityError:
            await self._db.rollback()
            logger.warning(
                f"Team '{name}' already exists", extra={"team": name},
            )
            raise DuplicateTeamError(name)
        except SQLAlchemyError as e:
            await self._db.rollback()
            logger.error(f"DB create_team failed: {e}", extra={"team": name})
            raise DatabaseError("Database operation failed", "create_team") from e
        logger.info(f"Created team '{name}'", extra={"team": name})
        return _team_record(team)

    async def fetch(self, name: TeamName) -> TeamRecord | None:
        async with self._unit_of_work("fetch_team", commit=False):
            result = await self._db.execute(
                select(Team.id, Team.name).where(Team.name == name),
            )
            row = result.first()
        return _team_record(row) if row else None

    async def fetch_all(self) -> list[TeamRecord]:
        async with self._unit_of_work("fetch_teams", commit=False):
            result = await self._db.execute(
                select(Team.id, Team.name).order_by(Team.name),
            )
            rows = result.all()
        return [_team_record(row) for row in rows]

    async def delete(self, team: TeamRecord) -> None:
        """Delete the team and its memberships. *Cannot be undone.*"""
        async with self._unit_of_work("delete_team"):
            await self._db.execute(
                delete(Member).where(Member.team_id == team.id),
            )
            await self._db.execute(delete(Team).where(Team.id == team.id))
        logger.info(f"Deleted team '{team.name}'", extra={"team": team.name})

    async def rename(self, team: TeamRecord, name: TeamName) -> TeamRecord:
        try:
            await self._db.execute(
                update(Team).where(Team.id == team.id).values(name=name),
            )
            await self._db.commit()
        except IntegrityError:
            await self._db.rollback()
            raise DuplicateTeamError(name)
        except SQLAlchemyError as e:
            await self._db.rollback()
            logger.error(f"DB rename_team failed: {e}", extra={"team": team.name})
            raise DatabaseError("Database operation failed", "rename_team") from e
        return TeamRecord(id=team.id, name=name)

    async def members(self, team_name: TeamName) -> list[UserRecord]:
        """Members of the named team with their statuses, ordered by user id."""
        async with self._unit_of_work("fetch_members", commit=False):
            result = await self._db.execute(
                select(User.id, User.status)
                .join(Member, Member.user_id == User.id)
                .join(Team, Team.id == Member.team_id)
                .where(Team.name == team_name)
                .order_by(User.id),
            )
            rows = result.all()
        return [UserRecord(id=UserId(row.id), status=row.status) for row in rows]

    async def add_member(self, team: TeamRecord, user: UserRecord) -> None:
        stmt = self._insert(Member).values(user_id=user.id, team_id=team.id)
        async with self._unit_of_work("add_member"):
            await self._db.execute(
                stmt.on_conflict_do_nothing(index_elements=["user_id", "team_id"]),
            )

    async def remove_member(self, team: TeamRecord, user: UserRecord) -> None:
        async with self._unit_of_work("remove_member"):
            await self._db.execute(
                delete(Member).where(
                    Member.user_id == user.id, Member.team_id == team.id,
                ),
            )
