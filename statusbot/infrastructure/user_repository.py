"""User Repository: SQL implementation of the UserRepository protocol.

Invariants:
    - save_status is a single INSERT ... ON CONFLICT(id) DO UPDATE (last write wins)
    - fetch_or_create never fails on a concurrent insert of the same id
"""

from sqlalchemy import select

from statusbot.core.domain_types import UserId, UserRecord
from statusbot.infrastructure.sql_repository import SqlRepository
from statusbot.models.user import User


class SqlUserRepository(SqlRepository):
    """Users and statuses stored in the `users` table."""

    async def fetch(self, user_id: UserId) -> UserRecord | None:
        async with self._unit_of_work("fetch_user", commit=False):
            result = await self._db.execute(
                select(User.id, User.status).where(User.id == user_id),
            )
            row = result.first()
        if row is None:
            return None
        return UserRecord(id=UserId(row.id), status=row.status)

    async def fetch_or_create(self, user_id: UserId) -> UserRecord:
        stmt = self._insert(User).values(id=user_id, status=None)
        async with self._unit_of_work("create_user"):
            await self._db.execute(stmt.on_conflict_do_nothing(index_elements=["id"]))
        user = await self.fetch(user_id)
        return user or UserRecord(id=user_id)

    async def save_status(self, user_id: UserId, status: str) -> UserRecord:
        stmt = self._insert(User).values(id=user_id, status=status)
        async with self._unit_of_work("save_status"):
            await self._db.execute(
                stmt.on_conflict_do_update(
                    index_elements=["id"], set_={"status": stmt.excluded.status},
                ),
            )
        return UserRecord(id=user_id, status=status)
