"""SQL Repository Base: shared transaction handling for the SQLAlchemy repositories.

Invariants:
    - Every mutating call commits its own unit of work or rolls it back
    - SQLAlchemyError never escapes: it is logged and re-raised as DatabaseError
    - Upserts use the dialect's native INSERT ... ON CONFLICT (SQLite and PostgreSQL)

Design Decisions:
    - Reads select plain columns, not ORM entities, so rows written through
      Core upserts are never shadowed by stale identity-map instances
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from statusbot.core.errors import DatabaseError

logger = logging.getLogger(__name__)

_DIALECT_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


class SqlRepository:
    """Base for repositories bound to one AsyncSession."""

    def __init__(self, db: AsyncSession):
        self._db = db

    @asynccontextmanager
    async def _unit_of_work(
        self, operation: str, commit: bool = True,
    ) -> AsyncGenerator[None, None]:
        """Run the block as one transaction; map driver failures to DatabaseError."""
        try:
            yield
            if commit:
                await self._db.commit()
        except SQLAlchemyError as e:
            await self._db.rollback()
            logger.error(
                f"DB {operation} failed: {e}",
                extra={"error_code": "DATABASE_ERROR"},
            )
            raise DatabaseError("Database operation failed", operation) from e

    def _insert(self, entity):
        """Dialect-specific INSERT supporting on_conflict_* clauses."""
        dialect = self._db.get_bind().dialect.name
        insert = _DIALECT_INSERTS.get(dialect)
        if insert is None:
            raise DatabaseError(f"Unsupported dialect '{dialect}'", "insert")
        return insert(entity)
