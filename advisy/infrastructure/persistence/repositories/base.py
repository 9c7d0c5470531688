"""Base repository: generic create, update and delete on an async session."""

from collections.abc import Sequence

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from advisy.infrastructure.persistence.database import Base


def is_unique_violation(
    exc: IntegrityError, constraint: str, table: str, columns: Sequence[str]
) -> bool:
    """Return True if exc was raised by the named unique constraint.

    asyncpg reports the constraint name on the driver error; PostgreSQL
    messages quote it; SQLite names the table columns instead.
    """
    orig = exc.orig
    for err in (orig, getattr(orig, "__cause__", None)):
        name = getattr(err, "constraint_name", None)
        if name:
            return name == constraint
    message = str(orig)
    if constraint in message:
        return True
    qualified = ", ".join(f"{table}.{col}" for col in columns)
    return f"UNIQUE constraint failed: {qualified}" in message


class BaseRepository[ModelType: Base]:
    """Base repository with create, update and delete.

    Every method flushes so that constraint violations surface inside the
    caller's SAVEPOINT rather than at commit time.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def create(self, obj: ModelType) -> ModelType:
        """Persist a new record and reload server-generated columns."""
        self.db.add(obj)
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def update(self, obj: ModelType) -> ModelType:
        """Flush changes on an attached record and reload it."""
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def delete(self, obj: ModelType) -> None:
        await self.db.delete(obj)
        await self.db.flush()
