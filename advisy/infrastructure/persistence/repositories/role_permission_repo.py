"""RolePermission repository: the (role, module, action) -> allowed matrix."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from sqlalchemy import insert as sa_insert
from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from advisy.application.dtos.permission import PermissionResult
from advisy.infrastructure.persistence.models.permission import RolePermission
from advisy.shared.utils.generators import generate_cuid

_CELL_COLUMNS = ["role_id", "module", "action"]


def permission_to_result(rp: RolePermission) -> PermissionResult:
    """Map ORM RolePermission to application PermissionResult."""
    return PermissionResult(
        id=rp.id,
        role_id=rp.role_id,
        module=rp.module,
        action=rp.action,
        allowed=rp.allowed,
    )


class RolePermissionRepository:
    """Permission rows of roles. Writes are single-statement upserts."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    def _upsert_statement(self, rows: list[dict[str, Any]]) -> Any:
        bind = self.db.get_bind()
        dialect = bind.dialect.name if bind else ""
        if dialect == "postgresql":
            stmt = pg_insert(RolePermission).values(rows)
        elif dialect == "sqlite":
            stmt = sqlite_insert(RolePermission).values(rows)
        else:
            raise NotImplementedError(f"Permission upsert not supported on {dialect!r}")
        return stmt.on_conflict_do_update(
            index_elements=_CELL_COLUMNS,
            set_={"allowed": stmt.excluded.allowed},
        )

    async def list_for_role(self, role_id: str) -> list[PermissionResult]:
        result = await self.db.execute(
            select(RolePermission)
            .where(RolePermission.role_id == role_id)
            .order_by(RolePermission.module, RolePermission.action)
            .execution_options(populate_existing=True)
        )
        return [permission_to_result(rp) for rp in result.scalars().all()]

    async def list_allowed_pairs(
        self, role_ids: Iterable[str]
    ) -> list[tuple[str, str]]:
        """Return distinct (module, action) with allowed=True across role_ids."""
        ids = list(role_ids)
        if not ids:
            return []
        result = await self.db.execute(
            select(RolePermission.module, RolePermission.action)
            .where(
                RolePermission.role_id.in_(ids),
                RolePermission.allowed.is_(True),
            )
            .distinct()
        )
        return [(m, a) for m, a in result.all()]

    async def upsert(
        self, role_id: str, module: str, action: str, allowed: bool
    ) -> PermissionResult:
        """Insert or update one cell in a single statement; return the stored row."""
        row = {
            "id": generate_cuid(),
            "role_id": role_id,
            "module": module,
            "action": action,
            "allowed": allowed,
        }
        await self.db.execute(self._upsert_statement([row]))
        result = await self.db.execute(
            select(RolePermission)
            .where(
                RolePermission.role_id == role_id,
                RolePermission.module == module,
                RolePermission.action == action,
            )
            .execution_options(populate_existing=True)
        )
        return permission_to_result(result.scalar_one())

    async def upsert_many(
        self, role_id: str, entries: Iterable[tuple[str, str, bool]]
    ) -> int:
        """Insert or update many cells in one statement; last entry wins on repeats."""
        cells: dict[tuple[str, str], bool] = {}
        for module, action, allowed in entries:
            cells[(module, action)] = allowed
        if not cells:
            return 0
        rows = [
            {
                "id": generate_cuid(),
                "role_id": role_id,
                "module": module,
                "action": action,
                "allowed": allowed,
            }
            for (module, action), allowed in cells.items()
        ]
        await self.db.execute(self._upsert_statement(rows))
        return len(rows)

    async def insert_many(
        self, role_id: str, entries: Iterable[tuple[str, str, bool]]
    ) -> int:
        """Plain insert for a role that has no rows yet (seeding, duplication)."""
        rows = [
            {
                "id": generate_cuid(),
                "role_id": role_id,
                "module": module,
                "action": action,
                "allowed": allowed,
            }
            for module, action, allowed in entries
        ]
        if not rows:
            return 0
        await self.db.execute(sa_insert(RolePermission).values(rows))
        return len(rows)

    async def copy_role_permissions(self, source_role_id: str, target_role_id: str) -> int:
        """Copy every row of source_role_id onto target_role_id inside a SAVEPOINT."""
        rows = await self.list_for_role(source_role_id)
        async with self.db.begin_nested():
            return await self.insert_many(
                target_role_id, ((r.module, r.action, r.allowed) for r in rows)
            )
