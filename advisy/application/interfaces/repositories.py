"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from advisy.application.dtos.assignment import AssignmentResult
    from advisy.application.dtos.permission import PermissionResult
    from advisy.application.dtos.role import RoleResult
    from advisy.domain.enums import DashboardScope


# Role repository interface
class IRoleRepository(Protocol):
    """Protocol for tenant role repository (DIP)."""

    async def create_role(
        self,
        tenant_id: str,
        name: str,
        description: str | None = None,
        *,
        dashboard_scope: DashboardScope = ...,
        can_see_own_commissions: bool = True,
        can_see_team_commissions: bool = False,
        can_see_all_commissions: bool = False,
        is_system_role: bool = False,
    ) -> RoleResult:
        """Insert a role; raises DuplicateRoleNameException on (tenant, name) clash."""

    async def get_by_id_and_tenant(
        self, role_id: str, tenant_id: str
    ) -> RoleResult | None:
        """Return role by id within tenant, or None."""

    async def list_by_tenant(
        self, tenant_id: str, *, include_inactive: bool = True
    ) -> list[RoleResult]:
        """Return roles of the tenant ordered by name."""

    async def get_by_name_and_tenant(
        self, name: str, tenant_id: str
    ) -> RoleResult | None:
        """Return role by name within tenant, or None."""

    async def has_any_role(self, tenant_id: str) -> bool:
        """Return True if the tenant owns at least one role."""

    async def update_role(
        self, role_id: str, tenant_id: str, changes: dict[str, Any]
    ) -> RoleResult | None:
        """Apply changes; return updated role or None if not found."""

    async def delete_role(self, role_id: str, tenant_id: str) -> bool:
        """Hard-delete role with its permissions and assignments."""


# Role permission repository interface
class IRolePermissionRepository(Protocol):
    """Protocol for the role permission matrix (DIP)."""

    async def list_for_role(self, role_id: str) -> list[PermissionResult]:
        """Return all permission rows of a role."""

    async def upsert(
        self, role_id: str, module: str, action: str, allowed: bool
    ) -> PermissionResult:
        """Atomically insert or update the (role, module, action) row."""

    async def upsert_many(
        self, role_id: str, entries: Iterable[tuple[str, str, bool]]
    ) -> int:
        """Atomically insert or update many rows; return the number of entries written."""

    async def list_allowed_pairs(
        self, role_ids: Iterable[str]
    ) -> list[tuple[str, str]]:
        """Return distinct allowed (module, action) pairs across roles."""

    async def insert_many(
        self, role_id: str, entries: Iterable[tuple[str, str, bool]]
    ) -> int:
        """Plain insert for a role with no rows yet."""

    async def copy_role_permissions(
        self, source_role_id: str, target_role_id: str
    ) -> int:
        """Copy all rows of one role onto another; all-or-nothing."""


# User role repository interface
class IUserRoleRepository(Protocol):
    """Protocol for user-role assignments (DIP)."""

    async def list_by_tenant(self, tenant_id: str) -> list[AssignmentResult]:
        """Return all assignments of the tenant joined with their role."""

    async def list_for_user(
        self, user_id: str, tenant_id: str
    ) -> list[AssignmentResult]:
        """Return assignments of one user joined with their role."""

    async def list_user_ids_for_role(self, role_id: str, tenant_id: str) -> list[str]:
        """Return ids of users holding role_id."""

    async def assign_role_to_user(
        self,
        user_id: str,
        role_id: str,
        tenant_id: str,
        assigned_by: str | None = None,
    ) -> AssignmentResult:
        """Insert assignment; raises DuplicateAssignmentException if already held."""

    async def get_by_id_and_tenant(
        self, assignment_id: str, tenant_id: str
    ) -> AssignmentResult | None:
        """Return assignment by id within tenant, or None."""

    async def remove_assignment(self, assignment_id: str, tenant_id: str) -> bool:
        """Hard-delete assignment; return False if not found."""
