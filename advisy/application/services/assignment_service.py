"""User-role assignment service."""

from __future__ import annotations

from advisy.application.dtos.assignment import AssignmentResult
from advisy.application.interfaces.repositories import (
    IRoleRepository,
    IUserRoleRepository,
)
from advisy.application.interfaces.services import INotifier
from advisy.application.services.authorization_service import AuthorizationService
from advisy.application.services.notify import notify_outcome
from advisy.domain.exceptions import (
    DuplicateAssignmentException,
    ResourceNotFoundException,
)

_MSG_ASSIGNED = "Rôle assigné"
_MSG_ASSIGN_FAILED = "Erreur lors de l'assignation"
_MSG_ALREADY_ASSIGNED = "Ce rôle est déjà assigné à cet utilisateur"
_MSG_REMOVED = "Rôle retiré"
_MSG_REMOVE_FAILED = "Erreur lors du retrait"


class AssignmentService:
    """Assign roles to users and list assignments within a tenant."""

    def __init__(
        self,
        role_repo: IRoleRepository,
        user_role_repo: IUserRoleRepository,
        notifier: INotifier,
        authorization: AuthorizationService | None = None,
    ) -> None:
        self._role_repo = role_repo
        self._user_role_repo = user_role_repo
        self._notifier = notifier
        self._authorization = authorization

    async def list_assignments(self, tenant_id: str) -> list[AssignmentResult]:
        return await self._user_role_repo.list_by_tenant(tenant_id)

    async def get_user_roles(
        self, tenant_id: str, user_id: str
    ) -> list[AssignmentResult]:
        return await self._user_role_repo.list_for_user(user_id, tenant_id)

    async def assign_role(
        self,
        tenant_id: str,
        user_id: str,
        role_id: str,
        assigned_by: str | None = None,
    ) -> AssignmentResult:
        """Give user_id the role role_id.

        Raises:
            ResourceNotFoundException: If the role is not in the tenant.
            DuplicateAssignmentException: If the user already holds the role.
        """
        with notify_outcome(
            self._notifier,
            _MSG_ASSIGNED,
            _MSG_ASSIGN_FAILED,
            messages={DuplicateAssignmentException: _MSG_ALREADY_ASSIGNED},
            tenant_id=tenant_id,
            user_id=user_id,
            role_id=role_id,
        ):
            role = await self._role_repo.get_by_id_and_tenant(role_id, tenant_id)
            if role is None:
                raise ResourceNotFoundException("role", role_id)
            assignment = await self._user_role_repo.assign_role_to_user(
                user_id, role_id, tenant_id, assigned_by=assigned_by
            )
        if self._authorization is not None:
            await self._authorization.invalidate_user_cache(user_id, tenant_id)
        return AssignmentResult(
            id=assignment.id,
            tenant_id=assignment.tenant_id,
            user_id=assignment.user_id,
            role_id=assignment.role_id,
            assigned_by=assignment.assigned_by,
            assigned_at=assignment.assigned_at,
            role=role,
        )

    async def remove_assignment(self, tenant_id: str, assignment_id: str) -> None:
        """Delete an assignment; ResourceNotFoundException when absent."""
        with notify_outcome(
            self._notifier,
            _MSG_REMOVED,
            _MSG_REMOVE_FAILED,
            tenant_id=tenant_id,
            assignment_id=assignment_id,
        ):
            assignment = await self._user_role_repo.get_by_id_and_tenant(
                assignment_id, tenant_id
            )
            if assignment is None:
                raise ResourceNotFoundException("assignment", assignment_id)
            await self._user_role_repo.remove_assignment(assignment_id, tenant_id)
        if self._authorization is not None:
            await self._authorization.invalidate_user_cache(
                assignment.user_id, tenant_id
            )
