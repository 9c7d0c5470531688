"""Role, permission-matrix and assignment service dependencies (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from advisy.application.interfaces.services import INotifier
from advisy.application.services.assignment_service import AssignmentService
from advisy.application.services.authorization_service import AuthorizationService
from advisy.application.services.permission_service import PermissionMatrixService
from advisy.application.services.role_service import RoleService
from advisy.infrastructure.notifications import LoggingNotifier
from advisy.infrastructure.persistence.database import get_db, get_db_transactional
from advisy.infrastructure.persistence.repositories import (
    RolePermissionRepository,
    RoleRepository,
    UserRoleRepository,
)
from advisy.infrastructure.services import TenantInitializationService

from .auth import get_authorization_service


def get_notifier() -> INotifier:
    """Outcome notifier (logs to advisy.notifications)."""
    return LoggingNotifier()


def get_role_service(
    db: Annotated[AsyncSession, Depends(get_db)],
    notifier: Annotated[INotifier, Depends(get_notifier)],
) -> RoleService:
    """Role service for read operations."""
    return RoleService(RoleRepository(db), RolePermissionRepository(db), notifier)


def get_role_service_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
    notifier: Annotated[INotifier, Depends(get_notifier)],
    authorization: Annotated[AuthorizationService, Depends(get_authorization_service)],
) -> RoleService:
    """Role service for create/update/delete/duplicate/seed (transactional)."""
    return RoleService(
        RoleRepository(db),
        RolePermissionRepository(db),
        notifier,
        initializer=TenantInitializationService(db),
        authorization=authorization,
    )


def get_permission_service(
    db: Annotated[AsyncSession, Depends(get_db)],
    notifier: Annotated[INotifier, Depends(get_notifier)],
) -> PermissionMatrixService:
    """Permission matrix service for reads."""
    return PermissionMatrixService(
        RoleRepository(db), RolePermissionRepository(db), notifier
    )


def get_permission_service_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
    notifier: Annotated[INotifier, Depends(get_notifier)],
    authorization: Annotated[AuthorizationService, Depends(get_authorization_service)],
) -> PermissionMatrixService:
    """Permission matrix service for upserts (transactional)."""
    return PermissionMatrixService(
        RoleRepository(db),
        RolePermissionRepository(db),
        notifier,
        authorization=authorization,
    )


def get_assignment_service(
    db: Annotated[AsyncSession, Depends(get_db)],
    notifier: Annotated[INotifier, Depends(get_notifier)],
) -> AssignmentService:
    """Assignment service for reads."""
    return AssignmentService(RoleRepository(db), UserRoleRepository(db), notifier)


def get_assignment_service_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
    notifier: Annotated[INotifier, Depends(get_notifier)],
    authorization: Annotated[AuthorizationService, Depends(get_authorization_service)],
) -> AssignmentService:
    """Assignment service for assign/remove (transactional)."""
    return AssignmentService(
        RoleRepository(db),
        UserRoleRepository(db),
        notifier,
        authorization=authorization,
    )
