"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags.
"""

from fastapi import APIRouter

from advisy.api.v1.endpoints import (
    health,
    permissions,
    role_assignments,
    roles,
    users,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(
    permissions.router, prefix="/permissions", tags=["permissions"]
)
api_router.include_router(roles.router, prefix="/roles", tags=["roles"])
api_router.include_router(
    role_assignments.router, prefix="/role-assignments", tags=["role-assignments"]
)
api_router.include_router(users.router, prefix="/users", tags=["users"])
