"""Authentication and permission dependencies (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from advisy.application.services.authorization_service import AuthorizationService
from advisy.core.config import get_settings
from advisy.infrastructure.persistence.database import get_db
from advisy.infrastructure.security.jwt import TokenClaims, verify_token
from advisy.infrastructure.services import PermissionResolver

from .tenant import get_tenant_id

_http_bearer = HTTPBearer(auto_error=False)


async def get_authorization_service(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AuthorizationService:
    """Build AuthorizationService with permission resolver and optional cache.

    Cache is set in app lifespan (app.state.cache) when Redis is enabled;
    otherwise permission checks hit the DB only.
    """
    return AuthorizationService(
        permission_resolver=PermissionResolver(db),
        cache=getattr(request.app.state, "cache", None),
        cache_ttl=get_settings().cache_ttl_permissions,
    )


async def get_current_claims(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
    tenant_id: Annotated[str, Depends(get_tenant_id)],
) -> TokenClaims:
    """Return verified token claims; 401 if missing/invalid, 403 on tenant mismatch."""
    if credentials is None:
        raise HTTPException(
            status_code=401,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        claims = verify_token(credentials.credentials)
    except ValueError:
        raise HTTPException(
            status_code=401,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        ) from None
    if claims.tenant_id != tenant_id:
        raise HTTPException(status_code=403, detail="Forbidden")
    return claims


def require_permission(module: str, action: str):
    """Dependency factory: require JWT auth and that the user may do module:action."""

    async def _require(
        claims: Annotated[TokenClaims, Depends(get_current_claims)],
        auth_svc: Annotated[AuthorizationService, Depends(get_authorization_service)],
    ) -> TokenClaims:
        await auth_svc.require_permission(
            claims.user_id, claims.tenant_id, module, action
        )
        return claims

    return _require


require_settings_view = require_permission("settings", "view")
require_settings_update = require_permission("settings", "update")
