"""Permission catalog API (static, unauthenticated)."""

from fastapi import APIRouter

from advisy.domain.permission_catalog import (
    MODULE_ACTIONS,
    PERMISSION_ACTIONS,
    PERMISSION_MODULES,
)
from advisy.schemas.permission import CatalogItem, PermissionCatalogResponse

router = APIRouter()


@router.get("/catalog", response_model=PermissionCatalogResponse)
def get_catalog() -> PermissionCatalogResponse:
    """Modules, actions (with display labels) and the actions valid per module."""
    return PermissionCatalogResponse(
        modules=[CatalogItem(id=m.id, label=m.label) for m in PERMISSION_MODULES],
        actions=[CatalogItem(id=a.id, label=a.label) for a in PERMISSION_ACTIONS],
        module_actions={m: list(actions) for m, actions in MODULE_ACTIONS.items()},
    )
