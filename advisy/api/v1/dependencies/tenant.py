"""Tenant header dependency."""

from __future__ import annotations

from fastapi import HTTPException, Request

from advisy.core.config import get_settings
from advisy.core.tenant_validation import is_valid_tenant_id_format


async def get_tenant_id(request: Request) -> str:
    """Return the tenant id from the tenant header (400 if missing or malformed)."""
    name = get_settings().tenant_header_name
    value = request.headers.get(name)
    if not value:
        raise HTTPException(status_code=400, detail=f"Missing required header: {name}")
    if not is_valid_tenant_id_format(value):
        raise HTTPException(
            status_code=400,
            detail="Invalid tenant ID format (use alphanumeric, hyphen, underscore; max 64 characters)",
        )
    return value
