"""DTOs for permission matrix use cases (no dependency on ORM)."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PermissionResult:
    """One (module, action) cell of a role's permission matrix."""

    id: str
    role_id: str
    module: str
    action: str
    allowed: bool
