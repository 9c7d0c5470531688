"""Seed the default roles for a tenant and optionally make a user its admin.

Usage:
    python -m scripts.seed_default_roles <tenant_id> [admin_user_id]

This is the bootstrap path for a new tenant: the HTTP endpoint
POST /roles/initialize-defaults already requires settings:update.
"""

import asyncio
import sys

from advisy.core.config import get_settings
from advisy.core.logging import setup_logging
from advisy.core.tenant_validation import is_valid_tenant_id_format
from advisy.domain.exceptions import DuplicateAssignmentException
from advisy.infrastructure.persistence import database
from advisy.infrastructure.services.tenant_initialization_service import (
    TenantInitializationService,
)

USAGE = "Usage: python -m scripts.seed_default_roles <tenant_id> [admin_user_id]"


async def main() -> None:
    """Seed default roles for the given tenant."""
    if len(sys.argv) < 2:
        print(USAGE, file=sys.stderr)
        sys.exit(1)
    tenant_id = sys.argv[1]
    admin_user_id = sys.argv[2] if len(sys.argv) > 2 else None
    if not is_valid_tenant_id_format(tenant_id):
        print(f"Invalid tenant id: {tenant_id}", file=sys.stderr)
        sys.exit(1)

    get_settings()
    setup_logging()
    database._ensure_engine()
    if database.AsyncSessionLocal is None:
        print("AsyncSessionLocal not configured (set DATABASE_URL)", file=sys.stderr)
        sys.exit(1)

    async with database.AsyncSessionLocal() as session:
        async with session.begin():
            init_svc = TenantInitializationService(session)
            result = await init_svc.initialize_default_roles(tenant_id)
            if result.already_initialized:
                print(f"Tenant {tenant_id} already has roles; nothing seeded")
            else:
                print(
                    f"Seeded {len(result.created_role_ids)} default roles for tenant {tenant_id}"
                )
                for name in result.failed_templates:
                    print(f"  failed: {name}", file=sys.stderr)
            if admin_user_id:
                try:
                    await init_svc.assign_admin_role(tenant_id, admin_user_id)
                    print(f"Assigned admin role to user {admin_user_id}")
                except DuplicateAssignmentException:
                    print(f"User {admin_user_id} already holds the admin role")
    await database.dispose_engine()


if __name__ == "__main__":
    asyncio.run(main())
