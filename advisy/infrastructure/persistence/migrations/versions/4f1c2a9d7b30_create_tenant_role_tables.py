"""Create tenant_role, tenant_role_permission and user_tenant_role

Revision ID: 4f1c2a9d7b30
Revises:
Create Date: 2026-10-19 09:12:41.508311

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "4f1c2a9d7b30"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create role, permission matrix and assignment tables."""
    op.create_table(
        "tenant_role",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("tenant_id", sa.String(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column(
            "is_system_role", sa.Boolean(), server_default=sa.false(), nullable=False
        ),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column(
            "dashboard_scope",
            sa.String(length=16),
            server_default="personal",
            nullable=False,
        ),
        sa.Column(
            "can_see_own_commissions",
            sa.Boolean(),
            server_default=sa.true(),
            nullable=False,
        ),
        sa.Column(
            "can_see_team_commissions",
            sa.Boolean(),
            server_default=sa.false(),
            nullable=False,
        ),
        sa.Column(
            "can_see_all_commissions",
            sa.Boolean(),
            server_default=sa.false(),
            nullable=False,
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.CheckConstraint(
            "dashboard_scope IN ('personal', 'team', 'global')",
            name="ck_tenant_role_dashboard_scope",
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("tenant_id", "name", name="uq_tenant_role_tenant_name"),
    )
    op.create_index(
        op.f("ix_tenant_role_tenant_id"), "tenant_role", ["tenant_id"], unique=False
    )

    op.create_table(
        "tenant_role_permission",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("role_id", sa.String(), nullable=False),
        sa.Column("module", sa.String(length=32), nullable=False),
        sa.Column("action", sa.String(length=32), nullable=False),
        sa.Column("allowed", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["role_id"], ["tenant_role.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "role_id", "module", "action", name="uq_tenant_role_permission_cell"
        ),
    )
    op.create_index(
        "ix_tenant_role_permission_role",
        "tenant_role_permission",
        ["role_id"],
        unique=False,
    )

    op.create_table(
        "user_tenant_role",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("tenant_id", sa.String(), nullable=False),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("role_id", sa.String(), nullable=False),
        sa.Column("assigned_by", sa.String(), nullable=True),
        sa.Column(
            "assigned_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["role_id"], ["tenant_role.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "role_id", name="uq_user_tenant_role"),
    )
    op.create_index(
        op.f("ix_user_tenant_role_tenant_id"),
        "user_tenant_role",
        ["tenant_id"],
        unique=False,
    )
    op.create_index(
        "ix_user_tenant_role_lookup",
        "user_tenant_role",
        ["tenant_id", "user_id"],
        unique=False,
    )


def downgrade() -> None:
    """Drop role tables."""
    op.drop_index("ix_user_tenant_role_lookup", table_name="user_tenant_role")
    op.drop_index(op.f("ix_user_tenant_role_tenant_id"), table_name="user_tenant_role")
    op.drop_table("user_tenant_role")
    op.drop_index(
        "ix_tenant_role_permission_role", table_name="tenant_role_permission"
    )
    op.drop_table("tenant_role_permission")
    op.drop_index(op.f("ix_tenant_role_tenant_id"), table_name="tenant_role")
    op.drop_table("tenant_role")
