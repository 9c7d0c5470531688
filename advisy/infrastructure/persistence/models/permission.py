"""RolePermission and UserTenantRole ORM models (RBAC)."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from advisy.infrastructure.persistence.database import Base
from advisy.infrastructure.persistence.models.mixins import CuidMixin, TenantMixin


class RolePermission(CuidMixin, Base):
    """One (module, action) cell of a role. Table: tenant_role_permission."""

    __tablename__ = "tenant_role_permission"

    role_id: Mapped[str] = mapped_column(
        String, ForeignKey("tenant_role.id", ondelete="CASCADE"), nullable=False
    )
    module: Mapped[str] = mapped_column(String(32), nullable=False)
    action: Mapped[str] = mapped_column(String(32), nullable=False)
    allowed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    __table_args__ = (
        UniqueConstraint(
            "role_id", "module", "action", name="uq_tenant_role_permission_cell"
        ),
        Index("ix_tenant_role_permission_role", "role_id"),
    )


class UserTenantRole(CuidMixin, TenantMixin, Base):
    """Many-to-many user-role within a tenant. Table: user_tenant_role."""

    __tablename__ = "user_tenant_role"

    user_id: Mapped[str] = mapped_column(String, nullable=False)
    role_id: Mapped[str] = mapped_column(
        String, ForeignKey("tenant_role.id", ondelete="CASCADE"), nullable=False
    )
    assigned_by: Mapped[str | None] = mapped_column(String, nullable=True)
    assigned_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    __table_args__ = (
        UniqueConstraint("user_id", "role_id", name="uq_user_tenant_role"),
        Index("ix_user_tenant_role_lookup", "tenant_id", "user_id"),
    )
