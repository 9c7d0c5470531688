"""Tenant role ORM model. Named roles with dashboard and commission visibility."""

from sqlalchemy import Boolean, CheckConstraint, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from advisy.domain.enums import DashboardScope
from advisy.infrastructure.persistence.database import Base
from advisy.infrastructure.persistence.models.mixins import MultiTenantModel


class TenantRole(MultiTenantModel, Base):
    """Role. Table: tenant_role. Unique (tenant_id, name)."""

    __tablename__ = "tenant_role"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_system_role: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    dashboard_scope: Mapped[str] = mapped_column(
        String(16), nullable=False, default=DashboardScope.PERSONAL.value
    )
    can_see_own_commissions: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True
    )
    can_see_team_commissions: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    can_see_all_commissions: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )

    __table_args__ = (
        UniqueConstraint("tenant_id", "name", name="uq_tenant_role_tenant_name"),
        CheckConstraint(
            "dashboard_scope IN ('personal', 'team', 'global')",
            name="ck_tenant_role_dashboard_scope",
        ),
    )
