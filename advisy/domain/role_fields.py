"""Role attributes a caller may change after creation."""

from typing import Any

from advisy.domain.enums import DashboardScope
from advisy.domain.exceptions import ValidationException

UPDATABLE_ROLE_FIELDS = frozenset(
    {
        "name",
        "description",
        "is_active",
        "dashboard_scope",
        "can_see_own_commissions",
        "can_see_team_commissions",
        "can_see_all_commissions",
    }
)

# The only updatable column that may be cleared.
NULLABLE_ROLE_FIELDS = frozenset({"description"})


def check_role_changes(changes: dict[str, Any]) -> dict[str, Any]:
    """Validate a partial role update and normalize dashboard_scope.

    Raises:
        ValidationException: On an unknown field, a null for a required
            field, or an unknown dashboard scope.
    """
    unknown = sorted(set(changes) - UPDATABLE_ROLE_FIELDS)
    if unknown:
        raise ValidationException(
            f"Role fields cannot be changed: {', '.join(unknown)}",
            field=unknown[0],
        )
    nulls = sorted(
        k for k, v in changes.items() if v is None and k not in NULLABLE_ROLE_FIELDS
    )
    if nulls:
        raise ValidationException(
            f"Role fields cannot be null: {', '.join(nulls)}", field=nulls[0]
        )
    checked = dict(changes)
    if "dashboard_scope" in checked:
        try:
            checked["dashboard_scope"] = DashboardScope(checked["dashboard_scope"])
        except ValueError:
            raise ValidationException(
                f"Unknown dashboard scope: {checked['dashboard_scope']}",
                field="dashboard_scope",
            ) from None
    return checked
