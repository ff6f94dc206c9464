"""Domain services - pure authorization logic."""

from rbacadmin.domain.services.categories import group_by_category, permission_category
from rbacadmin.domain.services.permission_resolver import (
    effective_permission_names,
    has_all,
    has_any,
    missing_permissions,
    normalize_required,
)

__all__ = [
    "effective_permission_names",
    "group_by_category",
    "has_all",
    "has_any",
    "missing_permissions",
    "normalize_required",
    "permission_category",
]
