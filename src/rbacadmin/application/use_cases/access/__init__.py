"""Access gating use cases."""

from rbacadmin.application.use_cases.access.access_gate import AccessGate, decide_access
from rbacadmin.application.use_cases.access.navigation import (
    DEFAULT_NAVIGATION,
    NavigationEntry,
    required_permissions_for,
    visible_entries,
)

__all__ = [
    "DEFAULT_NAVIGATION",
    "AccessGate",
    "NavigationEntry",
    "decide_access",
    "required_permissions_for",
    "visible_entries",
]
