"""Domain value objects."""

from rbacadmin.domain.value_objects.assignment_key import AssignmentKey
from rbacadmin.domain.value_objects.gate_state import AuthStatus, DenialReason, GateState

__all__ = [
    "AssignmentKey",
    "AuthStatus",
    "DenialReason",
    "GateState",
]
