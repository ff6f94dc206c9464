"""Access gate states and reasons."""

from enum import StrEnum


class GateState(StrEnum):
    """Outcome of gating a view or menu entry."""

    PENDING = "pending"
    DENIED = "denied"
    GRANTED = "granted"


class AuthStatus(StrEnum):
    """Resolution of the current-session fetch."""

    PENDING = "pending"
    AUTHENTICATED = "authenticated"
    UNAUTHENTICATED = "unauthenticated"


class DenialReason(StrEnum):
    """Why a gate resolved to denied."""

    UNAUTHENTICATED = "unauthenticated"
    INSUFFICIENT_PERMISSION = "insufficient_permission"
