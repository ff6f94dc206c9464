"""Access decision gate - pending/denied/granted for a guarded view."""

import logging
from collections.abc import Iterable

from rbacadmin.application.dto import AccessDecision
from rbacadmin.application.ports import Navigator
from rbacadmin.domain.entities import User
from rbacadmin.domain.exceptions import GateAlreadyResolved
from rbacadmin.domain.services import (
    effective_permission_names,
    has_all,
    missing_permissions,
    normalize_required,
)
from rbacadmin.domain.value_objects import AuthStatus, DenialReason, GateState

logger = logging.getLogger(__name__)

DEFAULT_SIGN_IN_PATH = "/login"


def decide_access(
    auth_status: AuthStatus,
    user: User | None,
    required: Iterable[str] = (),
    *,
    sign_in_path: str = DEFAULT_SIGN_IN_PATH,
) -> AccessDecision:
    """Evaluate the gate for a view requiring every name in `required`.

    An empty requirement still needs an authenticated user.
    """
    required = normalize_required(required)
    if auth_status is AuthStatus.PENDING:
        return AccessDecision(state=GateState.PENDING)
    if auth_status is AuthStatus.UNAUTHENTICATED or user is None:
        return AccessDecision(
            state=GateState.DENIED,
            reason=DenialReason.UNAUTHENTICATED,
            redirect_to=sign_in_path,
        )

    effective = effective_permission_names(user)
    if has_all(effective, required):
        return AccessDecision(state=GateState.GRANTED)
    return AccessDecision(
        state=GateState.DENIED,
        reason=DenialReason.INSUFFICIENT_PERMISSION,
        missing=missing_permissions(effective, required),
    )


class AccessGate:
    """Gate for one guarded view.

    Starts pending and transitions exactly once, when the session fetch
    resolves. An unauthenticated denial signals the navigator to go to the
    sign-in page; an insufficient-permission denial renders in place.
    """

    def __init__(
        self,
        required: Iterable[str] = (),
        navigator: Navigator | None = None,
        sign_in_path: str = DEFAULT_SIGN_IN_PATH,
    ) -> None:
        self._required = normalize_required(required)
        self._navigator = navigator
        self._sign_in_path = sign_in_path
        self._decision = AccessDecision(state=GateState.PENDING)

    @property
    def required(self) -> tuple[str, ...]:
        return self._required

    @property
    def decision(self) -> AccessDecision:
        return self._decision

    @property
    def state(self) -> GateState:
        return self._decision.state

    def resolve(self, auth_status: AuthStatus, user: User | None) -> AccessDecision:
        """Apply the outcome of the session fetch."""
        if self._decision.state is not GateState.PENDING:
            raise GateAlreadyResolved(f"Gate already resolved to {self._decision.state}")

        decision = decide_access(
            auth_status, user, self._required, sign_in_path=self._sign_in_path
        )
        if decision.state is GateState.PENDING:
            return decision

        self._decision = decision
        if decision.reason is DenialReason.UNAUTHENTICATED:
            logger.info("Access denied: not authenticated, redirecting to %s", decision.redirect_to)
            if self._navigator is not None:
                self._navigator.redirect(decision.redirect_to)
        elif decision.reason is DenialReason.INSUFFICIENT_PERMISSION:
            logger.info(
                "Access denied for user %s: missing %s",
                user.id if user else None,
                ", ".join(decision.missing),
            )
        return decision
