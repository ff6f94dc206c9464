"""Unit tests for the access decision gate."""

import logging

import pytest

from rbacadmin.application.use_cases.access import AccessGate, decide_access
from rbacadmin.domain.exceptions import GateAlreadyResolved, InvalidRequirement
from rbacadmin.domain.value_objects import AuthStatus, DenialReason, GateState

from tests.conftest import make_permission, make_role, make_user


def test_direct_permission_granted() -> None:
    """User with only a direct permission is granted a view requiring it."""
    user = make_user(permissions=(make_permission(1, "view users"),))
    decision = decide_access(AuthStatus.AUTHENTICATED, user, ["view users"])
    assert decision.state is GateState.GRANTED
    assert decision.reason is None
    assert decision.granted


def test_role_missing_permission_denied() -> None:
    """Viewer role lacks "delete users": denied in place, no redirect."""
    viewer = make_role(1, "Viewer", make_permission(1, "view users"))
    user = make_user(roles=(viewer,))

    decision = decide_access(AuthStatus.AUTHENTICATED, user, ["view users", "delete users"])

    assert decision.state is GateState.DENIED
    assert decision.reason is DenialReason.INSUFFICIENT_PERMISSION
    assert decision.missing == ("delete users",)
    assert decision.redirect_to is None


def test_unauthenticated_empty_requirement_redirects(navigator) -> None:
    """An empty requirement does not bypass the authentication check."""
    gate = AccessGate([], navigator=navigator)

    decision = gate.resolve(AuthStatus.UNAUTHENTICATED, None)

    assert decision.state is GateState.DENIED
    assert decision.reason is DenialReason.UNAUTHENTICATED
    assert decision.redirect_to == "/login"
    assert navigator.redirects == ["/login"]


def test_pending_until_auth_resolves() -> None:
    gate = AccessGate(["view users"])
    assert gate.state is GateState.PENDING
    assert decide_access(AuthStatus.PENDING, None, ["view users"]).state is GateState.PENDING


def test_resolving_with_pending_is_noop(navigator) -> None:
    gate = AccessGate(["view users"], navigator=navigator)
    gate.resolve(AuthStatus.PENDING, None)
    assert gate.state is GateState.PENDING
    assert navigator.redirects == []


def test_empty_requirement_granted_when_authenticated() -> None:
    gate = AccessGate()
    assert gate.resolve(AuthStatus.AUTHENTICATED, make_user()).state is GateState.GRANTED


def test_insufficient_permission_does_not_redirect(navigator) -> None:
    gate = AccessGate(["view settings"], navigator=navigator)
    decision = gate.resolve(AuthStatus.AUTHENTICATED, make_user())
    assert decision.reason is DenialReason.INSUFFICIENT_PERMISSION
    assert navigator.redirects == []


def test_gate_transitions_once(navigator) -> None:
    gate = AccessGate(["view users"], navigator=navigator)
    gate.resolve(AuthStatus.UNAUTHENTICATED, None)

    with pytest.raises(GateAlreadyResolved):
        gate.resolve(AuthStatus.AUTHENTICATED, make_user())
    assert gate.state is GateState.DENIED
    assert navigator.redirects == ["/login"]


def test_authenticated_without_user_is_unauthenticated() -> None:
    decision = decide_access(AuthStatus.AUTHENTICATED, None, [])
    assert decision.reason is DenialReason.UNAUTHENTICATED


def test_custom_sign_in_path(navigator) -> None:
    gate = AccessGate(navigator=navigator, sign_in_path="/auth/sign-in")
    gate.resolve(AuthStatus.UNAUTHENTICATED, None)
    assert navigator.redirects == ["/auth/sign-in"]


def test_decide_access_idempotent(admin_user) -> None:
    """Same snapshot and requirement, same decision; the user is untouched."""
    required = ["view users", "delete roles"]
    first = decide_access(AuthStatus.AUTHENTICATED, admin_user, required)
    second = decide_access(AuthStatus.AUTHENTICATED, admin_user, required)
    assert first == second
    assert first.state is GateState.GRANTED


def test_gate_rejects_malformed_requirement() -> None:
    with pytest.raises(InvalidRequirement):
        AccessGate("view users")
    with pytest.raises(InvalidRequirement):
        decide_access(AuthStatus.UNAUTHENTICATED, None, "view users")


def test_denial_logged(caplog, viewer_user) -> None:
    gate = AccessGate(["view settings"])
    with caplog.at_level(logging.INFO):
        gate.resolve(AuthStatus.AUTHENTICATED, viewer_user)
    assert "missing view settings" in caplog.text
