"""Access decision and navigation resources."""

from collections.abc import Iterable, Sequence

import falcon.asgi

from rbacadmin.application.dto import AccessDecision
from rbacadmin.application.use_cases.access import (
    DEFAULT_NAVIGATION,
    NavigationEntry,
    decide_access,
    required_permissions_for,
    visible_entries,
)
from rbacadmin.domain.services import effective_permission_names
from rbacadmin.domain.value_objects import DenialReason, GateState
from rbacadmin.interfaces.api.serializers import decision_to_dict, entry_to_dict


def gate_request(
    req: falcon.asgi.Request,
    resp: falcon.asgi.Response,
    required: Iterable[str],
    sign_in_path: str,
) -> AccessDecision:
    """Evaluate the gate for the request's user; fill 401/403 on denial."""
    decision = decide_access(
        req.context.auth_status,
        req.context.user,
        required,
        sign_in_path=sign_in_path,
    )
    if decision.state is GateState.GRANTED:
        return decision
    if decision.reason is DenialReason.UNAUTHENTICATED:
        resp.status = falcon.HTTP_401
        resp.media = {"error": "Unauthorized", "redirect_to": decision.redirect_to}
    else:
        resp.status = falcon.HTTP_403
        resp.media = {"error": "Access denied", "missing": list(decision.missing)}
    return decision


class AccessResource:
    """GET /v1/access - gate decision for ?require=... or ?path=..."""

    def __init__(
        self,
        sign_in_path: str,
        navigation: Sequence[NavigationEntry] = DEFAULT_NAVIGATION,
    ) -> None:
        self._sign_in_path = sign_in_path
        self._navigation = navigation

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Decision for the required names, or for the view behind `path`."""
        path = req.get_param("path")
        if path:
            required = required_permissions_for(path, self._navigation)
        else:
            required = req.get_param_as_list("require") or []

        decision = decide_access(
            req.context.auth_status,
            req.context.user,
            required,
            sign_in_path=self._sign_in_path,
        )

        resp.media = decision_to_dict(decision)
        resp.status = falcon.HTTP_200


class NavigationResource:
    """GET /v1/navigation - menu entries visible to the current user."""

    def __init__(
        self,
        sign_in_path: str,
        navigation: Sequence[NavigationEntry] = DEFAULT_NAVIGATION,
    ) -> None:
        self._sign_in_path = sign_in_path
        self._navigation = navigation

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        decision = gate_request(req, resp, [], self._sign_in_path)
        if not decision.granted:
            return

        user = req.context.user
        effective = effective_permission_names(user)
        resp.media = {
            "user": {"id": user.id, "name": user.name, "email": user.email},
            "items": [entry_to_dict(e) for e in visible_entries(self._navigation, effective)],
        }
        resp.status = falcon.HTTP_200
