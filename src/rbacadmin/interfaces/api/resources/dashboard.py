"""Dashboard statistics resource."""

import falcon.asgi

from rbacadmin.application.use_cases.access import required_permissions_for
from rbacadmin.application.use_cases.dashboard import compute_dashboard_stats
from rbacadmin.application.use_cases.session import SessionLoader
from rbacadmin.domain.exceptions import DirectoryError
from rbacadmin.interfaces.api.resources.access import gate_request
from rbacadmin.interfaces.api.serializers import stats_to_dict


class DashboardResource:
    """GET /v1/dashboard - directory totals and role distribution."""

    def __init__(self, sign_in_path: str) -> None:
        self._sign_in_path = sign_in_path
        self._required = required_permissions_for("/dashboard")

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        decision = gate_request(req, resp, self._required, self._sign_in_path)
        if not decision.granted:
            return

        try:
            snapshot = await SessionLoader(req.context.directory).load_snapshot()
        except DirectoryError as e:
            resp.status = falcon.HTTP_502
            resp.media = {"error": str(e)}
            return

        resp.media = stats_to_dict(compute_dashboard_stats(snapshot))
        resp.status = falcon.HTTP_200
