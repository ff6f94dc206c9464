"""Health check endpoints."""

import falcon.asgi

from rbacadmin import __version__


class HealthResource:
    """Liveness and readiness; neither touches the directory."""

    def __init__(self, directory_api_url: str = "") -> None:
        self._directory_api_url = directory_api_url

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /v1/health - liveness."""
        resp.media = {"status": "ok", "version": __version__}
        resp.status = falcon.HTTP_200

    async def on_get_ready(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /v1/health/ready - readiness (directory configured)."""
        if not self._directory_api_url:
            resp.media = {"status": "unavailable", "reason": "directory API not configured"}
            resp.status = falcon.HTTP_503
            return
        resp.media = {"status": "ready"}
        resp.status = falcon.HTTP_200
