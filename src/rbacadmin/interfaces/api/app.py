"""Falcon ASGI application."""

import logging

import falcon
import falcon.asgi
from falcon.asgi import App

from rbacadmin.interfaces.api.matrix_sessions import MatrixSessionStore
from rbacadmin.interfaces.api.middleware.auth import AuthMiddleware, DirectoryClientFactory
from rbacadmin.interfaces.api.middleware.cors import CORSMiddleware
from rbacadmin.interfaces.api.resources.access import AccessResource, NavigationResource
from rbacadmin.interfaces.api.resources.dashboard import DashboardResource
from rbacadmin.interfaces.api.resources.health import HealthResource
from rbacadmin.interfaces.api.resources.matrix import MatrixResource, MatrixSaveResource

logger = logging.getLogger(__name__)


async def _handle_unexpected(req, resp, ex, params) -> None:
    logger.exception("Unhandled error on %s %s", req.method, req.path, exc_info=ex)
    resp.status = falcon.HTTP_500
    resp.media = {"title": "500 Internal Server Error"}


def create_app(
    client_factory: DirectoryClientFactory,
    *,
    sign_in_path: str = "/login",
    cors_origins: list[str] | None = None,
    directory_api_url: str = "",
    matrix_sessions: MatrixSessionStore | None = None,
) -> App:
    """Create Falcon ASGI app with routes."""
    matrix_sessions = matrix_sessions or MatrixSessionStore()

    app = falcon.asgi.App(
        middleware=[
            CORSMiddleware(cors_origins or []),
            AuthMiddleware(client_factory),
        ],
    )
    app.add_error_handler(Exception, _handle_unexpected)

    health = HealthResource(directory_api_url)
    app.add_route("/v1/health", health)
    app.add_route("/v1/health/ready", health, suffix="ready")
    app.add_route("/v1/access", AccessResource(sign_in_path))
    app.add_route("/v1/navigation", NavigationResource(sign_in_path))
    app.add_route("/v1/dashboard", DashboardResource(sign_in_path))
    app.add_route("/v1/matrix", MatrixResource(matrix_sessions, sign_in_path))
    app.add_route("/v1/matrix/save", MatrixSaveResource(matrix_sessions, sign_in_path))
    return app
