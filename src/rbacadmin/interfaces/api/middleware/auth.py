"""Auth middleware - resolves the operator's session through the directory."""

import logging
from collections.abc import Callable, Iterable

import falcon.asgi

from rbacadmin.application.ports import DirectoryClient
from rbacadmin.application.use_cases.session import SessionLoader
from rbacadmin.domain.value_objects import AuthStatus

logger = logging.getLogger(__name__)

DirectoryClientFactory = Callable[[str | None], DirectoryClient]


class AuthMiddleware:
    """Sets req.context.directory, req.context.auth_status and req.context.user.

    The bearer token is forwarded to the directory, which owns the session;
    a request without one is unauthenticated.
    """

    def __init__(
        self,
        client_factory: DirectoryClientFactory,
        exempt_prefixes: Iterable[str] = ("/v1/health",),
    ) -> None:
        self._client_factory = client_factory
        self._exempt = tuple(exempt_prefixes)

    async def process_request(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        """Load the current user for the request's token."""
        req.context.directory = None
        req.context.auth_status = AuthStatus.UNAUTHENTICATED
        req.context.user = None
        if req.method == "OPTIONS" or req.path.startswith(self._exempt):
            return

        auth = req.get_header("Authorization")
        if not auth or not auth.startswith("Bearer "):
            return

        directory = self._client_factory(auth[7:])
        req.context.directory = directory
        status, user = await SessionLoader(directory).load_current_user()
        req.context.auth_status = status
        req.context.user = user

    async def process_response(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, resource, req_succeeded
    ) -> None:
        """Release the per-request directory client."""
        directory = getattr(req.context, "directory", None)
        close = getattr(directory, "aclose", None)
        if close is not None:
            await close()
