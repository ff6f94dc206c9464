"""CORS middleware for the admin console front end."""

import falcon.asgi

ALLOWED_METHODS = "GET, POST, DELETE, OPTIONS"
ALLOWED_HEADERS = "Authorization, Content-Type, X-Requested-With"


class CORSMiddleware:
    """Echoes allowed origins and answers OPTIONS preflight.

    "*" in origins allows any origin; credentials are only advertised for an
    explicitly listed origin.
    """

    def __init__(self, origins: list[str]) -> None:
        self._origins = frozenset(origins)
        self._allow_any = "*" in self._origins

    def _apply(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        origin = req.get_header("Origin")
        if not origin:
            return
        if origin in self._origins:
            resp.set_header("Access-Control-Allow-Origin", origin)
            resp.set_header("Access-Control-Allow-Credentials", "true")
        elif self._allow_any:
            resp.set_header("Access-Control-Allow-Origin", "*")
        else:
            return
        resp.set_header("Vary", "Origin")
        resp.set_header("Access-Control-Allow-Methods", ALLOWED_METHODS)
        resp.set_header("Access-Control-Allow-Headers", ALLOWED_HEADERS)

    async def process_request(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        """Short-circuit preflight requests."""
        if req.method == "OPTIONS":
            self._apply(req, resp)
            resp.status = falcon.HTTP_204
            resp.complete = True

    async def process_response(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, resource, req_succeeded
    ) -> None:
        self._apply(req, resp)
