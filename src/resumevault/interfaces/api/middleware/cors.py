"""CORS middleware for the editor frontend."""

import falcon.asgi

_ALLOWED_METHODS = "GET, POST, PUT, PATCH, DELETE, OPTIONS"


class CORSMiddleware:
    """Adds CORS headers for allowed origins and answers OPTIONS preflight.

    An origin list containing "*" allows every origin.
    """

    def __init__(self, origins: list[str]) -> None:
        self._origins = origins
        self._allow_all = "*" in origins

    def _allowed_origin(self, req: falcon.asgi.Request) -> str | None:
        origin = req.get_header("Origin")
        if not origin:
            return None
        if self._allow_all or origin in self._origins:
            return origin
        return None

    def _set_cors_headers(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        origin = self._allowed_origin(req)
        resp.append_header("Vary", "Origin")
        if not origin:
            return
        resp.set_header("Access-Control-Allow-Origin", origin)
        resp.set_header("Access-Control-Allow-Methods", _ALLOWED_METHODS)
        resp.set_header("Access-Control-Allow-Headers", "Authorization, Content-Type")
        resp.set_header("Access-Control-Max-Age", "86400")

    async def process_request(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        """Short-circuit OPTIONS preflight."""
        if req.method == "OPTIONS":
            self._set_cors_headers(req, resp)
            resp.status = falcon.HTTP_204
            resp.complete = True

    async def process_response(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, resource, req_succeeded
    ) -> None:
        """Add CORS headers to every non-preflight response."""
        if req.method != "OPTIONS":
            self._set_cors_headers(req, resp)
