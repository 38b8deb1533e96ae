"""
Inkwell Backend: Request ID Middleware
=========================================

What:  Assigns every request a short correlation id and echoes it back in
       the `X-Request-ID` response header.
How:   Reuses a client-supplied X-Request-ID or generates one, stores it in a
       ContextVar (for loggers and error handlers) and on request.state.
When:  Outermost application middleware, ahead of access logging.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on the same thread each see their own id.
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

MAX_CLIENT_ID_LENGTH = 64


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Behavior:
        1. Use the client's X-Request-ID header when present and sane
        2. Otherwise generate an 8-char id from a UUID4
        3. Store it in the ContextVar and request.state
        4. Add it to the response headers
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID", "")
        if not rid or len(rid) > MAX_CLIENT_ID_LENGTH:
            rid = str(uuid.uuid4())[:8]

        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers["X-Request-ID"] = rid
        return response


def current_request_id(request: Request) -> str:
    """Request id for error responses, including those built outside this middleware."""
    return getattr(request.state, "request_id", "") or request_id_var.get("")
