"""
Inkwell Backend: Unhandled Error Middleware
==============================================

What:  Turns any exception that escaped the routers into the generic 500
       JSON body.
How:   Wraps the downstream app and catches `Exception`. Application errors
       (InkwellError, request validation) never get here; their handlers run
       inside the router's ExceptionMiddleware.
When:  Inside CORS, Request ID and access logging, so the 500 carries CORS
       and X-Request-ID headers and is logged like any other response.
       Starlette's own `Exception` handler runs outside all user middleware
       and is only reached by failures in the middleware itself.
"""

import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from inkwell.middleware.request_id import current_request_id

logger = logging.getLogger(__name__)


def internal_error_response(request: Request) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_server_error",
            "message": "An unexpected error occurred. Please try again or contact support.",
            "request_id": current_request_id(request),
        },
    )


class UnhandledErrorMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            logger.error(
                "[%s] Unexpected error: %s", current_request_id(request), str(exc), exc_info=True
            )
            return internal_error_response(request)
