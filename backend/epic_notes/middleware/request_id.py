"""
Epic Notes Backend: Request ID Middleware
============================================

What:  Assigns an id to each request and returns it in X-Request-ID.
How:   Reuses the client's X-Request-ID when sent, otherwise generates a
       short UUID; stores it in a ContextVar for loggers and exception
       handlers, and on request.state for route handlers.
When:  Wraps the logging middleware, so access log lines carry the id.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one event loop each see their own id
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Correlates log lines, error bodies and error pages of one request."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:8]

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid
        return response
