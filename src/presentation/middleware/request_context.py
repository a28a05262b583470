"""Request context middleware for tracing."""

import uuid
from contextvars import ContextVar
from typing import Optional

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

MAX_REQUEST_ID_LENGTH = 128


def get_request_id() -> Optional[str]:
    """Get the current request ID from context."""
    return request_id_var.get()


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Middleware that sets up request context.

    Takes the request ID from the X-Request-ID header (or generates one)
    and echoes it in the response headers. The ID and, when given, the
    `as_of` reference date are bound into structlog's contextvars, so a
    log line about an overdue entry or a balance says which "today" it
    was computed against.
    """

    HEADER_NAME = "X-Request-ID"

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(self.HEADER_NAME, "")[:MAX_REQUEST_ID_LENGTH]
        request_id = request_id or str(uuid.uuid4())

        token = request_id_var.set(request_id)
        context = {"request_id": request_id}
        as_of = request.query_params.get("as_of")
        if as_of:
            context["as_of"] = as_of
        structlog.contextvars.bind_contextvars(**context)

        try:
            response = await call_next(request)
            response.headers[self.HEADER_NAME] = request_id
            return response
        finally:
            structlog.contextvars.unbind_contextvars(*context)
            request_id_var.reset(token)
