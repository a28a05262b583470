"""Request/response logging middleware with timing and HTTP metrics."""

import time
from typing import Callable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from src.core.config import settings
from src.core.metrics import record_http_request

logger = structlog.get_logger(__name__)

# Paths excluded from request logs and HTTP metrics
QUIET_PATHS = frozenset({"/metrics", "/api/health"})


def _route_template(request: Request) -> str:
    """
    Request path with parameter values put back as "{name}", e.g.
    "/api/accounts/{account_id}", to keep metric labels bounded.

    Built from the full request path so router prefixes are always part
    of the label. Requests no route matched are labelled "unmatched".
    """
    if request.scope.get("endpoint") is None:
        return "unmatched"
    names = {str(value): name for name, value in request.path_params.items()}
    return "/".join(
        f"{{{names[segment]}}}" if segment in names else segment
        for segment in request.url.path.split("/")
    )


class LoggingMiddleware(BaseHTTPMiddleware):
    """Logs request start, completion and duration; records HTTP metrics."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        path = request.url.path
        if path in QUIET_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        method = request.method
        query = str(request.query_params) if request.query_params else None

        log = logger.bind(method=method, path=path)
        log.info("request_started", query=query)

        try:
            response = await call_next(request)
        except Exception as e:
            duration = time.perf_counter() - start_time
            log.error(
                "request_failed",
                error=str(e),
                error_type=type(e).__name__,
                duration_ms=round(duration * 1000, 2),
            )
            if settings.metrics_enabled:
                record_http_request(method, _route_template(request), 500, duration)
            raise

        duration = time.perf_counter() - start_time
        log.info(
            "request_completed",
            status_code=response.status_code,
            duration_ms=round(duration * 1000, 2),
        )
        if settings.metrics_enabled:
            record_http_request(method, _route_template(request), response.status_code, duration)

        return response
