"""Request logging middleware.

Logs one line per request: method, path, status and duration. Headers are
never logged, so bearer tokens stay out of the logs. The same pass assigns
the request's trace id, echoes it in ``X-Trace-ID`` and records the request
in the Prometheus metrics.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from auth_service.presentation.api.observability import (
    TRACE_ID_HEADER,
    observe_request,
    reset_trace_id,
    set_trace_id,
    trace_id_from_headers,
)

logger = logging.getLogger(__name__)

UNMATCHED_ROUTE = "unmatched"


def _route_template(request: Request) -> str:
    # Label by template, never by raw path, to keep metric cardinality bounded
    route = request.scope.get("route")
    return getattr(route, "path", None) or UNMATCHED_ROUTE


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every HTTP request with its outcome and latency."""

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        trace_id = trace_id_from_headers(request.headers)
        token = set_trace_id(trace_id)
        started = time.perf_counter()
        try:
            try:
                response = await call_next(request)
            except Exception:
                elapsed = time.perf_counter() - started
                observe_request(request.method, _route_template(request), 500, elapsed)
                logger.error(
                    "%s %s failed after %.1f ms",
                    request.method,
                    request.url.path,
                    elapsed * 1000,
                )
                raise

            elapsed = time.perf_counter() - started
            observe_request(
                request.method,
                _route_template(request),
                response.status_code,
                elapsed,
            )
            level = logging.ERROR if response.status_code >= 400 else logging.INFO
            logger.log(
                level,
                "%s %s -> %d (%.1f ms)",
                request.method,
                request.url.path,
                response.status_code,
                elapsed * 1000,
            )
            response.headers[TRACE_ID_HEADER] = trace_id
            return response
        finally:
            reset_trace_id(token)
