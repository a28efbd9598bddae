"""Request tracing and Prometheus metrics.

Every request carries a trace id. It is taken from the W3C ``traceparent``
header when present, else from ``X-Trace-ID``, else freshly generated. The id
lives in a context variable for the duration of the request, so any log
record emitted while handling it can include ``%(trace_id)s``.
"""

import logging
import re
import secrets
from collections.abc import Mapping
from contextvars import ContextVar, Token

from prometheus_client import Counter, Histogram

TRACE_ID_HEADER = "X-Trace-ID"
NO_TRACE_ID = "-"

# Inbound ids end up in log lines; anything else is replaced
_VALID_TRACE_ID = re.compile(r"^[A-Za-z0-9_-]{1,64}$")

_TRACE_ID: ContextVar[str] = ContextVar("trace_id", default=NO_TRACE_ID)

REQUEST_COUNTER = Counter(
    "auth_http_requests_total",
    "Number of processed HTTP requests",
    labelnames=("method", "route", "status"),
)
REQUEST_LATENCY = Histogram(
    "auth_http_request_duration_seconds",
    "HTTP request latency",
    labelnames=("method", "route"),
    buckets=(0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1, 2, 5, 10),
)


def new_trace_id() -> str:
    return secrets.token_hex(16)


def trace_id_from_headers(headers: Mapping[str, str]) -> str:
    """Pick the trace id for a request.

    Parameters
    ----------
    headers
        Case-insensitive request headers

    Returns
    -------
    The trace-id field of ``traceparent`` (``version-traceid-spanid-flags``),
    otherwise ``X-Trace-ID``, otherwise a new 32-character hex id
    """
    traceparent = headers.get("traceparent", "")
    parts = traceparent.split("-")
    if len(parts) >= 2 and _VALID_TRACE_ID.match(parts[1]):
        return parts[1]

    explicit = headers.get(TRACE_ID_HEADER, "").strip()
    if _VALID_TRACE_ID.match(explicit):
        return explicit

    return new_trace_id()


def set_trace_id(trace_id: str) -> Token[str]:
    return _TRACE_ID.set(trace_id)


def reset_trace_id(token: Token[str]) -> None:
    _TRACE_ID.reset(token)


def get_trace_id() -> str:
    return _TRACE_ID.get()


class TraceIdFilter(logging.Filter):
    """Attach the current trace id to every record as ``record.trace_id``."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.trace_id = get_trace_id()
        return True


def observe_request(method: str, route: str, status: int, seconds: float) -> None:
    REQUEST_COUNTER.labels(method=method, route=route, status=str(status)).inc()
    REQUEST_LATENCY.labels(method=method, route=route).observe(seconds)
