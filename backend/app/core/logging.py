"""Logging setup: plain or JSON output, request IDs and simulation tick context.

Every record passes through :class:`ContextFilter`, which stamps it with the
current request ID and simulation tick number (both held in context
variables), so engine log lines emitted while a tick runs can be correlated
with the HTTP request or ticker iteration that triggered it.
"""

from __future__ import annotations

import json
import logging
import time
import uuid
from contextvars import ContextVar
from typing import Any

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

request_id_var: ContextVar[str] = ContextVar("request_id", default="")
tick_var: ContextVar[int | None] = ContextVar("tick", default=None)

# Polled by dashboards and probes; logged at DEBUG only.
QUIET_PATHS = frozenset({"/health"})

TEXT_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(context)s%(message)s"

_EXTRA_FIELDS = (
    "method",
    "path",
    "status_code",
    "duration_ms",
    "client_ip",
    "mode",
    "battery_soc",
    "fallback",
    "tick_count",
)


class ContextFilter(logging.Filter):
    """Attach ``request_id``, ``tick`` and a printable ``context`` prefix."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get("")
        record.tick = tick_var.get()

        parts = []
        if record.request_id:
            parts.append(f"req={record.request_id}")
        if record.tick is not None:
            parts.append(f"tick={record.tick}")
        record.context = f"({' '.join(parts)}) " if parts else ""
        return True


class JSONFormatter(logging.Formatter):
    """One JSON object per line; context and known extras become keys."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if getattr(record, "request_id", ""):
            entry["request_id"] = record.request_id
        if getattr(record, "tick", None) is not None:
            entry["tick"] = record.tick

        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self.formatException(record.exc_info)

        for key in _EXTRA_FIELDS:
            val = getattr(record, key, None)
            if val is not None:
                entry[key] = val

        return json.dumps(entry, default=str)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Tag each request with an X-Request-ID and log its status and timing."""

    async def dispatch(self, request: Request, call_next) -> Response:  # type: ignore[override]
        rid = request.headers.get("x-request-id") or uuid.uuid4().hex[:8]
        token = request_id_var.set(rid)
        try:
            start = time.perf_counter()
            response: Response = await call_next(request)
            duration_ms = round((time.perf_counter() - start) * 1000, 1)

            response.headers["X-Request-ID"] = rid

            path = request.url.path
            level = logging.DEBUG if path in QUIET_PATHS else logging.INFO
            logging.getLogger("greengrid.access").log(
                level,
                "%s %s -> %s (%.1fms)",
                request.method,
                path,
                response.status_code,
                duration_ms,
                extra={
                    "method": request.method,
                    "path": path,
                    "status_code": response.status_code,
                    "duration_ms": duration_ms,
                    "client_ip": request.client.host if request.client else "unknown",
                },
            )
            return response
        finally:
            request_id_var.reset(token)


def setup_logging(json_format: bool = False, debug: bool = False) -> None:
    """Install a single stream handler on the root logger.

    Use ``json_format=True`` in production so log shippers can index the
    tick and request fields.
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG if debug else logging.INFO)

    handler = logging.StreamHandler()
    handler.addFilter(ContextFilter())
    if json_format:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    for old in list(root.handlers):
        if getattr(old, "_greengrid", False):
            root.removeHandler(old)
    handler._greengrid = True  # type: ignore[attr-defined]
    root.addHandler(handler)

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
