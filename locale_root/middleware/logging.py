"""
Structured request logging

One access record per request on the ``locale_root.access`` logger, tagged
with the request ID and, when the root router handled the request, the
locale it resolved and the decision it made.
"""

import json
import logging
import time
import uuid
from collections.abc import Callable
from contextvars import ContextVar
from datetime import datetime, timezone

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

request_id_var: ContextVar[str] = ContextVar("request_id", default="")

# Record attributes copied into the JSON output when present
EXTRA_FIELDS = ("method", "path", "status_code", "duration_ms", "locale", "routing_decision", "error_code")

UNLOGGED_PATHS = frozenset({"/health", "/ready"})


class RequestIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get("")
        return True


class StructuredFormatter(logging.Formatter):
    """Render a record as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", ""),
        }
        entry.update({key: getattr(record, key) for key in EXTRA_FIELDS if hasattr(record, key)})
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry)


class StructuredLoggingMiddleware(BaseHTTPMiddleware):
    """Echo or assign X-Request-ID and write the access record."""

    def __init__(self, app: ASGIApp, logger_name: str = "locale_root.access"):
        super().__init__(app)
        self.logger = logging.getLogger(logger_name)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request_id_var.set(request_id)
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            self._log_request(request, 500, started)
            raise

        response.headers["X-Request-ID"] = request_id
        self._log_request(request, response.status_code, started)
        return response

    def _log_request(self, request: Request, status_code: int, started: float) -> None:
        if request.url.path in UNLOGGED_PATHS:
            return

        duration_ms = round((time.perf_counter() - started) * 1000, 2)
        extra = {
            "method": request.method,
            "path": request.url.path,
            "status_code": status_code,
            "duration_ms": duration_ms,
        }
        # Set by the root routes once a decision is reached
        for key in ("locale", "routing_decision"):
            value = getattr(request.state, key, None)
            if value:
                extra[key] = value

        level = logging.ERROR if status_code >= 500 else logging.INFO
        self.logger.log(level, f"{request.method} {request.url.path} - {status_code} ({duration_ms}ms)", extra=extra)


def setup_structured_logging(log_level: str = "INFO", json_format: bool = True) -> None:
    """Install a single stderr handler on the root logger.

    ``json_format=False`` gives a plain text line for local development.
    """
    handler = logging.StreamHandler()
    if json_format:
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s [%(request_id)s] %(message)s"))
    handler.addFilter(RequestIdFilter())

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level.upper())

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
