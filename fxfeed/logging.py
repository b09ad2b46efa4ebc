"""Log setup and structured extras for the feed server.

Every record may carry ``extra`` fields (``event``, ``request_id``, ...);
the JSON formatter emits them next to the message, the plain formatter
ignores them.
"""

from __future__ import annotations

import json
import logging
import time
import uuid
from datetime import UTC, datetime
from typing import Any

from flask import Flask, g, has_request_context, request

REQUEST_ID_HEADER = "X-Request-ID"

_RECORD_ATTRS = set(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}


class JSONLogFormatter(logging.Formatter):
    """One JSON object per record, extras included."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(
            (key, value) for key, value in vars(record).items() if key not in _RECORD_ATTRS
        )
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, separators=(",", ":"))


def setup_logging(app: Flask) -> None:
    """Install a single stderr handler on the root logger."""

    level = logging.getLevelName(str(app.config.get("LOG_LEVEL", "INFO")).upper())
    if not isinstance(level, int):
        level = logging.INFO

    handler = logging.StreamHandler()
    if app.config.get("LOG_JSON_ENABLED"):
        handler.setFormatter(JSONLogFormatter())
    else:
        handler.setFormatter(logging.Formatter(app.config.get("LOG_FORMAT")))

    logging.basicConfig(level=level, handlers=[handler], force=True)
    app.logger.handlers = []
    app.logger.setLevel(level)


def init_request_logging(app: Flask) -> None:
    """Tag each request with an id and log its outcome."""

    @app.before_request
    def _start_request():
        g.request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        g.request_start = time.perf_counter()

    @app.after_request
    def _log_request(response):
        response.headers.setdefault(REQUEST_ID_HEADER, g.request_id)
        app.logger.info(
            "Request handled",
            extra={
                "event": "request.completed",
                "method": request.method,
                "path": request.path,
                "status": response.status_code,
                "duration_ms": round((time.perf_counter() - g.request_start) * 1000, 3),
                "request_id": g.request_id,
            },
        )
        return response


def feed_log_extra(
    *,
    event: str,
    status: str,
    url: str,
    duration_ms: float,
    error: str | None = None,
) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "event": event,
        "status": status,
        "url": url,
        "duration_ms": round(duration_ms, 3),
        "request_id": current_request_id(),
        "error": error,
    }
    return {key: value for key, value in payload.items() if value is not None}


def auth_log_extra(*, reason: str) -> dict[str, Any]:
    """Extras for a rejected credential; the credential itself is never included."""

    payload: dict[str, Any] = {
        "event": "auth.invalid_token",
        "reason": reason,
        "timestamp": datetime.now(UTC).isoformat(),
        "request_id": current_request_id(),
        "client_ip": request.remote_addr if has_request_context() else None,
    }
    return {key: value for key, value in payload.items() if value is not None}


def current_request_id() -> str | None:
    if not has_request_context():
        return None
    return g.get("request_id")
