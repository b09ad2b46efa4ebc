"""Application-wide error taxonomy and Flask error handlers."""

from __future__ import annotations

import logging

from flask import Flask, Response, g, has_request_context, make_response
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)

STATUS_MESSAGES: dict[int, str] = {
    401: "Unauthorized",
    500: "Internal Server Error",
}


class FeedServerError(Exception):
    """Base class for errors mapped onto an HTTP status."""

    status_code: int = 500
    event: str = "request.error"

    def __init__(self, message: str = "", *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    @property
    def public_message(self) -> str:
        return STATUS_MESSAGES.get(self.status_code, STATUS_MESSAGES[500])


class AuthError(FeedServerError):
    """Missing, malformed or incorrect bearer credential."""

    status_code = 401
    event = "auth.rejected"


class ConfigError(FeedServerError):
    """Required process configuration is absent."""

    event = "config.error"


class NetworkError(FeedServerError):
    """The outbound feed request could not be completed."""

    event = "feed.fetch_failed"


class ParseError(FeedServerError):
    """The feed document does not have the expected shape."""

    event = "feed.parse_failed"


def plain_text_response(status_code: int) -> Response:
    body = STATUS_MESSAGES.get(status_code, STATUS_MESSAGES[500])
    response = make_response(body, status_code)
    response.mimetype = "text/plain"
    return response


def register_error_handlers(app: Flask) -> None:
    """Attach error handlers to the Flask application."""

    @app.errorhandler(FeedServerError)
    def handle_feed_server_error(error: FeedServerError):
        if error.status_code >= 500:
            logger.error(
                "Request failed: %s",
                error.message or error.__class__.__name__,
                extra=_error_log_extra(error.event, error),
            )
        return plain_text_response(error.status_code)

    @app.errorhandler(Exception)
    def handle_unexpected_error(error: Exception):
        if isinstance(error, HTTPException):
            return error
        logger.exception(
            "Error processing request",
            extra=_error_log_extra("request.unhandled", error),
        )
        return plain_text_response(500)


def _error_log_extra(event: str, error: Exception) -> dict[str, str]:
    payload = {"event": event, "error_type": error.__class__.__name__}
    if has_request_context():
        stage = g.get("request_stage")
        if stage:
            payload["stage"] = stage
    return payload
