"""Catch-all route serving the normalized ECB feed as JSON."""

from __future__ import annotations

import logging
from enum import Enum

from flask import Response, current_app, g, jsonify, request
from werkzeug.exceptions import MethodNotAllowed

from fxfeed.errors import AuthError, ConfigError
from fxfeed.feed import EcbFeedClient, normalize
from fxfeed.logging import auth_log_extra
from fxfeed.security import TokenVerifier, extract_bearer

from . import bp

logger = logging.getLogger(__name__)

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


class Stage(str, Enum):
    """Progress of a single request; the last value reached is kept on ``g``."""

    RECEIVED = "received"
    AUTHORIZING = "authorizing"
    FETCHING = "fetching"
    NORMALIZING = "normalizing"
    RESPONDING = "responding"


@bp.route("/", defaults={"path": ""}, methods=ALL_METHODS)
@bp.route("/<path:path>", methods=ALL_METHODS)
def serve_rates(path: str) -> Response:
    """Authenticate the caller, fetch the daily feed and return it as JSON."""

    _advance(Stage.RECEIVED)
    verifier: TokenVerifier = current_app.extensions["token_verifier"]
    if not verifier.configured:
        raise ConfigError("API_TOKEN is not configured; every request is refused")

    token = extract_bearer(request.headers.get("Authorization"))
    if token is None:
        raise AuthError("Missing or malformed Authorization header")

    _advance(Stage.AUTHORIZING)
    if not verifier.verify(token):
        logger.warning("Invalid API token", extra=auth_log_extra(reason="hash_mismatch"))
        raise AuthError("Invalid API token")

    _advance(Stage.FETCHING)
    feed_client: EcbFeedClient = current_app.extensions["feed_client"]
    document = feed_client.fetch()

    _advance(Stage.NORMALIZING)
    snapshot = normalize(document)

    _advance(Stage.RESPONDING)
    response = jsonify(snapshot.to_dict())
    response.status_code = 200
    return response


@bp.before_app_request
def serve_unlisted_methods() -> Response | None:
    """Route verbs outside ALL_METHODS (TRACE, PROPFIND, ...) to the same handler."""

    if isinstance(request.routing_exception, MethodNotAllowed):
        return serve_rates(request.path)
    return None


def _advance(stage: Stage) -> None:
    g.request_stage = stage.value
