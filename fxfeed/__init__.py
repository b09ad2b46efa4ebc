"""Application factory for the ECB rate feed server."""

from __future__ import annotations

from flask import Flask

from config import get_config
from .cli import register_cli
from .feed import EcbFeedClient
from .security import TokenVerifier


def create_app(
    config_name: str | None = None,
    *,
    feed_client: EcbFeedClient | None = None,
    verifier: TokenVerifier | None = None,
) -> Flask:
    """Application factory adhering to the Flask app factory pattern.

    ``feed_client`` and ``verifier`` replace the collaborators that would
    otherwise be built from configuration.
    """

    app = Flask(__name__)
    config_class = get_config(config_name)
    app.config.from_object(config_class)

    _configure_logging(app)
    _register_extensions(app, feed_client=feed_client, verifier=verifier)
    _register_blueprints(app)
    _register_error_handlers(app)

    register_cli(app)
    return app


def _configure_logging(app: Flask) -> None:
    from .logging import init_request_logging, setup_logging

    # Under test the root logger belongs to pytest's capture handlers.
    if not app.config.get("TESTING"):
        setup_logging(app)
    init_request_logging(app)


def _register_extensions(
    app: Flask,
    *,
    feed_client: EcbFeedClient | None,
    verifier: TokenVerifier | None,
) -> None:
    from .cors import init_cors

    token_verifier = verifier or TokenVerifier.from_config(app.config)
    if not token_verifier.configured:
        app.logger.error(
            "API_TOKEN is not set; all requests will fail with 500",
            extra={"event": "config.error", "setting": "API_TOKEN"},
        )
    app.extensions["token_verifier"] = token_verifier
    app.extensions["feed_client"] = feed_client or EcbFeedClient.from_config(app.config)

    init_cors(app)


def _register_blueprints(app: Flask) -> None:
    """Register Flask blueprints."""

    from .rates import bp as rates_bp

    app.register_blueprint(rates_bp)


def _register_error_handlers(app: Flask) -> None:
    """Register global error handlers."""

    from .errors import register_error_handlers

    register_error_handlers(app)
