"""CLI entry points."""

from __future__ import annotations

from flask import Flask

from .fetch_rates import fetch_rates
from .hash_token import hash_token_command


def register_cli(app: Flask) -> None:
    """Register CLI commands on the given Flask app."""

    app.cli.add_command(hash_token_command)
    app.cli.add_command(fetch_rates)
