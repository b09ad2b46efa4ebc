"""CLI command that fetches and prints the normalized feed once."""

from __future__ import annotations

import json

import click
from flask import current_app
from flask.cli import with_appcontext

from fxfeed.errors import NetworkError, ParseError
from fxfeed.feed import EcbFeedClient, normalize


@click.command("fetch-rates")
@click.option("--indent", type=int, default=2, show_default=True, help="JSON indentation.")
@with_appcontext
def fetch_rates(indent: int) -> None:
    """Download today's ECB rates and print them as JSON."""

    feed_client: EcbFeedClient = current_app.extensions["feed_client"]
    try:
        snapshot = normalize(feed_client.fetch())
    except (NetworkError, ParseError) as exc:
        raise click.ClickException(f"{exc.__class__.__name__}: {exc}") from exc

    click.echo(json.dumps(snapshot.to_dict(), indent=indent, sort_keys=True))
