"""CLI command for producing the API_TOKEN hash."""

from __future__ import annotations

import click

from fxfeed.security import hash_token


@click.command("hash-token")
@click.argument("token")
def hash_token_command(token: str) -> None:
    """Print the SHA-256 hex digest of TOKEN for use as API_TOKEN."""

    if not token:
        raise click.BadParameter("token must not be empty", param_hint="TOKEN")
    click.echo(hash_token(token))
