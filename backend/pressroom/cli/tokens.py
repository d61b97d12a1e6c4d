"""Refresh-token maintenance commands."""

from __future__ import annotations

import click
from flask.cli import with_appcontext

from pressroom.api.deps import get_container

PURGE_LOCK_KEY = "lock:tokens:purge-expired"


@click.group("tokens")
def tokens_cli() -> None:
    """Refresh-token maintenance."""


@tokens_cli.command("purge-expired")
@with_appcontext
def purge_expired_command() -> None:
    """Delete expired refresh-token rows.

    Guarded by a distributed lock so that, with several instances scheduled
    at once, only one does the work.
    """
    container = get_container()
    with container.lock.hold(PURGE_LOCK_KEY, container.maintenance_lock_ttl) as token:
        if token is None:
            click.echo("Purge already running elsewhere; skipping.")
            return
        removed = container.issuer.purge_expired()
    click.echo(f"Purged {removed} expired refresh token(s).")
