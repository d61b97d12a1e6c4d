"""Flask CLI commands for seeding demo data."""

from __future__ import annotations

import logging

import click
from flask import current_app
from flask.cli import with_appcontext

from pressroom.api.deps import get_container
from pressroom.core.extensions import db
from pressroom.seeds import seed_data
from pressroom.services._shared.cache_keys import POSTS_LIST_PATTERN

LOGGER = logging.getLogger(__name__)

SEED_LOCK_KEY = "lock:seed:demo"


def _echo_summary(summary: dict[str, dict[str, int]]) -> None:
    """Pretty-print a tabular summary of seed results."""
    click.echo("Seed summary:")
    if not summary:
        click.echo("  (no changes)")
        return
    width = max(len(name) for name in summary)
    for table, counters in sorted(summary.items()):
        created = counters.get("created", 0)
        existing = counters.get("existing", 0)
        click.echo(f"  {table.ljust(width)}  created={created:>2}  existing={existing:>2}")


@click.group("seed")
@click.option("--verbose", is_flag=True, help="Enable verbose logging for seeding.")
@click.pass_context
def seed_cli(ctx: click.Context, verbose: bool) -> None:
    """Collection of database seeding commands."""
    ctx.meta["seed.verbose"] = verbose
    level = logging.DEBUG if verbose else logging.INFO
    logging.getLogger(seed_data.__name__).setLevel(level)
    LOGGER.setLevel(level)


@seed_cli.command("demo")
@click.pass_context
@with_appcontext
def demo_command(ctx: click.Context) -> None:
    """Create the demo accounts and sample posts (idempotent).

    Only one instance seeds at a time; a contended run exits without changes.
    """
    if str(current_app.config.get("APP_ENV", "")).lower() == "production":
        raise click.UsageError("The 'flask seed demo' command is disabled in production.")

    container = get_container()
    verbose = bool(ctx.meta.get("seed.verbose", False))
    with container.lock.hold(SEED_LOCK_KEY, container.maintenance_lock_ttl) as token:
        if token is None:
            click.echo("Another seed run is in progress; skipping.")
            return
        try:
            summary = seed_data.run_all(db, verbose=verbose)
        except Exception as exc:  # pragma: no cover - CLI safeguard
            raise click.ClickException(f"Seeding failed: {exc}") from exc
    container.cache.invalidate_by_pattern(POSTS_LIST_PATTERN)
    _echo_summary(summary)
