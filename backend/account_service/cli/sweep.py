"""Flask CLI commands for subscription maintenance."""

from __future__ import annotations

import click
from flask import current_app
from flask.cli import with_appcontext

from account_service.tasks.subscription_sweep import SubscriptionSweeper


@click.group("sweep")
def sweep_cli() -> None:
    """Subscription maintenance commands."""


@sweep_cli.command("run")
@with_appcontext
def run_command() -> None:
    """Turn off every paid subscription whose expiry has passed, once."""
    sweeper = SubscriptionSweeper(current_app._get_current_object())  # type: ignore[attr-defined]
    affected = sweeper.run_once()
    click.echo(f"Deactivated subscriptions: {affected}")
