"""CLI commands for inspecting the transactional outbox."""

from __future__ import annotations

import json

import click

from catalog.infrastructure.bootstrap import Application
from catalog.infrastructure.cli.errors import reported_errors
from catalog.infrastructure.cli.product_commands import pass_app
from catalog.infrastructure.persistence.outbox_repository import OutboxStatus


@click.command("pending")
@click.option("--aggregate", "aggregate_id", default=None, help="Only events for this product ID.")
@click.option("--payload", "show_payload", is_flag=True, default=False, help="Print each payload.")
@pass_app
def outbox_pending(app: Application, aggregate_id: str | None, show_payload: bool) -> None:
    """List outbox events still waiting for a relay."""
    with reported_errors():
        records = app.outbox.list_events(status=OutboxStatus.PENDING, aggregate_id=aggregate_id)

    if not records:
        click.echo("No pending events.")
        return

    for record in records:
        click.echo(
            f"{record.created_at:%Y-%m-%d %H:%M:%S}  {record.event_type:<26} {record.aggregate_id}"
        )
        if show_payload:
            click.echo("  " + json.dumps(record.payload, sort_keys=True))
