"""CLI commands for product discounts."""

from __future__ import annotations

from datetime import datetime, timezone

import click

from catalog.infrastructure.bootstrap import Application
from catalog.infrastructure.cli.errors import reported_errors
from catalog.infrastructure.cli.product_commands import pass_app

_DATE_FORMATS = ["%Y-%m-%d", "%Y-%m-%dT%H:%M", "%Y-%m-%dT%H:%M:%S"]


def _as_utc(value: datetime) -> datetime:
    """Naive input is taken to be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@click.command("apply")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--percentage", required=True, type=int, help="Percent off, 1-100.")
@click.option("--start", required=True, type=click.DateTime(_DATE_FORMATS), help="First valid instant (UTC).")
@click.option("--end", required=True, type=click.DateTime(_DATE_FORMATS), help="Last valid instant (UTC).")
@pass_app
def discount_apply(
    app: Application, product_id: str, percentage: int, start: datetime, end: datetime
) -> None:
    """Attach a discount to an active product, replacing any existing one."""
    with reported_errors():
        app.apply_discount.handle(product_id, percentage, _as_utc(start), _as_utc(end))

    click.echo(f"{percentage}% discount applied to product {product_id}.")


@click.command("remove")
@click.option("--id", "product_id", required=True, help="Product ID.")
@pass_app
def discount_remove(app: Application, product_id: str) -> None:
    """Remove the discount from a product."""
    with reported_errors():
        app.remove_discount.handle(product_id)

    click.echo(f"Discount removed from product {product_id}.")
