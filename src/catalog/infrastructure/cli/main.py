import click

from catalog.infrastructure.bootstrap import build_application
from catalog.infrastructure.cli.discount_commands import discount_apply, discount_remove
from catalog.infrastructure.cli.outbox_commands import outbox_pending
from catalog.infrastructure.cli.product_commands import (
    product_activate,
    product_archive,
    product_create,
    product_deactivate,
    product_list,
    product_price,
    product_show,
    product_update,
)
from catalog.infrastructure.config import Settings
from catalog.infrastructure.logging_config import configure_logging


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Product Catalog"""
    # Tests pass a prebuilt Application through ``obj``.
    if ctx.obj is None:
        settings = Settings.from_env()
        configure_logging(settings)
        ctx.obj = build_application(settings)


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def discount() -> None:
    """Manage product discounts."""


@cli.group()
def outbox() -> None:
    """Inspect the event outbox."""


# Register subcommands
product.add_command(product_activate)
product.add_command(product_archive)
product.add_command(product_create)
product.add_command(product_deactivate)
product.add_command(product_list)
product.add_command(product_price)
product.add_command(product_show)
product.add_command(product_update)
discount.add_command(discount_apply)
discount.add_command(discount_remove)
outbox.add_command(outbox_pending)
