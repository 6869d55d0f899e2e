"""CLI commands for the Product aggregate."""

from __future__ import annotations

from fractions import Fraction

import click

from catalog.application.dto import ProductDTO
from catalog.infrastructure.bootstrap import Application
from catalog.infrastructure.cli.errors import reported_errors

pass_app = click.make_pass_decorator(Application)


def _parse_price(raw: str) -> Fraction:
    """Parse '19.99' or '1999/100' into an exact fraction."""
    try:
        return Fraction(raw.strip())
    except (ValueError, ZeroDivisionError):
        raise click.BadParameter(f"Invalid price '{raw}'.", param_hint="'--price'")


@click.command("create")
@click.option("--name", required=True, help="Product name.")
@click.option("--description", default="", help="Free-text description.")
@click.option("--category", required=True, help="Category name.")
@click.option("--price", required=True, help="Base price, e.g. 19.99 or 1999/100.")
@pass_app
def product_create(app: Application, name: str, description: str, category: str, price: str) -> None:
    """Create a new product in DRAFT status."""
    amount = _parse_price(price)

    with reported_errors():
        product_id = app.create_product.handle(
            name=name,
            description=description,
            category=category,
            price_numerator=amount.numerator,
            price_denominator=amount.denominator,
        )

    click.echo(product_id)


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--name", required=True, help="New name.")
@click.option("--description", default="", help="New description.")
@click.option("--category", required=True, help="New category.")
@pass_app
def product_update(
    app: Application, product_id: str, name: str, description: str, category: str
) -> None:
    """Replace a product's name, description and category."""
    with reported_errors():
        app.update_product.handle(product_id, name, description, category)

    click.echo(f"Product {product_id} updated.")


@click.command("activate")
@click.option("--id", "product_id", required=True, help="Product ID.")
@pass_app
def product_activate(app: Application, product_id: str) -> None:
    """Put a product on sale."""
    with reported_errors():
        app.activate_product.handle(product_id)

    click.echo(f"Product {product_id} activated.")


@click.command("deactivate")
@click.option("--id", "product_id", required=True, help="Product ID.")
@pass_app
def product_deactivate(app: Application, product_id: str) -> None:
    """Take a product off sale."""
    with reported_errors():
        app.deactivate_product.handle(product_id)

    click.echo(f"Product {product_id} deactivated.")


@click.command("archive")
@click.option("--id", "product_id", required=True, help="Product ID.")
@pass_app
def product_archive(app: Application, product_id: str) -> None:
    """Archive a product (it must not be active)."""
    with reported_errors():
        app.archive_product.handle(product_id)

    click.echo(f"Product {product_id} archived.")


def _display_product(dto: ProductDTO) -> None:
    click.echo(f"Product {dto.id}  (status={dto.status})")
    click.echo(f"Name:      {dto.name}")
    click.echo(f"Category:  {dto.category}")
    if dto.description:
        click.echo(f"About:     {dto.description}")
    click.echo(f"Price:     {dto.base_price}")
    if dto.discount_percent is not None:
        state = "active" if dto.has_active_discount else "inactive"
        click.echo(
            f"Discount:  {dto.discount_percent}% "
            f"{dto.discount_start:%Y-%m-%d %H:%M} .. {dto.discount_end:%Y-%m-%d %H:%M} ({state})"
        )
    click.echo(f"Effective: {dto.effective_price}")
    click.echo(f"Created:   {dto.created_at:%Y-%m-%d %H:%M UTC}")
    if dto.archived_at is not None:
        click.echo(f"Archived:  {dto.archived_at:%Y-%m-%d %H:%M UTC}")


@click.command("show")
@click.option("--id", "product_id", required=True, help="Product ID to display.")
@pass_app
def product_show(app: Application, product_id: str) -> None:
    """Show one product with its current effective price."""
    with reported_errors():
        dto = app.get_product.handle(product_id)

    _display_product(dto)


@click.command("price")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--quantity", type=int, default=1, show_default=True, help="Units to price.")
@pass_app
def product_price(app: Application, product_id: str, quantity: int) -> None:
    """Show the current price breakdown for some units of a product."""
    with reported_errors():
        quote = app.quote_price.handle(product_id, quantity)

    click.echo(f"Product {quote.product_id} x{quote.quantity}  (at {quote.quoted_at:%Y-%m-%d %H:%M UTC})")
    click.echo(f"Unit price: {quote.base_price}")
    if quote.discount_percent:
        click.echo(f"Discount:   {quote.discount_percent}% (-{quote.discount_amount} per unit)")
    click.echo(f"Unit now:   {quote.effective_price}")
    click.echo(f"Total:      {quote.total}")
    if quote.discount_percent:
        click.echo(f"You save:   {quote.savings}")


@click.command("list")
@click.option("--category", default=None, help="Only this category.")
@click.option(
    "--status",
    default=None,
    type=click.Choice(["draft", "active", "inactive", "archived"]),
    help="Only this status.",
)
@click.option("--active-only", is_flag=True, default=False, help="Only active products.")
@click.option("--limit", type=int, default=None, help="Page size (default 20, max 100).")
@click.option("--offset", type=int, default=0, help="Rows to skip.")
@pass_app
def product_list(
    app: Application,
    category: str | None,
    status: str | None,
    active_only: bool,
    limit: int | None,
    offset: int,
) -> None:
    """List products, newest first."""
    with reported_errors():
        page = app.list_products.handle(
            category=category,
            status=status,
            active_only=active_only,
            limit=limit,
            offset=offset,
        )

    if not page.products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<36}  {'Name':<20} {'Category':<12} {'Status':<9} {'Price':>10} {'Now':>10}")
    click.echo("-" * 104)
    for p in page.products:
        click.echo(
            f"{p.id:<36}  {p.name:<20} {p.category:<12} {p.status:<9} "
            f"{p.base_price:>10} {p.effective_price:>10}"
        )
    shown = page.offset + len(page.products)
    more = " (more available)" if page.has_more else ""
    click.echo(f"{page.offset + 1}-{shown} of {page.total_count}{more}")
