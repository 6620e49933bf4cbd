"""CLI commands for the product catalog."""

from __future__ import annotations

from pathlib import Path

import click

from storefront.application.add_product import AddProductHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import product_repository


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--inventory", type=click.IntRange(min=0), default=None, help="Units in stock (omit if untracked).")
@click.option("--category", default=None, help="Category label.")
@click.pass_obj
def product_add(
    data_dir: Path,
    name: str,
    price: str,
    inventory: int | None,
    category: str | None,
) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(product_repo=product_repository(data_dir))

    try:
        product = handler.handle(
            name=name, price=price, inventory_count=inventory, category=category
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} '{product.name}' added at {product.price}")


@click.command("list")
@click.pass_obj
def product_list(data_dir: Path) -> None:
    """List all products in the catalog."""
    try:
        products = product_repository(data_dir).list_all()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'Category':<12} {'Price':>10} {'Stock':>7}")
    click.echo("-" * 59)
    for p in products:
        stock = "-" if p.inventory_count is None else str(p.inventory_count)
        click.echo(
            f"{p.id:<6} {p.name:<20} {p.category or '':<12} {str(p.price):>10} {stock:>7}"
        )
