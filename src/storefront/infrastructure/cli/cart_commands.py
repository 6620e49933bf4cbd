"""CLI commands for a session's shopping cart.

Each invocation restores the session's cart from its session file, applies
one edit and persists it again, the way a page reload would.
"""

from __future__ import annotations

from pathlib import Path

import click

from storefront.application.cart_store import CartStore
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import cart_store, product_repository

session_option = click.option(
    "--session",
    "session_id",
    default="default",
    show_default=True,
    envvar="STOREFRONT_SESSION",
    help="Client session owning the cart.",
)


def open_cart(data_dir: Path, session_id: str) -> CartStore:
    try:
        return cart_store(session_id, data_dir)
    except DomainException as exc:
        raise click.ClickException(str(exc))


def display_cart(store: CartStore) -> None:
    """Shared formatting for displaying a cart."""
    lines = store.lines
    if not lines:
        click.echo("Your cart is empty.")
        return

    click.echo(f"  {'ID':<6} {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*54}")
    for line in lines:
        click.echo(
            f"  {line.product_id:<6} {line.product.name:<20} {line.quantity:>5} "
            f"{str(line.product.price):>10} {str(line.line_total):>10}"
        )
    click.echo(f"  {'-'*54}")
    click.echo(f"  {'Subtotal':<27} {str(store.subtotal):>27}")
    click.echo(f"  {'Items':<27} {store.total_items:>27}")


@click.command("add")
@session_option
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--qty", "quantity", type=click.IntRange(min=1), default=1, show_default=True, help="Units to add.")
@click.pass_obj
def cart_add(data_dir: Path, session_id: str, product_id: str, quantity: int) -> None:
    """Add a product to the cart (increments an existing line)."""
    store = open_cart(data_dir, session_id)

    try:
        product = product_repository(data_dir).get_by_id(product_id)
        if product is None:
            raise click.ClickException(f"Product with ID '{product_id}' not found")
        store.add_item(product, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    display_cart(store)


@click.command("update")
@session_option
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--qty", "quantity", type=int, required=True, help="New quantity; 0 or less removes the line.")
@click.pass_obj
def cart_update(data_dir: Path, session_id: str, product_id: str, quantity: int) -> None:
    """Set the quantity of a cart line."""
    store = open_cart(data_dir, session_id)
    store.update_quantity(product_id, quantity)
    display_cart(store)


@click.command("remove")
@session_option
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.pass_obj
def cart_remove(data_dir: Path, session_id: str, product_id: str) -> None:
    """Remove a product from the cart."""
    store = open_cart(data_dir, session_id)
    store.remove_item(product_id)
    display_cart(store)


@click.command("clear")
@session_option
@click.pass_obj
def cart_clear(data_dir: Path, session_id: str) -> None:
    """Remove every line from the cart."""
    store = open_cart(data_dir, session_id)
    store.clear_cart()
    click.echo("Cart cleared.")


@click.command("show")
@session_option
@click.pass_obj
def cart_show(data_dir: Path, session_id: str) -> None:
    """Show the cart with current prices."""
    display_cart(open_cart(data_dir, session_id))
