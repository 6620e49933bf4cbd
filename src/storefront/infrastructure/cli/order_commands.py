"""CLI commands for checkout and orders."""

from __future__ import annotations

from datetime import timedelta
from pathlib import Path

import click

from storefront.application.dto import OrderDTO
from storefront.application.find_orphaned_orders import FindOrphanedOrdersHandler
from storefront.application.list_customer_orders import ListCustomerOrdersHandler
from storefront.application.review_order import ReviewOrderHandler
from storefront.application.show_order import ShowOrderHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import (
    checkout_handler,
    customer_repository,
    order_repository,
)
from storefront.infrastructure.cli.cart_commands import open_cart, session_option


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id}  (status={dto.status})")
    click.echo(f"Customer: {dto.customer_name or dto.customer_id}")
    click.echo(f"Created:  {dto.created_at}")
    click.echo(f"Payment:  {dto.payment_status or 'missing'}")
    if dto.shipment_status:
        click.echo(f"Shipment: {dto.shipment_status}  tracking {dto.tracking_number}")
        click.echo(f"Ship to:  {dto.shipping_address}")
    else:
        click.echo("Shipment: missing")
    click.echo()

    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*47}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<20} {item.quantity:>5} {item.unit_price:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Order Total':<27} {dto.total:>20}")


@click.command("checkout")
@session_option
@click.option("--email", required=True, help="Email of a registered customer.")
@click.option("--address", required=True, help="Shipping address.")
@click.option(
    "--no-idempotency",
    is_flag=True,
    default=False,
    help="Do not resume an earlier failed attempt; always create a new order.",
)
@click.pass_obj
def checkout(
    data_dir: Path,
    session_id: str,
    email: str,
    address: str,
    no_idempotency: bool,
) -> None:
    """Place an order for the cart. The cart is cleared only on success."""
    store = open_cart(data_dir, session_id)

    try:
        found = customer_repository(data_dir).get_by_email(email)
        if found is None:
            raise click.ClickException(
                f"No customer registered with email '{email}'. "
                "Run 'storefront customer register' first."
            )
        result = checkout_handler(data_dir).handle(
            store, found.id, address, idempotent=not no_idempotency
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not result.ok:
        message = "Order could not be completed. Your cart has been kept"
        if result.partial:
            message += (
                f"; order #{result.order_id} was left incomplete and needs review"
            )
        raise click.ClickException(f"{message}. ({result.error})")

    verb = "completed" if result.resumed else "placed"
    click.echo(f"Thank you! Order #{result.order_id} {verb}.")
    click.echo()
    handler = ShowOrderHandler(order_repository(data_dir), customer_repository(data_dir))
    try:
        _display_order(handler.handle(result.order_id))  # type: ignore[arg-type]
    except DomainException as exc:
        raise click.ClickException(str(exc))


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
@click.pass_obj
def order_show(data_dir: Path, order_id: int) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(order_repository(data_dir), customer_repository(data_dir))

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
@click.option("--email", required=True, help="Customer email.")
@click.pass_obj
def order_list(data_dir: Path, email: str) -> None:
    """List a customer's orders, newest first."""
    handler = ListCustomerOrdersHandler(
        order_repository(data_dir), customer_repository(data_dir)
    )

    try:
        orders = handler.handle(email)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<6} {'Date':<22} {'Status':<10} {'Total':>10} {'Payment':<10} {'Shipment':<12} Tracking")
    click.echo("-" * 90)
    for dto in orders:
        click.echo(
            f"{dto.id:<6} {dto.created_at:<22} {dto.status:<10} {dto.total:>10} "
            f"{dto.payment_status or '-':<10} {dto.shipment_status or '-':<12} "
            f"{dto.tracking_number or '-'}"
        )


def _review(data_dir: Path, order_id: int, approve: bool) -> None:
    handler = ReviewOrderHandler(order_repository(data_dir))

    try:
        status = handler.handle(order_id, approve=approve)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} {status.value}.")


@click.command("approve")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to approve.")
@click.pass_obj
def order_approve(data_dir: Path, order_id: int) -> None:
    """Approve a pending order."""
    _review(data_dir, order_id, approve=True)


@click.command("reject")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to reject.")
@click.pass_obj
def order_reject(data_dir: Path, order_id: int) -> None:
    """Reject a pending order."""
    _review(data_dir, order_id, approve=False)


@click.command("orphans")
@click.option(
    "--grace-minutes",
    type=click.IntRange(min=0),
    default=10,
    show_default=True,
    help="Ignore orders younger than this; their commit may still be running.",
)
@click.pass_obj
def order_orphans(data_dir: Path, grace_minutes: int) -> None:
    """List orders missing their lines, payment or shipment."""
    handler = FindOrphanedOrdersHandler(order_repository(data_dir))

    try:
        report = handler.handle(grace=timedelta(minutes=grace_minutes))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not report:
        click.echo("No orphaned orders.")
        return

    click.echo(f"{'ID':<6} {'Created':<22} {'Total':>10}  Missing")
    click.echo("-" * 60)
    for row in report:
        click.echo(f"{row.order_id:<6} {row.created_at:<22} {row.total:>10}  {', '.join(row.missing)}")
