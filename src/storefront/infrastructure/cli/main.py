from pathlib import Path

import click

from storefront.infrastructure.bootstrap import DEFAULT_DATA_DIR
from storefront.infrastructure.cli.cart_commands import (
    cart_add,
    cart_clear,
    cart_remove,
    cart_show,
    cart_update,
)
from storefront.infrastructure.cli.customer_commands import customer_register
from storefront.infrastructure.cli.order_commands import (
    checkout,
    order_approve,
    order_list,
    order_orphans,
    order_reject,
    order_show,
)
from storefront.infrastructure.cli.product_commands import product_add, product_list
from storefront.infrastructure.logging import configure_logging


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=DEFAULT_DATA_DIR,
    show_default=True,
    envvar="STOREFRONT_DATA_DIR",
    help="Directory holding the store's JSON tables and session files.",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    envvar="STOREFRONT_LOG_LEVEL",
    help="Minimum level of log lines written to stderr.",
)
@click.pass_context
def cli(ctx: click.Context, data_dir: Path, log_level: str) -> None:
    """Storefront — cart and checkout"""
    configure_logging(log_level)
    ctx.obj = data_dir


@cli.group()
def product() -> None:
    """Manage the product catalog."""


@cli.group()
def customer() -> None:
    """Manage customers."""


@cli.group()
def cart() -> None:
    """Edit a session's shopping cart."""


@cli.group()
def order() -> None:
    """Inspect and review orders."""


# Register subcommands
product.add_command(product_add)
product.add_command(product_list)
customer.add_command(customer_register)
cart.add_command(cart_add)
cart.add_command(cart_update)
cart.add_command(cart_remove)
cart.add_command(cart_clear)
cart.add_command(cart_show)
cli.add_command(checkout)
order.add_command(order_show)
order.add_command(order_list)
order.add_command(order_approve)
order.add_command(order_reject)
order.add_command(order_orphans)
