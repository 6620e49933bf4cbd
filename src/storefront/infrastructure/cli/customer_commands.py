"""CLI commands for customers."""

from __future__ import annotations

from pathlib import Path

import click

from storefront.application.register_customer import RegisterCustomerHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import customer_repository


@click.command("register")
@click.option("--name", required=True, help="Full name.")
@click.option("--email", required=True, help="Email address (identifies the customer).")
@click.option("--phone", default=None, help="Contact number.")
@click.pass_obj
def customer_register(data_dir: Path, name: str, email: str, phone: str | None) -> None:
    """Register a customer, or look up the one already using this email."""
    handler = RegisterCustomerHandler(customer_repo=customer_repository(data_dir))

    try:
        customer = handler.handle(name=name, email=email, contact_number=phone)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Customer {customer.id}  {customer.name} <{customer.email}>")
