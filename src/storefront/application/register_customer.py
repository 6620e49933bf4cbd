"""Application service: Register Customer use case."""

from __future__ import annotations

import structlog

from storefront.domain.model.customer import Customer, normalize_email
from storefront.domain.repository.customer_repository import CustomerRepository

logger = structlog.get_logger(__name__)


class RegisterCustomerHandler:

    def __init__(self, customer_repo: CustomerRepository) -> None:
        self._customer_repo = customer_repo

    def handle(
        self,
        name: str,
        email: str,
        contact_number: str | None = None,
    ) -> Customer:
        """Return the customer registered under ``email``, creating it if new.

        An existing customer is returned as-is; name and contact number
        given on a later visit do not overwrite the stored ones.
        """
        existing = self._customer_repo.get_by_email(normalize_email(email or ""))
        if existing is not None:
            return existing

        customer = Customer.register(name, email, contact_number)
        self._customer_repo.add(customer)
        logger.info("Customer registered", customer_id=customer.id, email=customer.email)
        return customer
