"""JSON-file-backed implementation of CustomerRepository."""

from __future__ import annotations

import uuid
from pathlib import Path

from storefront.domain.model.customer import Customer, normalize_email
from storefront.domain.repository.customer_repository import CustomerRepository
from storefront.infrastructure.persistence.json_table import JsonTable


class JsonCustomerRepository(CustomerRepository):

    def __init__(self, file_path: Path) -> None:
        self._table = JsonTable(file_path)

    def get_by_id(self, customer_id: str) -> Customer | None:
        for raw in self._table.read():
            if raw["id"] == customer_id:
                return self._to_domain(raw)
        return None

    def get_by_email(self, email: str) -> Customer | None:
        email = normalize_email(email)
        for raw in self._table.read():
            if normalize_email(raw["email"]) == email:
                return self._to_domain(raw)
        return None

    def add(self, customer: Customer) -> Customer:
        customer.id = str(uuid.uuid4())
        self._table.append(
            {
                "id": customer.id,
                "name": customer.name,
                "email": customer.email,
                "contact_number": customer.contact_number,
            }
        )
        return customer

    @staticmethod
    def _to_domain(raw: dict) -> Customer:
        return Customer(
            id=raw["id"],
            name=raw["name"],
            email=raw["email"],
            contact_number=raw.get("contact_number"),
        )
