"""Abstract repository for Customer records."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.customer import Customer


class CustomerRepository(ABC):

    @abstractmethod
    def get_by_id(self, customer_id: str) -> Customer | None:
        """Return a customer by ID, or None if not found."""

    @abstractmethod
    def get_by_email(self, email: str) -> Customer | None:
        """Return the customer registered under ``email``, or None."""

    @abstractmethod
    def add(self, customer: Customer) -> Customer:
        """Insert a new customer; the store assigns and sets ``customer.id``."""
