"""Customer aggregate.

Customers are identified by email, the natural key used to deduplicate
registrations. The order pipeline references a customer by id and never
mutates it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from storefront.domain.exceptions import ValidationError

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def normalize_email(email: str) -> str:
    return email.strip().lower()


@dataclass
class Customer:
    id: str | None
    name: str
    email: str
    contact_number: str | None = None

    @staticmethod
    def register(name: str, email: str, contact_number: str | None = None) -> Customer:
        """Build a new, not yet persisted customer."""
        if not name or not name.strip():
            raise ValidationError("Customer name is required")

        email = normalize_email(email or "")
        if not _EMAIL_RE.match(email):
            raise ValidationError(f"Invalid email address: '{email}'")

        contact = contact_number.strip() if contact_number else None
        return Customer(
            id=None,
            name=name.strip(),
            email=email,
            contact_number=contact or None,
        )
