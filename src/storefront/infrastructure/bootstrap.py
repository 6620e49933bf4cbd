"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from pathlib import Path

from storefront.application.cart_store import CartStore
from storefront.application.checkout import CheckoutHandler
from storefront.application.commit_order import CommitOrderHandler
from storefront.infrastructure.persistence.json_customer_repository import (
    JsonCustomerRepository,
)
from storefront.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from storefront.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from storefront.infrastructure.persistence.json_session_storage import (
    JsonSessionStorage,
)

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


def product_repository(data_dir: Path = DEFAULT_DATA_DIR) -> JsonProductRepository:
    return JsonProductRepository(data_dir / "products.json")


def customer_repository(data_dir: Path = DEFAULT_DATA_DIR) -> JsonCustomerRepository:
    return JsonCustomerRepository(data_dir / "customers.json")


def order_repository(data_dir: Path = DEFAULT_DATA_DIR) -> JsonOrderRepository:
    return JsonOrderRepository(data_dir)


def cart_store(session_id: str, data_dir: Path = DEFAULT_DATA_DIR) -> CartStore:
    """The cart of one client session, restored from its session file."""
    return CartStore(
        storage=JsonSessionStorage(data_dir / "sessions", session_id),
        catalog=product_repository(data_dir),
    )


def checkout_handler(data_dir: Path = DEFAULT_DATA_DIR) -> CheckoutHandler:
    return CheckoutHandler(
        CommitOrderHandler(
            order_repo=order_repository(data_dir),
            customer_repo=customer_repository(data_dir),
        )
    )
