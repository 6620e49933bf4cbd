"""Application service: the session's Cart Store.

One CartStore exists per client session and is handed explicitly to
whatever needs it; there is no global cart. Every mutation rewrites the
persisted copy synchronously, so a reload of the same session restores
the same lines.

Persisted format, under a fixed key::

    [{"productId": "1", "quantity": 2}, ...]

Prices are not persisted. Restoring resolves each product through the
catalog, so a restored cart quotes current prices.
"""

from __future__ import annotations

import json
import threading
import uuid

import structlog

from storefront.domain.exceptions import StorageError
from storefront.domain.model.cart import Cart, CartLine, CartSnapshot
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.repository.session_storage import SessionStorage

logger = structlog.get_logger(__name__)

CART_KEY = "cart"
NONCE_SUFFIX = ":checkout-nonce"


class CartStore:

    def __init__(
        self,
        storage: SessionStorage,
        catalog: ProductRepository,
        key: str = CART_KEY,
    ) -> None:
        self._storage = storage
        self._catalog = catalog
        self._key = key
        self._nonce_key = key + NONCE_SUFFIX
        self._nonce: str | None = None
        # Serializes edits against snapshots taken for an in-flight commit.
        self._lock = threading.RLock()
        self._cart = self._restore()

    # --- Mutations ------------------------------------------------------------

    def add_item(self, product: Product, quantity: int = 1) -> None:
        """Add ``quantity`` units of ``product`` (merging into its line)."""
        with self._lock:
            self._cart.add(product, quantity)
            self._persist()

    def update_quantity(self, product_id: str, new_quantity: int) -> None:
        """Set a line's quantity; ``new_quantity <= 0`` removes the line."""
        with self._lock:
            if product_id not in self._cart:
                return
            self._cart.set_quantity(product_id, new_quantity)
            self._persist()

    def remove_item(self, product_id: str) -> None:
        with self._lock:
            if product_id not in self._cart:
                return
            self._cart.remove(product_id)
            self._persist()

    def clear_cart(self) -> None:
        """Empty the cart and forget the checkout nonce."""
        with self._lock:
            self._cart.clear()
            self._nonce = None
            self._persist()
            self._forget_nonce()

    # --- Reads ----------------------------------------------------------------

    @property
    def lines(self) -> list[CartLine]:
        with self._lock:
            return self._cart.lines

    @property
    def subtotal(self) -> Money:
        with self._lock:
            return self._cart.subtotal

    @property
    def total_items(self) -> int:
        with self._lock:
            return self._cart.total_items

    @property
    def is_empty(self) -> bool:
        with self._lock:
            return self._cart.is_empty

    def snapshot(self) -> CartSnapshot:
        """Immutable, price-frozen copy of the current lines."""
        with self._lock:
            return self._cart.snapshot()

    def checkout_nonce(self) -> str:
        """Client nonce kept with the cart until it is cleared.

        Combined with the cart contents it forms the idempotency key of a
        checkout, so retrying after a partial failure resumes the same order.
        """
        with self._lock:
            if self._nonce is None:
                self._nonce = self._read(self._nonce_key) or uuid.uuid4().hex
                self._write(self._nonce_key, self._nonce)
            return self._nonce

    # --- Persistence ----------------------------------------------------------

    def _persist(self) -> None:
        payload = json.dumps(
            [
                {"productId": line.product_id, "quantity": line.quantity}
                for line in self._cart.lines
            ]
        )
        self._write(self._key, payload)

    def _restore(self) -> Cart:
        raw = self._read(self._key)
        if raw is None:
            return Cart()

        try:
            records = json.loads(raw)
        except (TypeError, ValueError):
            logger.warning("Discarding malformed persisted cart", key=self._key)
            return Cart()
        if not isinstance(records, list):
            logger.warning("Discarding malformed persisted cart", key=self._key)
            return Cart()

        cart = Cart()
        for record in records:
            try:
                product_id = str(record["productId"])
                quantity = record["quantity"]
            except (KeyError, TypeError):
                logger.warning("Skipping malformed cart line", key=self._key, line=record)
                continue

            if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
                logger.warning(
                    "Skipping cart line with invalid quantity",
                    product_id=product_id,
                    quantity=quantity,
                )
                continue

            product = self._catalog.get_by_id(product_id)
            if product is None:
                logger.warning("Skipping cart line for unknown product", product_id=product_id)
                continue
            cart.add(product, quantity)

        logger.debug("Cart restored", key=self._key, lines=len(cart))
        return cart

    def _read(self, key: str) -> str | None:
        try:
            return self._storage.get(key)
        except (OSError, StorageError) as exc:
            logger.warning("Cart storage read failed", key=key, error=str(exc))
            return None

    def _write(self, key: str, value: str) -> None:
        # The in-memory cart stays authoritative; the next write reconciles.
        try:
            self._storage.set(key, value)
        except (OSError, StorageError) as exc:
            logger.warning("Cart storage write failed", key=key, error=str(exc))

    def _forget_nonce(self) -> None:
        try:
            self._storage.delete(self._nonce_key)
        except (OSError, StorageError) as exc:
            logger.warning("Cart storage write failed", key=self._nonce_key, error=str(exc))
