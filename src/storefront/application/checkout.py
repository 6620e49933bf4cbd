"""Application service: Checkout use case.

The caller side of the commit pipeline. It snapshots the session's cart,
commits the snapshot and clears the cart only when every write succeeded.
Any failure leaves the cart exactly as it was so the customer can retry
without re-entering items.
"""

from __future__ import annotations

import hashlib

from storefront.application.cart_store import CartStore
from storefront.application.commit_order import CommitOrderHandler
from storefront.application.dto import CommitResult
from storefront.domain.model.cart import CartSnapshot


def derive_idempotency_key(snapshot: CartSnapshot, nonce: str, customer_id: str) -> str:
    """Stable key for "this customer, this nonce, these lines at these prices"."""
    digest = hashlib.sha256(f"{nonce}|{customer_id}".encode("utf-8"))
    for line in sorted(snapshot.lines, key=lambda l: l.product_id):
        digest.update(
            f"|{line.product_id}:{line.quantity}:{line.unit_price.amount}".encode("utf-8")
        )
    return digest.hexdigest()


class CheckoutHandler:

    def __init__(self, commit_handler: CommitOrderHandler) -> None:
        self._commit_handler = commit_handler

    def handle(
        self,
        cart_store: CartStore,
        customer_id: str | None,
        shipping_address: str | None,
        idempotent: bool = True,
    ) -> CommitResult:
        """Commit the cart and clear it on full success.

        With ``idempotent`` (the default) the commit carries a key derived
        from the customer, the cart's nonce and its contents: retrying after a
        partial failure resumes the orphaned order instead of creating a second
        one.
        """
        snapshot = cart_store.snapshot()

        key = None
        if idempotent and customer_id and not snapshot.is_empty:
            key = derive_idempotency_key(
                snapshot, cart_store.checkout_nonce(), customer_id
            )

        result = self._commit_handler.handle(
            customer_id, snapshot, shipping_address, idempotency_key=key
        )
        if result.ok:
            cart_store.clear_cart()
        return result
