"""Cart aggregate: what the customer intends to buy.

The cart holds at most one line per product and every line has at least
one unit. Totals are derived from the lines on every read so they can
never drift from them.

A ``CartSnapshot`` is the immutable, price-frozen copy the commit pipeline
works from. Editing the cart after a snapshot was taken does not touch it.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money, Quantity


@dataclass(frozen=True)
class CartLine:
    """A product reference plus a positive quantity.

    The line keeps a reference to the catalog Product, so its total follows
    the product's *current* price.
    """

    product: Product
    quantity: int

    def __post_init__(self) -> None:
        Quantity(self.quantity)

    @property
    def product_id(self) -> str:
        return self.product.id

    @property
    def line_total(self) -> Money:
        return self.product.price * self.quantity


@dataclass(frozen=True)
class SnapshotLine:
    product_id: str
    product_name: str
    quantity: int
    unit_price: Money  # frozen when the snapshot is taken

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class CartSnapshot:
    """Point-in-time copy of a cart's lines with prices frozen."""

    lines: tuple[SnapshotLine, ...]

    @property
    def subtotal(self) -> Money:
        return Money.total(line.line_total for line in self.lines)

    @property
    def total_items(self) -> int:
        return sum(line.quantity for line in self.lines)

    @property
    def is_empty(self) -> bool:
        return not self.lines

    def __len__(self) -> int:
        return len(self.lines)

    @staticmethod
    def of(lines: Iterable[CartLine]) -> CartSnapshot:
        return CartSnapshot(
            lines=tuple(
                SnapshotLine(
                    product_id=line.product.id,
                    product_name=line.product.name,
                    quantity=line.quantity,
                    unit_price=line.product.price,
                )
                for line in lines
            )
        )


class Cart:
    """Ordered collection of CartLines keyed by product id."""

    def __init__(self, lines: Iterable[CartLine] = ()) -> None:
        self._lines: dict[str, CartLine] = {}
        for line in lines:
            self.add(line.product, line.quantity)

    # --- Mutations ------------------------------------------------------------

    def add(self, product: Product, quantity: int = 1) -> None:
        """Add ``quantity`` units, merging into an existing line if present."""
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise ValidationError(f"Quantity to add must be at least 1, got {quantity!r}")

        existing = self._lines.get(product.id)
        if existing is not None:
            quantity += existing.quantity
        self._lines[product.id] = CartLine(product=product, quantity=quantity)

    def set_quantity(self, product_id: str, quantity: int) -> None:
        """Set (not increment) a line's quantity; ``quantity <= 0`` removes it.

        Unknown product ids are ignored.
        """
        existing = self._lines.get(product_id)
        if existing is None:
            return
        if quantity <= 0:
            del self._lines[product_id]
            return
        self._lines[product_id] = CartLine(product=existing.product, quantity=quantity)

    def remove(self, product_id: str) -> None:
        self._lines.pop(product_id, None)

    def clear(self) -> None:
        self._lines.clear()

    # --- Computed properties --------------------------------------------------

    @property
    def lines(self) -> list[CartLine]:
        return list(self._lines.values())

    @property
    def subtotal(self) -> Money:
        return Money.total(line.line_total for line in self._lines.values())

    @property
    def total_items(self) -> int:
        return sum(line.quantity for line in self._lines.values())

    @property
    def is_empty(self) -> bool:
        return not self._lines

    def get(self, product_id: str) -> CartLine | None:
        return self._lines.get(product_id)

    def snapshot(self) -> CartSnapshot:
        return CartSnapshot.of(self._lines.values())

    def __len__(self) -> int:
        return len(self._lines)

    def __contains__(self, product_id: object) -> bool:
        return product_id in self._lines
