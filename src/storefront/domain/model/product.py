"""Product aggregate.

Products belong to the catalog, an external collaborator. The cart and the
commit pipeline only read them: the cart quotes the current price, the
pipeline freezes it into the order lines.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money


@dataclass
class Product:
    """A product in the catalog.

    ``inventory_count`` of ``None`` means stock is not tracked. The count is
    advisory display data; nothing in the cart or the pipeline enforces it.
    """

    id: str
    name: str
    price: Money
    inventory_count: int | None = None
    category: str | None = None
    description: str | None = None

    def __post_init__(self) -> None:
        if self.inventory_count is not None and self.inventory_count < 0:
            raise ValidationError("Inventory count cannot be negative")

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        Live carts pick the new price up on their next read. Committed
        orders keep the unit price frozen into their lines.
        """
        self.price = new_price
