"""Product aggregate.

Products live independently of orders. They have their own lifecycle:
prices change, stock is replenished and drawn down by orders.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from checkout.domain.exceptions import InsufficientStockError, ValidationError
from checkout.domain.model.value_objects import Money


@dataclass
class Product:
    """A product in the catalog.

    Invariant: ``stock`` never goes negative.  Every decrement checks
    sufficiency first, so callers that load the product inside a unit of
    work get the check and the write under the same isolation.
    """

    id: str
    name: str
    price: Money  # base currency
    stock: int = 0
    images: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.stock < 0:
            raise ValidationError(
                f"Stock for {self.name} cannot be negative, got {self.stock}"
            )

    @property
    def thumbnail(self) -> str | None:
        return self.images[0] if self.images else None

    def has_stock_for(self, quantity: int) -> bool:
        return self.stock >= quantity

    def decrement_stock(self, quantity: int) -> None:
        """Take *quantity* units out of stock.

        Raises InsufficientStockError if fewer units are on hand.
        """
        if quantity <= 0:
            raise ValidationError("Decrement quantity must be positive")
        if not self.has_stock_for(quantity):
            raise InsufficientStockError(
                product_id=self.id,
                product_name=self.name,
                available=self.stock,
                requested=quantity,
            )
        self.stock -= quantity

