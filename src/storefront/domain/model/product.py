"""Product aggregate.

Products live independently of carts and orders. They have their own
lifecycle: prices change, stock is replenished or sold, products are
deactivated. Carts only keep a display snapshot and orders a price
snapshot, so none of these changes reach back into them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from storefront.domain.exceptions import OutOfStock, ProductUnavailable, ValidationError
from storefront.domain.model.value_objects import Money


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Product:
    """A product in the catalog.

    Invariants:
    - ``stock_quantity`` is never negative
    - an inactive product may be listed but not sold
    """

    id: str
    name: str
    price: Money
    stock_quantity: int = 0
    is_active: bool = True
    description: str | None = None
    image_url: str | None = None
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)

    def __post_init__(self) -> None:
        if self.stock_quantity < 0:
            raise ValidationError("Stock quantity cannot be negative", field="stock_quantity")

    # --- Catalog maintenance --------------------------------------------------

    def rename(self, name: str) -> None:
        if not name or not name.strip():
            raise ValidationError("Product name is required", field="name")
        self.name = name.strip()
        self._touch()

    def describe(self, description: str | None) -> None:
        self.description = description.strip() if description and description.strip() else None
        self._touch()

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        This does NOT affect any existing orders because orders
        capture a price snapshot at creation time.
        """
        self.price = new_price
        self._touch()

    def set_stock(self, quantity: int) -> None:
        if quantity < 0:
            raise ValidationError("Stock quantity cannot be negative", field="stock_quantity")
        self.stock_quantity = quantity
        self._touch()

    def activate(self) -> None:
        self.is_active = True
        self._touch()

    def deactivate(self) -> None:
        self.is_active = False
        self._touch()

    # --- Selling --------------------------------------------------------------

    def ensure_purchasable(self, quantity: int) -> None:
        """Raise unless *quantity* units can be sold right now."""
        if not self.is_active:
            raise ProductUnavailable(self.id, self.name)
        if quantity > self.stock_quantity:
            raise OutOfStock(self.id, self.name, quantity, self.stock_quantity)

    def take_stock(self, quantity: int) -> None:
        """Permanently deduct sold units."""
        if quantity <= 0:
            raise ValidationError("Quantity must be positive", field="quantity")
        self.ensure_purchasable(quantity)
        self.stock_quantity -= quantity
        self._touch()

    # --- Internal helpers -----------------------------------------------------

    def _touch(self) -> None:
        self.updated_at = _now()
