"""Cart aggregate: the customer's selection before checkout.

The cart holds a display snapshot of each product (name, price, image,
stock as last observed), never a live link. Prices held here are a hint
for the customer; the order gateway re-prices every line at checkout.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from storefront.domain.exceptions import (
    EntityNotFoundError,
    OutOfStock,
    ProductUnavailable,
    ValidationError,
)
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money


@dataclass(frozen=True)
class CartLine:
    """One (product, quantity) pair.

    Invariant: ``1 <= quantity <= stock_quantity``.
    """

    product_id: str
    product_name: str
    unit_price: Money
    stock_quantity: int
    quantity: int
    image_url: str | None = None

    @property
    def subtotal(self) -> Money:
        return self.unit_price * self.quantity


@dataclass
class Cart:
    """Aggregate root for the shopping cart.

    Lines are keyed by product id and kept in insertion order.

    Invariants:
    - no line has a quantity below 1
    - no product appears on more than one line
    """

    _lines: dict[str, CartLine] = field(default_factory=dict)

    @staticmethod
    def from_lines(lines: list[CartLine]) -> Cart:
        """Rebuild a cart from stored lines, dropping any that are empty."""
        cart = Cart()
        for line in lines:
            if line.quantity > 0:
                cart._lines[line.product_id] = line
        return cart

    # --- Mutations ------------------------------------------------------------

    def add_item(self, product: Product, quantity: int = 1) -> CartLine:
        """Add *quantity* units of *product*, merging with an existing line.

        The product's current data replaces the line's snapshot, which
        also counts as a fresh stock observation.
        """
        if quantity < 1:
            raise ValidationError("Quantity must be at least 1", field="quantity")
        if not product.is_active:
            raise ProductUnavailable(product.id, product.name)

        existing = self._lines.get(product.id)
        new_quantity = quantity + (existing.quantity if existing else 0)
        if new_quantity > product.stock_quantity:
            raise OutOfStock(product.id, product.name, new_quantity, product.stock_quantity)

        line = CartLine(
            product_id=product.id,
            product_name=product.name,
            unit_price=product.price,
            stock_quantity=product.stock_quantity,
            quantity=new_quantity,
            image_url=product.image_url,
        )
        self._lines[product.id] = line
        return line

    def update_quantity(self, product_id: str, new_quantity: int) -> CartLine | None:
        """Set a line's quantity; zero or less removes the line.

        Returns the updated line, or None when it was removed.
        """
        line = self._lines.get(product_id)
        if line is None:
            raise EntityNotFoundError(f"Product #{product_id} is not in the cart")

        if new_quantity <= 0:
            del self._lines[product_id]
            return None
        if new_quantity > line.stock_quantity:
            raise OutOfStock(product_id, line.product_name, new_quantity, line.stock_quantity)

        updated = replace(line, quantity=new_quantity)
        self._lines[product_id] = updated
        return updated

    def remove_item(self, product_id: str) -> None:
        self._lines.pop(product_id, None)

    def clear(self) -> None:
        self._lines.clear()

    def copy(self) -> Cart:
        # Lines are frozen, so a shallow copy of the mapping is enough.
        return Cart(dict(self._lines))

    # --- Queries --------------------------------------------------------------

    @property
    def lines(self) -> list[CartLine]:
        return list(self._lines.values())

    @property
    def is_empty(self) -> bool:
        return not self._lines

    def get(self, product_id: str) -> CartLine | None:
        return self._lines.get(product_id)

    @property
    def total_price(self) -> Money:
        result = Money.zero()
        for line in self._lines.values():
            result = result + line.subtotal
        return result

    @property
    def total_items(self) -> int:
        return sum(line.quantity for line in self._lines.values())
