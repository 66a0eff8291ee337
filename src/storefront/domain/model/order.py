"""Order aggregate and its status state machine.

An order is created once by the order gateway from a priced submission.
After that only its status moves, along the edges in
``ALLOWED_TRANSITIONS``; the total and the line snapshots never change.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum

from storefront.domain.exceptions import InvalidTransition, ValidationError
from storefront.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return not ALLOWED_TRANSITIONS[self]

    @staticmethod
    def parse(value: OrderStatus | str) -> OrderStatus:
        if isinstance(value, OrderStatus):
            return value
        try:
            return OrderStatus(value.strip().lower())
        except ValueError:
            valid = ", ".join(s.value for s in OrderStatus)
            raise ValidationError(
                f"Invalid status '{value}'. Must be one of: {valid}", field="status"
            ) from None


ALLOWED_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.PROCESSING, OrderStatus.CANCELLED}),
    OrderStatus.PROCESSING: frozenset({OrderStatus.SHIPPED, OrderStatus.CANCELLED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}


@dataclass(frozen=True)
class OrderLine:
    """Captures the price snapshot of a product at order-creation time.

    ``product_id`` becomes None if the product is later deleted; the name
    and price copies keep the order readable.
    """

    product_id: str | None
    product_name: str
    unit_price: Money  # locked at order-creation time
    quantity: Quantity

    @property
    def subtotal(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass
class Order:
    """Aggregate root for placed orders.

    Use the ``Order.create()`` factory for new orders. The ``__init__`` is
    intentionally simple so the repository can reconstitute persisted
    orders, including their stored total, without recomputing anything.
    """

    id: str | None
    customer_name: str
    customer_email: str
    customer_phone: str
    delivery_address: str
    delivery_city: str
    total_amount: Money
    lines: list[OrderLine]
    delivery_postal_code: str | None = None
    notes: str | None = None
    status: OrderStatus = OrderStatus.PENDING
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        customer_name: str,
        customer_email: str,
        customer_phone: str,
        delivery_address: str,
        delivery_city: str,
        lines: list[OrderLine],
        delivery_postal_code: str | None = None,
        notes: str | None = None,
    ) -> Order:
        """Create a pending order; the total is fixed here, once."""
        if not lines:
            raise ValidationError("Order must contain at least one item", field="items")

        total = Money.zero()
        for line in lines:
            total = total + line.subtotal

        return Order(
            id=None,
            customer_name=customer_name,
            customer_email=customer_email,
            customer_phone=customer_phone,
            delivery_address=delivery_address,
            delivery_city=delivery_city,
            delivery_postal_code=delivery_postal_code,
            notes=notes,
            total_amount=total,
            lines=list(lines),
        )

    # --- State transitions ----------------------------------------------------

    def can_transition_to(self, target: OrderStatus) -> bool:
        return target in ALLOWED_TRANSITIONS[self.status]

    def transition_to(self, target: OrderStatus) -> bool:
        """Move to *target*, returning False if it was already there.

        Raises InvalidTransition for any edge outside the table,
        including every move out of a terminal status.
        """
        if target == self.status:
            return False
        if not self.can_transition_to(target):
            raise InvalidTransition(self.status.value, target.value)
        self.status = target
        self.updated_at = datetime.now(timezone.utc)
        return True

    # --- Catalog changes ------------------------------------------------------

    def detach_product(self, product_id: str) -> bool:
        """Drop the product reference from lines of a deleted product.

        Names, prices and the total are left as they were. Returns True
        if any line referred to the product.
        """
        if not any(line.product_id == product_id for line in self.lines):
            return False
        self.lines = [
            replace(line, product_id=None) if line.product_id == product_id else line
            for line in self.lines
        ]
        return True

    # --- Computed properties --------------------------------------------------

    @property
    def total_items(self) -> int:
        return sum(line.quantity.value for line in self.lines)
