"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.model.cart import CartLine
from storefront.domain.model.order import Order, OrderLine
from storefront.domain.model.product import Product

_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M UTC"


@dataclass(frozen=True)
class ProductDTO:
    id: str
    name: str
    price: str
    stock_quantity: int
    is_active: bool
    description: str | None

    @staticmethod
    def from_domain(product: Product) -> ProductDTO:
        return ProductDTO(
            id=product.id,
            name=product.name,
            price=str(product.price),
            stock_quantity=product.stock_quantity,
            is_active=product.is_active,
            description=product.description,
        )


@dataclass(frozen=True)
class CartLineDTO:
    product_id: str
    product_name: str
    quantity: int
    unit_price: str  # formatted, e.g. "15.00"
    subtotal: str

    @staticmethod
    def from_domain(line: CartLine) -> CartLineDTO:
        return CartLineDTO(
            product_id=line.product_id,
            product_name=line.product_name,
            quantity=line.quantity,
            unit_price=str(line.unit_price),
            subtotal=str(line.subtotal),
        )


@dataclass(frozen=True)
class OrderLineDTO:
    """Output: a single order line as displayed to the admin."""

    product_name: str
    quantity: int
    unit_price: str
    subtotal: str

    @staticmethod
    def from_domain(line: OrderLine) -> OrderLineDTO:
        return OrderLineDTO(
            product_name=line.product_name,
            quantity=line.quantity.value,
            unit_price=str(line.unit_price),
            subtotal=str(line.subtotal),
        )


@dataclass(frozen=True)
class OrderSummaryDTO:
    """Output: one row of the admin order list."""

    id: str
    customer_name: str
    status: str
    total: str
    created_at: str

    @staticmethod
    def from_domain(order: Order) -> OrderSummaryDTO:
        return OrderSummaryDTO(
            id=order.id,  # type: ignore[arg-type]
            customer_name=order.customer_name,
            status=order.status.value,
            total=str(order.total_amount),
            created_at=order.created_at.strftime(_TIMESTAMP_FORMAT),
        )


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the admin."""

    id: str
    customer_name: str
    customer_email: str
    customer_phone: str
    delivery_address: str
    delivery_city: str
    delivery_postal_code: str | None
    notes: str | None
    status: str
    items: list[OrderLineDTO]
    total: str
    created_at: str
    updated_at: str
    next_statuses: list[str]

    @staticmethod
    def from_domain(order: Order, lines: list[OrderLine], next_statuses: list[str]) -> OrderDTO:
        return OrderDTO(
            id=order.id,  # type: ignore[arg-type]
            customer_name=order.customer_name,
            customer_email=order.customer_email,
            customer_phone=order.customer_phone,
            delivery_address=order.delivery_address,
            delivery_city=order.delivery_city,
            delivery_postal_code=order.delivery_postal_code,
            notes=order.notes,
            status=order.status.value,
            items=[OrderLineDTO.from_domain(line) for line in lines],
            total=str(order.total_amount),
            created_at=order.created_at.strftime(_TIMESTAMP_FORMAT),
            updated_at=order.updated_at.strftime(_TIMESTAMP_FORMAT),
            next_statuses=next_statuses,
        )
