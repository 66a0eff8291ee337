"""In-memory fakes for testing.

The repositories implement the same abstract interfaces as the JSON
repositories but keep everything in a dict. No file I/O, no side
effects. The gateway fake records every call it receives.
"""

from __future__ import annotations

from dataclasses import replace
from decimal import Decimal

from storefront.domain.exceptions import DomainException, EntityNotFoundError
from storefront.domain.model.cart import Cart
from storefront.domain.model.order import Order, OrderLine, OrderStatus
from storefront.domain.model.product import Product
from storefront.domain.model.submission import CheckoutForm, OrderSubmission
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.gateways import OrderGateway
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository


class FakeOrderRepository(OrderRepository):

    def __init__(self) -> None:
        self._store: dict[str, Order] = {}
        self._next_id = 1
        self.fail_next_save = False

    def get_by_id(self, order_id: str) -> Order | None:
        return self._store.get(order_id)

    def list_all(self) -> list[Order]:
        return list(reversed(self._store.values()))

    def save(self, order: Order) -> None:
        if self.fail_next_save:
            self.fail_next_save = False
            raise OSError("disk full")
        if order.id is None:
            order.id = f"order-{self._next_id}"
            self._next_id += 1
        self._store[order.id] = order

    def detach_product(self, product_id: str) -> int:
        return sum(order.detach_product(product_id) for order in self._store.values())


class FakeProductRepository(ProductRepository):

    def __init__(self, products: list[Product] | None = None) -> None:
        self._store: dict[str, Product] = {}
        for p in products or []:
            self._store[p.id] = p

    def get_by_id(self, product_id: str) -> Product | None:
        return self._store.get(product_id)

    def get_by_name(self, name: str) -> Product | None:
        for p in self._store.values():
            if p.name.lower() == name.lower():
                return p
        return None

    def list_all(self) -> list[Product]:
        return list(self._store.values())

    def save(self, product: Product) -> None:
        self._store[product.id] = product

    def delete(self, product_id: str) -> None:
        self._store.pop(product_id, None)


class FakeCartRepository(CartRepository):
    """Stores copies so later in-memory edits cannot leak into storage."""

    def __init__(self) -> None:
        self._store: dict[str, Cart] = {}
        self.fail_next_save = False
        self.save_count = 0

    def load(self, session_id: str) -> Cart | None:
        cart = self._store.get(session_id)
        return cart.copy() if cart is not None else None

    def save(self, session_id: str, cart: Cart) -> None:
        if self.fail_next_save:
            self.fail_next_save = False
            raise OSError("disk full")
        self.save_count += 1
        self._store[session_id] = cart.copy()


class FakeOrderGateway(OrderGateway):
    """Accepts every submission at a flat unit price unless told to fail."""

    def __init__(self, error: DomainException | None = None) -> None:
        self.error = error
        self.submissions: list[OrderSubmission] = []
        self.status_calls: list[tuple[str, OrderStatus]] = []
        self.orders = FakeOrderRepository()
        self.on_create = None

    def create_order(self, submission: OrderSubmission) -> Order:
        self.submissions.append(submission)
        if self.on_create is not None:
            self.on_create()
        if self.error is not None:
            raise self.error
        order = Order.create(
            customer_name=submission.customer_name,
            customer_email=submission.customer_email,
            customer_phone=submission.customer_phone,
            delivery_address=submission.delivery_address,
            delivery_city=submission.delivery_city,
            delivery_postal_code=submission.delivery_postal_code,
            notes=submission.notes,
            lines=[
                OrderLine(
                    product_id=line.product_id,
                    product_name=f"Product {line.product_id}",
                    unit_price=Money(Decimal("1.00")),
                    quantity=line.quantity,
                )
                for line in submission.items
            ],
        )
        self.orders.save(order)
        return order

    def list_orders(self) -> list[Order]:
        return self.orders.list_all()

    def get_order_detail(self, order_id: str) -> tuple[Order, list[OrderLine]]:
        order = self._stored(order_id)
        return replace(order, lines=list(order.lines)), list(order.lines)

    def set_order_status(self, order_id: str, status: OrderStatus) -> Order:
        self.status_calls.append((order_id, status))
        if self.error is not None:
            raise self.error
        order = self._stored(order_id)
        order.transition_to(status)
        return replace(order, lines=list(order.lines))

    def _stored(self, order_id: str) -> Order:
        order = self.orders.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order {order_id} not found")
        return order


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


def make_product(
    product_id: str = "1",
    name: str = "Clay Vase",
    price: str = "10.00",
    stock: int = 10,
    active: bool = True,
) -> Product:
    return Product(
        id=product_id,
        name=name,
        price=Money.of(price),
        stock_quantity=stock,
        is_active=active,
    )


def make_form(**overrides: str | None) -> CheckoutForm:
    values: dict[str, str | None] = {
        "customer_name": "Ivan Petrov",
        "customer_email": "ivan@example.com",
        "customer_phone": "0888123456",
        "delivery_address": "12 Vitosha Blvd",
        "delivery_city": "Sofia",
        "delivery_postal_code": "1000",
        "notes": None,
    }
    values.update(overrides)
    return CheckoutForm(**values)  # type: ignore[arg-type]


def make_order(status: OrderStatus = OrderStatus.PENDING, order_id: str = "order-1") -> Order:
    order = Order.create(
        customer_name="Ivan Petrov",
        customer_email="ivan@example.com",
        customer_phone="0888123456",
        delivery_address="12 Vitosha Blvd",
        delivery_city="Sofia",
        lines=[
            OrderLine(
                product_id="1",
                product_name="Clay Vase",
                unit_price=Money.of("10.00"),
                quantity=Quantity(2),
            )
        ],
    )
    order.id = order_id
    order.status = status
    return order
