"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from storefront.domain.model.order import Order, OrderLine, OrderStatus
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.order_repository import OrderRepository
from storefront.infrastructure.persistence.json_file import JsonFile


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path, empty=[])

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: str) -> Order | None:
        for raw in self._file.load():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Order]:
        orders = [self._to_domain(raw) for raw in self._file.load()]
        return sorted(orders, key=lambda o: o.created_at, reverse=True)

    def save(self, order: Order) -> None:
        orders = self._file.load()

        if order.id is None:
            order.id = str(uuid.uuid4())

        # Upsert: replace if exists, otherwise append
        replaced = False
        for i, raw in enumerate(orders):
            if raw["id"] == order.id:
                orders[i] = self._to_raw(order)
                replaced = True
                break
        if not replaced:
            orders.append(self._to_raw(order))

        self._file.persist(orders)

    def detach_product(self, product_id: str) -> int:
        orders = [self._to_domain(raw) for raw in self._file.load()]
        touched = [order.detach_product(product_id) for order in orders]
        if any(touched):
            self._file.persist([self._to_raw(order) for order in orders])
        return sum(touched)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "customer_name": order.customer_name,
            "customer_email": order.customer_email,
            "customer_phone": order.customer_phone,
            "delivery_address": order.delivery_address,
            "delivery_city": order.delivery_city,
            "delivery_postal_code": order.delivery_postal_code,
            "notes": order.notes,
            "total_amount": str(order.total_amount.amount),
            "status": order.status.value,
            "created_at": order.created_at.isoformat(),
            "updated_at": order.updated_at.isoformat(),
            "items": [
                {
                    "product_id": line.product_id,
                    "product_name": line.product_name,
                    "product_price": str(line.unit_price.amount),
                    "quantity": line.quantity.value,
                    "subtotal": str(line.subtotal.amount),
                }
                for line in order.lines
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        lines = [
            OrderLine(
                product_id=i.get("product_id"),
                product_name=i["product_name"],
                unit_price=Money(Decimal(i["product_price"])),
                quantity=Quantity(i["quantity"]),
            )
            for i in raw["items"]
        ]
        # The stored total is authoritative; it is never recomputed.
        return Order(
            id=raw["id"],
            customer_name=raw["customer_name"],
            customer_email=raw["customer_email"],
            customer_phone=raw["customer_phone"],
            delivery_address=raw["delivery_address"],
            delivery_city=raw["delivery_city"],
            delivery_postal_code=raw.get("delivery_postal_code"),
            notes=raw.get("notes"),
            total_amount=Money(Decimal(raw["total_amount"])),
            lines=lines,
            status=OrderStatus(raw["status"]),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw.get("updated_at", raw["created_at"])),
        )
