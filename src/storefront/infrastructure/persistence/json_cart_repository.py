"""JSON-file-backed implementation of CartRepository.

All sessions share one file holding ``{session_id: [line, ...]}``.
Last write for a session wins.
"""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from storefront.domain.model.cart import Cart, CartLine
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.cart_repository import CartRepository
from storefront.infrastructure.persistence.json_file import JsonFile


class JsonCartRepository(CartRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path, empty={})

    # --- CartRepository interface ---------------------------------------------

    def load(self, session_id: str) -> Cart | None:
        raw_lines = self._file.load().get(session_id)
        if raw_lines is None:
            return None
        return Cart.from_lines([self._to_domain(raw) for raw in raw_lines])

    def save(self, session_id: str, cart: Cart) -> None:
        carts = self._file.load()
        if cart.is_empty:
            carts.pop(session_id, None)
        else:
            carts[session_id] = [self._to_raw(line) for line in cart.lines]
        self._file.persist(carts)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(line: CartLine) -> dict:
        return {
            "product_id": line.product_id,
            "product_name": line.product_name,
            "unit_price": str(line.unit_price.amount),
            "stock_quantity": line.stock_quantity,
            "quantity": line.quantity,
            "image_url": line.image_url,
        }

    @staticmethod
    def _to_domain(raw: dict) -> CartLine:
        return CartLine(
            product_id=raw["product_id"],
            product_name=raw["product_name"],
            unit_price=Money(Decimal(raw["unit_price"])),
            stock_quantity=raw["stock_quantity"],
            quantity=raw["quantity"],
            image_url=raw.get("image_url"),
        )
