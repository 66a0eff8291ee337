"""Application service: the session's Cart Store.

Owns the in-memory cart for one session and keeps its stored copy in
step. Each mutation runs against a copy of the cart; the copy is saved
first and only then becomes the current cart, so a failed save leaves
memory and storage exactly as they were.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

import structlog

from storefront.domain.model.cart import Cart, CartLine
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.cart_repository import CartRepository

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class CartStore:

    def __init__(self, cart_repo: CartRepository, session_id: str) -> None:
        self._cart_repo = cart_repo
        self._session_id = session_id
        self._cart = Cart()

    @classmethod
    def open(cls, cart_repo: CartRepository, session_id: str) -> CartStore:
        """Construct a store for *session_id* with its saved cart restored."""
        store = cls(cart_repo, session_id)
        store.restore()
        return store

    def restore(self) -> None:
        self._cart = self._cart_repo.load(self._session_id) or Cart()

    # --- Mutations ------------------------------------------------------------

    def add_item(self, product: Product, quantity: int = 1) -> CartLine:
        line = self._commit(lambda cart: cart.add_item(product, quantity))
        logger.debug("Cart item added", product_id=product.id, quantity=line.quantity)
        return line

    def update_quantity(self, product_id: str, new_quantity: int) -> CartLine | None:
        line = self._commit(lambda cart: cart.update_quantity(product_id, new_quantity))
        logger.debug("Cart quantity updated", product_id=product_id, quantity=new_quantity)
        return line

    def remove_item(self, product_id: str) -> None:
        if self._cart.get(product_id) is None:
            return
        self._commit(lambda cart: cart.remove_item(product_id))
        logger.debug("Cart item removed", product_id=product_id)

    def clear(self) -> None:
        self._commit(lambda cart: cart.clear())
        logger.debug("Cart cleared", session_id=self._session_id)

    # --- Queries --------------------------------------------------------------

    def lines(self) -> list[CartLine]:
        return self._cart.lines

    @property
    def is_empty(self) -> bool:
        return self._cart.is_empty

    def get_total_price(self) -> Money:
        return self._cart.total_price

    def get_total_items(self) -> int:
        return self._cart.total_items

    # --- Internal helpers -----------------------------------------------------

    def _commit(self, mutate: Callable[[Cart], T]) -> T:
        draft = self._cart.copy()
        result = mutate(draft)
        self._cart_repo.save(self._session_id, draft)
        self._cart = draft
        return result
