"""Ports to the collaborators that own catalog and order data.

The cart and checkout code talk to these interfaces only. The shipped
implementation works against local repositories; a networked one would
raise TransportFailure when the remote side cannot be reached.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.order import Order, OrderLine, OrderStatus
from storefront.domain.model.product import Product
from storefront.domain.model.submission import OrderSubmission


class CatalogGateway(ABC):

    @abstractmethod
    def list_products(self) -> list[Product]:
        """Return the products customers may browse."""

    @abstractmethod
    def get_product(self, product_id: str) -> Product:
        """Return a product, raising EntityNotFoundError if unknown."""


class OrderGateway(ABC):

    @abstractmethod
    def create_order(self, submission: OrderSubmission) -> Order:
        """Price, validate and persist a submission.

        Raises OutOfStock if any line now exceeds current stock and
        ProductUnavailable if a product is inactive or gone. Stock is
        checked and decremented atomically.
        """

    @abstractmethod
    def list_orders(self) -> list[Order]:
        """Return every order, newest first."""

    @abstractmethod
    def get_order_detail(self, order_id: str) -> tuple[Order, list[OrderLine]]:
        """Return an order and its lines, raising EntityNotFoundError if unknown."""

    @abstractmethod
    def set_order_status(self, order_id: str, status: OrderStatus) -> Order:
        """Persist a new status and return the updated order."""
