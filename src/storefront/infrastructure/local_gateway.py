"""Catalog and order gateways backed by local repositories.

Plays the part of the storefront backend: it is the authority on prices
and stock at checkout. Storage failures surface as TransportFailure so
callers treat them like any other unreachable backend.
"""

from __future__ import annotations

import json
import threading
from collections.abc import Callable
from typing import TypeVar

from storefront.domain.exceptions import EntityNotFoundError, TransportFailure
from storefront.domain.model.order import Order, OrderLine, OrderStatus
from storefront.domain.model.product import Product
from storefront.domain.model.submission import OrderSubmission
from storefront.domain.repository.gateways import CatalogGateway, OrderGateway
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.order_placement_service import OrderPlacementService

T = TypeVar("T")

# One lock per process: placements and status changes never interleave.
_WRITE_LOCK = threading.Lock()


def _storage_call(fn: Callable[[], T]) -> T:
    try:
        return fn()
    except (OSError, json.JSONDecodeError) as exc:
        raise TransportFailure(f"Storage unavailable: {exc}") from exc


class LocalCatalogGateway(CatalogGateway):

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def list_products(self) -> list[Product]:
        products = _storage_call(self._product_repo.list_all)
        return [p for p in products if p.is_active]

    def get_product(self, product_id: str) -> Product:
        product = _storage_call(lambda: self._product_repo.get_by_id(product_id))
        if product is None:
            raise EntityNotFoundError(f"Product #{product_id} not found")
        return product


class LocalOrderGateway(OrderGateway):

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._order_repo = order_repo
        self._placement = OrderPlacementService(product_repo, order_repo)

    def create_order(self, submission: OrderSubmission) -> Order:
        with _WRITE_LOCK:
            return _storage_call(lambda: self._placement.place(submission))

    def list_orders(self) -> list[Order]:
        return _storage_call(self._order_repo.list_all)

    def get_order_detail(self, order_id: str) -> tuple[Order, list[OrderLine]]:
        order = self._load(order_id)
        return order, list(order.lines)

    def set_order_status(self, order_id: str, status: OrderStatus) -> Order:
        with _WRITE_LOCK:
            order = self._load(order_id)
            if order.transition_to(status):
                _storage_call(lambda: self._order_repo.save(order))
            return order

    def _load(self, order_id: str) -> Order:
        order = _storage_call(lambda: self._order_repo.get_by_id(order_id))
        if order is None:
            raise EntityNotFoundError(f"Order {order_id} not found")
        return order
