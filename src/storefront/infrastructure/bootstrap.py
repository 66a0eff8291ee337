"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from storefront.application.cart_store import CartStore
from storefront.infrastructure.config import Settings, get_settings
from storefront.infrastructure.local_gateway import LocalCatalogGateway, LocalOrderGateway
from storefront.infrastructure.persistence.json_cart_repository import JsonCartRepository
from storefront.infrastructure.persistence.json_order_repository import JsonOrderRepository
from storefront.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)


def product_repository(settings: Settings | None = None) -> JsonProductRepository:
    settings = settings or get_settings()
    return JsonProductRepository(settings.products_file)


def order_repository(settings: Settings | None = None) -> JsonOrderRepository:
    settings = settings or get_settings()
    return JsonOrderRepository(settings.orders_file)


def cart_repository(settings: Settings | None = None) -> JsonCartRepository:
    settings = settings or get_settings()
    return JsonCartRepository(settings.carts_file)


def catalog_gateway(settings: Settings | None = None) -> LocalCatalogGateway:
    return LocalCatalogGateway(product_repository(settings))


def order_gateway(settings: Settings | None = None) -> LocalOrderGateway:
    return LocalOrderGateway(order_repository(settings), product_repository(settings))


def cart_store(session_id: str | None = None, settings: Settings | None = None) -> CartStore:
    """Open the cart for a session, restored from storage."""
    settings = settings or get_settings()
    return CartStore.open(cart_repository(settings), session_id or settings.session_id)
