"""Application service: List Products use case (query)."""

from __future__ import annotations

from storefront.application.dto import ProductDTO
from storefront.domain.repository.product_repository import ProductRepository


class ListProductsHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, include_inactive: bool = False) -> list[ProductDTO]:
        """Customers see active products only; admins may ask for all."""
        return [
            ProductDTO.from_domain(product)
            for product in self._product_repo.list_all()
            if include_inactive or product.is_active
        ]
