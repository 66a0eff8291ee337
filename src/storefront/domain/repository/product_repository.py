"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, in-memory)
live in the infrastructure layer and in the tests.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def get_by_name(self, name: str) -> Product | None:
        """Return a product by its exact name (case-insensitive), or None."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog, active or not."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new or updated product."""

    def save_all(self, products: list[Product]) -> None:
        """Persist several products; stores that can batch should override."""
        for product in products:
            self.save(product)

    @abstractmethod
    def delete(self, product_id: str) -> None:
        """Remove a product from the catalog; unknown IDs are ignored."""
