"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path

from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository
from storefront.infrastructure.persistence.json_file import JsonFile


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path, empty=[])

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        products = self._load()
        return products.get(product_id)

    def get_by_name(self, name: str) -> Product | None:
        for product in self._load().values():
            if product.name.lower() == name.lower():
                return product
        return None

    def list_all(self) -> list[Product]:
        return list(self._load().values())

    def save(self, product: Product) -> None:
        self.save_all([product])

    def save_all(self, products: list[Product]) -> None:
        stored = self._load()
        for product in products:
            stored[product.id] = product
        self._persist(stored)

    def delete(self, product_id: str) -> None:
        stored = self._load()
        if stored.pop(product_id, None) is not None:
            self._persist(stored)

    # --- Serialization helpers ------------------------------------------------

    def _load(self) -> dict[str, Product]:
        return {item["id"]: self._to_domain(item) for item in self._file.load()}

    def _persist(self, products: dict[str, Product]) -> None:
        self._file.persist([self._to_raw(p) for p in products.values()])

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "description": product.description,
            "price": str(product.price.amount),
            "image_url": product.image_url,
            "stock_quantity": product.stock_quantity,
            "is_active": product.is_active,
            "created_at": product.created_at.isoformat(),
            "updated_at": product.updated_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        product = Product(
            id=raw["id"],
            name=raw["name"],
            price=Money(Decimal(raw["price"])),
            stock_quantity=raw.get("stock_quantity", 0),
            is_active=raw.get("is_active", True),
            description=raw.get("description"),
            image_url=raw.get("image_url"),
        )
        if "created_at" in raw:
            product.created_at = datetime.fromisoformat(raw["created_at"])
        if "updated_at" in raw:
            product.updated_at = datetime.fromisoformat(raw["updated_at"])
        return product
