"""Application service: Add Product use case."""

from __future__ import annotations

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        name: str,
        price: str,
        stock_quantity: int = 0,
        description: str | None = None,
        image_url: str | None = None,
    ) -> Product:
        """Add a new, active product to the catalog."""
        if not name or not name.strip():
            raise ValidationError("Product name is required", field="name")

        existing = self._product_repo.get_by_name(name.strip())
        if existing is not None:
            raise ValidationError(f"Product '{name.strip()}' already exists", field="name")

        # Auto-assign ID based on existing products
        all_products = self._product_repo.list_all()
        if all_products:
            next_id = str(max(int(p.id) for p in all_products) + 1)
        else:
            next_id = "1"

        product = Product(
            id=next_id,
            name=name.strip(),
            price=Money.of(price),
            stock_quantity=stock_quantity,
            description=description.strip() if description and description.strip() else None,
            image_url=image_url,
        )
        self._product_repo.save(product)
        return product
