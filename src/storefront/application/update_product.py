"""Application service: Update Product use case."""

from __future__ import annotations

from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository


class UpdateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        product_id: str,
        name: str | None = None,
        description: str | None = None,
        price: str | None = None,
        stock_quantity: int | None = None,
        is_active: bool | None = None,
    ) -> Product:
        """Apply the given field changes to a product.

        Fields left as None are not touched. A price change does NOT
        affect any existing orders; they captured a price snapshot at
        creation time.
        """
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        if name is not None:
            clash = self._product_repo.get_by_name(name.strip())
            if clash is not None and clash.id != product.id:
                raise ValidationError(f"Product '{name.strip()}' already exists", field="name")
            product.rename(name)
        if description is not None:
            product.describe(description)
        if price is not None:
            product.update_price(Money.of(price))
        if stock_quantity is not None:
            product.set_stock(stock_quantity)
        if is_active is True:
            product.activate()
        elif is_active is False:
            product.deactivate()

        self._product_repo.save(product)
        return product
