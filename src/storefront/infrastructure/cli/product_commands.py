"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from storefront.application.add_product import AddProductHandler
from storefront.application.delete_product import DeleteProductHandler
from storefront.application.list_products import ListProductsHandler
from storefront.application.update_product import UpdateProductHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import order_repository, product_repository


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--stock", "stock_quantity", default=0, type=click.IntRange(min=0), help="Units in stock.")
@click.option("--description", default=None, help="Optional description.")
def product_add(name: str, price: str, stock_quantity: int, description: str | None) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(product_repo=product_repository())

    try:
        product = handler.handle(
            name=name, price=price, stock_quantity=stock_quantity, description=description
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Product #{product.id} '{product.name}' added at {product.price} "
        f"({product.stock_quantity} in stock)"
    )


@click.command("list")
@click.option("--all", "include_inactive", is_flag=True, default=False, help="Include inactive products.")
def product_list(include_inactive: bool) -> None:
    """List products in the catalog."""
    handler = ListProductsHandler(product_repo=product_repository())
    try:
        products = handler.handle(include_inactive=include_inactive)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'Price':>10} {'Stock':>7}  Status")
    click.echo("-" * 54)
    for p in products:
        status = "active" if p.is_active else "inactive"
        click.echo(f"{p.id:<6} {p.name:<20} {p.price:>10} {p.stock_quantity:>7}  {status}")


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--name", default=None, help="New name.")
@click.option("--price", default=None, help="New price (e.g. 29.99).")
@click.option("--stock", "stock_quantity", default=None, type=click.IntRange(min=0), help="New stock level.")
@click.option("--description", default=None, help="New description.")
@click.option("--active/--inactive", "is_active", default=None, help="Show or hide the product.")
def product_update(
    product_id: str,
    name: str | None,
    price: str | None,
    stock_quantity: int | None,
    description: str | None,
    is_active: bool | None,
) -> None:
    """Update a product's details, price, stock or visibility."""
    handler = UpdateProductHandler(product_repo=product_repository())

    try:
        product = handler.handle(
            product_id=product_id,
            name=name,
            description=description,
            price=price,
            stock_quantity=stock_quantity,
            is_active=is_active,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} '{product.name}' updated")


@click.command("delete")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_delete(product_id: str) -> None:
    """Remove a product from the catalog; past orders keep their lines."""
    handler = DeleteProductHandler(
        product_repo=product_repository(), order_repo=order_repository()
    )

    try:
        product = handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} '{product.name}' deleted")
