"""CLI commands for the session's cart."""

from __future__ import annotations

import click

from storefront.application.cart_store import CartStore
from storefront.application.dto import CartLineDTO
from storefront.domain.exceptions import DomainException, OutOfStock
from storefront.infrastructure.bootstrap import cart_store, catalog_gateway


def _display_cart(store: CartStore) -> None:
    lines = [CartLineDTO.from_domain(line) for line in store.lines()]
    if not lines:
        click.echo("Your cart is empty.")
        return

    click.echo(f"  {'ID':<6} {'Product':<20} {'Qty':>5} {'Price':>10} {'Subtotal':>10}")
    click.echo(f"  {'-'*54}")
    for line in lines:
        click.echo(
            f"  {line.product_id:<6} {line.product_name:<20} {line.quantity:>5} "
            f"{line.unit_price:>10} {line.subtotal:>10}"
        )
    click.echo(f"  {'-'*54}")
    click.echo(f"  {'Items':<27} {store.get_total_items():>5}")
    click.echo(f"  {'Total':<27} {str(store.get_total_price()):>27}")


def _out_of_stock_message(exc: OutOfStock) -> str:
    return (
        f"Only {exc.available} of '{exc.product_name}' in stock "
        f"(you asked for {exc.requested})."
    )


@click.command("show")
@click.pass_obj
def cart_show(obj: dict) -> None:
    """Show the cart with totals."""
    try:
        store = cart_store(obj["session_id"])
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_cart(store)


@click.command("add")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--quantity", default=1, type=int, help="Units to add.")
@click.pass_obj
def cart_add(obj: dict, product_id: str, quantity: int) -> None:
    """Add a product to the cart."""
    try:
        store = cart_store(obj["session_id"])
        product = catalog_gateway().get_product(product_id)
        line = store.add_item(product, quantity)
    except OutOfStock as exc:
        raise click.ClickException(_out_of_stock_message(exc))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"'{line.product_name}' in cart: {line.quantity}")


@click.command("update")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="New quantity (0 removes).")
@click.pass_obj
def cart_update(obj: dict, product_id: str, quantity: int) -> None:
    """Set the quantity of a cart line."""
    try:
        line = cart_store(obj["session_id"]).update_quantity(product_id, quantity)
    except OutOfStock as exc:
        raise click.ClickException(_out_of_stock_message(exc))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if line is None:
        click.echo(f"Product #{product_id} removed from cart.")
    else:
        click.echo(f"'{line.product_name}' in cart: {line.quantity}")


@click.command("remove")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.pass_obj
def cart_remove(obj: dict, product_id: str) -> None:
    """Remove a product from the cart."""
    try:
        cart_store(obj["session_id"]).remove_item(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product_id} removed from cart.")


@click.command("clear")
@click.pass_obj
def cart_clear(obj: dict) -> None:
    """Empty the cart."""
    try:
        cart_store(obj["session_id"]).clear()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo("Cart cleared.")
