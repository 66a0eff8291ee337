"""CLI commands for checkout and order administration."""

from __future__ import annotations

import click

from storefront.application.change_order_status import ChangeOrderStatusHandler
from storefront.application.checkout import CheckoutAssembler
from storefront.application.dto import OrderDTO
from storefront.application.show_order import ListOrdersHandler, ShowOrderHandler
from storefront.domain.exceptions import (
    DomainException,
    OutOfStock,
    ProductUnavailable,
)
from storefront.domain.model.order import OrderStatus
from storefront.domain.model.submission import CheckoutForm
from storefront.infrastructure.bootstrap import cart_store, order_gateway


@click.command("checkout")
@click.option("--name", required=True, help="Customer name.")
@click.option("--email", required=True, help="Customer email.")
@click.option("--phone", required=True, help="Customer phone.")
@click.option("--address", required=True, help="Delivery address.")
@click.option("--city", required=True, help="Delivery city.")
@click.option("--postal-code", default=None, help="Delivery postal code.")
@click.option("--notes", default=None, help="Notes for the order.")
@click.pass_obj
def checkout(
    obj: dict,
    name: str,
    email: str,
    phone: str,
    address: str,
    city: str,
    postal_code: str | None,
    notes: str | None,
) -> None:
    """Place an order for everything in the cart."""
    form = CheckoutForm(
        customer_name=name,
        customer_email=email,
        customer_phone=phone,
        delivery_address=address,
        delivery_city=city,
        delivery_postal_code=postal_code,
        notes=notes,
    )

    try:
        store = cart_store(obj["session_id"])
        assembler = CheckoutAssembler(cart=store, order_gateway=order_gateway())
        order = assembler.submit(form)
    except ProductUnavailable as exc:
        try:
            store.remove_item(exc.product_id)
        except DomainException as cart_exc:
            raise click.ClickException(f"{exc}. {cart_exc}")
        raise click.ClickException(f"{exc}. It has been removed from your cart.")
    except OutOfStock as exc:
        raise click.ClickException(
            f"{exc}. Update the quantity in your cart and try again."
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {order.id} placed  (status={order.status.value})")
    click.echo(f"Total: {order.total_amount}")


@click.command("list")
def order_list() -> None:
    """List all orders, newest first."""
    handler = ListOrdersHandler(order_gateway=order_gateway())

    try:
        orders = handler.handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<36}  {'Customer':<20} {'Status':<11} {'Total':>10}  Created")
    click.echo("-" * 100)
    for o in orders:
        click.echo(f"{o.id:<36}  {o.customer_name:<20} {o.status:<11} {o.total:>10}  {o.created_at}")


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order {dto.id}  (status={dto.status})")
    click.echo(f"Customer: {dto.customer_name} <{dto.customer_email}>, {dto.customer_phone}")
    postal = f" {dto.delivery_postal_code}" if dto.delivery_postal_code else ""
    click.echo(f"Deliver:  {dto.delivery_address}, {dto.delivery_city}{postal}")
    if dto.notes:
        click.echo(f"Notes:    {dto.notes}")
    click.echo(f"Created:  {dto.created_at}   Updated: {dto.updated_at}")
    click.echo()
    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Subtotal':>10}")
    click.echo(f"  {'-'*47}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<20} {item.quantity:>5} {item.unit_price:>10} {item.subtotal:>10}"
        )
    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Order Total':<27} {dto.total:>20}")
    if dto.next_statuses:
        click.echo(f"Next status: {', '.join(dto.next_statuses)}")


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID to display.")
def order_show(order_id: str) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(order_gateway=order_gateway())

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("status")
@click.option("--id", "order_id", required=True, help="Order ID.")
@click.option(
    "--to",
    "status",
    required=True,
    type=click.Choice([s.value for s in OrderStatus]),
    help="Target status.",
)
def order_status(order_id: str, status: str) -> None:
    """Move an order to its next status."""
    handler = ChangeOrderStatusHandler(order_gateway=order_gateway())

    try:
        dto = handler.handle(order_id, status)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)
