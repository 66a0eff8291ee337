import click

from storefront.infrastructure.cli.cart_commands import (
    cart_add,
    cart_clear,
    cart_remove,
    cart_show,
    cart_update,
)
from storefront.infrastructure.cli.order_commands import (
    checkout,
    order_list,
    order_show,
    order_status,
)
from storefront.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_list,
    product_update,
)
from storefront.infrastructure.config import get_settings
from storefront.infrastructure.logging import bind_session, configure_logging


@click.group()
@click.option("--session", "session_id", default=None, help="Cart session ID (default from settings).")
@click.pass_context
def cli(ctx: click.Context, session_id: str | None) -> None:
    """Storefront: catalog, cart, checkout and order administration"""
    settings = get_settings()
    configure_logging(settings.log_level, json=settings.log_json)
    ctx.ensure_object(dict)
    ctx.obj["session_id"] = session_id or settings.session_id
    bind_session(ctx.obj["session_id"])


@cli.group()
def product() -> None:
    """Browse and manage products."""


@cli.group()
def cart() -> None:
    """Manage the shopping cart."""


@cli.group()
def order() -> None:
    """Administer orders."""


# Register subcommands
product.add_command(product_add)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_update)
cart.add_command(cart_add)
cart.add_command(cart_clear)
cart.add_command(cart_remove)
cart.add_command(cart_show)
cart.add_command(cart_update)
order.add_command(order_list)
order.add_command(order_show)
order.add_command(order_status)
cli.add_command(checkout)
