import click

from orderhub.infrastructure.bootstrap import settings
from orderhub.infrastructure.cli.order_commands import (
    order_cancel,
    order_create,
    order_list,
    order_seller,
    order_show,
    order_update,
)
from orderhub.infrastructure.cli.product_commands import (
    product_add,
    product_list,
    product_set_stock,
)
from orderhub.infrastructure.logging_config import configure_logging


@click.group()
@click.option("--log-level", default=None, help="Override ORDERHUB_LOG_LEVEL.")
def cli(log_level: str | None) -> None:
    """orderhub: marketplace order processing"""
    configure_logging(log_level or settings().log_level)


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def product() -> None:
    """Manage the product directory."""


# Register subcommands
order.add_command(order_cancel)
order.add_command(order_create)
order.add_command(order_list)
order.add_command(order_seller)
order.add_command(order_show)
order.add_command(order_update)
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_set_stock)
