"""CLI commands for the product directory."""

from __future__ import annotations

import click

from orderhub.application.add_product import AddProductHandler
from orderhub.application.order_views import to_product_dto
from orderhub.application.set_stock import SetStockHandler
from orderhub.domain.exceptions import DomainException
from orderhub.domain.model.principal import Principal, Role
from orderhub.infrastructure.bootstrap import unit_of_work


@click.command("add")
@click.option("--title", required=True, help="Product title.")
@click.option("--price", required=True, help="Unit price (e.g. 15.00).")
@click.option("--currency", default="USD", show_default=True, help="Currency code.")
@click.option("--stock", required=True, type=int, help="Initial stock quantity.")
@click.option("--seller", "seller_id", required=True, help="Seller user ID.")
@click.option("--inactive", is_flag=True, default=False, help="Register as not for sale.")
def product_add(
    title: str,
    price: str,
    currency: str,
    stock: int,
    seller_id: str,
    inactive: bool,
) -> None:
    """Add a new product to the directory."""
    handler = AddProductHandler(unit_of_work())

    try:
        product = handler.handle(
            title=title,
            price=price,
            currency=currency,
            stock_quantity=stock,
            seller_id=seller_id,
            active=not inactive,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Product {product.id} '{product.title}' added at "
        f"{product.price} {product.currency} (stock {product.stock_quantity})"
    )


@click.command("list")
def product_list() -> None:
    """List all products in the directory."""
    with unit_of_work() as uow:
        products = [to_product_dto(p) for p in uow.products.list_all()]

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<36}  {'Title':<20} {'Price':>12} {'Stock':>6} {'Seller':<12} Active")
    click.echo("-" * 98)
    for p in products:
        click.echo(
            f"{p.id:<36}  {p.title[:20]:<20} {p.price:>8} {p.currency:<3} "
            f"{p.stock_quantity:>6} {p.seller_id[:12]:<12} {'yes' if p.active else 'no'}"
        )


@click.command("set-stock")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="New stock quantity.")
@click.option("--user", "user_id", required=True, help="Acting user ID.")
@click.option("--role", default=Role.USER.value, type=click.Choice([r.value for r in Role]))
def product_set_stock(product_id: str, quantity: int, user_id: str, role: str) -> None:
    """Set the stock level of a product."""
    handler = SetStockHandler(unit_of_work())

    try:
        product = handler.handle(product_id, quantity, Principal.of(user_id, role))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Stock for '{product.title}' set to {product.stock_quantity}")
