"""CLI commands for the Order aggregate.

``--user`` and ``--role`` carry the identity resolved by the
authentication layer in front of this tool.
"""

from __future__ import annotations

import click

from orderhub.application.cancel_order import CancelOrderHandler
from orderhub.application.create_order import CreateOrderHandler
from orderhub.application.dto import OrderDTO, OrderItemSpec
from orderhub.application.list_orders import ListOrdersHandler
from orderhub.application.list_seller_orders import ListSellerOrdersHandler
from orderhub.application.show_order import ShowOrderHandler
from orderhub.application.update_order import UpdateOrderHandler
from orderhub.domain.exceptions import DomainException
from orderhub.domain.model.order import OrderStatus
from orderhub.domain.model.principal import Principal, Role
from orderhub.infrastructure.bootstrap import unit_of_work

_ROLE_CHOICE = click.Choice([r.value for r in Role])
_STATUS_CHOICE = click.Choice([s.value for s in OrderStatus])


def _parse_items(raw: str) -> list[OrderItemSpec]:
    """Parse 'P1:3,P2:5' into OrderItemSpec list."""
    specs: list[OrderItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductId:Quantity'."
            )
        product_id, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{product_id}'."
            )
        specs.append(OrderItemSpec(product_id=product_id.strip(), quantity=qty))
    return specs


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order {dto.id}  (status={dto.status})")
    click.echo(f"Buyer:    {dto.buyer_id}")
    click.echo(f"Created:  {dto.created_at}")
    if dto.shipping_address or dto.zip_code:
        click.echo(f"Ship to:  {dto.shipping_address or ''} {dto.zip_code or ''}".rstrip())
    if dto.payment_id:
        click.echo(f"Payment:  {dto.payment_id}")
    if dto.notes:
        click.echo(f"Notes:    {dto.notes}")
    click.echo()

    click.echo(f"  {'Product':<24} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*51}")
    for item in dto.items:
        name = item.product.title if item.product is not None else item.product_id
        click.echo(
            f"  {name[:24]:<24} {item.quantity:>5} {item.price:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*51}")
    click.echo(f"  {'Order Total':<31} {dto.total_amount:>16} {dto.currency}")


def _display_summary(orders: list[OrderDTO]) -> None:
    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<36}  {'Buyer':<16} {'Status':<11} {'Items':>5} {'Total':>12}")
    click.echo("-" * 86)
    for dto in orders:
        click.echo(
            f"{dto.id:<36}  {dto.buyer_id[:16]:<16} {dto.status:<11} "
            f"{len(dto.items):>5} {dto.total_amount:>8} {dto.currency}"
        )


@click.command("create")
@click.option("--user", "user_id", required=True, help="Buyer user ID.")
@click.option("--items", required=True, help="Items as 'ProductId:Qty,ProductId:Qty'.")
@click.option("--address", default=None, help="Shipping address.")
@click.option("--zip", "zip_code", default=None, help="Postal code.")
@click.option("--notes", default=None, help="Free-form notes.")
def order_create(
    user_id: str,
    items: str,
    address: str | None,
    zip_code: str | None,
    notes: str | None,
) -> None:
    """Create a new order (decrements stock)."""
    specs = _parse_items(items)
    handler = CreateOrderHandler(unit_of_work())

    try:
        dto = handler.handle(
            buyer_id=user_id,
            item_specs=specs,
            shipping_address=address,
            zip_code=zip_code,
            notes=notes,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID to display.")
@click.option("--user", "user_id", required=True, help="Acting user ID.")
@click.option("--role", default=Role.USER.value, type=_ROLE_CHOICE, show_default=True)
def order_show(order_id: str, user_id: str, role: str) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(unit_of_work())

    try:
        dto = handler.handle(order_id, Principal.of(user_id, role))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
@click.option("--user", "user_id", required=True, help="Acting user ID.")
@click.option("--role", default=Role.USER.value, type=_ROLE_CHOICE, show_default=True)
def order_list(user_id: str, role: str) -> None:
    """List your orders (admins see every order)."""
    handler = ListOrdersHandler(unit_of_work())

    try:
        orders = handler.handle(Principal.of(user_id, role))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_summary(orders)


@click.command("update")
@click.option("--id", "order_id", required=True, help="Order ID to update.")
@click.option("--user", "user_id", required=True, help="Acting user ID.")
@click.option("--role", default=Role.USER.value, type=_ROLE_CHOICE, show_default=True)
@click.option("--status", default=None, type=_STATUS_CHOICE, help="New status (admin only).")
@click.option("--address", default=None, help="New shipping address.")
@click.option("--zip", "zip_code", default=None, help="New postal code.")
@click.option("--payment-id", default=None, help="Payment reference (admin only).")
@click.option("--notes", default=None, help="New notes.")
def order_update(
    order_id: str,
    user_id: str,
    role: str,
    status: str | None,
    address: str | None,
    zip_code: str | None,
    payment_id: str | None,
    notes: str | None,
) -> None:
    """Update delivery details, or any field as an admin."""
    options = {
        "status": status,
        "shipping_address": address,
        "zip_code": zip_code,
        "payment_id": payment_id,
        "notes": notes,
    }
    patch = {name: value for name, value in options.items() if value is not None}
    if not patch:
        raise click.UsageError("Nothing to update.")

    handler = UpdateOrderHandler(unit_of_work())

    try:
        dto = handler.handle(order_id, patch, Principal.of(user_id, role))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("cancel")
@click.option("--id", "order_id", required=True, help="Order ID to cancel.")
@click.option("--user", "user_id", required=True, help="Acting user ID.")
@click.option("--role", default=Role.USER.value, type=_ROLE_CHOICE, show_default=True)
def order_cancel(order_id: str, user_id: str, role: str) -> None:
    """Cancel an order (restores stock)."""
    handler = CancelOrderHandler(unit_of_work())

    try:
        dto = handler.handle(order_id, Principal.of(user_id, role))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.id} cancelled.")


@click.command("seller")
@click.option("--user", "user_id", required=True, help="Acting user ID.")
@click.option("--role", default=Role.USER.value, type=_ROLE_CHOICE, show_default=True)
@click.option("--seller", "seller_id", default=None, help="Seller ID (defaults to --user).")
def order_seller(user_id: str, role: str, seller_id: str | None) -> None:
    """List orders containing a seller's products (only that seller's items)."""
    handler = ListSellerOrdersHandler(unit_of_work())

    try:
        orders = handler.handle(Principal.of(user_id, role), seller_id=seller_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not orders:
        click.echo("No orders found.")
        return
    for dto in orders:
        _display_order(dto)
        click.echo()
