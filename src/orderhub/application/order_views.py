"""Mapping from domain objects to the sanitized views handed to callers."""

from __future__ import annotations

from datetime import datetime

from orderhub.application.dto import OrderDTO, OrderItemDTO, ProductDTO
from orderhub.domain.model.order import Order
from orderhub.domain.model.product import Product
from orderhub.domain.repository.product_directory import ProductDirectory


def to_product_dto(product: Product) -> ProductDTO:
    return ProductDTO(
        id=product.id,
        title=product.title,
        price=product.price.format_amount(),
        currency=product.price.currency,
        stock_quantity=product.stock_quantity,
        seller_id=product.seller_id,
        active=product.active,
    )


def to_order_dto(order: Order, products: ProductDirectory) -> OrderDTO:
    """Build the order view, joining every item with its current product."""
    cache: dict[str, Product | None] = {}
    items: list[OrderItemDTO] = []

    for item in order.items:
        if item.product_id not in cache:
            cache[item.product_id] = products.find_product(item.product_id)
        product = cache[item.product_id]

        items.append(
            OrderItemDTO(
                id=item.id,
                product_id=item.product_id,
                quantity=item.quantity.value,
                price=item.unit_price.format_amount(),
                currency=item.currency,
                line_total=item.line_total.format_amount(),
                product=to_product_dto(product) if product is not None else None,
            )
        )

    return OrderDTO(
        id=order.id,
        buyer_id=order.buyer_id,
        status=order.status.value,
        total_amount=order.total_amount.format_amount(),
        currency=order.currency,
        items=items,
        shipping_address=order.shipping_address,
        zip_code=order.zip_code,
        payment_id=order.payment_id,
        notes=order.notes,
        created_at=_format_timestamp(order.created_at),
        updated_at=_format_timestamp(order.updated_at),
    )


def _format_timestamp(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None
