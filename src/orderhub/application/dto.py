"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.  Amounts are formatted
strings so callers never do arithmetic on a view.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: what the buyer asked for (product id + quantity)."""

    product_id: str
    quantity: int


@dataclass(frozen=True)
class ProductDTO:
    """Output: product detail as shown to the user."""

    id: str
    title: str
    price: str  # formatted, e.g. "10.00"
    currency: str
    stock_quantity: int
    seller_id: str
    active: bool


@dataclass(frozen=True)
class OrderItemDTO:
    """Output: a single order item with its price snapshot.

    ``product`` is None when the product has since left the directory.
    """

    id: str
    product_id: str
    quantity: int
    price: str
    currency: str
    line_total: str
    product: ProductDTO | None


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: str
    buyer_id: str
    status: str
    total_amount: str
    currency: str
    items: list[OrderItemDTO]
    shipping_address: str | None
    zip_code: str | None
    payment_id: str | None
    notes: str | None
    created_at: str | None
    updated_at: str | None
