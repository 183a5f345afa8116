"""Product record as exposed by the product directory.

Products live independently of orders. They have their own lifecycle:
prices change, stock moves, products are deactivated. Orders only ever
hold a weak reference (the product id) plus a price snapshot.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from orderhub.domain.exceptions import InvalidArgumentError
from orderhub.domain.model.value_objects import Money

MAX_TITLE_LENGTH = 120
CENT = Decimal("0.01")
# largest value a Numeric(12, 2) column holds
MAX_PRICE = Decimal("9999999999.99")


@dataclass
class Product:
    """A product in the catalog, owned by exactly one seller."""

    id: str
    title: str
    price: Money
    stock_quantity: int
    seller_id: str
    active: bool = True

    @staticmethod
    def create(
        title: str,
        price: Money,
        stock_quantity: int,
        seller_id: str,
        active: bool = True,
    ) -> Product:
        """Create a new product, enforcing catalog rules."""
        if not title or not title.strip():
            raise InvalidArgumentError("Product title is required")
        if len(title.strip()) > MAX_TITLE_LENGTH:
            raise InvalidArgumentError(
                f"Product title must be at most {MAX_TITLE_LENGTH} characters"
            )
        if price.amount <= 0:
            raise InvalidArgumentError("Product price must be greater than zero")
        if price.amount > MAX_PRICE:
            raise InvalidArgumentError(f"Product price cannot exceed {MAX_PRICE}")
        if price.amount != price.amount.quantize(CENT):
            raise InvalidArgumentError("Product price must have at most 2 decimal places")
        if stock_quantity < 0:
            raise InvalidArgumentError("Stock quantity cannot be negative")
        if not seller_id:
            raise InvalidArgumentError("Seller ID is required")

        return Product(
            id=str(uuid.uuid4()),
            title=title.strip(),
            price=price,
            stock_quantity=stock_quantity,
            seller_id=seller_id,
            active=active,
        )

    @property
    def is_available(self) -> bool:
        return self.active


@dataclass(frozen=True)
class StockAdjustment:
    """One audited change to a product's stock."""

    product_id: str
    previous_quantity: int
    new_quantity: int
    actor_id: str
    created_at: datetime | None = None
