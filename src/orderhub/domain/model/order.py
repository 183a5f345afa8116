"""Order aggregate, the core of the domain.

The Order is an aggregate root that exclusively owns its items.
Items are immutable price snapshots: once an order exists its total
and currency never change, whatever happens to the catalog later.
"""

from __future__ import annotations

import uuid
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from orderhub.domain.exceptions import (
    InvalidArgumentError,
    InvalidStateError,
    UnprocessableError,
)
from orderhub.domain.model.product import Product
from orderhub.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"

    def can_transition_to(self, target: OrderStatus) -> bool:
        return target in _TRANSITIONS[self]

    @staticmethod
    def parse(value: object) -> OrderStatus:
        if isinstance(value, OrderStatus):
            return value
        try:
            return OrderStatus(str(value).lower())
        except ValueError as exc:
            allowed = ", ".join(s.value for s in OrderStatus)
            raise InvalidArgumentError(
                f"Invalid status {value!r} (expected one of: {allowed})"
            ) from exc


# ---------------------------------------------------------------------------
# Lifecycle graph
# ---------------------------------------------------------------------------
_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.PAID, OrderStatus.CANCELLED}),
    OrderStatus.PAID: frozenset(
        {OrderStatus.PROCESSING, OrderStatus.CANCELLED, OrderStatus.REFUNDED}
    ),
    OrderStatus.PROCESSING: frozenset({OrderStatus.SHIPPED, OrderStatus.CANCELLED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
    OrderStatus.REFUNDED: frozenset(),
}

CANCELLABLE_STATUSES = frozenset(
    {OrderStatus.PENDING, OrderStatus.PAID, OrderStatus.PROCESSING}
)

# Fields an update patch may touch at all; who may touch which is decided
# by the access policy.
UPDATABLE_FIELDS = frozenset(
    {"status", "shipping_address", "zip_code", "payment_id", "notes"}
)


@dataclass
class OrderItem:
    """Captures the price snapshot of a product at order-creation time.

    ``quantity`` and ``unit_price`` never change after creation
    (price lock preserved).
    """

    id: str
    product_id: str
    quantity: Quantity
    unit_price: Money  # locked at order-creation time
    order_id: str | None = None

    @staticmethod
    def snapshot(product: Product, quantity: Quantity) -> OrderItem:
        return OrderItem(
            id=str(uuid.uuid4()),
            product_id=product.id,
            quantity=quantity,
            unit_price=product.price,
        )

    @property
    def currency(self) -> str:
        return self.unit_price.currency

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass
class Order:
    """Aggregate root for purchase orders.

    Use the ``Order.create()`` factory for new orders; it enforces all
    creation invariants.  The ``__init__`` is intentionally simple so the
    repository can reconstitute persisted orders without re-validating.
    """

    id: str
    buyer_id: str
    total_amount: Money
    items: list[OrderItem] = field(default_factory=list)
    status: OrderStatus = OrderStatus.PENDING
    shipping_address: str | None = None
    zip_code: str | None = None
    payment_id: str | None = None
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        buyer_id: str,
        items: list[OrderItem],
        shipping_address: str | None = None,
        zip_code: str | None = None,
        notes: str | None = None,
    ) -> Order:
        """Create a new pending order, enforcing all invariants.

        The order currency is taken from the first item and every other
        item must match it.  The total is computed here, once.
        """
        if not buyer_id:
            raise InvalidArgumentError("Buyer ID is required")

        if not items:
            raise InvalidArgumentError("Order must contain at least one item")

        currency = items[0].currency
        total = Money.zero(currency)
        for item in items:
            if item.currency != currency:
                raise UnprocessableError(
                    f"Currency mismatch: order is in {currency} but product "
                    f"{item.product_id} is priced in {item.currency}"
                )
            total = total + item.line_total

        order = Order(
            id=str(uuid.uuid4()),
            buyer_id=buyer_id,
            total_amount=total,
            items=list(items),
            shipping_address=shipping_address,
            zip_code=zip_code,
            notes=notes,
        )
        for item in order.items:
            item.order_id = order.id
        return order

    # --- State transitions ----------------------------------------------------

    def cancel(self) -> None:
        """Transition PENDING|PAID|PROCESSING -> CANCELLED.

        Stock restitution must be coordinated by the application handler
        in the same unit of work.
        """
        if self.status not in CANCELLABLE_STATUSES:
            raise InvalidStateError(
                f"Cannot cancel an order in status {self.status.value}"
            )
        self.status = OrderStatus.CANCELLED

    def apply_patch(self, patch: Mapping[str, object]) -> None:
        """Merge *patch* onto the order.

        Validates every field before touching any of them.  Does not
        check the lifecycle graph: callers that reach this are trusted to
        override it.
        """
        unknown = sorted(set(patch) - UPDATABLE_FIELDS)
        if unknown:
            raise InvalidArgumentError(
                f"Cannot update field(s): {', '.join(unknown)}"
            )

        changes: dict[str, object] = {}
        for name, value in patch.items():
            if name == "status":
                changes[name] = OrderStatus.parse(value)
            elif value is None or isinstance(value, str):
                changes[name] = value
            else:
                raise InvalidArgumentError(f"Field '{name}' must be a string")

        for name, value in changes.items():
            setattr(self, name, value)

    # --- Computed properties --------------------------------------------------

    @property
    def currency(self) -> str:
        return self.total_amount.currency

    def quantities_by_product(self) -> dict[str, int]:
        """Total quantity per product across all items."""
        result: dict[str, int] = {}
        for item in self.items:
            result[item.product_id] = result.get(item.product_id, 0) + item.quantity.value
        return result
