"""Domain service: Access Policy.

Pure authorization predicates over a principal and an order.  Holds no
state and performs no I/O; the application handlers call these before
touching anything.
"""

from __future__ import annotations

from collections.abc import Iterable

from orderhub.domain.exceptions import ForbiddenError
from orderhub.domain.model.order import Order
from orderhub.domain.model.principal import Principal

# What a buyer may change on their own order.  Everything else is admin-only.
BUYER_EDITABLE_FIELDS = frozenset({"shipping_address", "zip_code", "notes"})


def can_access_order(principal: Principal, order: Order) -> bool:
    return principal.is_admin or order.buyer_id == principal.user_id


def ensure_can_access_order(
    principal: Principal, order: Order, action: str = "access"
) -> None:
    if not can_access_order(principal, order):
        raise ForbiddenError(f"You are not allowed to {action} order {order.id}")


def disallowed_patch_fields(principal: Principal, fields: Iterable[str]) -> list[str]:
    """Return the sorted patch fields *principal* is not allowed to touch."""
    if principal.is_admin:
        return []
    return sorted(set(fields) - BUYER_EDITABLE_FIELDS)


def ensure_can_patch(principal: Principal, fields: Iterable[str]) -> None:
    disallowed = disallowed_patch_fields(principal, fields)
    if disallowed:
        raise ForbiddenError(
            f"You are not allowed to update the following fields: {', '.join(disallowed)}",
            disallowed_fields=disallowed,
        )


def ensure_can_view_seller_orders(principal: Principal, seller_id: str) -> None:
    if not principal.is_admin and principal.user_id != seller_id:
        raise ForbiddenError(f"You are not allowed to list orders of seller {seller_id}")
