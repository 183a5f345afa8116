"""Unit tests for the access policy predicates."""

import pytest

from orderhub.domain.exceptions import ForbiddenError, InvalidArgumentError
from orderhub.domain.model.order import Order, OrderItem
from orderhub.domain.model.principal import Principal, Role
from orderhub.domain.model.value_objects import Quantity
from orderhub.domain.service.access_policy import (
    can_access_order,
    disallowed_patch_fields,
    ensure_can_access_order,
    ensure_can_patch,
    ensure_can_view_seller_orders,
)
from tests.fakes import make_product

ALICE = Principal("alice")
BOB = Principal("bob")
ADMIN = Principal("root", Role.ADMIN)


def _alice_order() -> Order:
    return Order.create("alice", [OrderItem.snapshot(make_product("p1"), Quantity(1))])


class TestPrincipal:

    def test_of_parses_role(self):
        assert Principal.of("x", "admin").is_admin
        assert not Principal.of("x", "user").is_admin

    def test_unknown_role_rejected(self):
        with pytest.raises(InvalidArgumentError, match="Unknown role"):
            Principal.of("x", "superuser")

    def test_blank_user_rejected(self):
        with pytest.raises(InvalidArgumentError):
            Principal(" ")


class TestOrderAccess:

    def test_owner_can_access(self):
        assert can_access_order(ALICE, _alice_order())

    def test_admin_can_access(self):
        assert can_access_order(ADMIN, _alice_order())

    def test_stranger_cannot_access(self):
        assert not can_access_order(BOB, _alice_order())

    def test_ensure_raises_forbidden(self):
        with pytest.raises(ForbiddenError, match="not allowed to cancel"):
            ensure_can_access_order(BOB, _alice_order(), "cancel")


class TestPatchFields:

    def test_buyer_may_edit_delivery_details(self):
        assert disallowed_patch_fields(ALICE, ["shipping_address", "zip_code", "notes"]) == []

    def test_buyer_may_not_touch_status_or_payment(self):
        assert disallowed_patch_fields(ALICE, ["notes", "status", "payment_id"]) == [
            "payment_id",
            "status",
        ]

    def test_admin_may_touch_anything(self):
        assert disallowed_patch_fields(ADMIN, ["status", "payment_id", "whatever"]) == []

    def test_ensure_lists_disallowed_fields(self):
        with pytest.raises(ForbiddenError, match="status") as exc_info:
            ensure_can_patch(ALICE, ["notes", "status"])
        assert exc_info.value.disallowed_fields == ["status"]


class TestSellerListing:

    def test_seller_sees_own_listing(self):
        ensure_can_view_seller_orders(ALICE, "alice")

    def test_admin_sees_any_listing(self):
        ensure_can_view_seller_orders(ADMIN, "alice")

    def test_other_seller_listing_forbidden(self):
        with pytest.raises(ForbiddenError):
            ensure_can_view_seller_orders(BOB, "alice")
