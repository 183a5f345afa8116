"""Unit tests for the Order aggregate and its business rules."""

import pytest

from orderhub.domain.exceptions import (
    InvalidArgumentError,
    InvalidStateError,
    UnprocessableError,
)
from orderhub.domain.model.order import (
    CANCELLABLE_STATUSES,
    Order,
    OrderItem,
    OrderStatus,
)
from orderhub.domain.model.value_objects import Money, Quantity
from tests.fakes import make_product


def _make_item(product_id: str = "p1", qty: int = 1, price: str = "10.00", currency: str = "USD") -> OrderItem:
    """Helper to build a valid item snapshot."""
    return OrderItem.snapshot(make_product(product_id, price=price, currency=currency), Quantity(qty))


class TestOrderCreation:

    def test_happy_path(self):
        order = Order.create(buyer_id="alice", items=[_make_item(qty=2, price="10.00")])
        assert order.buyer_id == "alice"
        assert order.status == OrderStatus.PENDING
        assert len(order.items) == 1
        assert order.total_amount == Money.of("20.00")
        assert order.currency == "USD"

    def test_generates_identifiers(self):
        order = Order.create("alice", [_make_item()])
        assert order.id
        assert order.items[0].id
        assert order.items[0].order_id == order.id

    def test_two_orders_get_distinct_ids(self):
        a = Order.create("alice", [_make_item()])
        b = Order.create("alice", [_make_item()])
        assert a.id != b.id

    def test_total_is_sum_of_items(self):
        items = [
            _make_item("p1", qty=3, price="15.00"),
            _make_item("p2", qty=5, price="25.00"),
        ]
        order = Order.create("bob", items)
        assert order.total_amount == Money.of("170.00")

    def test_currency_taken_from_first_item(self):
        order = Order.create("bob", [_make_item(currency="BRL")])
        assert order.currency == "BRL"

    def test_optional_fields(self):
        order = Order.create(
            "bob", [_make_item()], shipping_address="Main St 1", zip_code="01001-000", notes="gift"
        )
        assert order.shipping_address == "Main St 1"
        assert order.zip_code == "01001-000"
        assert order.notes == "gift"
        assert order.payment_id is None


class TestOrderCreationValidation:

    def test_no_items_rejected(self):
        with pytest.raises(InvalidArgumentError, match="at least one item"):
            Order.create("alice", [])

    def test_missing_buyer_rejected(self):
        with pytest.raises(InvalidArgumentError, match="Buyer ID"):
            Order.create("", [_make_item()])

    def test_mixed_currencies_rejected(self):
        items = [_make_item("p1", currency="USD"), _make_item("p2", currency="BRL")]
        with pytest.raises(UnprocessableError, match="Currency mismatch"):
            Order.create("alice", items)


class TestOrderItem:

    def test_line_total_calculation(self):
        item = _make_item(qty=3, price="15.00")
        assert item.line_total == Money.of("45.00")

    def test_price_is_snapshot(self):
        """The item holds its own price copy, unaffected by catalog changes."""
        product = make_product("p1", price="15.00")
        item = OrderItem.snapshot(product, Quantity(1))
        product.price = Money.of("99.99")
        assert item.unit_price == Money.of("15.00")


class TestLifecycleGraph:

    @pytest.mark.parametrize(
        "source, target",
        [
            (OrderStatus.PENDING, OrderStatus.PAID),
            (OrderStatus.PENDING, OrderStatus.CANCELLED),
            (OrderStatus.PAID, OrderStatus.REFUNDED),
            (OrderStatus.PROCESSING, OrderStatus.SHIPPED),
            (OrderStatus.SHIPPED, OrderStatus.DELIVERED),
        ],
    )
    def test_allowed_transitions(self, source, target):
        assert source.can_transition_to(target)

    @pytest.mark.parametrize(
        "source, target",
        [
            (OrderStatus.PENDING, OrderStatus.SHIPPED),
            (OrderStatus.SHIPPED, OrderStatus.CANCELLED),
            (OrderStatus.CANCELLED, OrderStatus.PENDING),
            (OrderStatus.DELIVERED, OrderStatus.REFUNDED),
        ],
    )
    def test_forbidden_transitions(self, source, target):
        assert not source.can_transition_to(target)

    def test_parse_accepts_any_case(self):
        assert OrderStatus.parse("PAID") is OrderStatus.PAID

    def test_parse_rejects_unknown(self):
        with pytest.raises(InvalidArgumentError, match="Invalid status"):
            OrderStatus.parse("lost")


class TestOrderCancel:

    @pytest.mark.parametrize("status", sorted(CANCELLABLE_STATUSES, key=lambda s: s.value))
    def test_cancellable_statuses(self, status):
        order = Order.create("alice", [_make_item()])
        order.status = status
        order.cancel()
        assert order.status == OrderStatus.CANCELLED

    @pytest.mark.parametrize(
        "status",
        [OrderStatus.SHIPPED, OrderStatus.DELIVERED, OrderStatus.CANCELLED, OrderStatus.REFUNDED],
    )
    def test_non_cancellable_statuses(self, status):
        order = Order.create("alice", [_make_item()])
        order.status = status
        with pytest.raises(InvalidStateError, match="Cannot cancel"):
            order.cancel()
        assert order.status == status


class TestOrderPatch:

    def test_applies_fields(self):
        order = Order.create("alice", [_make_item()])
        order.apply_patch({"shipping_address": "Elm St 2", "payment_id": "ln_123"})
        assert order.shipping_address == "Elm St 2"
        assert order.payment_id == "ln_123"

    def test_status_accepts_any_target(self):
        order = Order.create("alice", [_make_item()])
        order.apply_patch({"status": "delivered"})
        assert order.status == OrderStatus.DELIVERED

    def test_total_is_not_recomputed(self):
        order = Order.create("alice", [_make_item(qty=2)])
        order.apply_patch({"notes": "leave at door"})
        assert order.total_amount == Money.of("20.00")

    def test_immutable_field_rejected(self):
        order = Order.create("alice", [_make_item()])
        with pytest.raises(InvalidArgumentError, match="total_amount"):
            order.apply_patch({"total_amount": "0"})

    def test_invalid_value_leaves_order_untouched(self):
        order = Order.create("alice", [_make_item()])
        with pytest.raises(InvalidArgumentError):
            order.apply_patch({"notes": "x", "status": "bogus"})
        assert order.notes is None
        assert order.status == OrderStatus.PENDING

    def test_non_string_value_rejected(self):
        order = Order.create("alice", [_make_item()])
        with pytest.raises(InvalidArgumentError, match="must be a string"):
            order.apply_patch({"zip_code": 12345})


class TestQuantitiesByProduct:

    def test_sums_repeated_products(self):
        order = Order.create("alice", [_make_item("p1", qty=2), _make_item("p1", qty=3), _make_item("p2")])
        assert order.quantities_by_product() == {"p1": 5, "p2": 1}
