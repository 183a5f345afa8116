"""Integration tests for the seller-scoped order listing."""

import pytest

from orderhub.application.create_order import CreateOrderHandler
from orderhub.application.dto import OrderItemSpec
from orderhub.application.list_seller_orders import ListSellerOrdersHandler
from orderhub.domain.exceptions import ForbiddenError
from orderhub.domain.model.principal import Principal, Role
from tests.fakes import FakeUnitOfWork, make_product

SELLER_A = Principal("seller-a")
SELLER_B = Principal("seller-b")
ADMIN = Principal("root", Role.ADMIN)


def _setup() -> FakeUnitOfWork:
    return FakeUnitOfWork(
        [
            make_product("a1", price="10.00", stock=50, seller_id="seller-a"),
            make_product("a2", price="4.00", stock=50, seller_id="seller-a"),
            make_product("b1", price="6.00", stock=50, seller_id="seller-b"),
        ]
    )


def _place(uow: FakeUnitOfWork, *specs: tuple[str, int], buyer: str = "alice") -> str:
    items = [OrderItemSpec(pid, qty) for pid, qty in specs]
    return CreateOrderHandler(uow).handle(buyer, items).id


class TestSellerView:

    def test_mixed_order_shows_only_sellers_items(self):
        uow = _setup()
        order_id = _place(uow, ("a1", 1), ("b1", 2), ("a2", 3))

        orders = ListSellerOrdersHandler(uow).handle(SELLER_A)

        assert [o.id for o in orders] == [order_id]
        assert sorted(i.product_id for i in orders[0].items) == ["a1", "a2"]

    def test_total_is_not_recomputed_per_seller(self):
        uow = _setup()
        _place(uow, ("a1", 1), ("b1", 2))

        order = ListSellerOrdersHandler(uow).handle(SELLER_B)[0]
        assert [i.product_id for i in order.items] == ["b1"]
        assert order.total_amount == "22.00"

    def test_same_order_seen_by_each_seller(self):
        uow = _setup()
        order_id = _place(uow, ("a1", 1), ("b1", 1))

        a_view = ListSellerOrdersHandler(uow).handle(SELLER_A)
        b_view = ListSellerOrdersHandler(uow).handle(SELLER_B)

        assert a_view[0].id == b_view[0].id == order_id
        assert {i.id for i in a_view[0].items}.isdisjoint({i.id for i in b_view[0].items})

    def test_order_listed_once_despite_many_items(self):
        uow = _setup()
        _place(uow, ("a1", 1), ("a2", 1), ("a1", 2))
        assert len(ListSellerOrdersHandler(uow).handle(SELLER_A)) == 1

    def test_newest_first(self):
        uow = _setup()
        first = _place(uow, ("a1", 1))
        _place(uow, ("b1", 1))
        third = _place(uow, ("a2", 1), buyer="bob")

        orders = ListSellerOrdersHandler(uow).handle(SELLER_A)
        assert [o.id for o in orders] == [third, first]

    def test_seller_without_sales(self):
        uow = _setup()
        _place(uow, ("a1", 1))
        assert ListSellerOrdersHandler(uow).handle(Principal("seller-c")) == []

    def test_storage_not_altered_by_projection(self):
        uow = _setup()
        order_id = _place(uow, ("a1", 1), ("b1", 1))
        ListSellerOrdersHandler(uow).handle(SELLER_A)
        assert len(uow.orders.get_by_id(order_id).items) == 2


class TestSellerViewAccess:

    def test_admin_may_view_any_seller(self):
        uow = _setup()
        _place(uow, ("b1", 1))
        orders = ListSellerOrdersHandler(uow).handle(ADMIN, seller_id="seller-b")
        assert len(orders) == 1

    def test_other_seller_forbidden(self):
        with pytest.raises(ForbiddenError):
            ListSellerOrdersHandler(_setup()).handle(SELLER_B, seller_id="seller-a")
