"""SQLAlchemy-backed implementation of OrderRepository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from orderhub.domain.exceptions import EntityNotFoundError
from orderhub.domain.model.order import Order, OrderItem, OrderStatus
from orderhub.domain.model.value_objects import Money, Quantity
from orderhub.domain.repository.order_repository import OrderRepository
from orderhub.infrastructure.persistence.models import (
    OrderItemRecord,
    OrderRecord,
    ProductRecord,
)


class SqlAlchemyOrderRepository(OrderRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- OrderRepository interface --------------------------------------------

    def add(self, order: Order) -> None:
        record = self._to_record(order)
        self._session.add(record)
        self._session.flush()
        order.created_at = record.created_at
        order.updated_at = record.updated_at

    def get_by_id(self, order_id: str) -> Order | None:
        record = self._session.get(OrderRecord, order_id)
        if record is None:
            return None
        return self._to_domain(record)

    def save(self, order: Order) -> None:
        record = self._session.get(OrderRecord, order.id)
        if record is None:
            raise EntityNotFoundError(f"Order {order.id} not found")

        record.status = order.status.value
        record.shipping_address = order.shipping_address
        record.zip_code = order.zip_code
        record.payment_id = order.payment_id
        record.notes = order.notes
        self._session.flush()
        order.updated_at = record.updated_at

    def list_all(self) -> list[Order]:
        return self._list(select(OrderRecord))

    def list_by_buyer(self, buyer_id: str) -> list[Order]:
        return self._list(select(OrderRecord).where(OrderRecord.buyer_id == buyer_id))

    def list_by_ids(self, order_ids: list[str]) -> list[Order]:
        if not order_ids:
            return []
        return self._list(select(OrderRecord).where(OrderRecord.id.in_(order_ids)))

    def find_order_ids_by_seller(self, seller_id: str) -> list[str]:
        stmt = (
            select(OrderItemRecord.order_id)
            .join(ProductRecord, ProductRecord.id == OrderItemRecord.product_id)
            .where(ProductRecord.seller_id == seller_id)
            .distinct()
        )
        return list(self._session.scalars(stmt))

    def get_items(self, order_id: str, seller_id: str | None = None) -> list[OrderItem]:
        stmt = select(OrderItemRecord).where(OrderItemRecord.order_id == order_id)
        if seller_id is not None:
            stmt = stmt.join(
                ProductRecord, ProductRecord.id == OrderItemRecord.product_id
            ).where(ProductRecord.seller_id == seller_id)
        stmt = stmt.order_by(OrderItemRecord.position)
        return [self._item_to_domain(r) for r in self._session.scalars(stmt)]

    # --- Query helpers --------------------------------------------------------

    def _list(self, stmt) -> list[Order]:
        stmt = stmt.options(selectinload(OrderRecord.items)).order_by(
            OrderRecord.created_at.desc()
        )
        return [self._to_domain(r) for r in self._session.scalars(stmt)]

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_record(order: Order) -> OrderRecord:
        return OrderRecord(
            id=order.id,
            buyer_id=order.buyer_id,
            status=order.status.value,
            total_amount=order.total_amount.amount,
            currency=order.currency,
            shipping_address=order.shipping_address,
            zip_code=order.zip_code,
            payment_id=order.payment_id,
            notes=order.notes,
            items=[
                OrderItemRecord(
                    id=item.id,
                    product_id=item.product_id,
                    position=position,
                    quantity=item.quantity.value,
                    price=item.unit_price.amount,
                    currency=item.currency,
                )
                for position, item in enumerate(order.items)
            ],
        )

    @classmethod
    def _to_domain(cls, record: OrderRecord) -> Order:
        return Order(
            id=record.id,
            buyer_id=record.buyer_id,
            total_amount=Money(record.total_amount, record.currency),
            items=[cls._item_to_domain(r) for r in record.items],
            status=OrderStatus(record.status),
            shipping_address=record.shipping_address,
            zip_code=record.zip_code,
            payment_id=record.payment_id,
            notes=record.notes,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )

    @staticmethod
    def _item_to_domain(record: OrderItemRecord) -> OrderItem:
        return OrderItem(
            id=record.id,
            order_id=record.order_id,
            product_id=record.product_id,
            quantity=Quantity(record.quantity),
            unit_price=Money(record.price, record.currency),
        )
