"""SQLAlchemy-backed implementation of ProductDirectory.

Stock writes are conditional updates so that two buyers racing for the
last units cannot both succeed: the loser's ``UPDATE`` matches no row.
"""

from __future__ import annotations

import logging

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from orderhub.domain.exceptions import (
    EntityNotFoundError,
    StockConflictError,
    UnprocessableError,
)
from orderhub.domain.model.product import Product, StockAdjustment
from orderhub.domain.model.value_objects import Money
from orderhub.domain.repository.product_directory import ProductDirectory
from orderhub.infrastructure.persistence.models import (
    ProductRecord,
    StockAdjustmentRecord,
)

logger = logging.getLogger(__name__)


class SqlAlchemyProductDirectory(ProductDirectory):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- ProductDirectory interface -------------------------------------------

    def find_product(self, product_id: str) -> Product | None:
        record = self._session.get(ProductRecord, product_id)
        if record is None:
            return None
        return self._to_domain(record)

    def set_stock(
        self,
        product_id: str,
        new_quantity: int,
        actor_id: str,
        expected_quantity: int | None = None,
    ) -> Product:
        if new_quantity < 0:
            raise UnprocessableError(
                f"Insufficient stock for product {product_id} "
                f"(stock cannot become {new_quantity})"
            )

        current = self._session.get(ProductRecord, product_id, populate_existing=True)
        if current is None:
            raise EntityNotFoundError(f"Product {product_id} not found")
        previous_quantity = current.stock_quantity

        stmt = (
            update(ProductRecord)
            .where(ProductRecord.id == product_id)
            .values(stock_quantity=new_quantity)
        )
        if expected_quantity is not None:
            stmt = stmt.where(ProductRecord.stock_quantity == expected_quantity)

        result = self._session.execute(
            stmt, execution_options={"synchronize_session": False}
        )
        if result.rowcount == 0:
            raise StockConflictError(
                f"Stock of product {product_id} changed concurrently "
                f"(expected {expected_quantity}, found {previous_quantity})"
            )

        self._record_adjustment(product_id, previous_quantity, new_quantity, actor_id)
        record = self._session.get(ProductRecord, product_id, populate_existing=True)
        return self._to_domain(record)

    def adjust_stock(self, product_id: str, delta: int, actor_id: str) -> Product:
        stmt = (
            update(ProductRecord)
            .where(ProductRecord.id == product_id)
            .values(stock_quantity=ProductRecord.stock_quantity + delta)
        )
        if delta < 0:
            stmt = stmt.where(ProductRecord.stock_quantity >= -delta)

        result = self._session.execute(
            stmt, execution_options={"synchronize_session": False}
        )
        if result.rowcount == 0:
            if self._session.get(ProductRecord, product_id) is None:
                raise EntityNotFoundError(f"Product {product_id} not found")
            raise UnprocessableError(
                f"Insufficient stock for product {product_id} (cannot remove {-delta})"
            )

        # the row is write-locked by our UPDATE, so this read sees our own result
        record = self._session.get(ProductRecord, product_id, populate_existing=True)
        new_quantity = record.stock_quantity
        self._record_adjustment(product_id, new_quantity - delta, new_quantity, actor_id)
        return self._to_domain(record)

    def add(self, product: Product) -> None:
        self._session.add(self._to_record(product))
        self._session.flush()

    def list_all(self) -> list[Product]:
        stmt = select(ProductRecord).order_by(ProductRecord.title, ProductRecord.id)
        return [self._to_domain(r) for r in self._session.scalars(stmt)]

    def list_stock_adjustments(self, product_id: str) -> list[StockAdjustment]:
        """Return the audit trail of a product, oldest first."""
        stmt = (
            select(StockAdjustmentRecord)
            .where(StockAdjustmentRecord.product_id == product_id)
            .order_by(StockAdjustmentRecord.id)
        )
        return [self._adjustment_to_domain(r) for r in self._session.scalars(stmt)]

    # --- Audit ----------------------------------------------------------------

    def _record_adjustment(
        self,
        product_id: str,
        previous_quantity: int,
        new_quantity: int,
        actor_id: str,
    ) -> None:
        self._session.add(
            StockAdjustmentRecord(
                product_id=product_id,
                previous_quantity=previous_quantity,
                new_quantity=new_quantity,
                actor_id=actor_id,
            )
        )
        self._session.flush()
        logger.debug(
            "Stock of %s set %d -> %d by %s",
            product_id,
            previous_quantity,
            new_quantity,
            actor_id,
        )

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _adjustment_to_domain(record: StockAdjustmentRecord) -> StockAdjustment:
        return StockAdjustment(
            product_id=record.product_id,
            previous_quantity=record.previous_quantity,
            new_quantity=record.new_quantity,
            actor_id=record.actor_id,
            created_at=record.created_at,
        )

    @staticmethod
    def _to_record(product: Product) -> ProductRecord:
        return ProductRecord(
            id=product.id,
            title=product.title,
            price=product.price.amount,
            currency=product.price.currency,
            stock_quantity=product.stock_quantity,
            active=product.active,
            seller_id=product.seller_id,
        )

    @staticmethod
    def _to_domain(record: ProductRecord) -> Product:
        return Product(
            id=record.id,
            title=record.title,
            price=Money(record.price, record.currency),
            stock_quantity=record.stock_quantity,
            seller_id=record.seller_id,
            active=record.active,
        )
