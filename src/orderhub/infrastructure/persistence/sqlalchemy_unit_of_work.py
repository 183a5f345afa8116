"""SQLAlchemy implementation of UnitOfWork: one Session per ``with`` block."""

from __future__ import annotations

from sqlalchemy.orm import Session, sessionmaker

from orderhub.domain.repository.unit_of_work import UnitOfWork
from orderhub.infrastructure.persistence.sqlalchemy_order_repository import (
    SqlAlchemyOrderRepository,
)
from orderhub.infrastructure.persistence.sqlalchemy_product_directory import (
    SqlAlchemyProductDirectory,
)


class SqlAlchemyUnitOfWork(UnitOfWork):

    orders: SqlAlchemyOrderRepository
    products: SqlAlchemyProductDirectory

    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory
        self._session: Session | None = None

    def __enter__(self) -> SqlAlchemyUnitOfWork:
        self._session = self._session_factory()
        self.orders = SqlAlchemyOrderRepository(self._session)
        self.products = SqlAlchemyProductDirectory(self._session)
        super().__enter__()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            super().__exit__(exc_type, exc, tb)
        finally:
            self._session.close()
            self._session = None

    def commit(self) -> None:
        self._session.commit()

    def rollback(self) -> None:
        self._session.rollback()
