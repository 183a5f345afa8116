"""Abstract unit of work.

Groups the order store and the product directory behind one atomic
boundary.  Usage::

    with uow:
        ...
        uow.commit()

Leaving the ``with`` block without ``commit()`` (including through an
exception) discards every write made inside it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from orderhub.domain.repository.order_repository import OrderRepository
from orderhub.domain.repository.product_directory import ProductDirectory


class UnitOfWork(ABC):

    orders: OrderRepository
    products: ProductDirectory

    def __enter__(self) -> UnitOfWork:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        # no-op after a successful commit
        self.rollback()

    @abstractmethod
    def commit(self) -> None:
        """Make every write of this unit of work durable."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard every uncommitted write of this unit of work."""
