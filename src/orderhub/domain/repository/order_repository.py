"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from orderhub.domain.model.order import Order, OrderItem


class OrderRepository(ABC):

    @abstractmethod
    def add(self, order: Order) -> None:
        """Insert a new order header and all of its items.

        Sets ``created_at`` / ``updated_at`` on *order*.
        """

    @abstractmethod
    def get_by_id(self, order_id: str) -> Order | None:
        """Return an order (with all items) by its ID, or None if not found."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist changes to an existing order header.  Items are immutable."""

    @abstractmethod
    def list_all(self) -> list[Order]:
        """Return every order, newest first."""

    @abstractmethod
    def list_by_buyer(self, buyer_id: str) -> list[Order]:
        """Return the orders placed by *buyer_id*, newest first."""

    @abstractmethod
    def list_by_ids(self, order_ids: list[str]) -> list[Order]:
        """Return the orders with the given IDs, newest first."""

    @abstractmethod
    def find_order_ids_by_seller(self, seller_id: str) -> list[str]:
        """Return the distinct IDs of orders holding at least one item of the seller."""

    @abstractmethod
    def get_items(self, order_id: str, seller_id: str | None = None) -> list[OrderItem]:
        """Return the items of an order, optionally only those sold by *seller_id*."""
