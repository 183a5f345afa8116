"""Abstract product directory.

The directory owns price, currency, the active flag and the stock
quantity of every product.  The order engine only reads products and
writes stock through this interface.  Concrete implementations live in
the infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from orderhub.domain.model.product import Product


class ProductDirectory(ABC):

    @abstractmethod
    def find_product(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def set_stock(
        self,
        product_id: str,
        new_quantity: int,
        actor_id: str,
        expected_quantity: int | None = None,
    ) -> Product:
        """Set the stock of a product and return the updated product.

        When *expected_quantity* is given the write only happens if the
        stored quantity still equals it; otherwise ``StockConflictError``
        is raised.  *actor_id* is recorded for audit only.

        Raises EntityNotFoundError if the product does not exist and
        UnprocessableError if *new_quantity* is negative.
        """

    @abstractmethod
    def adjust_stock(self, product_id: str, delta: int, actor_id: str) -> Product:
        """Add *delta* (which may be negative) to the stored stock in one write.

        The change is relative to whatever is stored at write time, so
        concurrent writers never conflict.  Raises EntityNotFoundError if
        the product does not exist and UnprocessableError if the stock
        would drop below zero.
        """

    @abstractmethod
    def add(self, product: Product) -> None:
        """Register a new product."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the directory."""
