"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
Each subclass maps to one error kind a caller can tell apart.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class InvalidArgumentError(DomainException):
    """The request itself is malformed (empty cart, bad quantity, unknown field)."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class ForbiddenError(DomainException):
    """The principal is not allowed to perform the operation."""

    def __init__(self, message: str, disallowed_fields: list[str] | None = None) -> None:
        super().__init__(message)
        self.disallowed_fields = list(disallowed_fields or [])


class UnprocessableError(DomainException):
    """A business rule was violated (unavailable product, stock, currency)."""


class StockConflictError(UnprocessableError):
    """A conditional stock write found a different quantity than expected."""


class InvalidStateError(DomainException):
    """The order is not in a status that allows the requested transition."""
