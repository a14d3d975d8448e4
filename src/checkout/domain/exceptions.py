"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
Each class carries a machine-readable ``kind`` and the HTTP status a web
transport would answer with.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""

    kind = "DomainError"
    http_status = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def details(self) -> dict:
        return {}

    def to_dict(self) -> dict:
        return {"kind": self.kind, "message": self.message, **self.details()}


class ValidationError(DomainException):
    """A business rule or invariant was violated."""

    kind = "InvalidRequest"


class UnsupportedCurrencyError(DomainException):
    kind = "UnsupportedCurrency"

    def __init__(self, currency: str) -> None:
        super().__init__("Invalid currency")
        self.currency = currency

    def details(self) -> dict:
        return {"currency": self.currency}


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""

    kind = "NotFound"
    http_status = 404


class ProductNotFoundError(EntityNotFoundError):
    kind = "ProductNotFound"

    def __init__(self, product_id: str) -> None:
        super().__init__(f"Product not found: {product_id}")
        self.product_id = product_id

    def details(self) -> dict:
        return {"productId": self.product_id}


class InsufficientStockError(DomainException):
    """Requested quantity exceeds the stock on hand."""

    kind = "InsufficientStock"

    def __init__(
        self,
        product_id: str,
        product_name: str,
        available: int,
        requested: int,
    ) -> None:
        super().__init__(
            f"Insufficient stock for {product_name}. "
            f"Available: {available}, Requested: {requested}"
        )
        self.product_id = product_id
        self.available = available
        self.requested = requested

    def details(self) -> dict:
        return {
            "productId": self.product_id,
            "available": self.available,
            "requested": self.requested,
        }


class OperationCancelledError(DomainException):
    """The caller abandoned the operation before it committed."""

    kind = "Cancelled"
    http_status = 499


class InternalError(DomainException):
    """Unexpected failure; details are logged, never shown to the caller."""

    kind = "InternalError"
    http_status = 500


class OrderPersistenceError(InternalError):
    """The order could not be written, even after the collision retry."""
