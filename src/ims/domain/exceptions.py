"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
None of them are retried by the core.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """Malformed input: a value that can never be valid."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class InvalidStateError(DomainException):
    """The document status does not allow the requested action."""


class ConstraintViolationError(DomainException):
    """A uniqueness or cross-field business constraint was violated."""


class TransactionAbortedError(DomainException):
    """The underlying store failed; every write of the transaction was discarded."""


class InsufficientStockError(DomainException):
    """Not enough available stock to move the requested quantity.

    Carries the offending product and location so callers can show
    which line failed.
    """

    def __init__(
        self,
        product_id: int,
        location_id: int,
        requested: int,
        available: int,
        label: str | None = None,
    ) -> None:
        self.product_id = product_id
        self.location_id = location_id
        self.requested = requested
        self.available = available
        self.label = label or f"product #{product_id}"
        super().__init__(
            f"Insufficient stock for {self.label} at location #{location_id} "
            f"(need {requested}, have {available} available)"
        )
