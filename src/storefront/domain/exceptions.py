"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.

The commit pipeline never raises its own errors; it returns them inside a
``CommitResult`` so the caller can tell a clean failure from a partial one.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class StoreError(DomainException):
    """A write to the remote data store was not acknowledged."""


class StorageError(DomainException):
    """The session key-value storage is unavailable."""


# ---------------------------------------------------------------------------
# Order commit outcomes
# ---------------------------------------------------------------------------


class CommitError(DomainException):
    """Base class for a failed order commit.

    ``order_id`` is set when an Order record was already written before the
    failing step, i.e. the failure left an orphaned order behind.
    """

    partial = False

    def __init__(self, message: str, order_id: int | None = None) -> None:
        super().__init__(message)
        self.order_id = order_id


class OrderCreationFailed(CommitError):
    """The Order insert failed; nothing was written."""


class LineInsertionFailed(CommitError):
    """The Order exists but its lines could not be written."""

    partial = True


class PaymentCreationFailed(CommitError):
    """The Order and its lines exist but no Payment was written."""

    partial = True


class ShipmentCreationFailed(CommitError):
    """Order, lines and Payment exist but no Shipment was written."""

    partial = True


class CommitValidationError(CommitError, ValidationError):
    """The commit was rejected before any write (empty cart, no address...)."""
