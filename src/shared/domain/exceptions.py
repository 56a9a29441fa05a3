"""Domain error taxonomy shared by every module.

Raised synchronously at the point where a rule is violated.  The API layer
maps each class to an HTTP status in ``modules.core.exceptions``:

- ``InvalidArgument``   -> 400
- ``NotFound``          -> 404
- ``AlreadyExists``     -> 409
- ``InsufficientStock`` -> 409
- ``InvalidOperation``  -> 409
"""

from __future__ import annotations


class DomainError(Exception):
    """Base class for all business rule violations."""

    code = "domain_error"


class InvalidArgument(DomainError, ValueError):
    """Malformed or out-of-range caller input."""

    code = "invalid_argument"


class NotFound(DomainError):
    """The referenced entity does not exist or has been soft-deleted."""

    code = "not_found"


class AlreadyExists(DomainError):
    """A uniqueness rule was violated."""

    code = "already_exists"


class InvalidOperation(DomainError):
    """The operation is inconsistent with the state of the entities involved."""

    code = "invalid_operation"


class InsufficientStock(DomainError):
    """Not enough stock to satisfy the requested quantity.

    Carries ``requested`` and ``available`` so callers can display them.
    """

    code = "insufficient_stock"

    def __init__(self, requested: int, available: int) -> None:
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient stock. Requested: {requested}, Available: {available}"
        )
