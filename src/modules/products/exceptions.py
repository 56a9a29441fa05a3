"""Product domain exceptions.

Raised by the Service Layer when business rules are violated.
The API exception handler translates them into HTTP responses
through their ``shared.domain.exceptions`` base classes.
"""

from __future__ import annotations

from shared.domain.exceptions import AlreadyExists, NotFound


class ProductAlreadyExists(AlreadyExists):
    """A non-deleted product with the same SKU already exists."""


class ProductNotFound(NotFound):
    """The requested product does not exist or has been soft-deleted."""
