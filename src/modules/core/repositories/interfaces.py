"""Generic repository interface (Dependency Inversion Principle).

Provides ``IRepository[T]``, the base abstract class that the
module-specific repository interfaces extend.  Service-layer code
depends on this abstraction, never on Django ORM directly.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, TypeVar
from uuid import UUID

T = TypeVar("T")


class IRepository(ABC, Generic[T]):
    """Base generic repository contract.

    Type parameter ``T`` represents the aggregate managed by the
    repository (e.g. ``Product``, ``Inventory``).
    """

    @abstractmethod
    def add(self, entity: T) -> UUID:
        """Insert a new entity and return its id."""

    @abstractmethod
    def update(self, entity: T) -> None:
        """Persist changes made to an existing entity."""
