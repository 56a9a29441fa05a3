"""Inventory repository interface."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Optional
from uuid import UUID

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.inventory.models import Inventory


class IInventoryRepository(IRepository["Inventory"]):
    """Repository contract for inventory records, keyed by product."""

    @abstractmethod
    def get_by_product_id(self, product_id: UUID | str) -> Optional[Inventory]:
        """Retrieve the inventory record of a product, or ``None``."""
