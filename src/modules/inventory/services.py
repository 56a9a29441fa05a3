"""Inventory service layer (Use Cases).

Loads the inventory record of a product, applies one reservation-flow
operation and persists it.  Product stock (``Product.stock_quantity``)
is never touched here.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Optional
from uuid import UUID

import structlog
from django.db import transaction

from modules.inventory.exceptions import InventoryAlreadyExists, InventoryNotFound
from modules.inventory.models import DEFAULT_MAX_STOCK, DEFAULT_REORDER_THRESHOLD, Inventory
from modules.products.exceptions import ProductNotFound

if TYPE_CHECKING:
    from modules.inventory.repositories.interfaces import IInventoryRepository
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class InventoryService:
    """Application service for the reservation ledger."""

    def __init__(
        self,
        inventory_repository: IInventoryRepository,
        product_repository: IProductRepository,
    ) -> None:
        self._inventory_repo = inventory_repository
        self._product_repo = product_repository

    @transaction.atomic
    def open_inventory(
        self,
        product_id: UUID | str,
        initial_stock: int = 0,
        reorder_threshold: int = DEFAULT_REORDER_THRESHOLD,
        max_stock: int = DEFAULT_MAX_STOCK,
        created_by: Optional[str] = None,
    ) -> Inventory:
        """Create the inventory record of a product.

        Raises:
            ProductNotFound: the product does not exist.
            InventoryAlreadyExists: the product already has a record.
        """
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise ProductNotFound(f"Product with ID {product_id} not found.")
        if self._inventory_repo.get_by_product_id(product.id) is not None:
            raise InventoryAlreadyExists(
                f"Inventory for product {product_id} already exists."
            )

        inventory = Inventory.open(
            product,
            initial_stock=initial_stock,
            reorder_threshold=reorder_threshold,
            max_stock=max_stock,
            created_by=created_by,
        )
        self._inventory_repo.add(inventory)
        logger.info(
            "inventory.opened",
            product_id=str(product.id),
            available_stock=inventory.available_stock,
        )
        return inventory

    def get_inventory(self, product_id: UUID | str) -> Inventory:
        """Raises ``InventoryNotFound`` when the product has no record."""
        inventory = self._inventory_repo.get_by_product_id(product_id)
        if inventory is None:
            raise InventoryNotFound(f"Inventory for product {product_id} not found.")
        return inventory

    def reserve(self, product_id: UUID | str, quantity: int) -> Inventory:
        return self._apply(product_id, quantity, "reserved", Inventory.reserve)

    def release(self, product_id: UUID | str, quantity: int) -> Inventory:
        return self._apply(product_id, quantity, "released", Inventory.release)

    def fulfill(self, product_id: UUID | str, quantity: int) -> Inventory:
        return self._apply(product_id, quantity, "fulfilled", Inventory.fulfill)

    def restock(self, product_id: UUID | str, quantity: int) -> Inventory:
        return self._apply(product_id, quantity, "restocked", Inventory.restock)

    @transaction.atomic
    def _apply(
        self,
        product_id: UUID | str,
        quantity: int,
        event: str,
        operation: Callable[[Inventory, int], None],
    ) -> Inventory:
        inventory = self.get_inventory(product_id)
        operation(inventory, quantity)
        self._inventory_repo.update(inventory)
        logger.info(
            f"inventory.{event}",
            product_id=str(product_id),
            quantity=quantity,
            available_for_sale=inventory.get_available_for_sale(),
        )
        return inventory
