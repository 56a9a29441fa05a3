"""Django ORM implementation of the Inventory repository."""

from __future__ import annotations

from typing import Optional
from uuid import UUID

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction

from modules.inventory.models import Inventory
from modules.inventory.repositories.interfaces import IInventoryRepository

logger = structlog.get_logger(__name__)


class InventoryDjangoRepository(IInventoryRepository):
    """Concrete Inventory repository backed by Django ORM."""

    def get_by_product_id(self, product_id: UUID | str) -> Optional[Inventory]:
        try:
            return Inventory.objects.filter(product_id=product_id).first()
        except (ValueError, ValidationError):
            return None

    @transaction.atomic
    def add(self, entity: Inventory) -> UUID:
        entity.save(force_insert=True)
        logger.info(
            "inventory.added",
            inventory_id=str(entity.id),
            product_id=str(entity.product_id),
        )
        return entity.id

    @transaction.atomic
    def update(self, entity: Inventory) -> None:
        entity.save()
        logger.info(
            "inventory.updated",
            inventory_id=str(entity.id),
            available_stock=entity.available_stock,
            reserved_stock=entity.reserved_stock,
        )
