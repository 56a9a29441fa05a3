"""Inventory DTOs (Pydantic v2, immutable)."""

from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, ConfigDict

from modules.inventory.models import DEFAULT_MAX_STOCK, DEFAULT_REORDER_THRESHOLD


class OpenInventoryDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    product_id: UUID
    initial_stock: int = 0
    reorder_threshold: int = DEFAULT_REORDER_THRESHOLD
    max_stock: int = DEFAULT_MAX_STOCK


class StockMovementDTO(BaseModel):
    """Quantity for a reserve / release / fulfill / restock call."""

    model_config = ConfigDict(frozen=True)

    quantity: int
