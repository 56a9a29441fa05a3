"""Inventory domain exceptions."""

from __future__ import annotations

from shared.domain.exceptions import AlreadyExists, NotFound


class InventoryNotFound(NotFound):
    """No inventory record exists for the product."""


class InventoryAlreadyExists(AlreadyExists):
    """The product already has an inventory record."""
