"""Inventory record with reservation counters.

Tracks ``available_stock`` (units on hand) and ``reserved_stock`` (units
set aside for pending orders) for one product.  This ledger is separate
from ``Product.stock_quantity``, which stays authoritative for catalog
stock checks; the two are not reconciled.

Invariant: ``reserved_stock <= available_stock``, enforced by every
operation and by a database check constraint.
"""

from __future__ import annotations

from django.db import models
from django.db.models import F

from modules.core.models import AuditModel
from shared.domain.exceptions import InsufficientStock, InvalidArgument

DEFAULT_REORDER_THRESHOLD = 10
DEFAULT_MAX_STOCK = 1000


def _require_positive(quantity: int) -> None:
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise InvalidArgument("Quantity must be an integer.")
    if quantity <= 0:
        raise InvalidArgument("Quantity must be positive.")


class Inventory(AuditModel):
    product = models.OneToOneField(
        "products.Product",
        on_delete=models.PROTECT,
        related_name="inventory",
    )
    available_stock = models.PositiveIntegerField(default=0)
    reserved_stock = models.PositiveIntegerField(default=0)
    reorder_threshold = models.PositiveIntegerField(default=DEFAULT_REORDER_THRESHOLD)
    max_stock = models.PositiveIntegerField(default=DEFAULT_MAX_STOCK)

    class Meta:
        db_table = "inventories"
        constraints = [
            models.CheckConstraint(
                condition=models.Q(reserved_stock__lte=F("available_stock")),
                name="inventories_reserved_within_available",
            ),
        ]

    @classmethod
    def open(
        cls,
        product,
        initial_stock: int = 0,
        reorder_threshold: int = DEFAULT_REORDER_THRESHOLD,
        max_stock: int = DEFAULT_MAX_STOCK,
        created_by: str | None = None,
    ) -> Inventory:
        """Build a new, unsaved inventory record for *product*."""
        if initial_stock < 0:
            raise InvalidArgument("Initial stock cannot be negative.")
        if reorder_threshold < 0:
            raise InvalidArgument("Reorder threshold cannot be negative.")
        if max_stock < 1:
            raise InvalidArgument("Max stock must be at least 1.")
        if initial_stock > max_stock:
            raise InvalidArgument(f"Cannot exceed max stock of {max_stock}.")
        return cls(
            product=product,
            available_stock=initial_stock,
            reorder_threshold=reorder_threshold,
            max_stock=max_stock,
            created_by=created_by,
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_available_for_sale(self) -> int:
        return self.available_stock - self.reserved_stock

    @property
    def needs_reorder(self) -> bool:
        return self.get_available_for_sale() <= self.reorder_threshold

    # ------------------------------------------------------------------
    # Reservation flow
    # ------------------------------------------------------------------

    def reserve(self, quantity: int) -> None:
        """Set *quantity* units aside for a pending order."""
        _require_positive(quantity)
        available = self.get_available_for_sale()
        if available < quantity:
            raise InsufficientStock(quantity, available)
        self.reserved_stock += quantity
        self.touch()

    def release(self, quantity: int) -> None:
        """Return previously reserved units to sale."""
        _require_positive(quantity)
        if quantity > self.reserved_stock:
            raise InvalidArgument("Cannot release more than reserved.")
        self.reserved_stock -= quantity
        self.touch()

    def fulfill(self, quantity: int) -> None:
        """Ship reserved units: both counters drop by *quantity*."""
        _require_positive(quantity)
        if quantity > self.reserved_stock:
            raise InvalidArgument("Cannot fulfill more than reserved.")
        self.available_stock -= quantity
        self.reserved_stock -= quantity
        self.touch()

    def restock(self, quantity: int) -> None:
        _require_positive(quantity)
        if self.available_stock + quantity > self.max_stock:
            raise InvalidArgument(f"Cannot exceed max stock of {self.max_stock}.")
        self.available_stock += quantity
        self.touch()

    def __str__(self) -> str:
        return (
            f"Inventory({self.product_id}): "
            f"{self.available_stock} available, {self.reserved_stock} reserved"
        )
