"""Product DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer and the Service layer.
DTOs are immutable (``frozen=True``) and only coerce types: business
rules (blank SKU, negative stock, currency set ...) are checked by the
service and the aggregate, which raise the domain error taxonomy.

- ``CreateProductDTO``: input for product creation.
- ``UpdateProductDTO``: input for partial detail updates.
- ``UpdatePriceDTO`` / ``UpdateStockDTO`` / ``ApplyDiscountDTO`` /
  ``RateProductDTO``: inputs for the single-purpose commands.
- ``StockStatus``: output of the stock check query.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict

# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class CreateProductDTO(BaseModel):
    """Immutable DTO for product creation requests."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    name: str
    sku: str
    price: Decimal
    currency: Optional[str] = None
    description: str = ""
    category: Optional[str] = None
    brand: Optional[str] = None
    initial_stock: int = 0


class UpdateProductDTO(BaseModel):
    """Immutable DTO for product detail updates.

    All fields are optional: only supplied fields will be updated.
    Price and stock have their own commands.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    name: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    brand: Optional[str] = None


class UpdatePriceDTO(BaseModel):
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    price: Decimal
    currency: str


class UpdateStockDTO(BaseModel):
    """Signed stock delta: positive adds stock, negative removes it."""

    model_config = ConfigDict(frozen=True)

    quantity: int


class ApplyDiscountDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    percentage: Decimal


class RateProductDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    rating: Decimal


# ---------------------------------------------------------------------------
# Output DTO
# ---------------------------------------------------------------------------


class StockStatus(BaseModel):
    """Availability of a requested quantity for one product."""

    model_config = ConfigDict(frozen=True)

    product_id: UUID
    requested_quantity: int
    available_quantity: int
    is_available: bool
    is_low_stock: bool
