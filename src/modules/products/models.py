"""Product aggregate with stock, price and lifecycle rules.

Business rules implemented:
- SKU is unique among non-deleted products (partial unique index).
- Price must be greater than zero.
- Stock quantity cannot be negative.
- Average rating stays within [0, 5].
- A soft-deleted product is never active.

The aggregate is only changed through its named operations
(``reduce_stock``, ``update_price``, ``delete`` ...).  Those operations
validate first and mutate second, so a rejected call leaves the instance
untouched.  They never hit the database: the repository persists.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from django.db import models

from modules.core.models import SoftDeleteModel
from modules.products import constants
from shared.domain.exceptions import (
    InsufficientStock,
    InvalidArgument,
    InvalidOperation,
)
from shared.domain.money import Money, Number, to_decimal

_RATING_PLACES = Decimal("0.01")


def normalize_sku(sku: str) -> str:
    return sku.strip().upper()


def _require_text(value: Optional[str], field: str, max_length: int) -> str:
    if value is None or not str(value).strip():
        raise InvalidArgument(f"Product {field} is required.")
    value = str(value).strip()
    if len(value) > max_length:
        raise InvalidArgument(
            f"Product {field} must be at most {max_length} characters."
        )
    return value


def _optional_text(value: Optional[str], field: str, max_length: int) -> Optional[str]:
    if value is None or not str(value).strip():
        return None
    value = str(value).strip()
    if len(value) > max_length:
        raise InvalidArgument(
            f"Product {field} must be at most {max_length} characters."
        )
    return value


def _require_positive_price(price: Optional[Money]) -> Money:
    if price is None:
        raise InvalidArgument("Price is required.")
    if not isinstance(price, Money):
        raise InvalidArgument("Price must be a Money value.")
    if price.amount <= 0:
        raise InvalidArgument("Price must be greater than zero.")
    return price


def _require_positive_quantity(quantity: int) -> None:
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise InvalidArgument("Quantity must be an integer.")
    if quantity <= 0:
        raise InvalidArgument("Quantity must be greater than zero.")


class Product(SoftDeleteModel):
    """Product aggregate root.

    ``price`` / ``currency`` hold the list price; ``money`` exposes them as
    a ``Money`` value.  ``discount_price`` is derived by ``apply_discount``.
    """

    name = models.CharField(max_length=constants.NAME_MAX_LENGTH)
    sku = models.CharField(max_length=constants.SKU_MAX_LENGTH)
    description = models.TextField(
        max_length=constants.DESCRIPTION_MAX_LENGTH, blank=True, default=""
    )
    price = models.DecimalField(max_digits=18, decimal_places=2)
    currency = models.CharField(max_length=3, default="ETB")
    stock_quantity = models.PositiveIntegerField(default=0)
    category = models.CharField(  # noqa: DJ01
        max_length=constants.CATEGORY_MAX_LENGTH, null=True, blank=True
    )
    brand = models.CharField(  # noqa: DJ01
        max_length=constants.BRAND_MAX_LENGTH, null=True, blank=True
    )
    discount_price = models.DecimalField(
        max_digits=18, decimal_places=2, null=True, blank=True
    )
    average_rating = models.DecimalField(
        max_digits=3, decimal_places=2, default=Decimal("0.00")
    )
    review_count = models.PositiveIntegerField(default=0)
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = "products"
        ordering = ["name"]
        indexes = [
            models.Index(fields=["category"], name="products_category_idx"),
            models.Index(fields=["brand"], name="products_brand_idx"),
            models.Index(fields=["is_active"], name="products_is_active_idx"),
            models.Index(fields=["created_at"], name="products_created_idx"),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["sku"],
                condition=models.Q(is_deleted=False),
                name="products_sku_unique_alive",
            ),
            models.CheckConstraint(
                condition=models.Q(price__gt=0),
                name="products_price_positive",
            ),
            models.CheckConstraint(
                condition=models.Q(average_rating__gte=0)
                & models.Q(average_rating__lte=5),
                name="products_rating_range",
            ),
            models.CheckConstraint(
                condition=models.Q(is_deleted=False) | models.Q(is_active=False),
                name="products_deleted_inactive",
            ),
        ]

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def create(
        cls,
        name: str,
        sku: str,
        description: Optional[str],
        price: Money,
        category: Optional[str] = None,
        brand: Optional[str] = None,
        initial_stock: int = 0,
        created_by: Optional[str] = None,
    ) -> Product:
        """Build a new, unsaved product.

        Raises:
            InvalidArgument: blank/too long name or SKU, negative initial
                stock, or a missing / non-positive price.
        """
        name = _require_text(name, "name", constants.NAME_MAX_LENGTH)
        sku = normalize_sku(_require_text(sku, "SKU", constants.SKU_MAX_LENGTH))
        if isinstance(initial_stock, bool) or not isinstance(initial_stock, int):
            raise InvalidArgument("Initial stock must be an integer.")
        if initial_stock < 0:
            raise InvalidArgument("Initial stock cannot be negative.")
        price = _require_positive_price(price)
        description = (description or "").strip()
        if len(description) > constants.DESCRIPTION_MAX_LENGTH:
            raise InvalidArgument(
                f"Product description must be at most "
                f"{constants.DESCRIPTION_MAX_LENGTH} characters."
            )

        return cls(
            name=name,
            sku=sku,
            description=description,
            price=price.amount,
            currency=price.currency,
            category=_optional_text(category, "category", constants.CATEGORY_MAX_LENGTH),
            brand=_optional_text(brand, "brand", constants.BRAND_MAX_LENGTH),
            stock_quantity=initial_stock,
            created_by=created_by,
        )

    # ------------------------------------------------------------------
    # Stock
    # ------------------------------------------------------------------

    @property
    def is_in_stock(self) -> bool:
        return self.stock_quantity > 0

    @property
    def is_out_of_stock(self) -> bool:
        return self.stock_quantity <= 0

    def has_sufficient_stock(self, quantity: int) -> bool:
        return self.stock_quantity >= quantity

    def reduce_stock(self, quantity: int) -> None:
        """Take *quantity* units out of stock.

        Raises:
            InvalidArgument: ``quantity <= 0``.
            InsufficientStock: fewer than *quantity* units on hand.
        """
        _require_positive_quantity(quantity)
        if not self.has_sufficient_stock(quantity):
            raise InsufficientStock(quantity, self.stock_quantity)
        self.stock_quantity -= quantity
        self.touch()

    def increase_stock(self, quantity: int) -> None:
        _require_positive_quantity(quantity)
        self.stock_quantity += quantity
        self.touch()

    # ------------------------------------------------------------------
    # Pricing
    # ------------------------------------------------------------------

    @property
    def money(self) -> Money:
        return Money(self.price, self.currency)

    def update_price(self, new_price: Money) -> None:
        new_price = _require_positive_price(new_price)
        self.price = new_price.amount
        self.currency = new_price.currency
        self.touch()

    def apply_discount(self, percentage: Number) -> None:
        """Set ``discount_price`` to ``price * (1 - percentage / 100)``."""
        percentage = to_decimal(percentage)
        if percentage < 0 or percentage > 100:
            raise InvalidArgument("Discount percentage must be between 0 and 100.")
        self.discount_price = self.money.apply_percentage(100 - percentage).amount
        self.touch()

    def remove_discount(self) -> None:
        self.discount_price = None
        self.touch()

    def get_current_price(self) -> Decimal:
        if self.discount_price is not None:
            return self.discount_price
        return self.price

    # ------------------------------------------------------------------
    # Reviews
    # ------------------------------------------------------------------

    def update_average_rating(self, new_rating: Number) -> None:
        """Fold *new_rating* into the running mean and bump ``review_count``.

        The mean is incremental: it is exact only if every earlier rating
        went through this method.
        """
        rating = to_decimal(new_rating)
        if rating < constants.MIN_RATING or rating > constants.MAX_RATING:
            raise InvalidArgument(
                f"Rating must be between {constants.MIN_RATING} "
                f"and {constants.MAX_RATING}."
            )
        current = to_decimal(self.average_rating)
        total = current * self.review_count + rating
        self.average_rating = (total / (self.review_count + 1)).quantize(
            _RATING_PLACES, rounding=ROUND_HALF_UP
        )
        self.review_count += 1
        self.touch()

    # ------------------------------------------------------------------
    # Details
    # ------------------------------------------------------------------

    def update_details(
        self,
        name: Optional[str] = None,
        description: Optional[str] = None,
        category: Optional[str] = None,
        brand: Optional[str] = None,
    ) -> None:
        """Change descriptive fields; ``None`` leaves a field unchanged."""
        changes = {}
        if name is not None:
            changes["name"] = _require_text(name, "name", constants.NAME_MAX_LENGTH)
        if description is not None:
            description = description.strip()
            if len(description) > constants.DESCRIPTION_MAX_LENGTH:
                raise InvalidArgument(
                    f"Product description must be at most "
                    f"{constants.DESCRIPTION_MAX_LENGTH} characters."
                )
            changes["description"] = description
        if category is not None:
            changes["category"] = _optional_text(
                category, "category", constants.CATEGORY_MAX_LENGTH
            )
        if brand is not None:
            changes["brand"] = _optional_text(
                brand, "brand", constants.BRAND_MAX_LENGTH
            )
        if not changes:
            return
        for field, value in changes.items():
            setattr(self, field, value)
        self.touch()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def delete(self, deleted_by: Optional[str] = None, using=None, keep_parents=False) -> None:
        """Soft-delete: the product is hidden and deactivated."""
        super().delete(deleted_by)
        self.is_active = False

    def restore(self) -> None:
        super().restore()
        self.is_active = True

    def activate(self) -> None:
        """Raises ``InvalidOperation`` for a soft-deleted product (use ``restore``)."""
        if self.is_deleted:
            raise InvalidOperation("Cannot activate a deleted product; restore it first.")
        self.is_active = True
        self.touch()

    def deactivate(self) -> None:
        self.is_active = False
        self.touch()

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self, *args, **kwargs) -> None:
        if self.sku:
            self.sku = normalize_sku(self.sku)
        super().save(*args, **kwargs)

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        return f"{self.sku} - {self.name}"
