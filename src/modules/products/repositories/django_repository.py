"""Django ORM implementation of the Product repository.

Satisfies ``IProductRepository`` using Django's QuerySet API.
Look-ups follow the Null Object pattern: methods return ``None`` /
``False`` instead of raising, and the Service Layer decides how to
translate a missing entity.

Every read starts from ``_queryset()``, which applies the soft-delete
predicate, so no query can forget it.  Search and category matching are
case-insensitive.
"""

from __future__ import annotations

from typing import List, Optional
from uuid import UUID

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import Q, QuerySet

from modules.products.constants import DELETED_BY_SYSTEM
from modules.products.models import Product, normalize_sku
from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    # ------------------------------------------------------------------
    # Query helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _queryset(include_deleted: bool = False) -> QuerySet:
        if include_deleted:
            return Product.objects.all()
        return Product.objects.alive()

    def _listed(self) -> QuerySet:
        """Products visible in catalog listings (active and not deleted)."""
        return self._queryset().filter(is_active=True)

    @staticmethod
    def _page(queryset: QuerySet, page: int, page_size: int) -> List[Product]:
        offset = (page - 1) * page_size
        return list(queryset[offset : offset + page_size])

    # ------------------------------------------------------------------
    # Single-entity look-ups
    # ------------------------------------------------------------------

    def get_by_id(
        self, id: UUID | str, include_deleted: bool = False
    ) -> Optional[Product]:
        """Retrieve a product by primary key.

        Returns ``None`` for non-existent, soft-deleted or invalid IDs.
        """
        try:
            return self._queryset(include_deleted).filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_by_sku(self, sku: str) -> Optional[Product]:
        return self._queryset().filter(sku=normalize_sku(sku)).first()

    # ------------------------------------------------------------------
    # Listings
    # ------------------------------------------------------------------

    def get_all(self) -> List[Product]:
        return list(self._queryset().order_by("name", "id"))

    def get_by_category(self, category: str, page: int, page_size: int) -> List[Product]:
        queryset = self._listed().filter(category__iexact=category.strip())
        return self._page(queryset.order_by("name", "id"), page, page_size)

    def search(self, term: str, page: int, page_size: int) -> List[Product]:
        term = term.strip()
        queryset = self._listed().filter(
            Q(name__icontains=term)
            | Q(description__icontains=term)
            | Q(brand__icontains=term)
        )
        return self._page(queryset.order_by("name", "id"), page, page_size)

    def get_featured(self, count: int) -> List[Product]:
        queryset = self._listed().order_by("-average_rating", "-review_count", "name")
        return list(queryset[:count])

    def get_low_stock_products(self, threshold: int) -> List[Product]:
        queryset = self._listed().filter(stock_quantity__lte=threshold)
        return list(queryset.order_by("stock_quantity", "name"))

    # ------------------------------------------------------------------
    # Existence / counts
    # ------------------------------------------------------------------

    def exists_by_id(self, id: UUID | str) -> bool:
        try:
            return self._queryset().filter(id=id).exists()
        except (ValueError, ValidationError):
            return False

    def exists_by_sku(self, sku: str) -> bool:
        return self._queryset().filter(sku=normalize_sku(sku)).exists()

    def get_total_count(self) -> int:
        return self._listed().count()

    def get_category_count(self, category: str) -> int:
        return self._listed().filter(category__iexact=category.strip()).count()

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    @transaction.atomic
    def add(self, entity: Product) -> UUID:
        entity.save(force_insert=True)
        logger.info("product.added", product_id=str(entity.id), sku=entity.sku)
        return entity.id

    @transaction.atomic
    def update(self, entity: Product) -> None:
        entity.save()
        logger.info("product.updated", product_id=str(entity.id), sku=entity.sku)

    @transaction.atomic
    def delete(self, id: UUID | str, deleted_by: str = DELETED_BY_SYSTEM) -> bool:
        """Soft-delete a product by ID.

        Returns ``True`` if the product was found and soft-deleted,
        ``False`` if no live product exists with the given ID.
        """
        product = self.get_by_id(id)
        if not product:
            return False
        product.delete(deleted_by)
        product.save()
        logger.info("product.soft_deleted", product_id=str(id), deleted_by=deleted_by)
        return True
