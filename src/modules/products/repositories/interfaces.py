"""Product repository interface.

Extends ``IRepository[Product]`` with the catalog look-ups the service
layer needs: SKU uniqueness, paginated category/search listings,
featured and low-stock listings.

Every read excludes soft-deleted products unless stated otherwise.
Pages are 1-indexed.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, List, Optional
from uuid import UUID

from modules.core.repositories.interfaces import IRepository
from modules.products.constants import DELETED_BY_SYSTEM

if TYPE_CHECKING:
    from modules.products.models import Product


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product aggregate."""

    @abstractmethod
    def get_by_id(
        self, id: UUID | str, include_deleted: bool = False
    ) -> Optional[Product]:
        """Retrieve a product by id; deleted rows only with ``include_deleted``."""

    @abstractmethod
    def get_by_sku(self, sku: str) -> Optional[Product]:
        """Retrieve a non-deleted product by SKU."""

    @abstractmethod
    def get_all(self) -> List[Product]:
        """All non-deleted products, active or not."""

    @abstractmethod
    def get_by_category(self, category: str, page: int, page_size: int) -> List[Product]:
        """Active products in *category*, sorted by name."""

    @abstractmethod
    def search(self, term: str, page: int, page_size: int) -> List[Product]:
        """Active products whose name, description or brand contains *term*."""

    @abstractmethod
    def get_featured(self, count: int) -> List[Product]:
        """Top *count* active products by rating, then review count."""

    @abstractmethod
    def delete(self, id: UUID | str, deleted_by: str = DELETED_BY_SYSTEM) -> bool:
        """Soft-delete through ``Product.delete``; ``False`` if not found."""

    @abstractmethod
    def exists_by_id(self, id: UUID | str) -> bool: ...

    @abstractmethod
    def exists_by_sku(self, sku: str) -> bool: ...

    @abstractmethod
    def get_total_count(self) -> int:
        """Number of active, non-deleted products."""

    @abstractmethod
    def get_category_count(self, category: str) -> int:
        """Number of active, non-deleted products in *category*."""

    @abstractmethod
    def get_low_stock_products(self, threshold: int) -> List[Product]:
        """Active products with ``stock_quantity <= threshold``, lowest first."""
