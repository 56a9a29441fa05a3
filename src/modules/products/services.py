"""Product service layer (Use Cases).

Orchestrates business logic for the Product aggregate, delegating
persistence to the injected ``IProductRepository``.

Every use case validates its input before touching the repository, and
domain rules are enforced by the aggregate itself.  Failures surface as
the ``shared.domain.exceptions`` taxonomy; nothing is retried here.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional
from uuid import UUID

import structlog
from django.conf import settings
from django.db import transaction

from modules.products.constants import DELETED_BY_SYSTEM, MIN_PAGE, MIN_PAGE_SIZE
from modules.products.dtos import StockStatus
from modules.products.exceptions import ProductAlreadyExists, ProductNotFound
from modules.products.models import Product
from shared.domain.exceptions import InvalidArgument
from shared.domain.money import Money, Number

if TYPE_CHECKING:
    from modules.products.dtos import CreateProductDTO, UpdateProductDTO
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductService:
    """Application service for Product use-cases.

    Receives an ``IProductRepository`` via constructor injection (DIP).
    Thresholds and page limits come from Django settings.
    """

    def __init__(self, repository: IProductRepository) -> None:
        self._repo = repository
        self._low_stock_threshold = settings.LOW_STOCK_THRESHOLD
        self._max_page_size = settings.MAX_PAGE_SIZE

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_product(self, dto: CreateProductDTO, created_by: Optional[str] = None) -> Product:
        """Create a new product after enforcing uniqueness rules.

        Raises:
            InvalidArgument: blank name/SKU, negative stock, bad price/currency.
            ProductAlreadyExists: SKU already used by a non-deleted product.
        """
        if not dto.name or not dto.name.strip():
            raise InvalidArgument("Product name is required.")
        if not dto.sku or not dto.sku.strip():
            raise InvalidArgument("SKU is required.")
        if dto.initial_stock < 0:
            raise InvalidArgument("Initial stock cannot be negative.")

        log = logger.bind(sku=dto.sku)

        if self._repo.exists_by_sku(dto.sku):
            log.warning("product.duplicate_sku")
            raise ProductAlreadyExists(f"Product with SKU '{dto.sku}' already exists.")

        product = Product.create(
            name=dto.name,
            sku=dto.sku,
            description=dto.description,
            price=Money(dto.price, dto.currency or settings.DEFAULT_CURRENCY),
            category=dto.category,
            brand=dto.brand,
            initial_stock=dto.initial_stock,
            created_by=created_by,
        )
        self._repo.add(product)
        log.info("product.created", product_id=str(product.id), name=product.name)
        return product

    @transaction.atomic
    def update_product(self, id: UUID | str, dto: UpdateProductDTO) -> Product:
        """Update descriptive fields of an existing product.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        product = self._get_or_raise(id)
        product.update_details(
            name=dto.name,
            description=dto.description,
            category=dto.category,
            brand=dto.brand,
        )
        self._repo.update(product)
        logger.info("product.details_updated", product_id=str(id))
        return product

    @transaction.atomic
    def update_price(self, id: UUID | str, amount: Number, currency: str) -> Product:
        """Replace the list price of a product.

        Raises:
            InvalidArgument: invalid amount or currency.
            ProductNotFound: if the product does not exist.
        """
        new_price = Money(amount, currency)
        product = self._get_or_raise(id)
        product.update_price(new_price)
        self._repo.update(product)
        logger.info("product.price_updated", product_id=str(id), new_price=str(new_price))
        return product

    @transaction.atomic
    def update_stock(self, id: UUID | str, quantity: int) -> bool:
        """Apply a signed stock delta.

        Returns ``False`` when the product does not exist; a negative delta
        larger than the stock on hand raises ``InsufficientStock``.
        """
        product = self._repo.get_by_id(id)
        if product is None:
            return False

        if quantity > 0:
            product.increase_stock(quantity)
        elif quantity < 0:
            product.reduce_stock(abs(quantity))

        self._repo.update(product)
        logger.info(
            "product.stock_updated",
            product_id=str(id),
            delta=quantity,
            stock_quantity=product.stock_quantity,
        )
        return True

    @transaction.atomic
    def apply_discount(self, id: UUID | str, percentage: Number) -> Product:
        product = self._get_or_raise(id)
        product.apply_discount(percentage)
        self._repo.update(product)
        logger.info(
            "product.discount_applied",
            product_id=str(id),
            percentage=str(percentage),
            discount_price=str(product.discount_price),
        )
        return product

    @transaction.atomic
    def remove_discount(self, id: UUID | str) -> Product:
        product = self._get_or_raise(id)
        product.remove_discount()
        self._repo.update(product)
        logger.info("product.discount_removed", product_id=str(id))
        return product

    @transaction.atomic
    def rate_product(self, id: UUID | str, rating: Number) -> Product:
        """Fold a single review rating into the product's average."""
        product = self._get_or_raise(id)
        product.update_average_rating(rating)
        self._repo.update(product)
        logger.info(
            "product.rated",
            product_id=str(id),
            average_rating=str(product.average_rating),
            review_count=product.review_count,
        )
        return product

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @transaction.atomic
    def delete_product(self, id: UUID | str, deleted_by: str = DELETED_BY_SYSTEM) -> None:
        """Soft-delete a product.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        if not self._repo.delete(id, deleted_by):
            raise ProductNotFound(f"Product with ID {id} not found.")
        logger.info("product.deleted", product_id=str(id), deleted_by=deleted_by)

    @transaction.atomic
    def restore_product(self, id: UUID | str) -> Product:
        """Bring back a soft-deleted (or live) product as active.

        Raises:
            ProductAlreadyExists: another live product took the SKU meanwhile.
            ProductNotFound: if the product does not exist at all.
        """
        product = self._repo.get_by_id(id, include_deleted=True)
        if product is None:
            raise ProductNotFound(f"Product with ID {id} not found.")
        if product.is_deleted:
            holder = self._repo.get_by_sku(product.sku)
            if holder is not None and holder.id != product.id:
                raise ProductAlreadyExists(
                    f"Product with SKU '{product.sku}' already exists."
                )
        product.restore()
        self._repo.update(product)
        logger.info("product.restored", product_id=str(id))
        return product

    @transaction.atomic
    def activate_product(self, id: UUID | str) -> Product:
        product = self._get_or_raise(id)
        product.activate()
        self._repo.update(product)
        logger.info("product.activated", product_id=str(id))
        return product

    @transaction.atomic
    def deactivate_product(self, id: UUID | str) -> Product:
        product = self._get_or_raise(id)
        product.deactivate()
        self._repo.update(product)
        logger.info("product.deactivated", product_id=str(id))
        return product

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_product(self, id: UUID | str) -> Product:
        """Retrieve a single product by ID.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        product = self._get_or_raise(id)
        logger.info("product.retrieved", product_id=str(id))
        return product

    def list_products(self) -> List[Product]:
        """Return every non-deleted product."""
        return self._repo.get_all()

    def get_products_by_category(
        self, category: str, page: int = 1, page_size: int = 20
    ) -> List[Product]:
        self._validate_pagination(page, page_size)
        if not category or not category.strip():
            raise InvalidArgument("Category is required.")
        return self._repo.get_by_category(category, page, page_size)

    def search_products(self, term: str, page: int = 1, page_size: int = 20) -> List[Product]:
        """Search active products; a blank term lists every product."""
        self._validate_pagination(page, page_size)
        if not term or not term.strip():
            return self._repo.get_all()
        return self._repo.search(term, page, page_size)

    def get_featured_products(self, count: Optional[int] = None) -> List[Product]:
        if count is None:
            count = settings.FEATURED_PRODUCTS_COUNT
        if count <= 0:
            raise InvalidArgument("Count must be greater than zero.")
        return self._repo.get_featured(count)

    def get_low_stock_products(self, threshold: Optional[int] = None) -> List[Product]:
        if threshold is None:
            threshold = self._low_stock_threshold
        if threshold < 0:
            raise InvalidArgument("Threshold cannot be negative.")
        return self._repo.get_low_stock_products(threshold)

    def check_stock(self, id: UUID | str, quantity: int) -> StockStatus:
        """Report whether *quantity* units of a product are available.

        Raises:
            InvalidArgument: ``quantity <= 0``.
            ProductNotFound: if the product does not exist.
        """
        if quantity <= 0:
            raise InvalidArgument("Quantity must be greater than zero.")
        product = self._get_or_raise(id)
        return StockStatus(
            product_id=product.id,
            requested_quantity=quantity,
            available_quantity=product.stock_quantity,
            is_available=product.has_sufficient_stock(quantity),
            is_low_stock=product.stock_quantity <= self._low_stock_threshold,
        )

    def get_product_count(self) -> int:
        return self._repo.get_total_count()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _get_or_raise(self, id: UUID | str) -> Product:
        product = self._repo.get_by_id(id)
        if product is None:
            raise ProductNotFound(f"Product with ID {id} not found.")
        return product

    def _validate_pagination(self, page: int, page_size: int) -> None:
        if page < MIN_PAGE:
            raise InvalidArgument("Page must be greater than or equal to 1.")
        if page_size < MIN_PAGE_SIZE or page_size > self._max_page_size:
            raise InvalidArgument(
                f"Page size must be between {MIN_PAGE_SIZE} and {self._max_page_size}."
            )
