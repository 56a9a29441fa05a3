"""Product API views.

Exposes the ``ProductService`` via HTTP using DRF ViewSets.
Views only parse input into DTOs and render output; domain and
validation errors propagate to ``modules.core.exceptions``, which turns
them into HTTP responses.
"""

from __future__ import annotations

from typing import List, Optional

from django.conf import settings
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.products.dtos import (
    ApplyDiscountDTO,
    CreateProductDTO,
    RateProductDTO,
    UpdatePriceDTO,
    UpdateProductDTO,
    UpdateStockDTO,
)
from modules.products.exceptions import ProductNotFound
from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.serializers import ProductSerializer
from modules.products.services import ProductService
from shared.domain.exceptions import InvalidArgument


def _query_int(request: Request, name: str, default: Optional[int]) -> Optional[int]:
    raw = request.query_params.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise InvalidArgument(f"Query parameter '{name}' must be an integer.") from exc


def _page_response(products: List[Product], page: int, page_size: int) -> Response:
    return Response(
        {
            "results": ProductSerializer(products, many=True).data,
            "page": page,
            "page_size": page_size,
            "count": len(products),
        }
    )


class ProductViewSet(GenericViewSet):
    """ViewSet for the product catalog.

    Uses ``ProductService`` with ``ProductDjangoRepository`` (DIP).
    Does **not** extend ``ModelViewSet``: all ORM access goes through
    the service/repository layer.
    """

    serializer_class = ProductSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = ProductService(repository=ProductDjangoRepository())

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/products/"""
        products = self._service.list_products()
        return Response(ProductSerializer(products, many=True).data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/products/{pk}/"""
        product = self._service.get_product(pk)
        return Response(ProductSerializer(product).data)

    def create(self, request: Request) -> Response:
        """POST /api/v1/products/"""
        dto = CreateProductDTO.model_validate(request.data)
        product = self._service.create_product(dto)
        return Response(ProductSerializer(product).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/products/{pk}/"""
        dto = UpdateProductDTO.model_validate(request.data)
        product = self._service.update_product(pk, dto)
        return Response(ProductSerializer(product).data)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/products/{pk}/"""
        self._service.delete_product(pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    # ------------------------------------------------------------------
    # Listings
    # ------------------------------------------------------------------

    @action(detail=False, methods=["get"])
    def search(self, request: Request) -> Response:
        """GET /api/v1/products/search/?term=&page=&page_size="""
        page = _query_int(request, "page", 1)
        page_size = _query_int(request, "page_size", settings.DEFAULT_PAGE_SIZE)
        term = request.query_params.get("term", "")
        products = self._service.search_products(term, page, page_size)
        return _page_response(products, page, page_size)

    @action(
        detail=False,
        methods=["get"],
        url_path=r"category/(?P<category>[^/]+)",
        url_name="by-category",
    )
    def by_category(self, request: Request, category: str | None = None) -> Response:
        """GET /api/v1/products/category/{category}/?page=&page_size="""
        page = _query_int(request, "page", 1)
        page_size = _query_int(request, "page_size", settings.DEFAULT_PAGE_SIZE)
        products = self._service.get_products_by_category(category or "", page, page_size)
        return _page_response(products, page, page_size)

    @action(detail=False, methods=["get"])
    def featured(self, request: Request) -> Response:
        """GET /api/v1/products/featured/?count="""
        count = _query_int(request, "count", None)
        products = self._service.get_featured_products(count)
        return Response(ProductSerializer(products, many=True).data)

    @action(detail=False, methods=["get"], url_path="low-stock", url_name="low-stock")
    def low_stock(self, request: Request) -> Response:
        """GET /api/v1/products/low-stock/?threshold="""
        threshold = _query_int(request, "threshold", None)
        products = self._service.get_low_stock_products(threshold)
        return Response(ProductSerializer(products, many=True).data)

    @action(detail=False, methods=["get"])
    def count(self, request: Request) -> Response:
        """GET /api/v1/products/count/"""
        return Response({"count": self._service.get_product_count()})

    # ------------------------------------------------------------------
    # Price / stock
    # ------------------------------------------------------------------

    @action(detail=True, methods=["put"])
    def price(self, request: Request, pk: str | None = None) -> Response:
        """PUT /api/v1/products/{pk}/price/"""
        dto = UpdatePriceDTO.model_validate(request.data)
        self._service.update_price(pk, dto.price, dto.currency)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=["put"])
    def stock(self, request: Request, pk: str | None = None) -> Response:
        """PUT /api/v1/products/{pk}/stock/

        Accepts ``{"quantity": N}``; negative values remove stock.
        """
        dto = UpdateStockDTO.model_validate(request.data)
        if not self._service.update_stock(pk, dto.quantity):
            raise ProductNotFound(f"Product with ID {pk} not found.")
        return Response(
            {
                "product_id": pk,
                "quantity_changed": dto.quantity,
                "message": "Stock updated successfully",
            }
        )

    @action(detail=True, methods=["get"], url_path="stock-status", url_name="stock-status")
    def stock_status(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/products/{pk}/stock-status/?quantity="""
        quantity = _query_int(request, "quantity", 1)
        stock_status = self._service.check_stock(pk, quantity)
        return Response(stock_status.model_dump(mode="json"))

    @action(detail=True, methods=["post", "delete"])
    def discount(self, request: Request, pk: str | None = None) -> Response:
        """POST / DELETE /api/v1/products/{pk}/discount/"""
        if request.method == "DELETE":
            product = self._service.remove_discount(pk)
        else:
            dto = ApplyDiscountDTO.model_validate(request.data)
            product = self._service.apply_discount(pk, dto.percentage)
        return Response(ProductSerializer(product).data)

    @action(detail=True, methods=["post"])
    def rating(self, request: Request, pk: str | None = None) -> Response:
        """POST /api/v1/products/{pk}/rating/"""
        dto = RateProductDTO.model_validate(request.data)
        product = self._service.rate_product(pk, dto.rating)
        return Response(ProductSerializer(product).data)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @action(detail=True, methods=["put"])
    def restore(self, request: Request, pk: str | None = None) -> Response:
        """PUT /api/v1/products/{pk}/restore/"""
        product = self._service.restore_product(pk)
        return Response(ProductSerializer(product).data)

    @action(detail=True, methods=["put"])
    def activate(self, request: Request, pk: str | None = None) -> Response:
        """PUT /api/v1/products/{pk}/activate/"""
        product = self._service.activate_product(pk)
        return Response(ProductSerializer(product).data)

    @action(detail=True, methods=["put"])
    def deactivate(self, request: Request, pk: str | None = None) -> Response:
        """PUT /api/v1/products/{pk}/deactivate/"""
        product = self._service.deactivate_product(pk)
        return Response(ProductSerializer(product).data)
