"""Inventory API views.

Inventory records are addressed by the id of the product they track:
``/api/v1/inventory/{product_id}/``.
"""

from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.inventory.dtos import OpenInventoryDTO, StockMovementDTO
from modules.inventory.repositories.django_repository import InventoryDjangoRepository
from modules.inventory.serializers import InventorySerializer
from modules.inventory.services import InventoryService
from modules.products.repositories.django_repository import ProductDjangoRepository


class InventoryViewSet(GenericViewSet):
    """ViewSet for the reservation ledger of each product."""

    serializer_class = InventorySerializer
    lookup_field = "product_id"

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = InventoryService(
            inventory_repository=InventoryDjangoRepository(),
            product_repository=ProductDjangoRepository(),
        )

    def create(self, request: Request) -> Response:
        """POST /api/v1/inventory/"""
        dto = OpenInventoryDTO.model_validate(request.data)
        inventory = self._service.open_inventory(
            dto.product_id,
            initial_stock=dto.initial_stock,
            reorder_threshold=dto.reorder_threshold,
            max_stock=dto.max_stock,
        )
        return Response(InventorySerializer(inventory).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request: Request, product_id: str | None = None) -> Response:
        """GET /api/v1/inventory/{product_id}/"""
        inventory = self._service.get_inventory(product_id)
        return Response(InventorySerializer(inventory).data)

    @action(detail=True, methods=["post"])
    def reserve(self, request: Request, product_id: str | None = None) -> Response:
        dto = StockMovementDTO.model_validate(request.data)
        inventory = self._service.reserve(product_id, dto.quantity)
        return Response(InventorySerializer(inventory).data)

    @action(detail=True, methods=["post"])
    def release(self, request: Request, product_id: str | None = None) -> Response:
        dto = StockMovementDTO.model_validate(request.data)
        inventory = self._service.release(product_id, dto.quantity)
        return Response(InventorySerializer(inventory).data)

    @action(detail=True, methods=["post"])
    def fulfill(self, request: Request, product_id: str | None = None) -> Response:
        dto = StockMovementDTO.model_validate(request.data)
        inventory = self._service.fulfill(product_id, dto.quantity)
        return Response(InventorySerializer(inventory).data)

    @action(detail=True, methods=["post"])
    def restock(self, request: Request, product_id: str | None = None) -> Response:
        dto = StockMovementDTO.model_validate(request.data)
        inventory = self._service.restock(product_id, dto.quantity)
        return Response(InventorySerializer(inventory).data)
