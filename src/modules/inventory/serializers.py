"""Inventory DRF serializers for API output."""

from __future__ import annotations

from rest_framework import serializers

from modules.inventory.models import Inventory


class InventorySerializer(serializers.ModelSerializer):
    """Read serializer for an inventory record."""

    product_id = serializers.UUIDField(read_only=True)
    available_for_sale = serializers.IntegerField(
        source="get_available_for_sale", read_only=True
    )
    needs_reorder = serializers.BooleanField(read_only=True)

    class Meta:
        model = Inventory
        fields = [
            "id",
            "product_id",
            "available_stock",
            "reserved_stock",
            "available_for_sale",
            "reorder_threshold",
            "max_stock",
            "needs_reorder",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
