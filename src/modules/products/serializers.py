"""Product DRF serializers for API output.

The serializer operates at the Interface layer (API Views) and is
read-only: input goes through the Pydantic DTOs in ``dtos.py`` and the
Service Layer, never through ``serializer.save()``.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.products.models import Product


class ProductSerializer(serializers.ModelSerializer):
    """Read serializer for the Product resource."""

    current_price = serializers.DecimalField(
        source="get_current_price",
        max_digits=18,
        decimal_places=2,
        read_only=True,
    )

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "sku",
            "description",
            "price",
            "currency",
            "discount_price",
            "current_price",
            "stock_quantity",
            "category",
            "brand",
            "average_rating",
            "review_count",
            "is_active",
            "created_at",
            "updated_at",
            "created_by",
            "updated_by",
        ]
        read_only_fields = fields
