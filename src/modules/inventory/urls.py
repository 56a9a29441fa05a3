"""Inventory URL configuration."""

from __future__ import annotations

from rest_framework.routers import DefaultRouter

from modules.inventory.views import InventoryViewSet

router = DefaultRouter(trailing_slash=True)
router.register("inventory", InventoryViewSet, basename="inventory")

urlpatterns = router.urls
