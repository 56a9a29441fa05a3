"""Unit tests for InventoryDjangoRepository."""

from __future__ import annotations

from decimal import Decimal

import pytest

from modules.inventory.models import Inventory
from modules.inventory.repositories.django_repository import InventoryDjangoRepository
from modules.products.models import Product
from shared.domain.money import Money

pytestmark = pytest.mark.unit


@pytest.fixture()
def repo():
    return InventoryDjangoRepository()


@pytest.fixture()
def product():
    product = Product.create(
        name="Coffee",
        sku="ET-COFFEE-001",
        description="",
        price=Money(Decimal("250"), "ETB"),
    )
    product.save()
    return product


class TestInventoryRepository:
    def test_add_and_get_by_product_id(self, repo, product):
        inventory = Inventory.open(product, initial_stock=5)

        inventory_id = repo.add(inventory)

        assert inventory_id == inventory.id
        assert repo.get_by_product_id(product.id) == inventory
        assert repo.get_by_product_id(str(product.id)) == inventory

    def test_missing_and_invalid_ids_return_none(self, repo, product):
        assert repo.get_by_product_id(product.id) is None
        assert repo.get_by_product_id("not-a-uuid") is None

    def test_update_persists_counters(self, repo, product):
        inventory = Inventory.open(product, initial_stock=10)
        repo.add(inventory)

        inventory.reserve(3)
        repo.update(inventory)

        stored = Inventory.objects.get(id=inventory.id)
        assert stored.reserved_stock == 3
        assert stored.updated_at is not None
