from decimal import Decimal

import pytest
from rest_framework.test import APIClient

from modules.products.models import Product
from shared.domain.money import Money


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


@pytest.fixture()
def make_product():
    """Factory that builds (and by default saves) a Product via ``Product.create``."""

    def _make(save: bool = True, **overrides) -> Product:
        defaults = {
            "name": "Widget",
            "sku": "SKU-001",
            "description": "A fine widget",
            "price": Money(Decimal("19.99"), "USD"),
            "category": "Tools",
            "brand": "Acme",
            "initial_stock": 10,
        }
        defaults.update(overrides)
        product = Product.create(**defaults)
        if save:
            product.save()
        return product

    return _make
