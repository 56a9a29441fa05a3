"""Integration tests for Inventory API endpoints.

Covers:
- Opening an inventory record via POST /api/v1/inventory/.
- Reading it back by product id.
- reserve / release / fulfill / restock actions and their error mapping.
"""

from __future__ import annotations

import uuid

import pytest

from modules.inventory.models import Inventory

pytestmark = pytest.mark.integration

BASE_URL = "/api/v1/inventory/"


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def product(make_product):
    return make_product(sku="ET-COFFEE-001", name="Coffee")


@pytest.fixture()
def inventory(product):
    inventory = Inventory.open(product, initial_stock=20, reorder_threshold=5, max_stock=100)
    inventory.save()
    return inventory


def _action_url(product_id, action: str) -> str:
    return f"{BASE_URL}{product_id}/{action}/"


# ===========================================================================
# Open / read
# ===========================================================================


class TestInventoryOpen:
    def test_open_returns_201(self, api_client, product):
        payload = {"product_id": str(product.id), "initial_stock": 50}

        response = api_client.post(BASE_URL, payload, format="json")

        assert response.status_code == 201
        body = response.json()
        assert body["product_id"] == str(product.id)
        assert body["available_stock"] == 50
        assert body["reserved_stock"] == 0
        assert body["available_for_sale"] == 50
        assert body["reorder_threshold"] == 10
        assert body["max_stock"] == 1000
        assert body["needs_reorder"] is False

    def test_open_twice_returns_409(self, api_client, inventory, product):
        response = api_client.post(BASE_URL, {"product_id": str(product.id)}, format="json")

        assert response.status_code == 409
        assert response.json()["errors"][0]["code"] == "already_exists"

    def test_open_for_unknown_product_returns_404(self, api_client):
        response = api_client.post(BASE_URL, {"product_id": str(uuid.uuid4())}, format="json")

        assert response.status_code == 404

    def test_open_with_invalid_payload_returns_400(self, api_client):
        response = api_client.post(BASE_URL, {"product_id": "nope"}, format="json")

        assert response.status_code == 400
        assert response.json()["errors"][0]["attr"] == "product_id"

    def test_open_above_max_stock_returns_400(self, api_client, product):
        payload = {"product_id": str(product.id), "initial_stock": 11, "max_stock": 10}

        response = api_client.post(BASE_URL, payload, format="json")

        assert response.status_code == 400
        assert response.json()["errors"][0]["code"] == "invalid_argument"


class TestInventoryRetrieve:
    def test_retrieve(self, api_client, inventory, product):
        response = api_client.get(f"{BASE_URL}{product.id}/")

        assert response.status_code == 200
        assert response.json()["available_stock"] == 20

    def test_retrieve_missing_returns_404(self, api_client, product):
        response = api_client.get(f"{BASE_URL}{product.id}/")

        assert response.status_code == 404
        assert response.json()["errors"][0]["code"] == "not_found"


# ===========================================================================
# Movements
# ===========================================================================


class TestInventoryMovements:
    def test_full_reservation_flow(self, api_client, inventory, product):
        response = api_client.post(_action_url(product.id, "reserve"), {"quantity": 8}, format="json")
        assert response.status_code == 200
        assert response.json()["available_for_sale"] == 12

        api_client.post(_action_url(product.id, "release"), {"quantity": 2}, format="json")
        api_client.post(_action_url(product.id, "fulfill"), {"quantity": 6}, format="json")
        response = api_client.post(
            _action_url(product.id, "restock"), {"quantity": 10}, format="json"
        )

        body = response.json()
        assert body["available_stock"] == 24
        assert body["reserved_stock"] == 0
        inventory.refresh_from_db()
        assert inventory.available_stock == 24

    def test_reserve_beyond_available_returns_409(self, api_client, inventory, product):
        response = api_client.post(
            _action_url(product.id, "reserve"), {"quantity": 21}, format="json"
        )

        assert response.status_code == 409
        error = response.json()["errors"][0]
        assert error["code"] == "insufficient_stock"
        assert error["requested"] == 21
        assert error["available"] == 20
        inventory.refresh_from_db()
        assert inventory.reserved_stock == 0

    def test_release_more_than_reserved_returns_400(self, api_client, inventory, product):
        response = api_client.post(
            _action_url(product.id, "release"), {"quantity": 1}, format="json"
        )

        assert response.status_code == 400

    def test_restock_beyond_max_returns_400(self, api_client, inventory, product):
        response = api_client.post(
            _action_url(product.id, "restock"), {"quantity": 81}, format="json"
        )

        assert response.status_code == 400

    def test_movement_without_record_returns_404(self, api_client, product):
        response = api_client.post(
            _action_url(product.id, "reserve"), {"quantity": 1}, format="json"
        )

        assert response.status_code == 404
