"""Integration tests for Product API endpoints.

Covers:
- CRUD operations via /api/v1/products/.
- Listings: search, category, featured, low stock, count.
- Price, stock, discount, rating and lifecycle actions.
- Domain exception mapping (400, 404, 409) and the error body format.
"""

from __future__ import annotations

import uuid
from decimal import Decimal

import pytest

from modules.products.models import Product

pytestmark = pytest.mark.integration

BASE_URL = "/api/v1/products/"


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_product(make_product):
    """A persisted Product instance."""
    return make_product(
        name="Coffee",
        sku="ET-COFFEE-001",
        description="Ethiopian coffee beans",
        category="Beverages",
        brand="Yirgacheffe",
        initial_stock=3,
    )


def _detail_url(product: Product, suffix: str = "") -> str:
    return f"{BASE_URL}{product.id}/{suffix}"


def _assert_error(response, status_code: int, code: str) -> dict:
    assert response.status_code == status_code
    body = response.json()
    assert body["type"] == "client_error"
    assert body["errors"][0]["code"] == code
    return body["errors"][0]


# ===========================================================================
# CREATE
# ===========================================================================


class TestProductCreate:
    def test_create_returns_201(self, api_client):
        payload = {
            "name": "Coffee",
            "sku": "et-coffee-001",
            "price": "250.00",
            "currency": "ETB",
            "category": "Beverages",
            "initial_stock": 10,
        }

        response = api_client.post(BASE_URL, payload, format="json")

        assert response.status_code == 201
        body = response.json()
        assert body["sku"] == "ET-COFFEE-001"
        assert body["price"] == "250.00"
        assert body["current_price"] == "250.00"
        assert body["stock_quantity"] == 10
        assert body["is_active"] is True
        assert Product.objects.filter(id=body["id"]).exists()

    def test_duplicate_sku_returns_409(self, api_client, sample_product):
        payload = {"name": "Other", "sku": "ET-COFFEE-001", "price": "10"}

        response = api_client.post(BASE_URL, payload, format="json")

        error = _assert_error(response, 409, "already_exists")
        assert "ET-COFFEE-001" in error["detail"]

    def test_missing_field_returns_400_with_attr(self, api_client):
        response = api_client.post(BASE_URL, {"name": "Coffee", "sku": "C-1"}, format="json")

        assert response.status_code == 400
        body = response.json()
        assert body["type"] == "client_error"
        assert {"price"} == {err["attr"] for err in body["errors"]}

    @pytest.mark.parametrize(
        "overrides",
        [{"price": "0"}, {"currency": "XYZ"}, {"initial_stock": -1}, {"name": "   "}],
    )
    def test_invalid_values_return_400(self, api_client, overrides):
        payload = {"name": "Coffee", "sku": "C-1", "price": "10", **overrides}

        response = api_client.post(BASE_URL, payload, format="json")

        _assert_error(response, 400, "invalid_argument")
        assert not Product.objects.exists()

    @pytest.mark.parametrize("price", ["1e30", "123456789012345678.00"])
    def test_oversized_price_returns_400_and_is_not_saved(self, api_client, price):
        payload = {"name": "Coffee", "sku": "C-1", "price": price}

        response = api_client.post(BASE_URL, payload, format="json")

        _assert_error(response, 400, "invalid_argument")
        assert not Product.objects.exists()
        assert api_client.get(BASE_URL).status_code == 200


# ===========================================================================
# READ
# ===========================================================================


class TestProductRead:
    def test_list(self, api_client, sample_product, make_product):
        make_product(sku="A-1", name="Apple")

        response = api_client.get(BASE_URL)

        assert response.status_code == 200
        assert [p["name"] for p in response.json()] == ["Apple", "Coffee"]

    def test_retrieve(self, api_client, sample_product):
        response = api_client.get(_detail_url(sample_product))

        assert response.status_code == 200
        assert response.json()["id"] == str(sample_product.id)

    @pytest.mark.parametrize("pk", [str(uuid.uuid4()), "not-a-uuid"])
    def test_retrieve_missing_returns_404(self, api_client, pk):
        response = api_client.get(f"{BASE_URL}{pk}/")

        _assert_error(response, 404, "not_found")


# ===========================================================================
# UPDATE / DELETE / LIFECYCLE
# ===========================================================================


class TestProductUpdate:
    def test_partial_update(self, api_client, sample_product):
        response = api_client.patch(
            _detail_url(sample_product), {"name": "Premium Coffee"}, format="json"
        )

        assert response.status_code == 200
        assert response.json()["name"] == "Premium Coffee"
        assert response.json()["category"] == "Beverages"

    def test_update_price(self, api_client, sample_product):
        response = api_client.put(
            _detail_url(sample_product, "price/"),
            {"price": "19.99", "currency": "USD"},
            format="json",
        )

        assert response.status_code == 204
        sample_product.refresh_from_db()
        assert sample_product.price == Decimal("19.99")
        assert sample_product.currency == "USD"


class TestProductLifecycle:
    def test_delete_then_restore(self, api_client, sample_product):
        response = api_client.delete(_detail_url(sample_product))
        assert response.status_code == 204
        assert api_client.get(_detail_url(sample_product)).status_code == 404

        response = api_client.put(_detail_url(sample_product, "restore/"))

        assert response.status_code == 200
        assert response.json()["is_active"] is True
        assert api_client.get(_detail_url(sample_product)).status_code == 200

    def test_delete_twice_returns_404(self, api_client, sample_product):
        api_client.delete(_detail_url(sample_product))

        response = api_client.delete(_detail_url(sample_product))

        _assert_error(response, 404, "not_found")

    def test_restore_with_sku_taken_returns_409(self, api_client, sample_product, make_product):
        api_client.delete(_detail_url(sample_product))
        make_product(sku="ET-COFFEE-001", name="Replacement")

        response = api_client.put(_detail_url(sample_product, "restore/"))

        _assert_error(response, 409, "already_exists")

    def test_deactivate_and_activate(self, api_client, sample_product):
        response = api_client.put(_detail_url(sample_product, "deactivate/"))
        assert response.json()["is_active"] is False

        response = api_client.put(_detail_url(sample_product, "activate/"))
        assert response.json()["is_active"] is True


# ===========================================================================
# STOCK
# ===========================================================================


class TestProductStock:
    def test_update_stock(self, api_client, sample_product):
        response = api_client.put(
            _detail_url(sample_product, "stock/"), {"quantity": 7}, format="json"
        )

        assert response.status_code == 200
        assert response.json()["quantity_changed"] == 7
        sample_product.refresh_from_db()
        assert sample_product.stock_quantity == 10

    def test_reduce_beyond_stock_returns_409(self, api_client, sample_product):
        response = api_client.put(
            _detail_url(sample_product, "stock/"), {"quantity": -5}, format="json"
        )

        error = _assert_error(response, 409, "insufficient_stock")
        assert error["requested"] == 5
        assert error["available"] == 3
        sample_product.refresh_from_db()
        assert sample_product.stock_quantity == 3

    def test_update_stock_missing_product_returns_404(self, api_client):
        response = api_client.put(
            f"{BASE_URL}{uuid.uuid4()}/stock/", {"quantity": 1}, format="json"
        )

        _assert_error(response, 404, "not_found")

    def test_stock_status(self, api_client, sample_product):
        response = api_client.get(_detail_url(sample_product, "stock-status/"), {"quantity": 5})

        assert response.status_code == 200
        assert response.json() == {
            "product_id": str(sample_product.id),
            "requested_quantity": 5,
            "available_quantity": 3,
            "is_available": False,
            "is_low_stock": True,
        }

    @pytest.mark.parametrize("quantity", ["0", "abc"])
    def test_stock_status_bad_quantity_returns_400(self, api_client, sample_product, quantity):
        response = api_client.get(
            _detail_url(sample_product, "stock-status/"), {"quantity": quantity}
        )

        _assert_error(response, 400, "invalid_argument")


# ===========================================================================
# DISCOUNT / RATING
# ===========================================================================


class TestDiscountAndRating:
    def test_apply_and_remove_discount(self, api_client, sample_product):
        url = _detail_url(sample_product, "discount/")

        response = api_client.post(url, {"percentage": "25"}, format="json")
        assert response.status_code == 200
        assert response.json()["discount_price"] == "14.99"
        assert response.json()["current_price"] == "14.99"

        response = api_client.delete(url)
        assert response.json()["discount_price"] is None
        assert response.json()["current_price"] == "19.99"

    def test_discount_out_of_range_returns_400(self, api_client, sample_product):
        response = api_client.post(
            _detail_url(sample_product, "discount/"), {"percentage": "150"}, format="json"
        )

        _assert_error(response, 400, "invalid_argument")

    @pytest.mark.parametrize(
        "action,payload",
        [("discount/", {"percentage": "NaN"}), ("rating/", {"rating": "NaN"})],
    )
    def test_non_finite_numbers_return_400(self, api_client, sample_product, action, payload):
        response = api_client.post(_detail_url(sample_product, action), payload, format="json")

        assert response.status_code == 400
        assert response.json()["type"] == "client_error"

    def test_oversized_price_update_returns_400(self, api_client, sample_product):
        response = api_client.put(
            _detail_url(sample_product, "price/"),
            {"price": "123456789012345678.00", "currency": "USD"},
            format="json",
        )

        _assert_error(response, 400, "invalid_argument")
        sample_product.refresh_from_db()
        assert sample_product.price == Decimal("19.99")

    def test_rating(self, api_client, sample_product):
        url = _detail_url(sample_product, "rating/")

        api_client.post(url, {"rating": 4}, format="json")
        response = api_client.post(url, {"rating": 2}, format="json")

        assert response.status_code == 200
        assert response.json()["average_rating"] == "3.00"
        assert response.json()["review_count"] == 2


# ===========================================================================
# LISTINGS
# ===========================================================================


class TestProductListings:
    def test_search(self, api_client, sample_product, make_product):
        make_product(sku="T-1", name="Tea", description="", brand=None)

        response = api_client.get(f"{BASE_URL}search/", {"term": "COFFEE"})

        assert response.status_code == 200
        body = response.json()
        assert [p["sku"] for p in body["results"]] == ["ET-COFFEE-001"]
        assert body["page"] == 1
        assert body["page_size"] == 20

    def test_search_invalid_page_returns_400(self, api_client):
        response = api_client.get(f"{BASE_URL}search/", {"term": "x", "page": 0})

        _assert_error(response, 400, "invalid_argument")

    def test_by_category(self, api_client, sample_product, make_product):
        make_product(sku="T-1", name="Tea", category="Beverages")
        make_product(sku="H-1", name="Hammer", category="Tools")

        response = api_client.get(f"{BASE_URL}category/beverages/", {"page_size": 1})

        body = response.json()
        assert [p["name"] for p in body["results"]] == ["Coffee"]
        assert body["page_size"] == 1

    def test_featured(self, api_client, sample_product, make_product):
        rated = make_product(sku="R-1", name="Rated")
        api_client.post(_detail_url(rated, "rating/"), {"rating": 5}, format="json")

        response = api_client.get(f"{BASE_URL}featured/", {"count": 1})

        assert [p["name"] for p in response.json()] == ["Rated"]

    def test_low_stock(self, api_client, sample_product, make_product):
        make_product(sku="P-1", name="Plenty", initial_stock=500)

        response = api_client.get(f"{BASE_URL}low-stock/")

        assert [p["sku"] for p in response.json()] == ["ET-COFFEE-001"]

    def test_count(self, api_client, sample_product, make_product):
        make_product(sku="A-1")

        response = api_client.get(f"{BASE_URL}count/")

        assert response.json() == {"count": 2}
