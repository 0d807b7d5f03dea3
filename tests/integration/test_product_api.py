"""Integration tests for Product API endpoints.

Covers:
- CRUD operations via /api/products.
- Search, category filter and pagination.
- Domain exception mapping (400, 404).
- Cascading delete of cart lines.
"""

from __future__ import annotations

import uuid
from decimal import Decimal

import pytest

from modules.cart.models import CartItem
from modules.catalog.models import Category, Product
from modules.core.pagination import MAX_LIMIT

pytestmark = pytest.mark.integration

URL = "/api/products"


def _payload(category: Category, **overrides) -> dict:
    data = {
        "title": "Widget",
        "description": "A fine widget",
        "price": "19.99",
        "stock": 10,
        "categoryId": str(category.id),
    }
    data.update(overrides)
    return data


# ===========================================================================
# List
# ===========================================================================


class TestListProducts:
    def test_envelope_and_pagination(self, api_client, make_product):
        for i in range(3):
            make_product(title=f"Item {i}")

        response = api_client.get(URL, {"limit": 2})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert len(body["data"]["items"]) == 2
        assert body["data"]["pagination"] == {
            "currentPage": 1,
            "totalPages": 2,
            "totalCount": 3,
            "hasNext": True,
            "hasPrev": False,
        }

    def test_item_shape(self, api_client, product):
        item = api_client.get(URL).json()["data"]["items"][0]

        assert item["id"] == str(product.id)
        assert item["price"] == "19.99"
        assert item["categoryId"] == str(product.category_id)
        assert item["category"] == {"id": str(product.category_id), "name": "Electronics"}
        assert {"createdAt", "updatedAt"} <= item.keys()

    def test_search(self, api_client, make_product):
        make_product(title="Blue Widget")
        make_product(title="Red Gadget")

        items = api_client.get(URL, {"search": "widget"}).json()["data"]["items"]

        assert [i["title"] for i in items] == ["Blue Widget"]

    def test_filter_by_category(self, api_client, make_product):
        books = Category.objects.create(name="Books")
        make_product(title="Gadget")
        make_product(title="Novel", category=books)

        items = api_client.get(URL, {"categoryId": str(books.id)}).json()["data"]["items"]

        assert [i["title"] for i in items] == ["Novel"]

    def test_invalid_category_id(self, api_client):
        response = api_client.get(URL, {"categoryId": "abc"})

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Validation Error"
        assert body["details"] == [
            {"field": "categoryId", "message": "Invalid category ID format."}
        ]

    @pytest.mark.parametrize("params", [{"page": 0}, {"limit": 0}, {"page": "x"}])
    def test_invalid_paging(self, api_client, params):
        assert api_client.get(URL, params).status_code == 400

    @pytest.mark.parametrize(
        ("params", "field"),
        [
            ({"page": "10000000000000000000"}, "page"),
            ({"limit": "10000000000000000000"}, "limit"),
            ({"page": "100000000000", "limit": "100000000000"}, "page"),
            ({"limit": MAX_LIMIT + 1}, "limit"),
        ],
    )
    def test_oversized_paging(self, api_client, product, params, field):
        response = api_client.get(URL, params)

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Validation Error"
        assert field in {d["field"] for d in body["details"]}

    def test_largest_limit_accepted(self, api_client, product):
        response = api_client.get(URL, {"limit": MAX_LIMIT})

        assert response.status_code == 200
        assert response.json()["data"]["pagination"]["totalCount"] == 1

    def test_page_past_the_end(self, api_client, product):
        body = api_client.get(URL, {"page": 4}).json()
        assert body["data"]["items"] == []
        assert body["data"]["pagination"]["hasPrev"] is True


# ===========================================================================
# Retrieve
# ===========================================================================


class TestRetrieveProduct:
    def test_includes_category_detail(self, api_client, product):
        response = api_client.get(f"{URL}/{product.id}")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["title"] == "Widget"
        assert data["category"]["description"] == "Gadgets"

    def test_not_found(self, api_client):
        response = api_client.get(f"{URL}/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json() == {
            "success": False,
            "error": "Not Found",
            "message": "Product not found",
        }

    @pytest.mark.parametrize("method", ["get", "patch", "delete"])
    def test_malformed_id(self, api_client, method):
        response = getattr(api_client, method)(f"{URL}/not-a-uuid", format="json")

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Validation Error"
        assert body["details"] == [{"field": "id", "message": "Invalid product ID format."}]


# ===========================================================================
# Create
# ===========================================================================


class TestCreateProduct:
    def test_created(self, api_client, category):
        response = api_client.post(URL, _payload(category), format="json")

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["title"] == "Widget"
        assert data["category"]["name"] == "Electronics"
        assert Product.objects.filter(id=data["id"]).exists()

    def test_stock_defaults_to_zero(self, api_client, category):
        payload = _payload(category)
        del payload["stock"]

        response = api_client.post(URL, payload, format="json")

        assert response.json()["data"]["stock"] == 0

    def test_unknown_category(self, api_client, category):
        response = api_client.post(
            URL, _payload(category, categoryId=str(uuid.uuid4())), format="json"
        )

        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "error": "Bad Request",
            "message": "Category does not exist",
        }
        assert not Product.objects.exists()

    @pytest.mark.parametrize(
        ("field", "value"),
        [
            ("price", "0"),
            ("price", "-5"),
            ("price", "1000000"),
            ("price", "19.999"),
            ("stock", -1),
            ("title", ""),
            ("title", "x" * 201),
            ("categoryId", "abc"),
        ],
    )
    def test_invalid_field(self, api_client, category, field, value):
        response = api_client.post(URL, _payload(category, **{field: value}), format="json")

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Validation Error"
        assert field in {d["field"] for d in body["details"]}

    def test_missing_fields(self, api_client):
        response = api_client.post(URL, {}, format="json")

        fields = {d["field"] for d in response.json()["details"]}
        assert {"title", "price", "categoryId"} <= fields


# ===========================================================================
# Update
# ===========================================================================


class TestUpdateProduct:
    @pytest.mark.parametrize("method", ["put", "patch"])
    def test_partial_update(self, api_client, product, method):
        response = getattr(api_client, method)(
            f"{URL}/{product.id}", {"stock": 7}, format="json"
        )

        assert response.status_code == 200
        product.refresh_from_db()
        assert product.stock == 7
        assert product.price == Decimal("19.99")

    def test_move_to_other_category(self, api_client, product):
        books = Category.objects.create(name="Books")

        response = api_client.patch(
            f"{URL}/{product.id}", {"categoryId": str(books.id)}, format="json"
        )

        assert response.json()["data"]["category"]["name"] == "Books"

    def test_unknown_category(self, api_client, product):
        response = api_client.patch(
            f"{URL}/{product.id}", {"categoryId": str(uuid.uuid4())}, format="json"
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Category does not exist"

    def test_not_found(self, api_client):
        response = api_client.patch(f"{URL}/{uuid.uuid4()}", {"stock": 1}, format="json")
        assert response.status_code == 404

    def test_invalid_value(self, api_client, product):
        response = api_client.patch(f"{URL}/{product.id}", {"price": "-1"}, format="json")
        assert response.status_code == 400


# ===========================================================================
# Delete
# ===========================================================================


class TestDeleteProduct:
    def test_deleted(self, api_client, product):
        response = api_client.delete(f"{URL}/{product.id}")

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "message": "Product deleted successfully",
        }
        assert not Product.objects.filter(id=product.id).exists()

    def test_removes_cart_lines(self, api_client, product, make_cart_item):
        make_cart_item(product, user_id="a")
        make_cart_item(product, user_id="b")

        api_client.delete(f"{URL}/{product.id}")

        assert not CartItem.objects.exists()

    def test_keeps_other_products_cart_lines(self, api_client, make_product, make_cart_item):
        doomed = make_product(title="Doomed")
        kept = make_product(title="Kept")
        make_cart_item(doomed)
        make_cart_item(kept)

        api_client.delete(f"{URL}/{doomed.id}")

        assert list(CartItem.objects.values_list("product_id", flat=True)) == [kept.id]

    def test_not_found(self, api_client):
        response = api_client.delete(f"{URL}/{uuid.uuid4()}")
        assert response.status_code == 404
