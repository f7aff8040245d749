"""
HTTP tests for the Product Catalog API.

These run the FastAPI app in-process through TestClient against an in-memory
store seeded with the five sample products, and verify that:
1. Authentication and admin authorization gate the product routes
2. The list endpoint returns the query envelope with correct metadata
3. CRUD operations behave and map errors to the documented JSON bodies
"""

from __future__ import annotations

from typing import Tuple

import pytest
from fastapi.testclient import TestClient

from catalog_api.api.app import create_app
from catalog_api.api.handlers import AVAILABLE_ENDPOINTS
from catalog_api.api.middleware import RATE_LIMIT_MESSAGE, SECURITY_HEADERS
from catalog_api.config import Settings
from catalog_api.domain.models import CATEGORY_REQUIRED, NAME_REQUIRED, PRICE_REQUIRED, Product
from catalog_api.store.memory import InMemoryProductStore

EXPECTED_SAMPLE_COUNT = 5
EXPECTED_NEW_ID = 6
CAPPED_LIMIT = 2
TEST_RATE_LIMIT = 2


class _ExplodingStore(InMemoryProductStore):
    def snapshot(self) -> Tuple[Product, ...]:
        raise RuntimeError("snapshot exploded")


class TestHealth:
    def test_health_needs_no_key(self, client: TestClient):
        response = client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "OK"
        assert body["environment"] == "test"
        assert body["uptime"] >= 0
        assert "timestamp" in body


class TestAuthentication:
    def test_missing_key_is_401(self, client: TestClient):
        response = client.get("/api/products")
        assert response.status_code == 401
        assert response.json()["error"] == "API key is required"

    def test_wrong_key_is_403(self, client: TestClient):
        response = client.get("/api/products", headers={"x-api-key": "nope"})
        assert response.status_code == 403
        assert response.json()["error"] == "Invalid API key"

    def test_unconfigured_key_rejects_everything(self, store):
        app = create_app(Settings(app_env="test", api_key=None), store)
        with TestClient(app) as client:
            response = client.get("/api/products", headers={"x-api-key": "anything"})
        assert response.status_code == 403

    @pytest.mark.parametrize(
        "method, path",
        [("post", "/api/products"), ("put", "/api/products/1"), ("delete", "/api/products/1")],
    )
    def test_mutations_need_admin(self, client: TestClient, api_headers, method, path):
        body = {"name": "x", "price": 1, "category": "y"}
        kwargs = {"json": body} if method != "delete" else {}
        response = client.request(method.upper(), path, headers=api_headers, **kwargs)
        assert response.status_code == 403
        assert response.json() == {
            "error": "Access denied",
            "message": "Admin privileges required for this operation",
        }

    def test_auth_is_checked_before_body_validation(self, client: TestClient):
        response = client.post("/api/products", json={"name": ""})
        assert response.status_code == 401


class TestListProducts:
    def test_default_listing(self, client: TestClient, api_headers):
        response = client.get("/api/products", headers=api_headers)
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert [product["id"] for product in body["data"]] == [1, 2, 3, 4, 5]
        assert body["pagination"] == {
            "currentPage": 1,
            "totalPages": 1,
            "totalProducts": EXPECTED_SAMPLE_COUNT,
            "hasNext": False,
            "hasPrev": False,
        }
        assert body["filters"] == {
            "search": None,
            "category": None,
            "inStock": None,
            "minPrice": None,
            "maxPrice": None,
            "sortBy": None,
            "sortOrder": "asc",
        }
        assert body["data"][0]["inStock"] is True
        assert body["data"][0]["createdAt"].startswith("2024-01-15")

    def test_sorted_paged_listing(self, client: TestClient, api_headers):
        response = client.get(
            "/api/products",
            params={"sortBy": "price", "sortOrder": "desc", "limit": 2, "page": 1},
            headers=api_headers,
        )
        body = response.json()
        assert [product["price"] for product in body["data"]] == [99.99, 79.99]
        assert body["pagination"]["hasNext"] is True
        assert body["pagination"]["hasPrev"] is False
        assert body["filters"]["sortBy"] == "price"
        assert body["filters"]["sortOrder"] == "desc"

    def test_filters_combine(self, client: TestClient, api_headers):
        response = client.get(
            "/api/products",
            params={"search": "wireless", "category": "ELECTRONICS", "inStock": "true"},
            headers=api_headers,
        )
        body = response.json()
        assert [product["id"] for product in body["data"]] == [1, 5]
        assert body["filters"]["inStock"] is True
        assert body["filters"]["category"] == "ELECTRONICS"

    def test_price_range(self, client: TestClient, api_headers):
        response = client.get(
            "/api/products", params={"minPrice": "30", "maxPrice": "90"}, headers=api_headers
        )
        body = response.json()
        assert [product["price"] for product in body["data"]] == [49.99, 79.99]
        assert body["filters"]["minPrice"] == 30.0

    def test_page_past_the_end(self, client: TestClient, api_headers):
        response = client.get("/api/products", params={"page": 100}, headers=api_headers)
        body = response.json()
        assert response.status_code == 200
        assert body["data"] == []
        assert body["pagination"]["hasPrev"] is True
        assert body["pagination"]["totalPages"] == 1

    def test_unknown_sort_field_is_ignored(self, client: TestClient, api_headers):
        response = client.get("/api/products", params={"sortBy": "bogus"}, headers=api_headers)
        body = response.json()
        assert response.status_code == 200
        assert body["filters"]["sortBy"] is None
        assert [product["id"] for product in body["data"]] == [1, 2, 3, 4, 5]

    @pytest.mark.parametrize("params", [{"inStock": "maybe"}, {"minPrice": "abc"}])
    def test_malformed_filters_are_400(self, client: TestClient, api_headers, params):
        response = client.get("/api/products", params=params, headers=api_headers)
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid query parameter"

    def test_limit_is_capped_by_settings(self, store, api_headers):
        settings = Settings(app_env="test", api_key=api_headers["x-api-key"], max_page_limit=2)
        with TestClient(create_app(settings, store)) as client:
            response = client.get("/api/products", params={"limit": 50}, headers=api_headers)
        body = response.json()
        assert len(body["data"]) == CAPPED_LIMIT
        assert body["pagination"]["totalPages"] == 3


class TestSingleProduct:
    def test_get_existing(self, client: TestClient, api_headers):
        response = client.get("/api/products/4", headers=api_headers)
        assert response.status_code == 200
        assert response.json()["data"]["name"] == "Mechanical Keyboard"

    def test_get_missing(self, client: TestClient, api_headers):
        response = client.get("/api/products/404", headers=api_headers)
        assert response.status_code == 404
        assert response.json() == {
            "error": "Product not found",
            "message": "Product with ID 404 does not exist",
        }

    def test_non_integer_id_is_400(self, client: TestClient, api_headers):
        response = client.get("/api/products/abc", headers=api_headers)
        assert response.status_code == 400
        assert response.json()["error"] == "Validation failed"


class TestMutations:
    def test_create(self, client: TestClient, admin_headers):
        response = client.post(
            "/api/products",
            json={"name": " Desk Lamp ", "price": 24.5, "category": "Home", "stockQuantity": 4},
            headers=admin_headers,
        )
        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Product created successfully"
        assert body["data"]["id"] == EXPECTED_NEW_ID
        assert body["data"]["name"] == "Desk Lamp"
        assert body["data"]["description"] == ""
        assert body["data"]["inStock"] is True
        assert body["data"]["createdAt"] == body["data"]["updatedAt"]

        listing = client.get("/api/products", headers=admin_headers).json()
        assert listing["pagination"]["totalProducts"] == EXPECTED_SAMPLE_COUNT + 1

    def test_create_validation_failure(self, client: TestClient, admin_headers):
        response = client.post(
            "/api/products",
            json={"name": "", "price": -3, "category": "Home"},
            headers=admin_headers,
        )
        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Validation failed"
        assert f"name: {NAME_REQUIRED}" in body["messages"]
        assert f"price: {PRICE_REQUIRED}" in body["messages"]

    def test_create_reports_each_missing_field(self, client: TestClient, admin_headers):
        response = client.post("/api/products", json={}, headers=admin_headers)
        assert response.status_code == 400
        assert response.json() == {
            "error": "Validation failed",
            "messages": [
                f"name: {NAME_REQUIRED}",
                f"price: {PRICE_REQUIRED}",
                f"category: {CATEGORY_REQUIRED}",
            ],
        }

    def test_create_rejects_infinite_price(self, client: TestClient, admin_headers):
        response = client.post(
            "/api/products",
            content='{"name": "x", "price": Infinity, "category": "y"}',
            headers={**admin_headers, "content-type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json()["messages"] == [f"price: {PRICE_REQUIRED}"]

        listing = client.get("/api/products", headers=admin_headers).json()
        assert listing["pagination"]["totalProducts"] == EXPECTED_SAMPLE_COUNT

    def test_update(self, client: TestClient, admin_headers):
        before = client.get("/api/products/2", headers=admin_headers).json()["data"]
        response = client.put(
            "/api/products/2",
            json={"name": "Rugged Case", "price": 24.99, "category": "Accessories"},
            headers=admin_headers,
        )
        assert response.status_code == 200
        after = response.json()["data"]
        assert response.json()["message"] == "Product updated successfully"
        assert after["name"] == "Rugged Case"
        assert after["description"] == before["description"]
        assert after["createdAt"] == before["createdAt"]
        assert after["updatedAt"] > before["updatedAt"]

    def test_update_missing(self, client: TestClient, admin_headers):
        response = client.put(
            "/api/products/99",
            json={"name": "x", "price": 1, "category": "y"},
            headers=admin_headers,
        )
        assert response.status_code == 404

    def test_update_requires_core_fields(self, client: TestClient, admin_headers):
        response = client.put("/api/products/2", json={"price": 1}, headers=admin_headers)
        assert response.status_code == 400
        assert response.json()["messages"] == [
            f"name: {NAME_REQUIRED}",
            f"category: {CATEGORY_REQUIRED}",
        ]

    def test_delete(self, client: TestClient, admin_headers):
        response = client.delete("/api/products/3", headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["data"]["id"] == 3
        assert client.get("/api/products/3", headers=admin_headers).status_code == 404
        assert client.delete("/api/products/3", headers=admin_headers).status_code == 404


class TestErrorHandling:
    def test_unknown_route(self, client: TestClient):
        response = client.get("/api/nothing-here")
        assert response.status_code == 404
        body = response.json()
        assert body["error"] == "Route not found"
        assert body["message"] == "The route GET /api/nothing-here does not exist"
        assert body["availableEndpoints"] == AVAILABLE_ENDPOINTS

    def test_unsupported_method_is_route_not_found(self, client: TestClient, api_headers):
        response = client.patch("/api/products/1", json={}, headers=api_headers)
        assert response.status_code == 404
        body = response.json()
        assert body["error"] == "Route not found"
        assert body["message"] == "The route PATCH /api/products/1 does not exist"
        assert body["availableEndpoints"] == AVAILABLE_ENDPOINTS

    def test_unhandled_error_hides_details_in_production(self, api_headers):
        settings = Settings(app_env="production", api_key=api_headers["x-api-key"])
        app = create_app(settings, _ExplodingStore())
        with TestClient(app, raise_server_exceptions=False) as client:
            response = client.get("/api/products", headers=api_headers)
        assert response.status_code == 500
        assert response.json() == {
            "error": "Internal Server Error",
            "message": "Something went wrong!",
        }

    def test_unhandled_error_shows_stack_in_development(self, api_headers):
        settings = Settings(app_env="development", api_key=api_headers["x-api-key"])
        app = create_app(settings, _ExplodingStore())
        with TestClient(app, raise_server_exceptions=False) as client:
            response = client.get("/api/products", headers=api_headers)
        body = response.json()
        assert response.status_code == 500
        assert body["message"] == "snapshot exploded"
        assert "RuntimeError" in body["stack"]


class TestRateLimitingAndHeaders:
    @pytest.fixture
    def limited_client(self, store, api_headers):
        settings = Settings(
            app_env="test",
            api_key=api_headers["x-api-key"],
            rate_limit=f"{TEST_RATE_LIMIT}/minute",
        )
        with TestClient(create_app(settings, store)) as client:
            yield client

    def test_requests_over_the_limit_are_429(self, limited_client: TestClient, api_headers):
        statuses = [
            limited_client.get("/api/products", headers=api_headers).status_code
            for _ in range(TEST_RATE_LIMIT)
        ]
        assert statuses == [200] * TEST_RATE_LIMIT

        response = limited_client.get("/api/products", headers=api_headers)
        assert response.status_code == 429
        assert response.json() == {"error": RATE_LIMIT_MESSAGE}

    def test_limit_is_shared_across_routes(self, limited_client: TestClient, api_headers):
        for _ in range(TEST_RATE_LIMIT):
            limited_client.get("/health")
        response = limited_client.get("/api/products/1", headers=api_headers)
        assert response.status_code == 429

    def test_disabled_limiter_never_rejects(self, store, api_headers):
        settings = Settings(
            app_env="test",
            api_key=api_headers["x-api-key"],
            rate_limit=f"{TEST_RATE_LIMIT}/minute",
            rate_limit_enabled=False,
        )
        with TestClient(create_app(settings, store)) as client:
            statuses = {client.get("/health").status_code for _ in range(TEST_RATE_LIMIT + 3)}
        assert statuses == {200}

    @pytest.mark.parametrize("path", ["/health", "/api/products", "/api/nothing-here"])
    def test_security_headers_on_every_response(self, client: TestClient, path):
        response = client.get(path)
        for name, value in SECURITY_HEADERS.items():
            assert response.headers[name] == value

    def test_rejected_requests_carry_security_headers(self, limited_client: TestClient):
        for _ in range(TEST_RATE_LIMIT):
            limited_client.get("/health")
        response = limited_client.get("/health")
        assert response.status_code == 429
        assert response.headers["X-Content-Type-Options"] == "nosniff"
