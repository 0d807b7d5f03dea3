"""Integration tests for the standardized failure envelope."""

from __future__ import annotations

import logging

import pytest

pytestmark = pytest.mark.integration


class TestStandardizedErrors:
    def test_validation_error_has_standard_format(self, api_client):
        response = api_client.post("/api/categories", {}, format="json")

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "Validation Error"
        assert isinstance(body["details"], list)
        assert {"field", "message"} == body["details"][0].keys()

    def test_malformed_json(self, api_client):
        response = api_client.post(
            "/api/products", data="{", content_type="application/json"
        )

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "Bad Request"
        assert "message" in body

    def test_method_not_allowed(self, api_client):
        response = api_client.put("/api/cart", {}, format="json")

        assert response.status_code == 405
        assert response.json()["error"] == "Method Not Allowed"

    def test_unknown_route(self, api_client):
        response = api_client.get("/api/unknown")

        assert response.status_code == 404
        assert response.json() == {
            "success": False,
            "error": "Not Found",
            "message": "Route /api/unknown not found",
        }

    def test_trailing_slash_is_unknown_route(self, api_client):
        response = api_client.get("/api/products/")
        assert response.status_code == 404
        assert response.json()["message"] == "Route /api/products/ not found"

    def test_rejection_is_logged_as_warning(self, api_client, caplog):
        with caplog.at_level(logging.INFO):
            api_client.get("/api/products/00000000-0000-0000-0000-000000000000")

        rejected = [r for r in caplog.records if "request.rejected" in r.getMessage()]
        assert rejected
        assert rejected[0].levelno == logging.WARNING

    def test_unexpected_failure_is_opaque(self, api_client, monkeypatch, settings):
        from modules.catalog.services import CategoryService

        def boom(self):
            raise RuntimeError("connection string leaked")

        settings.EXPOSE_ERROR_DETAILS = False
        monkeypatch.setattr(CategoryService, "list_categories", boom)

        response = api_client.get("/api/categories")

        assert response.status_code == 500
        assert response.json() == {
            "success": False,
            "error": "Internal Server Error",
            "message": "Something went wrong",
        }

    def test_unexpected_failure_detail_exposed(self, api_client, monkeypatch, settings):
        from modules.catalog.services import CategoryService

        def boom(self):
            raise RuntimeError("boom")

        settings.EXPOSE_ERROR_DETAILS = True
        monkeypatch.setattr(CategoryService, "list_categories", boom)

        response = api_client.get("/api/categories")

        assert response.status_code == 500
        assert response.json()["message"] == "boom"
