"""Integration tests for the sales coordinator and catalog APIs."""

from __future__ import annotations

from uuid import uuid4

import pytest

from modules.catalog.models import ProductCategory, ProductName
from modules.coordinators.models import SalesCoordinator

pytestmark = pytest.mark.integration

URL = "/api/v1/coordinators/"


class TestCoordinatorApi:
    def test_list_sorted_by_name(self, auth_client, coordinator):
        SalesCoordinator.objects.create(name="Aarav Shah", email="aarav@example.com")

        response = auth_client.get(URL)

        assert response.status_code == 200
        assert [c["name"] for c in response.json()] == ["Aarav Shah", "Priya Nair"]

    def test_create(self, auth_client):
        response = auth_client.post(
            URL,
            {"name": "Sara Khan", "email": "sara@example.com", "phone": "+91 98450 33333"},
            format="json",
            HTTP_X_SESSION_ID="desk-1",
        )

        assert response.status_code == 201
        assert response.json()["name"] == "Sara Khan"
        assert SalesCoordinator.objects.filter(email="sara@example.com").exists()
        toasts = auth_client.get("/api/v1/notifications/", HTTP_X_SESSION_ID="desk-1").json()
        assert [t["title"] for t in toasts] == ["Coordinator Added"]

    def test_create_requires_valid_email(self, auth_client):
        response = auth_client.post(URL, {"name": "Sara", "email": "nope"}, format="json")
        assert response.status_code == 400

    def test_create_rejects_blank_name(self, auth_client):
        response = auth_client.post(
            URL, {"name": "   ", "email": "sara@example.com"}, format="json"
        )
        assert response.status_code == 400

    def test_partial_update(self, auth_client, coordinator):
        response = auth_client.patch(
            f"{URL}{coordinator.id}/", {"phone": "+91 90000 00000"}, format="json"
        )

        assert response.status_code == 200
        coordinator.refresh_from_db()
        assert coordinator.phone == "+91 90000 00000"
        assert coordinator.name == "Priya Nair"

    def test_update_unknown(self, auth_client):
        response = auth_client.patch(f"{URL}{uuid4()}/", {"name": "Nobody"}, format="json")
        assert response.status_code == 404

    def test_retrieve(self, auth_client, coordinator):
        response = auth_client.get(f"{URL}{coordinator.id}/")
        assert response.status_code == 200
        assert response.json()["email"] == "priya@example.com"


class TestCatalogApi:
    def test_catalog_payload(self, auth_client, product, black, white):
        response = auth_client.get("/api/v1/catalog/")

        assert response.status_code == 200
        data = response.json()
        assert [c["name"] for c in data["categories"]] == ["T-Shirts"]
        assert [p["name"] for p in data["products"]] == ["Polo Tee"]
        assert data["products"][0]["available_colors"] == [str(black.id)]
        assert [c["name"] for c in data["colors"]] == ["Black", "White"]

    def test_products_filtered_by_category(self, auth_client, product):
        headwear = ProductCategory.objects.create(name="Headwear")
        ProductName.objects.create(name="Cap", category=headwear)

        data = auth_client.get("/api/v1/catalog/", {"category": str(headwear.id)}).json()

        assert [p["name"] for p in data["products"]] == ["Cap"]
