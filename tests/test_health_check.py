from unittest.mock import patch


class TestHealthCheck:
    def test_all_services_up(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "timestamp" in data
        assert set(data["services"]) == {"database", "cache", "storage"}
        assert all(s["status"] == "up" for s in data["services"].values())
        assert "response_time_ms" in data["services"]["database"]

    def test_is_public(self, api_client):
        assert api_client.get("/health").status_code == 200

    def test_cache_miss_is_unhealthy(self, client):
        with patch("modules.core.views.cache") as cache:
            cache.get.return_value = None
            response = client.get("/health")

        assert response.status_code == 503
        services = response.json()["services"]
        assert services["cache"] == {"status": "down"}
        assert services["database"]["status"] == "up"

    def test_unreachable_storage_is_unhealthy(self, client):
        with patch("modules.core.views.default_storage") as storage:
            storage.exists.side_effect = OSError("bucket unreachable")
            response = client.get("/health")

        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"
        assert response.json()["services"]["storage"] == {"status": "down"}
