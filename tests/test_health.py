"""
Tests for health check endpoints.
"""
from fastapi.testclient import TestClient


class TestHealth:
    """Tests for health check endpoints."""

    def test_basic_health(self, client: TestClient):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_api_health_checks_database(self, client: TestClient):
        response = client.get("/api/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["services"]["database"]["status"] == "ok"

    def test_root(self, client: TestClient):
        assert client.get("/").json()["docs"] == "/docs"

    def test_api_health_reports_version(self, client: TestClient):
        from clubledger import __version__

        data = client.get("/api/health").json()

        assert data["version"] == __version__
        assert data["app"] == "Club Ledger API"
