"""Tests for health check endpoints."""


class TestHealthEndpoints:
    """Tests for health check endpoints."""

    def test_health_check(self, client):
        """Health endpoint should return 200 with status."""
        response = client.get("/api/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["version"] == "1.0.0"

    def test_health_response_structure(self, client):
        response = client.get("/api/health")
        assert set(response.json().keys()) == {"status", "version"}

    def test_health_needs_no_session(self, client):
        assert "tasker_session" not in client.cookies
        assert client.get("/api/health").status_code == 200
