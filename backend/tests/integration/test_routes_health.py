"""
Integration tests for the health check endpoint.

Verifies GET /health returns 200 with status "healthy" in the envelope.
No authentication required for this endpoint.
Version: 1.0.0
"""
import pytest


@pytest.mark.integration
class TestHealthRoutes:
    """Integration tests for the /health endpoint."""

    def test_health_returns_status_healthy(self, client):
        """GET /health should return the success envelope."""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"success": True, "data": {"status": "healthy"}}

    def test_health_response_is_json(self, client):
        response = client.get("/health")
        assert response.headers["content-type"] == "application/json"

    def test_health_wrong_method_not_allowed(self, client):
        """POST /health should return 405 in the error envelope."""
        response = client.post("/health")
        assert response.status_code == 405
        assert response.json()["success"] is False
