"""Integration tests for /health and /metrics endpoints."""

from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient
from pydantic import SecretStr

from trava.config import Settings
from trava.main import app


@pytest.fixture
def client() -> TestClient:
    """Create test client."""
    return TestClient(app)


class TestHealthEndpoint:
    """Test /health endpoint."""

    @patch("trava.api.routes.health.get_settings")
    def test_health_reports_synthetic_only_without_key(
        self, mock_get_settings: MagicMock, client: TestClient
    ) -> None:
        mock_get_settings.return_value = Settings(openai_api_key=None)

        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "components": {"ai": "synthetic_only"}}

    @patch("trava.api.routes.health.get_settings")
    def test_health_reports_configured_ai(
        self, mock_get_settings: MagicMock, client: TestClient
    ) -> None:
        mock_get_settings.return_value = Settings(openai_api_key=SecretStr("sk-test"))

        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["components"]["ai"] == "configured"


class TestMetricsEndpoint:
    """Test /metrics endpoint."""

    def test_metrics_exposes_generation_counters(self, client: TestClient) -> None:
        """Generating once makes the labelled counters appear in the exposition."""
        body = {"destination": "Lisbon", "start_date": "2026-06-10", "end_date": "2026-06-11"}
        assert client.post("/itinerary/generate", json=body).status_code == 200

        response = client.get("/metrics")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        text = response.text
        assert "itinerary_generation_total" in text
        assert "itinerary_ai_failures_total" in text
        assert "itinerary_recovery_stage_total" in text or "itinerary_ai_latency_ms" in text


def test_root(client: TestClient) -> None:
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["message"] == "Trava Itinerary API"
