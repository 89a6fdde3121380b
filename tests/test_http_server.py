"""Tests for the HTTP server.

These tests require the optional [http] dependencies.
Install with: pip install "claw-router[http]"
"""

import pytest

# Skip all tests in this module if HTTP deps not installed
fastapi = pytest.importorskip(
    "fastapi",
    reason="HTTP dependencies not installed. Install with: pip install 'claw-router[http]'",
)
from fastapi.testclient import TestClient


@pytest.fixture
def client():
    from claw_router.http_server import app

    return TestClient(app)


class TestHealthEndpoint:
    """Tests for the /health endpoint."""

    def test_health_returns_ok(self, client):
        """Health endpoint should return status ok."""
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"
        assert response.json()["service"] == "claw-router"

    def test_health_bypasses_auth(self, client, monkeypatch):
        """Health stays open when a token is configured."""
        monkeypatch.setenv("CLAW_ROUTER_API_TOKEN", "secret")

        assert client.get("/health").status_code == 200


class TestDecideEndpoint:
    """Tests for POST /v1/route/decide."""

    def test_decide_returns_decision(self, client):
        """A message returns the full routing decision."""
        response = client.post("/v1/route/decide", json={"message": "请做一个系统设计"})

        assert response.status_code == 200
        data = response.json()
        assert data["tier"] == "EXPERT"
        assert data["model"] == "default"
        assert data["score"]["override_applied"] == 'expert_keyword ("系统设计")'
        assert len(data["score"]["dimensions"]) == 8
        assert "latency_ms" in data

    def test_missing_message_is_422(self, client):
        """A body without message fails validation."""
        response = client.post("/v1/route/decide", json={})

        assert response.status_code == 422

    def test_session_id_persisted(self, client, tmp_path):
        """session_id is written to the session store."""
        from claw_router.service import get_router

        client.post("/v1/route/decide", json={"message": "hi", "session_id": "web-1"})

        assert get_router().session_store.get("web-1")["model"] == "default"


class TestStatsEndpoints:
    """Tests for /v1/route/stats and /v1/route/status."""

    def test_stats_count_decisions(self, client):
        """Stats reflect routed messages."""
        client.post("/v1/route/decide", json={"message": "hi"})
        client.post("/v1/route/decide", json={"message": "ok"})

        data = client.get("/v1/route/stats").json()

        assert data["total_routed"] == 2
        assert data["tier_counts"]["TRIVIAL"] == 2
        assert data["override_count"] == 2

    def test_status(self, client):
        """Status reports tiers, thresholds and stats."""
        data = client.get("/v1/route/status").json()

        assert set(data["tiers"]) == {"TRIVIAL", "SIMPLE", "MODERATE", "COMPLEX", "EXPERT"}
        assert data["thresholds"] == [0.15, 0.35, 0.55, 0.75]
        assert data["stats"]["total_routed"] == 0


class TestAuth:
    """Bearer token checks when CLAW_ROUTER_API_TOKEN is set."""

    def test_missing_token_401(self, client, monkeypatch):
        """Protected endpoints reject requests without a token."""
        monkeypatch.setenv("CLAW_ROUTER_API_TOKEN", "secret")

        response = client.post("/v1/route/decide", json={"message": "hi"})

        assert response.status_code == 401

    def test_wrong_token_401(self, client, monkeypatch):
        """A wrong token is rejected."""
        monkeypatch.setenv("CLAW_ROUTER_API_TOKEN", "secret")

        response = client.get("/v1/route/stats", headers={"Authorization": "Bearer nope"})

        assert response.status_code == 401

    def test_valid_token_200(self, client, monkeypatch):
        """The configured token is accepted."""
        monkeypatch.setenv("CLAW_ROUTER_API_TOKEN", "secret")

        response = client.get("/v1/route/stats", headers={"Authorization": "Bearer secret"})

        assert response.status_code == 200
