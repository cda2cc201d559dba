"""Tests for liveness and health endpoints (F1)."""


class TestLiveness:
    """Tests for GET /test."""

    def test_plain_text_liveness(self, client):
        response = client.get("/test")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert response.text == "Server is working!"


class TestHealthEndpoint:
    """Tests for GET /health."""

    def test_health_returns_ok(self, client):
        data = client.get("/health").json()
        assert data["status"] == "ok"
        assert data["database"] == "ok"

    def test_health_returns_version(self, client):
        assert client.get("/health").json()["version"] == "0.1.0"

    def test_health_returns_timestamp(self, client):
        assert "T" in client.get("/health").json()["timestamp"]

    def test_health_reports_database_error(self, client, monkeypatch):
        monkeypatch.setattr("newgen.web.routes.health.ping", lambda: False)
        assert client.get("/health").json()["database"] == "error"


class TestCors:
    """CORS allows any origin."""

    def test_preflight_any_origin(self, client):
        response = client.options(
            "/signup",
            headers={
                "Origin": "https://example.org",
                "Access-Control-Request-Method": "POST",
            },
        )
        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] in ("*", "https://example.org")
