"""ABOUTME: End-to-end health check endpoint tests
ABOUTME: Tests the ping and health endpoints with different database states"""

from unittest.mock import patch

from flask.testing import FlaskClient

from gamehub import __version__


def test_ping(client: FlaskClient):
    response = client.get("/ping")

    assert response.status_code == 200
    assert response.get_data(as_text=True) == "pong"


class TestHealthCheckEndpoint:
    def test_healthy(self, client: FlaskClient, register_and_confirm):
        register_and_confirm()

        response = client.get("/health")

        assert response.status_code == 200
        data = response.get_json()
        assert data == {"database_ok": True, "account_count": 1, "version": __version__}

    def test_fields_keep_their_order(self, client: FlaskClient):
        response = client.get("/health")

        body = response.get_data(as_text=True)
        assert body.index('"database_ok"') < body.index('"account_count"') < body.index('"version"')

    def test_database_failure(self, client: FlaskClient):
        with patch("gamehub.entrypoints.blueprints.health.check_database", return_value=(False, "UNKNOWN")):
            response = client.get("/health")

        assert response.status_code == 500
        data = response.get_json()
        assert data["database_ok"] is False
        assert data["account_count"] == "UNKNOWN"


class TestErrorHandlers:
    def test_unknown_route_is_json_404(self, client: FlaskClient):
        response = client.get("/no-such-endpoint")

        assert response.status_code == 404
        assert response.get_json() == {"error": "Endpoint not found"}

    def test_wrong_method_is_json_405(self, client: FlaskClient):
        response = client.get("/register")

        assert response.status_code == 405
        assert "error" in response.get_json()
