"""Tests for application wiring: health, pages and error envelopes."""

import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from shared.exceptions import DashboardError, NotFoundError


@pytest.fixture
def app():
    """Create a fresh app for each test."""
    return create_app()


class TestHealth:
    def test_health_check(self, app):
        response = TestClient(app).get("/api/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "version": "0.1.0"}


class TestPages:
    def test_home_shell(self, app):
        response = TestClient(app).get("/")

        assert response.status_code == 200
        assert '<div id="root" data-page="home">' in response.text
        assert "<title>Home | Dashboard API</title>" in response.text


class TestErrorHandlers:
    def test_domain_error_envelope(self, app):
        @app.get("/api/test/missing")
        async def missing():
            raise NotFoundError("Thing not found", code="THING_NOT_FOUND")

        response = TestClient(app).get("/api/test/missing")

        assert response.status_code == 404
        assert response.json() == {"error": "Thing not found", "code": "THING_NOT_FOUND"}

    def test_base_error_is_500(self, app):
        @app.get("/api/test/base")
        async def base():
            raise DashboardError("Something broke")

        response = TestClient(app).get("/api/test/base")

        assert response.status_code == 500
        assert response.json()["code"] == "DashboardError"

    def test_unexpected_error_hides_details(self, app):
        @app.get("/api/test/crash")
        async def crash():
            raise RuntimeError("secret internals")

        response = TestClient(app, raise_server_exceptions=False).get("/api/test/crash")

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error", "code": "INTERNAL_ERROR"}

    def test_unknown_api_route(self, app):
        response = TestClient(app).get("/api/nope")

        assert response.status_code == 404
        assert response.json()["code"] == "HTTP_404"
