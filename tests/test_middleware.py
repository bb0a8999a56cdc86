"""
Middleware & Error Handling Tests
=================================

Route-not-found envelope, security headers, CORS, rate limiting and
the internal-error contract in each environment.
"""

import time

import pytest
from fastapi.testclient import TestClient
from limits import parse

from crud_api.app.main import create_app
from crud_api.app.services import UserService

from .conftest import make_settings


class ExplodingUserService(UserService):
    def count(self) -> int:
        raise RuntimeError("storage exploded")


class TestRouting:

    def test_unknown_route(self, client):
        response = client.get("/api/unknown")
        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Route GET /api/unknown not found"}

    def test_unsupported_method_is_reported_as_missing_route(self, client):
        response = client.patch("/api/users/1", json={})
        assert response.status_code == 404
        assert response.json()["message"] == "Route PATCH /api/users/1 not found"

    def test_security_headers(self, client):
        response = client.get("/health")
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "SAMEORIGIN"

    def test_cors_allows_any_origin_in_tests(self, client):
        response = client.get("/health", headers={"Origin": "http://example.org"})
        assert response.headers["access-control-allow-origin"] == "*"


class TestRateLimiting:

    def test_strict_tier_returns_429(self):
        app = create_app(make_settings(rate_limit_strict_max=2))
        with TestClient(app) as client:
            for i in range(2):
                response = client.post(
                    "/api/users", json={"name": f"U{i}", "email": f"u{i}@example.com", "age": 20}
                )
                assert response.status_code == 201
                assert response.headers["X-RateLimit-Limit"] == "2"
                assert response.headers["X-RateLimit-Remaining"] == str(1 - i)
            response = client.post("/api/users", json={"name": "U", "email": "u@example.com", "age": 20})
            assert response.status_code == 429
            assert response.json() == {
                "success": False,
                "message": "Too many requests from this IP, please try again later.",
                "retryAfter": "1 minutes",
            }
            assert response.headers["X-RateLimit-Remaining"] == "0"
            assert "Retry-After" in response.headers
            # Reads use the general tier and are still allowed.
            assert client.get("/api/users").status_code == 200

    def test_tier_is_shared_across_routes(self):
        app = create_app(make_settings(rate_limit_max=3))
        with TestClient(app) as client:
            assert client.get("/api/users").status_code == 200
            assert client.get("/api/posts").status_code == 200
            assert client.get("/api/users/1").status_code == 200
            assert client.get("/api/posts/stats").status_code == 429
            # Health and info are not rate limited.
            assert client.get("/health").status_code == 200

    def test_new_application_starts_with_fresh_counters(self):
        for _ in range(2):
            app = create_app(make_settings(rate_limit_strict_max=1))
            with TestClient(app) as client:
                response = client.post("/api/posts", json={"title": "T", "content": "C"})
                assert response.status_code == 201

    def test_window_length_is_reported_in_minutes(self):
        app = create_app(make_settings(rate_limit_max=1, rate_limit_window_seconds=900))
        with TestClient(app) as client:
            client.get("/api/users")
            response = client.get("/api/users")
        assert response.status_code == 429
        assert response.json()["retryAfter"] == "15 minutes"

    def test_expired_windows_are_dropped(self):
        app = create_app(make_settings())
        backend = app.state.limiter.limiter
        item = parse("5 per 1 second")
        for i in range(500):
            backend.hit(item, f"10.0.{i // 250}.{i % 250}", "general")
        assert len(backend.storage.storage) == 500

        time.sleep(1.2)
        # Any new hit schedules the sweep of expired counters.
        backend.hit(item, "10.1.0.1", "general")
        time.sleep(0.2)
        assert len(backend.storage.storage) <= 1


class TestInternalErrors:

    @pytest.mark.parametrize("environment, exposes_detail", [("development", True), ("production", False)])
    def test_unexpected_errors_become_500(self, environment, exposes_detail):
        app = create_app(
            make_settings(environment=environment, cors_allowed_origins=""),
            user_service=ExplodingUserService(),
        )
        with TestClient(app, raise_server_exceptions=False) as client:
            response = client.get("/api/users/stats")
        assert response.status_code == 500
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Internal server error"
        if exposes_detail:
            assert body["error"] == "storage exploded"
        else:
            assert "error" not in body
