"""Tests for security middleware and log sanitisation."""

import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient

from deckgen.core.security import (
    RequestSizeLimitMiddleware,
    SecurityHeadersMiddleware,
    sanitize_log_value,
)


class TestSanitizeLogValue:
    """Test log injection prevention."""

    def test_removes_control_characters(self):
        result = sanitize_log_value("topic\nFAKE LOG LINE\r\x00")
        assert result == "topicFAKE LOG LINE"

    def test_truncates_long_values(self):
        result = sanitize_log_value("a" * 1000, max_length=100)
        assert result == "a" * 100 + "..."

    def test_handles_empty_string(self):
        assert sanitize_log_value("") == ""


def _app(*, is_production: bool = False, max_size: int = 1024) -> FastAPI:
    app = FastAPI()
    app.add_middleware(SecurityHeadersMiddleware, is_production=is_production)
    app.add_middleware(RequestSizeLimitMiddleware, max_size=max_size)

    @app.post("/echo")
    async def echo(request: Request) -> dict:
        return {"size": len(await request.body())}

    return app


class TestSecurityHeaders:
    def test_headers_added(self):
        response = TestClient(_app()).post("/echo", content=b"{}")

        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
        assert "frame-ancestors 'none'" in response.headers["Content-Security-Policy"]
        assert "Strict-Transport-Security" not in response.headers

    def test_hsts_in_production(self):
        response = TestClient(_app(is_production=True)).post("/echo", content=b"{}")
        assert response.headers["Strict-Transport-Security"].startswith("max-age=31536000")


class TestRequestSizeLimit:
    @pytest.mark.parametrize(("size", "status"), [(1024, 200), (1025, 413)])
    def test_limit_is_inclusive(self, size, status):
        response = TestClient(_app(max_size=1024)).post("/echo", content=b"x" * size)

        assert response.status_code == status
        if status == 413:
            assert "Maximum allowed: 1024 bytes" in response.json()["detail"]
