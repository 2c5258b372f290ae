"""Tests for structured logging helpers and request id middleware."""

import httpx
import pytest
import structlog
from fastapi import FastAPI

from deckgen.telemetry import (
    RequestIdMiddleware,
    bind_generation_context,
    clear_context,
    configure_logging,
)


class TestGenerationContext:
    def test_bind_generation_context_sets_contextvars(self):
        bind_generation_context(theme="minimal", slide_count=7, mode="quick_prompt")

        context = structlog.contextvars.get_contextvars()
        assert context["theme"] == "minimal"
        assert context["slide_count"] == 7
        assert context["mode"] == "quick_prompt"

    def test_clear_context_removes_everything(self):
        bind_generation_context(theme="minimal", slide_count=7, mode="quick_prompt")
        clear_context()
        assert structlog.contextvars.get_contextvars() == {}


class TestConfigureLogging:
    @pytest.mark.parametrize("json_logs", [True, False])
    def test_configure_logging_accepts_both_renderers(self, json_logs):
        configure_logging(json_logs=json_logs, log_level="WARNING")
        structlog.get_logger("test").info("test.event", value=1)


class TestRequestIdMiddleware:
    @pytest.mark.asyncio
    async def test_response_carries_request_id_and_context_is_cleared(self):
        seen: dict = {}

        app = FastAPI()
        app.add_middleware(RequestIdMiddleware)

        @app.get("/ping")
        async def ping() -> dict:
            seen.update(structlog.contextvars.get_contextvars())
            return {"ok": True}

        async with httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app), base_url="http://test"
        ) as ac:
            response = await ac.get("/ping")

        assert response.status_code == 200
        request_id = response.headers["x-request-id"]
        assert request_id.startswith("req_")
        assert seen["request_id"] == request_id
        assert "request_id" not in structlog.contextvars.get_contextvars()
