"""
Shared test fixtures for pytest.

Provides common settings, fakes and apps for all test modules:
- fake_settings: Test environment configuration (demo provider, no latency)
- demo_llm: Real LLMClient on the demo provider
- mock_llm: LLMClient mock whose complete_json is an AsyncMock
- rate_limiter: Fresh in-process rate limiter
- test_app: Full application from create_app() with test overrides
- client: Async HTTP client for the test app
"""

from collections.abc import Callable
from typing import Any, AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
import pytest_asyncio
import structlog
from fastapi import FastAPI

from deckgen.config import Environment, LLMProvider, Settings, get_settings
from deckgen.core.rate_limit import RateLimiter, get_rate_limiter
from deckgen.deck.schema import Deck, Layout, Slide, SlideImage, ThemeName
from deckgen.llm.client import LLMClient


# ------------------------------------------------------------------ #
# Session-scoped: clear settings cache between test sessions
# ------------------------------------------------------------------ #

@pytest.fixture(autouse=True, scope="session")
def _clear_settings_cache():
    """Clear the lru_cache on get_settings so test overrides take effect."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Generation context bound by one test must not leak into the next."""
    yield
    structlog.contextvars.clear_contextvars()


# ------------------------------------------------------------------ #
# Settings & LLM Fixtures
# ------------------------------------------------------------------ #

@pytest.fixture
def fake_settings() -> Settings:
    """Test environment settings with safe defaults."""
    return Settings(
        environment=Environment.TEST,
        llm_provider=LLMProvider.DEMO,
        demo_latency_seconds=0,
        outline_timeout_seconds=5,
        slide_timeout_seconds=5,
        visual_timeout_seconds=5,
        rate_limit_requests=100,
        rate_limit_window_seconds=60,
    )


@pytest.fixture
def demo_llm(fake_settings: Settings) -> LLMClient:
    """LLM client answering with canned demo responses."""
    return LLMClient(fake_settings)


@pytest.fixture
def mock_llm() -> MagicMock:
    """LLM client mock. Set ``complete_json.return_value`` / ``side_effect`` per test."""
    llm = MagicMock(spec=LLMClient)
    llm.complete = AsyncMock(return_value="")
    llm.complete_json = AsyncMock(return_value={})
    return llm


def _outline_payload(*section_sizes: int) -> dict[str, Any]:
    return {
        "title": "**Remote Work**: The New Normal",
        "sections": [
            {
                "name": f"Section {s + 1}",
                "slides": [
                    {"title": f"Slide {s + 1}.{i + 1}", "layout": "title_bullets"}
                    for i in range(size)
                ],
            }
            for s, size in enumerate(section_sizes)
        ],
    }


@pytest.fixture
def outline_payload() -> Callable[..., dict[str, Any]]:
    """Builder for model-style outline dicts: sizes of each section's slot list."""
    return _outline_payload


@pytest.fixture
def sample_deck() -> Deck:
    """Small deck with markdown emphasis in its text."""
    return Deck(
        title="**Remote Work**: The New Normal",
        theme=ThemeName.CORPORATE,
        slides=[
            Slide(
                layout=Layout.TITLE_BULLETS,
                title="Why **Remote Work** Matters",
                bullets=["**85%** of teams are hybrid", "Output up *12%*"],
                notes="Open with the headline figure.",
                image=SlideImage(
                    prompt="Team on a **video call**",
                    alt="Remote *team*",
                    source="generated",
                ),
                citations=["Industry research on Remote Work, 2025"],
            ),
            Slide(layout=Layout.QUOTE, title="In Their Words", bullets=[]),
        ],
    )


# ------------------------------------------------------------------ #
# App Fixtures
# ------------------------------------------------------------------ #

@pytest.fixture
def rate_limiter(fake_settings: Settings) -> RateLimiter:
    return RateLimiter(fake_settings.rate_limit_requests, fake_settings.rate_limit_window_seconds)


@pytest.fixture
def test_app(
    fake_settings: Settings,
    rate_limiter: RateLimiter,
    monkeypatch: pytest.MonkeyPatch,
) -> FastAPI:
    """Create FastAPI test app instance with test settings.

    Overrides get_settings (at construction and as a dependency) and the
    rate limiter so each test starts with a clean allowance.
    """
    from deckgen.main import create_app

    get_settings.cache_clear()
    monkeypatch.setattr("deckgen.main.get_settings", lambda: fake_settings)

    app = create_app()
    app.dependency_overrides[get_settings] = lambda: fake_settings
    app.dependency_overrides[get_rate_limiter] = lambda: rate_limiter
    return app


@pytest_asyncio.fixture
async def client(test_app: FastAPI) -> AsyncGenerator[httpx.AsyncClient, None]:
    """Async HTTP client bound to the test app."""
    transport = httpx.ASGITransport(app=test_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
