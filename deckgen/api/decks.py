"""Deck generation endpoint - POST /generate-deck

This is the primary endpoint. It:
1. Checks the per-client rate limit
2. Validates the request (400 on invalid data, see main.py)
3. Runs the generation pipeline
4. Returns the deck and its export references

Pipeline failures that fallbacks cannot absorb come back as 500 with a
user-facing ``error`` and the raw ``details``.
"""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from deckgen.config import Settings, get_settings
from deckgen.core.rate_limit import RateLimiter, client_key, get_rate_limiter
from deckgen.deck.pipeline import DeckGenerationError, DeckGenerator
from deckgen.deck.schema import GenerateDeckRequest, GenerateDeckResponse
from deckgen.llm.client import LLMClient, LLMError, LLMTimeoutError, LLMUnavailableError

log = structlog.get_logger(__name__)

router = APIRouter(tags=["decks"])


def get_deck_generator(settings: Settings = Depends(get_settings)) -> DeckGenerator:
    """FastAPI dependency - a generator bound to the configured LLM."""
    return DeckGenerator(LLMClient(settings), settings)


def user_facing_error(exc: Exception, settings: Settings) -> str:
    """Translate a pipeline failure into a message the user can act on."""
    message = str(exc)
    lowered = message.lower()

    if isinstance(exc, LLMUnavailableError) or "connect" in lowered or "network" in lowered:
        target = settings.effective_base_url or "the configured LLM endpoint"
        return (
            f"Cannot connect to AI service at {target}. Please ensure your LLM provider "
            "is running or configure LLM_PROVIDER / LLM_BASE_URL."
        )
    if isinstance(exc, LLMTimeoutError | TimeoutError) or "timed out" in lowered:
        return "Request timed out. The AI service may be slow or unavailable. Please try again."
    if message:
        return f"Generation failed: {message}"
    return "Deck generation failed"


@router.post(
    "/generate-deck",
    response_model=GenerateDeckResponse,
    summary="Generate a slide deck",
    description=(
        "Generate an outline, per-slide content and image prompts for a topic or "
        "uploaded documents. The deck always contains exactly `slide_count` slides."
    ),
    responses={
        400: {"description": "Invalid request data"},
        429: {"description": "Rate limit exceeded"},
        500: {"description": "Generation failed"},
    },
)
async def generate_deck(
    body: GenerateDeckRequest,
    request: Request,
    settings: Settings = Depends(get_settings),
    rate_limiter: RateLimiter = Depends(get_rate_limiter),
    generator: DeckGenerator = Depends(get_deck_generator),
) -> GenerateDeckResponse | JSONResponse:
    await rate_limiter.check(client_key(request))

    try:
        return await generator.generate(body)
    except (DeckGenerationError, LLMError) as exc:
        log.error(
            "deck.generation_failed",
            error_type=type(exc).__name__,
            error=str(exc),
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": user_facing_error(exc, settings),
                "details": str(exc),
            },
        )
