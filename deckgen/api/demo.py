"""Demo fixture endpoints for UI development without a model."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter

from deckgen.deck.demo_data import DEMO_DECK, DEMO_LIVE_WIDGETS, DEMO_TOPICS
from deckgen.deck.schema import Deck, GenerateDeckRequest

router = APIRouter(prefix="/demo", tags=["demo"])


@router.get("/deck", response_model=Deck)
async def demo_deck() -> Deck:
    return DEMO_DECK


@router.get("/topics", response_model=list[GenerateDeckRequest])
async def demo_topics() -> list[GenerateDeckRequest]:
    return DEMO_TOPICS


@router.get("/widgets")
async def demo_widgets() -> list[dict[str, Any]]:
    return DEMO_LIVE_WIDGETS
