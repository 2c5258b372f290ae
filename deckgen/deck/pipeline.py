"""Deck generation pipeline.

Stages, all sequential and each bounded by its own deadline:

1. Document summary (doc_to_deck mode only)
2. Outline, reconciled to the requested slide count
3. Per slot: slide draft -> optional chart from document tables -> visual
4. Deck assembly and export references

Only the outline deadline fails a request. Every per-slot failure is replaced
by a placeholder slide, so the deck always has exactly ``slide_count`` slides.
"""

from __future__ import annotations

import asyncio

import structlog

from deckgen.config import Settings, get_settings
from deckgen.core.security import sanitize_log_value
from deckgen.deck.documents import (
    attach_chart_spec,
    harvest_facts_for_slide,
    parse_documents,
    table_for_title,
    table_matches_title,
)
from deckgen.deck.export import build_export_links
from deckgen.deck.outline import OutlineParams, generate_outline, reconcile_slide_count
from deckgen.deck.schema import (
    Deck,
    GenerateDeckRequest,
    GenerateDeckResponse,
    Mode,
    OutlineSlot,
    Slide,
    SlideImage,
)
from deckgen.deck.slides import generate_slide, generate_visual
from deckgen.deck.themes import get_theme
from deckgen.llm.client import LLMClient
from deckgen.telemetry.logging import bind_generation_context

log = structlog.get_logger(__name__)

PLACEHOLDER_BULLET = "Content generation in progress..."
PLACEHOLDER_NOTES = "This slide content is being generated."


class DeckGenerationError(Exception):
    """A pipeline stage failed in a way its fallbacks do not cover."""


def placeholder_slide(slot: OutlineSlot) -> Slide:
    """Stand-in for a slot whose content could not be generated."""
    return Slide(
        layout=slot.layout,
        title=slot.title,
        bullets=[PLACEHOLDER_BULLET],
        notes=PLACEHOLDER_NOTES,
        chart_spec=None,
        image=SlideImage(prompt=f"Visual for {slot.title}", alt=slot.title, source="generated"),
        citations=[],
    )


class DeckGenerator:
    """Runs the generation pipeline for one request at a time."""

    def __init__(self, llm: LLMClient, settings: Settings | None = None) -> None:
        self._llm = llm
        self._settings = settings or get_settings()

    async def generate(self, request: GenerateDeckRequest) -> GenerateDeckResponse:
        """Build a deck for ``request``.

        Raises:
            DeckGenerationError: the outline stage missed its deadline
        """
        settings = self._settings
        bind_generation_context(
            theme=request.theme.value,
            slide_count=request.slide_count,
            mode=request.mode.value,
        )
        log.info(
            "deck.generation_started",
            topic=sanitize_log_value(request.topic),
            audience=request.audience.value,
            tone=request.tone.value,
            live_widgets=request.live_widgets,
        )

        doc_summary = ""
        if request.mode == Mode.DOC_TO_DECK and request.assets and request.assets.doc_urls:
            doc_summary = parse_documents(request.assets.doc_urls, notes=request.instructions)

        params = OutlineParams(
            slide_count=request.slide_count,
            audience=request.audience.value,
            tone=request.tone.value,
            topic=request.topic,
            doc_summary=doc_summary,
        )
        try:
            outline = await asyncio.wait_for(
                generate_outline(self._llm, params),
                timeout=settings.outline_timeout_seconds,
            )
        except TimeoutError as exc:
            raise DeckGenerationError(
                f"Outline generation timed out after {settings.outline_timeout_seconds:g} seconds"
            ) from exc

        if outline.total_slides != request.slide_count:
            log.warning(
                "deck.outline.count_mismatch",
                generated=outline.total_slides,
                requested=request.slide_count,
            )
            outline = reconcile_slide_count(outline, request.slide_count)

        theme_style = get_theme(request.theme).image_style
        slots = outline.slots()
        slides: list[Slide] = []
        for position, slot in enumerate(slots, start=1):
            log.info(
                "deck.slide.generating",
                position=position,
                total=len(slots),
                slot_title=sanitize_log_value(slot.title),
            )
            slides.append(await self._build_slide(slot, doc_summary, theme_style))

        deck = Deck(title=outline.title, theme=request.theme, slides=slides)
        exports = build_export_links(settings.export_url_scheme)

        log.info("deck.generation_completed", slides=len(slides))
        return GenerateDeckResponse(deck=deck, exports=exports)

    async def _build_slide(self, slot: OutlineSlot, doc_summary: str, theme_style: str) -> Slide:
        settings = self._settings
        try:
            facts = harvest_facts_for_slide(doc_summary, slot.title) if doc_summary else ""
            draft = await asyncio.wait_for(
                generate_slide(self._llm, slot, facts),
                timeout=settings.slide_timeout_seconds,
            )

            if draft.chart_spec is None and table_matches_title(doc_summary, slot.title):
                draft = attach_chart_spec(draft, table_for_title(doc_summary, slot.title))

            visual = await asyncio.wait_for(
                generate_visual(
                    self._llm,
                    title=draft.title,
                    bullets=draft.bullets,
                    theme_style=theme_style,
                ),
                timeout=settings.visual_timeout_seconds,
            )
        except Exception as exc:
            log.error(
                "deck.slide.failed",
                slot_title=sanitize_log_value(slot.title),
                error_type=type(exc).__name__,
                error=str(exc),
                exc_info=not isinstance(exc, TimeoutError),
            )
            return placeholder_slide(slot)

        return Slide(
            layout=slot.layout,
            title=draft.title,
            bullets=draft.bullets,
            notes=draft.notes,
            chart_spec=draft.chart_spec,
            image=SlideImage(prompt=visual.prompt, alt=visual.alt, source="generated"),
            citations=draft.citations,
        )
