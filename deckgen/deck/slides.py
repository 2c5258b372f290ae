"""Slide and visual stages.

``generate_slide`` turns an outline slot into a draft; ``generate_visual``
turns a draft into an image prompt styled for the deck's theme. Both recover
from model failures with deterministic content so a single bad response never
costs the user a slide.
"""

from __future__ import annotations

import re
from datetime import UTC, datetime
from urllib.parse import quote

import structlog
from pydantic import ValidationError

from deckgen.deck.prompts import slide_prompt, visual_prompt
from deckgen.deck.schema import OutlineSlot, SlideDraft, SlideImage, Visual
from deckgen.llm.client import LLMClient, LLMError
from deckgen.llm.json_repair import JSONRepairError

log = structlog.get_logger(__name__)

PLACEHOLDER_SOURCE = "placeholder"
DEFAULT_IMAGE_KEYWORDS = "business,presentation,professional"

_NON_WORD = re.compile(r"[^\w\s]")


def unsplash_url(topic: str) -> str:
    """Stock-photo URL searching on up to three meaningful words of ``topic``."""
    words = [w for w in _NON_WORD.sub("", topic).split(" ") if len(w) > 3]
    search = ",".join(words[:3]) or DEFAULT_IMAGE_KEYWORDS
    return f"https://source.unsplash.com/800x600/?{quote(search, safe='')}"


def generate_citations(topic: str, year: int | None = None) -> list[str]:
    """Generic source lines for fallback slides."""
    year = year or datetime.now(UTC).year
    return [
        f"Industry research on {topic}, {year}",
        f"Market analysis and trends, {year - 1}-{year}",
    ]


def fallback_slide_draft(slot: OutlineSlot) -> SlideDraft:
    topic = slot.title or "Key Concepts"
    return SlideDraft(
        title=f"**{topic}**: Overview",
        bullets=[
            f"**Core Concept**: {topic} fundamentals",
            "**Key Metrics**: Measurable outcomes",
            "**Innovation**: Latest developments",
        ],
        notes="",
        chart_spec=None,
        citations=generate_citations(topic),
        image=SlideImage(
            prompt=(
                f"Modern infographic showing {topic} with icons, arrows, and data "
                "visualizations in a clean, professional style"
            ),
            alt=f"{topic} concept diagram",
            source=unsplash_url(topic),
        ),
    )


def _ensure_image(draft: SlideDraft, slot: OutlineSlot) -> SlideDraft:
    if draft.image is None:
        image = SlideImage(
            prompt=f"Professional {slot.title} diagram with modern, clean design",
            alt=f"Visual representation of {slot.title}",
            source=unsplash_url(slot.title),
        )
        return draft.model_copy(update={"image": image})
    if not draft.image.source or draft.image.source == PLACEHOLDER_SOURCE:
        image = draft.image.model_copy(update={"source": unsplash_url(slot.title)})
        return draft.model_copy(update={"image": image})
    return draft


async def generate_slide(llm: LLMClient, slot: OutlineSlot, facts: str = "") -> SlideDraft:
    """Draft the content of one slide. Never raises for model failures."""
    try:
        raw = await llm.complete_json(slide_prompt(slot, facts))
        draft = SlideDraft.model_validate(raw)
    except (LLMError, JSONRepairError, ValidationError) as exc:
        log.warning(
            "deck.slide.fallback",
            slot_title=slot.title,
            error_type=type(exc).__name__,
            error=str(exc),
        )
        return fallback_slide_draft(slot)

    return _ensure_image(draft, slot)


async def generate_visual(
    llm: LLMClient,
    *,
    title: str,
    bullets: list[str],
    theme_style: str,
) -> Visual:
    """Produce an image prompt and alt text for a drafted slide."""
    prompt = visual_prompt(title=title, bullets=bullets, theme_style=theme_style)
    try:
        raw = await llm.complete_json(prompt)
        return Visual.model_validate(raw)
    except (LLMError, JSONRepairError, ValidationError) as exc:
        log.warning(
            "deck.visual.fallback",
            slide_title=title,
            error_type=type(exc).__name__,
            error=str(exc),
        )
        return Visual(
            prompt=f"Minimalist illustration of {title}",
            alt=f"Visual representation of {title}",
        )
