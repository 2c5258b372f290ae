"""Outline stage: ask the model for sections and slots, then enforce the count.

Models routinely miscount slides, so whatever comes back is reconciled to the
requested count. Any failure (transport, JSON, shape) degrades to a
deterministic outline built from the topic alone.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog
from pydantic import ValidationError

from deckgen.deck.prompts import outline_prompt
from deckgen.deck.schema import Layout, Outline, OutlineSection, OutlineSlot
from deckgen.llm.client import LLMClient, LLMError
from deckgen.llm.json_repair import JSONRepairError

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class OutlineParams:
    slide_count: int
    audience: str
    tone: str
    topic: str
    doc_summary: str = ""


async def generate_outline(llm: LLMClient, params: OutlineParams) -> Outline:
    """Generate an outline with exactly ``params.slide_count`` slots."""
    prompt = outline_prompt(
        topic=params.topic,
        slide_count=params.slide_count,
        audience=params.audience,
        tone=params.tone,
        doc_summary=params.doc_summary,
    )

    try:
        raw = await llm.complete_json(prompt)
        outline = Outline.model_validate(raw)
    except (LLMError, JSONRepairError, ValidationError) as exc:
        log.warning(
            "deck.outline.fallback",
            error_type=type(exc).__name__,
            error=str(exc),
        )
        return fallback_outline(params.topic, params.slide_count)

    _fill_slot_sections(outline)

    if outline.total_slides != params.slide_count:
        log.warning(
            "deck.outline.count_mismatch",
            generated=outline.total_slides,
            requested=params.slide_count,
        )
        outline = reconcile_slide_count(outline, params.slide_count)

    log.info(
        "deck.outline.generated",
        sections=len(outline.sections),
        slides=outline.total_slides,
    )
    return outline


def _fill_slot_sections(outline: Outline) -> None:
    for section in outline.sections:
        for slot in section.slides:
            if not slot.section:
                slot.section = section.name


def reconcile_slide_count(outline: Outline, target: int) -> Outline:
    """Return a copy of ``outline`` holding exactly ``target`` slots.

    Short outlines get "Additional Key Point" slots appended to the last
    section. Long outlines lose slots from the end, walking back through
    sections and dropping any a trim leaves empty (the first section always
    stays).
    """
    if target < 1:
        raise ValueError(f"Slide count must be positive, got {target}")

    result = outline.model_copy(deep=True)
    total = result.total_slides

    if total < target:
        last = result.sections[-1]
        for i in range(target - total):
            last.slides.append(
                OutlineSlot(
                    title=f"Additional Key Point {i + 1}",
                    layout=Layout.TITLE_BULLETS,
                    section=last.name,
                )
            )
    elif total > target:
        excess = total - target
        while excess > 0:
            last = result.sections[-1]
            removable = min(excess, len(last.slides))
            if removable:
                del last.slides[len(last.slides) - removable :]
                excess -= removable
            if not last.slides and len(result.sections) > 1:
                result.sections.pop()

    return result


def fallback_outline(topic: str, slide_count: int) -> Outline:
    """Deterministic three-act outline used when the model cannot deliver one."""
    topic = topic.strip() or "Your Topic"
    sections: list[OutlineSection] = []
    remaining = slide_count

    opening = min(2, remaining)
    sections.append(
        OutlineSection(
            name="Opening",
            slides=[
                OutlineSlot(
                    title=f"**{topic}**: What You Need to Know" if i == 0 else "Current State & Trends",
                    layout=Layout.TITLE_BULLETS,
                    section="Opening",
                )
                for i in range(opening)
            ],
        )
    )
    remaining -= opening

    analysis = max(1, remaining - 2)
    analysis_titles = ["Key Challenges & Opportunities", "Data-Driven Insights"]
    sections.append(
        OutlineSection(
            name="Analysis",
            slides=[
                OutlineSlot(
                    title=analysis_titles[i] if i < len(analysis_titles) else f"Key Point {i + 1}",
                    layout=Layout.CHART if i == 1 else Layout.TITLE_BULLETS,
                    section="Analysis",
                )
                for i in range(analysis)
            ],
        )
    )
    remaining -= analysis

    if remaining > 0:
        sections.append(
            OutlineSection(
                name="Conclusion",
                slides=[
                    OutlineSlot(
                        title="Impact & Results" if i == 0 else "Next Steps & Takeaways",
                        layout=Layout.TITLE_BULLETS,
                        section="Conclusion",
                    )
                    for i in range(remaining)
                ],
            )
        )

    outline = Outline(title=f"**{topic}**: Key Insights & Analysis", sections=sections)
    if outline.total_slides != slide_count:
        outline = reconcile_slide_count(outline, slide_count)
    return outline
