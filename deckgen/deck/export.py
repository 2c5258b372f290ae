"""Export-side transformations of a generated deck.

Generated text keeps the model's markdown emphasis for on-screen rendering;
everything that leaves the service as a file goes through ``strip_markdown``
first. Binary PPTX/PDF encoding happens downstream of ``deck_to_document``.
"""

from __future__ import annotations

import re
import time
from typing import Any

from deckgen.deck.schema import Deck, ExportLinks

_MARKDOWN_EMPHASIS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"\*\*(.*?)\*\*"), r"\1"),
    (re.compile(r"\*(.*?)\*"), r"\1"),
    (re.compile(r"__(.*?)__"), r"\1"),
    (re.compile(r"_(.*?)_"), r"\1"),
]
_UNSAFE_FILENAME = re.compile(r'[\\/:*?"<>|\x00-\x1f]+')


def strip_markdown(text: str) -> str:
    """Remove bold/italic markers, keeping the emphasised text."""
    for pattern, replacement in _MARKDOWN_EMPHASIS:
        text = pattern.sub(replacement, text)
    return text.strip()


def build_export_links(scheme: str = "export", now_ms: int | None = None) -> ExportLinks:
    """References under which exporters publish the deck's files."""
    stamp = now_ms if now_ms is not None else int(time.time() * 1000)
    base = f"{scheme}://deck-{stamp}"
    return ExportLinks(
        pptx_url=f"{base}.pptx",
        pdf_url=f"{base}.pdf",
        json_url=f"{base}.json",
    )


def clean_deck(deck: Deck) -> Deck:
    """Copy of ``deck`` with markdown stripped from every user-visible string."""
    slides = []
    for slide in deck.slides:
        update: dict[str, Any] = {
            "title": strip_markdown(slide.title),
            "bullets": [strip_markdown(b) for b in slide.bullets],
        }
        if slide.image is not None:
            update["image"] = slide.image.model_copy(
                update={
                    "alt": strip_markdown(slide.image.alt),
                    "prompt": strip_markdown(slide.image.prompt),
                }
            )
        slides.append(slide.model_copy(update=update))
    return deck.model_copy(update={"title": strip_markdown(deck.title), "slides": slides})


def deck_to_document(deck: Deck, deck_id: str | None = None) -> dict[str, Any]:
    """Block-structured document consumed by the PPTX/PDF exporters."""
    title = strip_markdown(deck.title)
    slides: list[dict[str, Any]] = []
    for index, slide in enumerate(deck.slides):
        blocks: list[dict[str, Any]] = []
        if slide.title:
            blocks.append({"type": "Heading", "text": strip_markdown(slide.title), "level": 1})
        if slide.bullets:
            blocks.append({"type": "Bullets", "items": [strip_markdown(b) for b in slide.bullets]})
        if slide.chart_spec is not None:
            blocks.append({"type": "Chart", "chartSpec": slide.chart_spec.model_dump()})
        if slide.image is not None:
            blocks.append(
                {
                    "type": "Image",
                    "url": slide.image.source or "",
                    "alt": strip_markdown(slide.image.alt),
                    "caption": strip_markdown(slide.image.prompt),
                }
            )
        slides.append(
            {
                "id": f"slide-{index}",
                "layout": slide.layout.value,
                "blocks": blocks,
                "notes": slide.notes,
                "citations": list(slide.citations),
            }
        )

    return {
        "id": deck_id or f"deck-{int(time.time() * 1000)}",
        "title": title,
        "theme": deck.theme.value,
        "meta": {"title": title, "theme": deck.theme.value},
        "slides": slides,
    }


def deck_filename(deck: Deck, extension: str) -> str:
    """Download filename derived from the deck title."""
    stem = _UNSAFE_FILENAME.sub("", strip_markdown(deck.title)).strip() or "presentation"
    return f"{stem}.{extension}"
