"""Request, outline and deck models.

Model output is validated into these types as soon as it is parsed, so the
rest of the pipeline never handles raw dicts. Validation is lenient where
models are sloppy (unknown layouts, missing lists) and strict where the
pipeline depends on a value (slot titles, section names).
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator


class Mode(StrEnum):
    QUICK_PROMPT = "quick_prompt"
    DOC_TO_DECK = "doc_to_deck"


class Tone(StrEnum):
    PROFESSIONAL = "professional"
    CASUAL = "casual"
    ACADEMIC = "academic"
    PERSUASIVE = "persuasive"


class Audience(StrEnum):
    GENERAL = "general"
    EXECUTIVES = "executives"
    TECHNICAL = "technical"
    STUDENTS = "students"


class ThemeName(StrEnum):
    DEEP_SPACE = "deep_space"
    ULTRA_VIOLET = "ultra_violet"
    MINIMAL = "minimal"
    CORPORATE = "corporate"


class Layout(StrEnum):
    TITLE = "title"
    TITLE_BULLETS = "title_bullets"
    TWO_COLUMN = "two_column"
    QUOTE = "quote"
    CHART = "chart"
    IMAGE_FULL = "image_full"


def coerce_layout(value: Any) -> Layout:
    """Map a model-supplied layout string onto a known layout."""
    try:
        return Layout(str(value).strip().lower())
    except ValueError:
        return Layout.TITLE_BULLETS


# ------------------------------------------------------------------ #
# Request
# ------------------------------------------------------------------ #


class Assets(BaseModel):
    doc_urls: list[str] | None = None
    image_urls: list[str] | None = None
    xlsx_urls: list[str] | None = None


class GenerateDeckRequest(BaseModel):
    mode: Mode
    topic_or_prompt: str | None = Field(default=None, max_length=10_000)
    instructions: str | None = Field(default=None, max_length=10_000)
    tone: Tone = Tone.PROFESSIONAL
    audience: Audience = Audience.GENERAL
    slide_count: int = Field(default=10, ge=3, le=50)
    theme: ThemeName = ThemeName.DEEP_SPACE
    live_widgets: bool = False
    assets: Assets | None = None

    @property
    def topic(self) -> str:
        """What the deck is about: the prompt, else the instructions."""
        return self.topic_or_prompt or self.instructions or ""


# ------------------------------------------------------------------ #
# Outline
# ------------------------------------------------------------------ #


class OutlineSlot(BaseModel):
    title: str = Field(min_length=1)
    layout: Layout = Layout.TITLE_BULLETS
    section: str = ""

    @field_validator("layout", mode="before")
    @classmethod
    def _known_layout(cls, value: Any) -> Layout:
        return coerce_layout(value)

    @field_validator("section", mode="before")
    @classmethod
    def _section_text(cls, value: Any) -> Any:
        # null sections are filled from the enclosing section later
        return "" if value is None else value


class OutlineSection(BaseModel):
    name: str = Field(min_length=1)
    slides: list[OutlineSlot] = Field(default_factory=list)


class Outline(BaseModel):
    title: str = Field(min_length=1)
    sections: list[OutlineSection] = Field(min_length=1)

    @property
    def total_slides(self) -> int:
        return sum(len(section.slides) for section in self.sections)

    def slots(self) -> list[OutlineSlot]:
        """All slots in presentation order."""
        return [slot for section in self.sections for slot in section.slides]


# ------------------------------------------------------------------ #
# Slide content
# ------------------------------------------------------------------ #


ChartType = Literal["bar", "line", "pie", "area", "scatter"]
_CHART_TYPES: frozenset[str] = frozenset({"bar", "line", "pie", "area", "scatter"})


class ChartSpec(BaseModel):
    type: ChartType = "bar"
    data: Any = None
    caption: str | None = None

    @field_validator("type", mode="before")
    @classmethod
    def _known_type(cls, value: Any) -> str:
        # "bar chart", "Line", None ...
        words = str(value or "").lower().split()
        return next((w for w in words if w in _CHART_TYPES), "bar")


class SlideImage(BaseModel):
    prompt: str
    alt: str
    source: str = "generated"


class Visual(BaseModel):
    prompt: str = Field(min_length=1)
    alt: str = ""


class SlideDraft(BaseModel):
    """Per-slide content as returned by the model, before assembly."""

    title: str = Field(min_length=1)
    bullets: list[str] = Field(default_factory=list)
    notes: str = ""
    chart_spec: ChartSpec | None = None
    citations: list[str] = Field(default_factory=list)
    image: SlideImage | None = None

    @field_validator("bullets", "citations", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("notes", mode="before")
    @classmethod
    def _notes_text(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("chart_spec", mode="before")
    @classmethod
    def _drop_unusable_chart(cls, value: Any) -> Any:
        # Models answer "chart_spec": {} or a prose string for non-chart slides
        if not isinstance(value, dict) or not value:
            return None
        return value


# ------------------------------------------------------------------ #
# Deck
# ------------------------------------------------------------------ #


class Slide(BaseModel):
    layout: Layout
    title: str
    bullets: list[str] = Field(default_factory=list)
    notes: str = ""
    chart_spec: ChartSpec | None = None
    image: SlideImage | None = None
    citations: list[str] = Field(default_factory=list)


class Deck(BaseModel):
    title: str
    theme: ThemeName
    slides: list[Slide]


class ExportLinks(BaseModel):
    pptx_url: str
    pdf_url: str
    json_url: str


class GenerateDeckResponse(BaseModel):
    deck: Deck
    exports: ExportLinks
