"""Tests for request, outline and slide models."""

import pytest
from pydantic import ValidationError

from deckgen.deck.demo_data import DEMO_DECK, DEMO_LIVE_WIDGETS, DEMO_TOPICS
from deckgen.deck.schema import (
    ChartSpec,
    GenerateDeckRequest,
    Layout,
    Mode,
    OutlineSlot,
    SlideDraft,
    coerce_layout,
)
from deckgen.deck.themes import THEMES, get_theme


class TestGenerateDeckRequest:
    def test_defaults(self):
        request = GenerateDeckRequest(mode=Mode.QUICK_PROMPT, topic_or_prompt="AI")

        assert request.slide_count == 10
        assert request.theme == "deep_space"
        assert request.tone == "professional"
        assert request.audience == "general"
        assert request.live_widgets is False

    @pytest.mark.parametrize("count", [2, 51])
    def test_slide_count_bounds(self, count):
        with pytest.raises(ValidationError):
            GenerateDeckRequest(mode=Mode.QUICK_PROMPT, slide_count=count)

    def test_rejects_unknown_theme(self):
        with pytest.raises(ValidationError):
            GenerateDeckRequest(mode=Mode.QUICK_PROMPT, theme="neon")

    def test_topic_prefers_prompt_then_instructions(self):
        assert GenerateDeckRequest(mode=Mode.QUICK_PROMPT, topic_or_prompt="A", instructions="B").topic == "A"
        assert GenerateDeckRequest(mode=Mode.QUICK_PROMPT, instructions="B").topic == "B"
        assert GenerateDeckRequest(mode=Mode.QUICK_PROMPT).topic == ""


class TestLenientModelOutput:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("chart", Layout.CHART),
            (" Two_Column ", Layout.TWO_COLUMN),
            ("timeline", Layout.TITLE_BULLETS),
            (None, Layout.TITLE_BULLETS),
        ],
    )
    def test_coerce_layout(self, raw, expected):
        assert coerce_layout(raw) == expected

    def test_slot_requires_title(self):
        with pytest.raises(ValidationError):
            OutlineSlot(title="")

    def test_slot_null_section_becomes_empty(self):
        assert OutlineSlot.model_validate({"title": "T", "section": None}).section == ""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("pie", "pie"), ("Stacked area chart", "area"), ("donut", "bar"), (None, "bar")],
    )
    def test_chart_type(self, raw, expected):
        assert ChartSpec(type=raw).type == expected

    def test_draft_normalises_nulls(self):
        draft = SlideDraft.model_validate(
            {"title": "T", "bullets": None, "citations": None, "notes": None, "chart_spec": "n/a"}
        )

        assert draft.bullets == []
        assert draft.citations == []
        assert draft.notes == ""
        assert draft.chart_spec is None


class TestThemes:
    def test_four_themes(self):
        assert {name.value for name in THEMES} == {"deep_space", "ultra_violet", "minimal", "corporate"}

    def test_get_theme_by_string(self):
        tokens = get_theme("corporate")
        assert tokens.primary == "#1E40AF"
        assert tokens.image_style == "professional, clean, corporate blue accents"

    def test_unknown_theme(self):
        with pytest.raises(KeyError):
            get_theme("neon")


class TestDemoFixtures:
    def test_demo_deck(self):
        assert len(DEMO_DECK.slides) == 14
        assert DEMO_DECK.title == "Alcohol Use Trends in Australia"

    def test_demo_topics_are_valid_requests(self):
        assert len(DEMO_TOPICS) == 5
        assert all(3 <= topic.slide_count <= 50 for topic in DEMO_TOPICS)

    def test_demo_widgets(self):
        assert DEMO_LIVE_WIDGETS
        assert {widget["kind"] for widget in DEMO_LIVE_WIDGETS} >= {"LiveChart", "Ticker"}
