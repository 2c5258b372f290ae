"""Tests for the end-to-end deck generation pipeline."""

import asyncio
from typing import Any

import pytest

from deckgen.deck.pipeline import (
    PLACEHOLDER_BULLET,
    PLACEHOLDER_NOTES,
    DeckGenerationError,
    DeckGenerator,
)
from deckgen.deck.schema import Assets, GenerateDeckRequest, Mode, ThemeName
from deckgen.llm.client import LLMError


def _request(slide_count: int = 5, **overrides: Any) -> GenerateDeckRequest:
    return GenerateDeckRequest(
        mode=overrides.pop("mode", Mode.QUICK_PROMPT),
        topic_or_prompt=overrides.pop("topic_or_prompt", "Remote Work Best Practices"),
        slide_count=slide_count,
        **overrides,
    )


@pytest.fixture
def fast_settings(fake_settings):
    return fake_settings.model_copy(
        update={
            "outline_timeout_seconds": 0.2,
            "slide_timeout_seconds": 0.2,
            "visual_timeout_seconds": 0.2,
        }
    )


class TestDemoPipeline:
    """Full pipeline against the canned demo provider."""

    @pytest.mark.parametrize("slide_count", [3, 5, 8, 10, 12])
    @pytest.mark.asyncio
    async def test_deck_has_exactly_requested_slides(self, demo_llm, fake_settings, slide_count):
        response = await DeckGenerator(demo_llm, fake_settings).generate(_request(slide_count))

        assert len(response.deck.slides) == slide_count
        assert all(slide.image.source == "generated" for slide in response.deck.slides)

    @pytest.mark.asyncio
    async def test_padding_slots_come_last(self, demo_llm, fake_settings):
        response = await DeckGenerator(demo_llm, fake_settings).generate(_request(10))

        titles = [slide.title for slide in response.deck.slides]
        assert titles[-2:] == ["Additional Key Point 1", "Additional Key Point 2"]

    @pytest.mark.asyncio
    async def test_trimming_walks_back_across_sections(self, demo_llm, fake_settings):
        response = await DeckGenerator(demo_llm, fake_settings).generate(_request(5))

        titles = [slide.title for slide in response.deck.slides]
        assert titles[2:] == [
            "Key Concept 1: Foundations",
            "Key Concept 2: In Practice",
            "By the Numbers",
        ]

    @pytest.mark.asyncio
    async def test_deck_metadata_and_exports(self, demo_llm, fake_settings):
        response = await DeckGenerator(demo_llm, fake_settings).generate(
            _request(4, theme=ThemeName.MINIMAL)
        )

        assert response.deck.title == "**Remote Work Best Practices**: AI-Generated Overview"
        assert response.deck.theme == ThemeName.MINIMAL
        assert response.exports.pptx_url.startswith("export://deck-")
        assert response.exports.pdf_url.endswith(".pdf")

    @pytest.mark.asyncio
    async def test_instructions_used_when_prompt_missing(self, demo_llm, fake_settings):
        request = GenerateDeckRequest(
            mode=Mode.QUICK_PROMPT, instructions="Onboarding Guide", slide_count=3
        )

        response = await DeckGenerator(demo_llm, fake_settings).generate(request)

        assert response.deck.title.startswith("**Onboarding Guide**")


class TestFallbacks:
    @pytest.mark.asyncio
    async def test_model_down_still_produces_full_deck(self, mock_llm, fake_settings):
        mock_llm.complete_json.side_effect = LLMError("connection refused")

        response = await DeckGenerator(mock_llm, fake_settings).generate(_request(6))

        slides = response.deck.slides
        assert len(slides) == 6
        assert response.deck.title == "**Remote Work Best Practices**: Key Insights & Analysis"
        assert all(s.title.endswith(": Overview") for s in slides)
        assert slides[0].citations[0].startswith("Industry research on ")
        assert slides[0].image.prompt.startswith("Minimalist illustration of ")
        assert slides[0].image.source == "generated"

    @pytest.mark.asyncio
    async def test_slow_slide_becomes_placeholder(self, mock_llm, fast_settings, outline_payload):
        async def respond(prompt: str) -> dict:
            if "Create an outline for" in prompt:
                return outline_payload(3)
            if "Title: Slide 1.2" in prompt:
                await asyncio.sleep(5)
            if "SLIDE_TITLE" in prompt:
                return {"prompt": "An image", "alt": "alt"}
            return {"title": "Drafted", "bullets": ["one"]}

        mock_llm.complete_json.side_effect = respond

        response = await DeckGenerator(mock_llm, fast_settings).generate(_request(3))

        slides = response.deck.slides
        assert [s.title for s in slides] == ["Drafted", "Slide 1.2", "Drafted"]
        assert slides[1].bullets == [PLACEHOLDER_BULLET]
        assert slides[1].notes == PLACEHOLDER_NOTES
        assert slides[1].chart_spec is None
        assert slides[1].citations == []
        assert slides[1].image.source == "generated"

    @pytest.mark.asyncio
    async def test_slow_visual_replaces_whole_slide(self, mock_llm, fast_settings, outline_payload):
        async def respond(prompt: str) -> dict:
            if "Create an outline for" in prompt:
                return outline_payload(3)
            if "SLIDE_TITLE" in prompt:
                await asyncio.sleep(5)
            return {"title": "Drafted", "bullets": ["one"]}

        mock_llm.complete_json.side_effect = respond

        response = await DeckGenerator(mock_llm, fast_settings).generate(_request(3))

        assert all(s.bullets == [PLACEHOLDER_BULLET] for s in response.deck.slides)
        assert [s.title for s in response.deck.slides] == ["Slide 1.1", "Slide 1.2", "Slide 1.3"]

    @pytest.mark.asyncio
    async def test_outline_deadline_fails_request(self, mock_llm, fast_settings):
        async def hang(prompt: str) -> dict:
            await asyncio.sleep(5)
            return {}

        mock_llm.complete_json.side_effect = hang

        with pytest.raises(DeckGenerationError, match="Outline generation timed out"):
            await DeckGenerator(mock_llm, fast_settings).generate(_request(3))


class TestDocToDeck:
    @pytest.mark.asyncio
    async def test_document_summary_reaches_outline_prompt(self, mock_llm, fake_settings, outline_payload):
        prompts: list[str] = []

        async def respond(prompt: str) -> dict:
            prompts.append(prompt)
            if "Create an outline for" in prompt:
                return outline_payload(3)
            if "SLIDE_TITLE" in prompt:
                return {"prompt": "An image", "alt": "alt"}
            return {"title": "Drafted"}

        mock_llm.complete_json.side_effect = respond
        request = _request(
            3,
            mode=Mode.DOC_TO_DECK,
            assets=Assets(doc_urls=["https://files.example.com/q3-report.pdf"]),
        )

        response = await DeckGenerator(mock_llm, fake_settings).generate(request)

        assert len(response.deck.slides) == 3
        assert "Document summary: Documents uploaded: q3-report." in prompts[0]

    @pytest.mark.asyncio
    async def test_quick_prompt_ignores_documents(self, mock_llm, fake_settings, outline_payload):
        mock_llm.complete_json.return_value = outline_payload(3)
        request = _request(3, assets=Assets(doc_urls=["q3-report.pdf"]))

        await DeckGenerator(mock_llm, fake_settings).generate(request)

        outline_prompt = mock_llm.complete_json.await_args_list[0].args[0]
        assert "Document summary: None provided" in outline_prompt

    @pytest.mark.asyncio
    async def test_pasted_table_becomes_chart_on_matching_slide(self, mock_llm, fake_settings, outline_payload):
        payload = outline_payload(3)
        payload["sections"][0]["slides"][1]["title"] = "EMEA Revenue by Region"
        prompts: list[str] = []

        async def respond(prompt: str) -> dict:
            prompts.append(prompt)
            if "Create an outline for" in prompt:
                return payload
            if "SLIDE_TITLE" in prompt:
                return {"prompt": "An image", "alt": "alt"}
            return {"title": "Drafted", "bullets": ["b"]}

        mock_llm.complete_json.side_effect = respond
        instructions = (
            "Revenue grew 12% in EMEA.\n\n"
            "Revenue by region:\n"
            "| Region | Revenue |\n"
            "| --- | --- |\n"
            "| EMEA | 1,200 |\n"
            "| APAC | 950.5 |"
        )
        request = _request(
            3,
            mode=Mode.DOC_TO_DECK,
            instructions=instructions,
            assets=Assets(doc_urls=["q3-report.pdf"]),
        )

        response = await DeckGenerator(mock_llm, fake_settings).generate(request)

        charted = response.deck.slides[1]
        assert charted.chart_spec is not None
        assert charted.chart_spec.caption == "Revenue by region"
        assert [point["value"] for point in charted.chart_spec.data] == [1200.0, 950.5]
        assert response.deck.slides[0].chart_spec is None
        slide_prompts = [p for p in prompts if "SLIDE TO GENERATE" in p]
        assert 'DOCUMENT_FACTS: """Revenue grew 12% in EMEA.' in slide_prompts[1]
        assert 'DOCUMENT_FACTS: """"""' in slide_prompts[0]
        assert "Document parsing is currently in development" not in slide_prompts[1]
