"""Tests for the deckgen command line."""

import json
from unittest.mock import AsyncMock, patch

import pytest

from deckgen.cli import build_parser, main
from deckgen.config import Environment, LLMProvider, Settings
from deckgen.deck.pipeline import DeckGenerationError
from deckgen.llm.client import LLMUnavailableError


@pytest.fixture(autouse=True)
def _cli_settings(fake_settings, monkeypatch):
    monkeypatch.setattr("deckgen.cli.get_settings", lambda: fake_settings)


class TestParser:
    def test_generate_defaults(self):
        args = build_parser().parse_args(["generate", "Remote Work"])

        assert args.command == "generate"
        assert args.slides == 10
        assert args.theme == "deep_space"
        assert args.audience == "general"
        assert args.tone == "professional"
        assert args.doc is None

    def test_rejects_unknown_theme(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["generate", "x", "--theme", "neon"])

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0
        assert "deckgen" in capsys.readouterr().out


class TestThemesCommand:
    def test_lists_every_theme(self, capsys):
        assert main(["themes"]) == 0

        out = capsys.readouterr().out
        for name in ("deep_space", "ultra_violet", "minimal", "corporate"):
            assert name in out


class TestGenerateCommand:
    def test_prints_deck_json(self, capsys):
        assert main(["generate", "Remote Work Best Practices", "--slides", "4"]) == 0

        payload = json.loads(capsys.readouterr().out)
        assert len(payload["deck"]["slides"]) == 4
        assert payload["exports"]["pptx_url"].startswith("export://deck-")

    def test_writes_output_file_and_strips_markdown(self, tmp_path, capsys):
        target = tmp_path / "deck.json"

        code = main(
            ["generate", "Remote Work", "--slides", "3", "--clean", "--output", str(target)]
        )

        assert code == 0
        assert capsys.readouterr().out == ""
        payload = json.loads(target.read_text(encoding="utf-8"))
        assert payload["deck"]["title"] == "Remote Work: AI-Generated Overview"
        assert all("**" not in s["title"] for s in payload["deck"]["slides"])

    def test_doc_switches_to_doc_mode(self, capsys):
        assert main(["generate", "Quarterly review", "--slides", "3", "--doc", "q3.pdf"]) == 0
        assert len(json.loads(capsys.readouterr().out)["deck"]["slides"]) == 3

    def test_invalid_slide_count_exits_2(self, capsys):
        assert main(["generate", "Remote Work", "--slides", "2"]) == 2
        assert "slide_count" in capsys.readouterr().err

    def test_outline_failure_exits_1(self, capsys):
        with patch(
            "deckgen.cli.DeckGenerator.generate",
            new=AsyncMock(side_effect=DeckGenerationError("Outline generation timed out after 60 seconds")),
        ):
            code = main(["generate", "Remote Work", "--slides", "3"])

        captured = capsys.readouterr()
        assert code == 1
        assert captured.out == ""
        assert "Outline generation timed out after 60 seconds" in captured.err

    def test_unreachable_provider_exits_1(self, capsys):
        with patch(
            "deckgen.cli.DeckGenerator.generate",
            new=AsyncMock(side_effect=LLMUnavailableError("Cannot connect to Ollama")),
        ):
            assert main(["generate", "Remote Work", "--slides", "3"]) == 1

        assert "Cannot connect to Ollama" in capsys.readouterr().err

    def test_blocked_production_config_exits_1(self, monkeypatch, capsys):
        def _production_settings() -> Settings:
            return Settings(environment=Environment.PROD, llm_provider=LLMProvider.OPENAI)

        monkeypatch.setattr("deckgen.cli.get_settings", _production_settings)

        assert main(["generate", "Remote Work", "--slides", "3"]) == 1
        assert "PRODUCTION STARTUP BLOCKED" in capsys.readouterr().err
