"""deckgen command line.

Commands::

    deckgen serve [--host H] [--port P] [--reload]   - Run the API with uvicorn
    deckgen generate TOPIC [--slides N] [...]        - Generate a deck offline-capable
    deckgen themes                                   - List theme names and image styles

``generate`` runs the same pipeline as POST /api/v1/generate-deck with the
provider configured in the environment (demo by default) and writes the
response JSON to stdout or ``--output``.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
import textwrap
from pathlib import Path

from pydantic import ValidationError

from deckgen.config import get_settings
from deckgen.deck.export import clean_deck
from deckgen.deck.pipeline import DeckGenerationError, DeckGenerator
from deckgen.deck.schema import Audience, GenerateDeckRequest, Mode, ThemeName, Tone
from deckgen.deck.themes import THEMES
from deckgen.llm.client import LLMClient, LLMError
from deckgen.telemetry.logging import configure_logging

_RESET = "\033[0m"
_RED = "\033[31m"
_CYAN = "\033[36m"


def _err(msg: str) -> None:
    print(f"{_RED}[ERROR]{_RESET} {msg}", file=sys.stderr)


def _info(msg: str) -> None:
    print(f"{_CYAN} [INFO]{_RESET} {msg}", file=sys.stderr)


# ------------------------------------------------------------------ #
# Commands
# ------------------------------------------------------------------ #


def cmd_serve(args: argparse.Namespace) -> int:
    """Run the HTTP API."""
    import uvicorn

    uvicorn.run("deckgen.main:app", host=args.host, port=args.port, reload=args.reload)
    return 0


def cmd_generate(args: argparse.Namespace) -> int:
    """Generate one deck and print or save the response."""
    try:
        settings = get_settings()
    except (RuntimeError, ValidationError) as exc:
        _err(f"Invalid configuration: {exc}")
        return 1
    configure_logging(
        json_logs=False,
        log_level="DEBUG" if args.verbose else "WARNING",
        stream=sys.stderr,
    )

    try:
        request = GenerateDeckRequest(
            mode=Mode.DOC_TO_DECK if args.doc else Mode.QUICK_PROMPT,
            topic_or_prompt=args.topic,
            slide_count=args.slides,
            audience=args.audience,
            tone=args.tone,
            theme=args.theme,
            assets={"doc_urls": args.doc} if args.doc else None,
        )
    except ValidationError as exc:
        for error in exc.errors():
            field = ".".join(str(part) for part in error["loc"])
            _err(f"{field}: {error['msg']}")
        return 2

    llm = LLMClient(settings)
    _info(f"Generating {request.slide_count} slides with {llm.provider.value}/{llm.model}")

    try:
        response = asyncio.run(DeckGenerator(llm, settings).generate(request))
    except (DeckGenerationError, LLMError) as exc:
        _err(str(exc))
        return 1

    if args.clean:
        response = response.model_copy(update={"deck": clean_deck(response.deck)})

    payload = json.dumps(response.model_dump(mode="json"), indent=2, ensure_ascii=False)
    if args.output:
        Path(args.output).write_text(payload + "\n", encoding="utf-8")
        _info(f"Wrote {args.output}")
    else:
        print(payload)
    return 0


def cmd_themes(args: argparse.Namespace) -> int:  # noqa: ARG001
    """List available themes."""
    for name, tokens in THEMES.items():
        print(f"{name.value:<14} {tokens.image_style}")
    return 0


# ------------------------------------------------------------------ #
# Argument parser
# ------------------------------------------------------------------ #


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser tree."""
    parser = argparse.ArgumentParser(
        prog="deckgen",
        description="AI slide deck generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent(
            """\
            Examples:
              deckgen serve --port 8000
              deckgen generate "Remote Work Best Practices" --slides 8 --theme corporate
              deckgen generate "Quarterly review" --doc q3-report.pdf -o deck.json
              deckgen themes
            """
        ),
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)
    serve_parser.add_argument("--reload", action="store_true", help="Reload on code changes")

    generate_parser = subparsers.add_parser("generate", help="Generate a deck")
    generate_parser.add_argument("topic", help="Topic or prompt for the deck")
    generate_parser.add_argument("--slides", "-n", type=int, default=10, help="Slide count (3-50)")
    generate_parser.add_argument(
        "--audience", choices=[a.value for a in Audience], default=Audience.GENERAL.value
    )
    generate_parser.add_argument(
        "--tone", choices=[t.value for t in Tone], default=Tone.PROFESSIONAL.value
    )
    generate_parser.add_argument(
        "--theme", choices=[t.value for t in ThemeName], default=ThemeName.DEEP_SPACE.value
    )
    generate_parser.add_argument(
        "--doc",
        action="append",
        default=None,
        help="Document reference (repeatable); switches to doc_to_deck mode",
    )
    generate_parser.add_argument("--output", "-o", default=None, help="Write JSON to this file")
    generate_parser.add_argument(
        "--clean", action="store_true", help="Strip markdown emphasis from the output"
    )
    generate_parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    subparsers.add_parser("themes", help="List themes")

    return parser


# ------------------------------------------------------------------ #
# Dispatch
# ------------------------------------------------------------------ #


def main(argv: list[str] | None = None) -> int:
    """Entry point for the deckgen CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "serve":
        return cmd_serve(args)
    elif args.command == "generate":
        return cmd_generate(args)
    elif args.command == "themes":
        return cmd_themes(args)
    else:
        parser.print_help()
        return 0


if __name__ == "__main__":
    sys.exit(main())
