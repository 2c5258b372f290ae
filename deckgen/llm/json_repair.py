"""Coerce semi-structured model output into JSON objects.

Models asked for "JSON only" still wrap answers in markdown fences, prepend
chatter ("Sure, here is..."), double-escape quotes or leak control
characters. The helpers here undo those habits in increasing order of
aggressiveness and give up with ``JSONRepairError`` when nothing yields an
object.
"""

from __future__ import annotations

import json
import re
from typing import Any

import structlog

log = structlog.get_logger(__name__)

_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")
_OPENING_FENCE = re.compile(r"^```(?:json)?[ \t]*\n?", re.IGNORECASE)
_CLOSING_FENCE = re.compile(r"\n?```\s*$")
_CHATTY_PREFIX = re.compile(
    r"^(?:here's|here is|certainly|okay|sure|here)[,:]?\s*",
    re.IGNORECASE,
)
_OBJECT = re.compile(r"\{[\s\S]*\}")


class JSONRepairError(ValueError):
    """Model output could not be turned into a JSON object."""


def strip_control_characters(text: str) -> str:
    """Remove ASCII control characters except tab, newline and carriage return."""
    return _CONTROL_CHARS.sub("", text)


def _is_json(text: str) -> bool:
    try:
        json.loads(text)
    except ValueError:
        return False
    return True


def strip_wrapping(text: str) -> str:
    """Remove markdown fences and a chatty lead-in, leaving escapes alone."""
    cleaned = text.strip()

    if cleaned.startswith("```"):
        cleaned = _OPENING_FENCE.sub("", cleaned)
        cleaned = _CLOSING_FENCE.sub("", cleaned)

    return _CHATTY_PREFIX.sub("", cleaned)


def clean_json_response(text: str) -> str:
    """Strip fences and chatter, then repair broken escapes if still invalid.

    The result is not guaranteed to parse; callers go through
    ``parse_json_object`` for that.
    """
    cleaned = strip_wrapping(text)

    if _is_json(cleaned):
        return cleaned

    cleaned = (
        cleaned.replace("\\n", " ")
        .replace("\\\\", "\\")
        .replace('\\"', '"')
        .replace("\\'", "'")
    )

    if not _is_json(cleaned):
        log.warning("json_repair.still_invalid", length=len(cleaned))

    return cleaned.strip()


def extract_json_object(text: str) -> str | None:
    """Return the span from the first ``{`` to the last ``}``, if any."""
    match = _OBJECT.search(text)
    return match.group(0) if match else None


def _first_object(text: str) -> dict[str, Any] | None:
    candidates = [text]
    extracted = extract_json_object(strip_control_characters(text))
    if extracted is not None:
        candidates.append(extracted)

    for candidate in candidates:
        try:
            parsed = json.loads(candidate)
        except ValueError:
            continue
        if isinstance(parsed, dict):
            return parsed
    return None


def parse_json_object(text: str) -> dict[str, Any]:
    """Parse model output into a dict, repairing it on the way.

    The escape rewrite runs only when the unwrapped text and its object
    span both fail to decode.

    Raises:
        JSONRepairError: nothing in ``text`` decodes to a JSON object
    """
    parsed = _first_object(strip_wrapping(text))
    if parsed is None:
        parsed = _first_object(clean_json_response(text))
    if parsed is None:
        raise JSONRepairError(f"No JSON object found in model output ({len(text)} chars)")
    return parsed
