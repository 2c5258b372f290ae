"""Document inputs for doc-to-deck mode.

Uploaded documents are not parsed. The summary lists their file names,
then any notes the user pasted as ``instructions`` (key figures, markdown
pipe tables), then guidance for the user. Fact harvesting and table
detection scan only the pasted notes, so a table in the notes becomes a
chart on the slide whose title it matches.
"""

from __future__ import annotations

import re
from pathlib import PurePosixPath
from typing import Any
from urllib.parse import unquote, urlparse

from deckgen.deck.schema import ChartSpec, SlideDraft

_WORD = re.compile(r"[A-Za-z0-9]+")
_SENTENCE_SPLIT = re.compile(r"(?<=[.!?])\s+|\n+")
_TABLE_ROW = re.compile(r"^\s*\|(.+)\|\s*$")
_SEPARATOR_CELL = re.compile(r"^:?-{3,}:?$")
_NUMBER = re.compile(r"-?\d+(?:\.\d+)?")

# Ignored when matching slide titles against document text
_STOPWORDS: frozenset[str] = frozenset(
    {
        "about", "after", "also", "and", "are", "for", "from", "have", "into",
        "key", "more", "need", "over", "that", "the", "their", "this", "what",
        "when", "with", "your",
    }
)

NAMES_PREFIX = "Documents uploaded:"

DOCUMENT_GUIDANCE = """Note: Document parsing is currently in development. For best results:
- Provide a detailed prompt describing the document content
- Include key topics, data, and insights you want in the presentation
- Specify the document structure if relevant (e.g., "The document contains market analysis, competitor data, and growth projections")"""


def _keywords(text: str) -> set[str]:
    return {
        word.lower()
        for word in _WORD.findall(text)
        if len(word) > 2 and word.lower() not in _STOPWORDS
    }


def _document_name(url: str) -> str:
    path = unquote(urlparse(url).path or url)
    name = PurePosixPath(path).name or "document"
    return PurePosixPath(name).stem or name


def parse_documents(doc_urls: list[str] | None, notes: str | None = None) -> str:
    """Summarise uploaded documents. Empty string when there are none."""
    if not doc_urls:
        return ""
    names = ", ".join(_document_name(url) for url in doc_urls)
    parts = [f"{NAMES_PREFIX} {names}."]
    if notes and notes.strip():
        parts.append(notes.strip())
    parts.append(DOCUMENT_GUIDANCE)
    return "\n\n".join(parts)


def document_text(doc_summary: str) -> str:
    """The part of a summary that came from the user: no names line, no guidance."""
    text = doc_summary.replace(DOCUMENT_GUIDANCE, "")
    lines = [line for line in text.splitlines() if not line.startswith(NAMES_PREFIX)]
    return "\n".join(lines).strip()


def harvest_facts_for_slide(doc_summary: str, title: str) -> str:
    """Sentences of the summary that share a keyword with the slide title."""
    wanted = _keywords(title)
    text = document_text(doc_summary)
    if not text or not wanted:
        return ""
    sentences = [s.strip() for s in _SENTENCE_SPLIT.split(text) if s.strip()]
    facts = [s for s in sentences if not _TABLE_ROW.match(s) and wanted & _keywords(s)]
    return " ".join(facts)


def _split_row(line: str) -> list[str]:
    match = _TABLE_ROW.match(line)
    if not match:
        return []
    return [cell.strip() for cell in match.group(1).split("|")]


def _find_tables(doc_summary: str) -> list[dict[str, Any]]:
    """Markdown pipe tables with the non-table line above each as caption."""
    tables: list[dict[str, Any]] = []
    lines = doc_summary.splitlines()
    i = 0
    while i < len(lines):
        header = _split_row(lines[i])
        separator = _split_row(lines[i + 1]) if i + 1 < len(lines) else []
        if not header or not separator or not all(_SEPARATOR_CELL.match(c) for c in separator):
            i += 1
            continue

        caption = ""
        for previous in reversed(lines[:i]):
            if previous.strip():
                caption = previous.strip().rstrip(":")
                break

        rows: list[list[str]] = []
        j = i + 2
        while j < len(lines) and (row := _split_row(lines[j])):
            rows.append(row)
            j += 1

        tables.append({"caption": caption, "columns": header, "rows": rows})
        i = j
    return tables


def table_for_title(doc_summary: str, title: str) -> dict[str, Any] | None:
    """First table whose caption or header shares a keyword with the title."""
    wanted = _keywords(title)
    text = document_text(doc_summary)
    if not text or not wanted:
        return None
    for table in _find_tables(text):
        described_by = _keywords(table["caption"]) | _keywords(" ".join(table["columns"]))
        if wanted & described_by:
            return table
    return None


def table_matches_title(doc_summary: str, title: str) -> bool:
    return table_for_title(doc_summary, title) is not None


def attach_chart_spec(draft: SlideDraft, table: dict[str, Any] | None) -> SlideDraft:
    """Return a copy of ``draft`` charting the table's first numeric column.

    The first column is the label; the first column with a number in every
    row is the value. Tables without such a column leave the draft unchanged.
    """
    if not table or not table["rows"]:
        return draft

    columns: list[str] = table["columns"]
    rows: list[list[str]] = table["rows"]
    for index in range(1, len(columns)):
        values = []
        for row in rows:
            cell = row[index] if index < len(row) else ""
            number = _NUMBER.search(cell.replace(",", ""))
            if number is None:
                break
            values.append(float(number.group(0)))
        else:
            data = [
                {"label": row[0] if row else "", "value": value}
                for row, value in zip(rows, values)
            ]
            chart = ChartSpec(
                type="bar",
                data=data,
                caption=table["caption"] or columns[index],
            )
            return draft.model_copy(update={"chart_spec": chart})
    return draft
