"""Demo provider - canned model responses for running without any LLM.

Used when LLM_PROVIDER=demo or when an OpenAI provider has no usable key.
Responses are chosen by the fixed header line of each prompt and are
deterministic, so the full pipeline (including slide-count reconciliation,
since the canned outline always has eight slides) can be exercised offline.
"""

from __future__ import annotations

import json
import re
from collections.abc import Callable

_TOPIC = re.compile(r'Create an outline for:\s*"""(.*?)"""', re.DOTALL)
_SLIDE_TITLE = re.compile(r"^Title:\s*(.+)$", re.MULTILINE)
_SLIDE_LAYOUT = re.compile(r"^Layout:\s*(\S+)", re.MULTILINE)
_VISUAL_TITLE = re.compile(r'^SLIDE_TITLE:\s*"(.*)"\s*$', re.MULTILINE)

DEFAULT_RESPONSE = (
    "This is a demo response. To use real AI generation, configure LLM_PROVIDER, "
    "LLM_API_KEY and LLM_MODEL in your environment or .env file."
)


def _outline(prompt: str) -> str:
    match = _TOPIC.search(prompt)
    topic = match.group(1).strip() if match and match.group(1).strip() else "Demo Presentation"
    sections = [
        (
            "Introduction",
            [
                ("Why **{topic}** Matters Now", "title_bullets"),
                ("The Current Landscape", "title_bullets"),
            ],
        ),
        (
            "Main Content",
            [
                ("Key Concept 1: Foundations", "title_bullets"),
                ("Key Concept 2: In Practice", "two_column"),
                ("By the Numbers", "chart"),
                ("Best Practices", "title_bullets"),
            ],
        ),
        (
            "Conclusion",
            [
                ("Summary", "title_bullets"),
                ("Next Steps", "title_bullets"),
            ],
        ),
    ]
    return json.dumps(
        {
            "title": f"**{topic}**: AI-Generated Overview",
            "sections": [
                {
                    "name": name,
                    "slides": [
                        {"title": title.format(topic=topic), "layout": layout, "section": name}
                        for title, layout in slides
                    ],
                }
                for name, slides in sections
            ],
        }
    )


def _slide(prompt: str) -> str:
    title_match = _SLIDE_TITLE.search(prompt)
    layout_match = _SLIDE_LAYOUT.search(prompt)
    title = title_match.group(1).strip() if title_match else "Slide Title"
    layout = layout_match.group(1) if layout_match else "title_bullets"

    chart_spec = None
    if "chart" in layout:
        chart_spec = {
            "type": "bar",
            "data": [
                {"label": "2022", "value": 42},
                {"label": "2023", "value": 58},
                {"label": "2024", "value": 71},
            ],
            "caption": "Illustrative demo figures",
        }

    # Fenced on purpose: real models do this and the parser must cope.
    draft = {
        "title": title,
        "bullets": [
            "**Key point 1**: the core idea in one line",
            "**Key point 2**: supporting detail with a figure such as **40%**",
            "**Key point 3**: what it means for the audience",
        ],
        "notes": "",
        "image": {
            "prompt": f"Clean diagram illustrating {title}",
            "alt": f"Diagram of {title}",
            "source": "placeholder",
        },
        "chart_spec": chart_spec,
        "citations": [],
    }
    return "```json\n" + json.dumps(draft, indent=2) + "\n```"


def _visual(prompt: str) -> str:
    match = _VISUAL_TITLE.search(prompt)
    title = match.group(1) if match else "the slide topic"
    return json.dumps(
        {
            "prompt": f"Abstract, text-free illustration evoking {title}",
            "alt": f"Illustration for {title}",
        }
    )


# Fixed header line of each stage's prompt. User text (topic, titles, notes)
# only ever follows the header, so the earliest header names the stage.
_CANNED: list[tuple[re.Pattern[str], Callable[[str], str]]] = [
    (re.compile(r"^Task: Produce an image prompt", re.MULTILINE), _visual),
    (re.compile(r"^SLIDE TO GENERATE:\s*$", re.MULTILINE), _slide),
    (re.compile(r"^Create an outline for:", re.MULTILINE), _outline),
]


def demo_response(prompt: str) -> str:
    """Select a canned response for ``prompt``."""
    found = [
        (match.start(), build)
        for header, build in _CANNED
        if (match := header.search(prompt))
    ]
    if not found:
        return DEFAULT_RESPONSE
    _, build = min(found, key=lambda item: item[0])
    return build(prompt)
