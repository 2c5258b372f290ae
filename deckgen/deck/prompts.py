"""Prompt templates for the three generation stages.

Every prompt ends with an explicit JSON shape; the parsers in
``deckgen.llm.json_repair`` deal with models that do not follow it exactly.
"""

from __future__ import annotations

import json

from deckgen.deck.schema import OutlineSlot

OUTLINE_PROMPT = """You are a world-class presentation strategist creating engaging, story-driven outlines.

RULES FOR ENGAGING PRESENTATIONS:
1. **Specific, Action-Oriented Titles**: Don't use generic titles
   Bad: "Introduction", "Overview", "Key Points"
   Good: "**AI Revolution**: Transforming Healthcare in 2024", "Why **85% of Hospitals** Are Investing in AI"

2. **Story Arc**: Structure slides to tell a compelling story
   - Hook: Start with a provocative question or statistic
   - Context: Set the stage with current situation
   - Insight: Deep dive into 2-3 key areas
   - Impact: Show results, data, case studies
   - Action: Clear takeaways and next steps

3. **Visual Variety**: Mix layout types
   - title_bullets: Most slides (content-heavy)
   - chart: Data-driven insights (2-3 per deck)
   - image_full: Powerful visuals for key concepts
   - quote: Expert opinions or testimonials
   - two_column: Comparisons (before/after, pros/cons)

4. **Audience-Specific**: Tailor depth and terminology
   - Executives: ROI, strategy, high-level impact
   - Technical: Implementation, architecture, specs
   - General: Simple language, analogies, real-world examples
   - Students: Educational, step-by-step, interactive

TASK:
Create an outline for: \"\"\"{topic}\"\"\"

CRITICAL CONSTRAINT:
- You MUST create EXACTLY {slide_count} slides - no more, no less. Count carefully.
- The total number of slides across all sections must equal {slide_count} exactly.

CONSTRAINTS:
- Total slides: {slide_count} (EXACTLY - this is mandatory)
- Audience: {audience}
- Tone: {tone}
- Document summary: {doc_summary}

OUTPUT FORMAT (JSON only):
{{
  "title": "**Engaging Main Title** with Topic",
  "sections": [
    {{
      "name": "Hook & Context",
      "slides": [
        {{"title": "Provocative opening question or stat", "layout": "title_bullets", "section": "Hook & Context"}},
        {{"title": "Current landscape", "layout": "title_bullets", "section": "Hook & Context"}}
      ]
    }},
    {{
      "name": "Deep Dive",
      "slides": [
        {{"title": "First key area with specifics", "layout": "title_bullets", "section": "Deep Dive"}},
        {{"title": "Data visualization", "layout": "chart", "section": "Deep Dive"}},
        {{"title": "Second key area", "layout": "title_bullets", "section": "Deep Dive"}}
      ]
    }},
    {{
      "name": "Impact & Action",
      "slides": [
        {{"title": "Results and outcomes", "layout": "title_bullets", "section": "Impact & Action"}},
        {{"title": "Key takeaways", "layout": "title_bullets", "section": "Impact & Action"}}
      ]
    }}
  ]
}}

IMPORTANT: Before returning, count the total number of slides in your "sections" array. It must equal {slide_count} exactly. Adjust the number of slides in each section to match this requirement.

Return ONLY valid JSON with specific, engaging titles for the given topic."""


SLIDE_PROMPT = """You are an expert presentation designer creating engaging, professional slides.

CRITICAL RULES FOR PROFESSIONAL CONTENT:
1. **Use Bold Text**: Wrap key terms in **double asterisks** for emphasis
   Example: "**AI-powered diagnostics** reduce errors by 40%"

2. **Specific Data**: Include real numbers, percentages, dates
   Bad: "AI is growing fast"
   Good: "**85% of hospitals** adopted AI by 2024"

3. **Visual Descriptions**: Add image details for EVERY slide
   - Describe relevant diagrams, charts, icons, or photos
   - Make it topic-specific and professional

4. **NO EMOJIS**: Do not use any emojis in titles or bullets. Keep it professional.

SLIDE TO GENERATE:
Title: {title}
Layout: {layout}
Section: {section}

DOCUMENT_FACTS: \"\"\"{facts}\"\"\"

OUTPUT REQUIREMENTS:
- title: Engaging, specific title (use **bold** for key words, NO emojis)
- bullets: 3-5 bullets with bold text and specific data (NO emojis)
- notes: Empty string (do not generate speaker notes)
- image: Always include! Describe a relevant visual element
  {{
    "prompt": "Detailed description of diagram/chart/icon that illustrates this slide's concept",
    "alt": "Brief alt text",
    "source": "placeholder"
  }}
- chart_spec: If layout includes "chart", add chart data as {{"type": "bar|line|pie|area|scatter", "data": [...], "caption": "..."}}
- citations: Empty array []

Output JSON:
{{
  "title": "**Bold Title** with Emphasis",
  "bullets": [
    "**Bold term**: specific detail with data",
    "Another point with **emphasis** and numbers"
  ],
  "notes": "",
  "image": {{
    "prompt": "Professional diagram showing...",
    "alt": "Diagram of...",
    "source": "placeholder"
  }},
  "chart_spec": null,
  "citations": []
}}

Return ONLY valid JSON."""


VISUAL_PROMPT = """Task: Produce an image prompt for a slide.
Style: {theme_style}
Avoid text inside images.

Input:
SLIDE_TITLE: "{title}"
SLIDE_BULLETS: {bullets}

Output:
{{ "prompt": "..." , "alt": "..." }}"""


def outline_prompt(
    *,
    topic: str,
    slide_count: int,
    audience: str,
    tone: str,
    doc_summary: str,
) -> str:
    return OUTLINE_PROMPT.format(
        topic=topic,
        slide_count=slide_count,
        audience=audience,
        tone=tone,
        doc_summary=doc_summary or "None provided",
    )


def slide_prompt(slot: OutlineSlot, facts: str) -> str:
    return SLIDE_PROMPT.format(
        title=slot.title,
        layout=slot.layout.value,
        section=slot.section or "Main Content",
        facts=facts,
    )


def visual_prompt(*, title: str, bullets: list[str], theme_style: str) -> str:
    # Titles are single-line in the prompt; the demo provider reads them back
    flat_title = " ".join(title.split()).replace('"', "'")
    return VISUAL_PROMPT.format(
        title=flat_title,
        bullets=json.dumps(bullets, ensure_ascii=False),
        theme_style=theme_style,
    )
