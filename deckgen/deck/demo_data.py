"""Demo fixtures served by the demo endpoints and used as UI samples."""

from __future__ import annotations

from typing import Any

from deckgen.deck.schema import (
    Audience,
    ChartSpec,
    Deck,
    GenerateDeckRequest,
    Layout,
    Mode,
    Slide,
    SlideImage,
    ThemeName,
    Tone,
)


def _slide(layout: Layout, title: str, bullets: list[str], notes: str, **extra: Any) -> Slide:
    return Slide(layout=layout, title=title, bullets=bullets, notes=notes, **extra)


DEMO_DECK = Deck(
    title="Alcohol Use Trends in Australia",
    theme=ThemeName.DEEP_SPACE,
    slides=[
        _slide(
            Layout.TITLE,
            "Alcohol Use Trends in Australia",
            ["A Policy Perspective on Age-Group Patterns"],
            "Welcome to the presentation. Introduce yourself and the topic. Set the context "
            "for why alcohol use trends matter for policy makers.",
        ),
        _slide(
            Layout.TITLE_BULLETS,
            "Agenda",
            [
                "Introduction (2 slides)",
                "Current Trends by Age Group (4 slides)",
                "Policy Implications (3 slides)",
                "Conclusion (2 slides)",
            ],
            "Walk through the agenda and set expectations for the presentation. Emphasize "
            "the data-driven approach.",
        ),
        _slide(
            Layout.TITLE_BULLETS,
            "Why This Matters",
            [
                "Alcohol use affects 80% of Australians annually",
                "Healthcare costs exceed $15 billion per year",
                "Policy decisions impact millions of lives",
                "Age-group patterns reveal intervention opportunities",
            ],
            "Establish the significance of the topic. Use concrete numbers to grab attention "
            "and show the scale of the issue.",
        ),
        _slide(
            Layout.TWO_COLUMN,
            "Data Sources & Methodology",
            [
                "Australian Bureau of Statistics data",
                "National Health Survey 2021-22",
                "Longitudinal analysis 2015-2022",
                "Age groups: 18-24, 25-34, 35-44, 45-54, 55-64, 65+",
            ],
            "Explain the credibility of the data sources and the methodology used. This "
            "builds trust in the findings.",
            image=SlideImage(
                prompt="Data analysis visualization",
                alt="Data analysis visualization",
                source="https://images.unsplash.com/photo-1551288049-bebda4e38f71?w=400&h=300&fit=crop",
            ),
        ),
        _slide(
            Layout.CHART,
            "Overall Consumption Trends",
            [],
            "Point out the peak consumption in the 35-44 age group and the decline in older "
            "age groups. This sets up the discussion of age-specific patterns.",
            chart_spec=ChartSpec(
                type="bar",
                data=[
                    {"label": "18-24", "value": 65},
                    {"label": "25-34", "value": 78},
                    {"label": "35-44", "value": 82},
                    {"label": "45-54", "value": 75},
                    {"label": "55-64", "value": 68},
                    {"label": "65+", "value": 45},
                ],
                caption="Consumption index by age group",
            ),
        ),
        _slide(
            Layout.TITLE_BULLETS,
            "Youth Trends (18-24)",
            [
                "Binge drinking decreased 15% since 2015",
                "Wine consumption increased 25%",
                "Spirits remain most popular choice",
                "Social media influence on drinking patterns",
            ],
            "Highlight the positive trend in binge drinking reduction while noting the shift "
            "in beverage preferences. Discuss the role of social media.",
        ),
        _slide(
            Layout.TITLE_BULLETS,
            "Middle-Age Patterns (35-44)",
            [
                "Highest consumption rates across all age groups",
                "Wine and beer equally popular",
                "Work-related drinking culture",
                "Stress and lifestyle factors",
            ],
            "Explain why this age group shows the highest consumption. Discuss work culture, "
            "stress, and lifestyle factors that contribute to this pattern.",
        ),
        _slide(
            Layout.TITLE_BULLETS,
            "Elderly Consumption (65+)",
            [
                "Lowest consumption rates",
                "Health concerns drive reduction",
                "Medication interactions",
                "Social isolation impact",
            ],
            "Discuss the factors that lead to lower consumption in older age groups, "
            "including health concerns and medication interactions.",
        ),
        _slide(
            Layout.TITLE_BULLETS,
            "Targeted Interventions Needed",
            [
                "Age-specific messaging strategies",
                "Workplace alcohol policies",
                "Healthcare provider training",
                "Community-based programs",
            ],
            "Transition to policy implications. Emphasize the need for age-specific "
            "approaches rather than one-size-fits-all solutions.",
        ),
        _slide(
            Layout.TITLE_BULLETS,
            "Resource Allocation Priorities",
            [
                "Focus on 35-44 age group (highest consumption)",
                "Prevention programs for youth",
                "Support services for elderly",
                "Cross-age group initiatives",
            ],
            "Discuss how the data should inform resource allocation decisions. Balance "
            "between high-risk groups and prevention strategies.",
        ),
        _slide(
            Layout.TITLE_BULLETS,
            "Monitoring & Evaluation",
            [
                "Regular data collection cycles",
                "Age-group specific metrics",
                "Policy effectiveness tracking",
                "Stakeholder feedback integration",
            ],
            "Emphasize the importance of ongoing monitoring to ensure policies are effective "
            "and can be adjusted as needed.",
        ),
        _slide(
            Layout.TITLE_BULLETS,
            "Key Takeaways",
            [
                "Age-group patterns reveal distinct consumption trends",
                "Middle-age groups require targeted interventions",
                "Youth trends show positive developments",
                "Elderly need specialized support approaches",
            ],
            "Summarize the key findings and their implications for policy. Reinforce the "
            "data-driven approach to decision making.",
        ),
        _slide(
            Layout.TITLE_BULLETS,
            "References",
            [
                "Australian Bureau of Statistics, National Health Survey 2021-22",
                "Alcohol and Drug Foundation, Annual Report 2023",
                "Department of Health, Alcohol Policy Framework 2022",
                "University of Sydney, Longitudinal Study on Alcohol Use 2023",
            ],
            "Acknowledge the data sources and research that informed this presentation. "
            "This adds credibility and allows for follow-up research.",
        ),
        _slide(
            Layout.TITLE,
            "Thank You",
            ["Questions & Discussion"],
            "Thank the audience and invite questions. Be prepared to discuss specific data "
            "points and policy implications in detail.",
        ),
    ],
)


# Ready-to-submit sample requests
DEMO_TOPICS: list[GenerateDeckRequest] = [
    GenerateDeckRequest(
        mode=Mode.QUICK_PROMPT,
        topic_or_prompt="The Future of Artificial Intelligence",
        instructions="Focus on machine learning trends and societal impact",
        tone=Tone.PROFESSIONAL,
        audience=Audience.EXECUTIVES,
        slide_count=12,
        theme=ThemeName.DEEP_SPACE,
    ),
    GenerateDeckRequest(
        mode=Mode.QUICK_PROMPT,
        topic_or_prompt="Climate Change Solutions",
        instructions="Renewable energy and carbon reduction strategies",
        tone=Tone.ACADEMIC,
        audience=Audience.TECHNICAL,
        slide_count=15,
        theme=ThemeName.MINIMAL,
    ),
    GenerateDeckRequest(
        mode=Mode.QUICK_PROMPT,
        topic_or_prompt="Remote Work Best Practices",
        instructions="Productivity tips and team collaboration tools",
        tone=Tone.CASUAL,
        audience=Audience.GENERAL,
        slide_count=8,
        theme=ThemeName.CORPORATE,
    ),
    GenerateDeckRequest(
        mode=Mode.QUICK_PROMPT,
        topic_or_prompt="Space Exploration Milestones",
        instructions="Recent achievements and future missions",
        tone=Tone.PERSUASIVE,
        audience=Audience.STUDENTS,
        slide_count=10,
        theme=ThemeName.ULTRA_VIOLET,
    ),
    GenerateDeckRequest(
        mode=Mode.QUICK_PROMPT,
        topic_or_prompt="Cybersecurity Threats",
        instructions="Current threats and prevention strategies",
        tone=Tone.PROFESSIONAL,
        audience=Audience.TECHNICAL,
        slide_count=14,
        theme=ThemeName.DEEP_SPACE,
    ),
]


DEMO_LIVE_WIDGETS: list[dict[str, Any]] = [
    {
        "kind": "LiveChart",
        "apiUrl": "/api/live-proxy?demo=alcohol_trend",
        "xKey": "time",
        "yKey": "value",
        "refreshMs": 5000,
    },
    {"kind": "Ticker", "symbols": ["BTC", "ETH", "ADA"], "refreshMs": 10000},
    {"kind": "Countdown", "targetIso": "2024-12-31T23:59:59Z"},
    {"kind": "Map", "lat": -33.8688, "lng": 151.2093, "zoom": 10},
    {"kind": "Iframe", "src": "https://example.com/dashboard", "height": 300},
]
