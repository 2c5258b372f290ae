"""Theme design tokens.

Colors and fonts are consumed by renderers; ``image_style`` is fed into the
visual prompt so generated imagery matches the deck.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass

from deckgen.deck.schema import ThemeName

_SYSTEM_FONT = "Inter, system-ui, -apple-system"


@dataclass(frozen=True)
class ThemeTokens:
    bg: str
    surface: str
    primary: str
    accent: str
    text: str
    muted: str
    font: str
    image_style: str

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


THEMES: dict[ThemeName, ThemeTokens] = {
    ThemeName.DEEP_SPACE: ThemeTokens(
        bg="#0B0F1A",
        surface="#101828",
        primary="#7C3AED",
        accent="#22D3EE",
        text="#E2E8F0",
        muted="#94A3B8",
        font=_SYSTEM_FONT,
        image_style="dark, subtle starfield, soft glow, high contrast",
    ),
    ThemeName.ULTRA_VIOLET: ThemeTokens(
        bg="#0F0820",
        surface="#1B1035",
        primary="#A855F7",
        accent="#06B6D4",
        text="#F8FAFC",
        muted="#A1A1AA",
        font=_SYSTEM_FONT,
        image_style="vibrant violet gradients, glassmorphism, soft blur",
    ),
    ThemeName.MINIMAL: ThemeTokens(
        bg="#FFFFFF",
        surface="#F8FAFC",
        primary="#1F2937",
        accent="#3B82F6",
        text="#111827",
        muted="#6B7280",
        font=_SYSTEM_FONT,
        image_style="clean, minimalist, high contrast, geometric",
    ),
    ThemeName.CORPORATE: ThemeTokens(
        bg="#F8FAFC",
        surface="#FFFFFF",
        primary="#1E40AF",
        accent="#059669",
        text="#111827",
        muted="#6B7280",
        font=_SYSTEM_FONT,
        image_style="professional, clean, corporate blue accents",
    ),
}


def get_theme(name: ThemeName | str) -> ThemeTokens:
    """Look up theme tokens.

    Raises:
        KeyError: unknown theme name
    """
    try:
        return THEMES[ThemeName(name)]
    except ValueError as exc:
        raise KeyError(f"Unknown theme: {name}") from exc
