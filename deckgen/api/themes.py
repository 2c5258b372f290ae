"""Theme catalogue endpoints."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from deckgen.deck.themes import THEMES, get_theme

router = APIRouter(prefix="/themes", tags=["themes"])


@router.get("", summary="List themes with their design tokens")
async def list_themes() -> dict[str, dict[str, str]]:
    return {name.value: tokens.to_dict() for name, tokens in THEMES.items()}


@router.get("/{name}", summary="Design tokens of one theme")
async def read_theme(name: str) -> dict[str, str]:
    try:
        return get_theme(name).to_dict()
    except KeyError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown theme: {name}",
        )
