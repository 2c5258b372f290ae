"""Export endpoints.

POST /export/json      - cleaned deck JSON as a download
POST /export/document  - block document handed to the PPTX/PDF exporters
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import structlog
from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from deckgen.deck.export import clean_deck, deck_filename, deck_to_document
from deckgen.deck.schema import Deck

log = structlog.get_logger(__name__)

router = APIRouter(prefix="/export", tags=["export"])


class ExportRequestBody(BaseModel):
    deck: Deck


@router.post("/json", summary="Download the deck as JSON with markdown stripped")
async def export_json(body: ExportRequestBody) -> JSONResponse:
    cleaned = clean_deck(body.deck)
    filename = deck_filename(body.deck, "json")
    log.info("export.json", slides=len(cleaned.slides))
    return JSONResponse(
        content=cleaned.model_dump(mode="json"),
        headers={"Content-Disposition": f"attachment; filename*=UTF-8''{quote(filename)}"},
    )


@router.post("/document", summary="Convert the deck to the exporter block format")
async def export_document(body: ExportRequestBody) -> dict[str, Any]:
    document = deck_to_document(body.deck)
    log.info("export.document", deck_id=document["id"], slides=len(document["slides"]))
    return document
