"""Health check endpoints.

/health/live   - Liveness probe: is the process up?
/health/ready  - Readiness probe: is the configured LLM provider reachable?

These are public endpoints.
"""

from __future__ import annotations

from datetime import UTC, datetime

from fastapi import APIRouter, Depends

from deckgen.config import Settings, get_settings
from deckgen.llm.client import LLMClient

router = APIRouter(prefix="/health", tags=["health"])


@router.get("/live")
async def liveness() -> dict:
    """Liveness probe - always returns 200 if the process is running."""
    return {"status": "ok", "timestamp": datetime.now(UTC).isoformat()}


@router.get("/ready")
async def readiness(settings: Settings = Depends(get_settings)) -> dict:
    """Readiness probe - checks the LLM provider answers."""
    llm = LLMClient(settings)
    llm_status = await llm.ping()

    return {
        "status": "ready" if llm_status == "ok" else "not_ready",
        "llm": {**llm.describe(), "status": llm_status},
        "timestamp": datetime.now(UTC).isoformat(),
    }
