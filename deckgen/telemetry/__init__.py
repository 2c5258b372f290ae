"""Telemetry package for observability.

This package contains:
- Structured logging with request correlation
"""

from __future__ import annotations

from deckgen.telemetry.logging import (
    RequestIdMiddleware,
    bind_generation_context,
    clear_context,
    configure_logging,
)

__all__ = [
    "RequestIdMiddleware",
    "bind_generation_context",
    "clear_context",
    "configure_logging",
]
