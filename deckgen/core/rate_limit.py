"""Per-client rate limiting using an in-process fixed window counter.

Deck generation fans out into one LLM call per slide, so requests are
limited per client (by remote address) over a long window rather than per
minute. Counters live in process memory; multiple API instances each keep
their own.

Thread safety: asyncio.Lock per client ensures no races in a single process.
"""

from __future__ import annotations

import asyncio
import time
from collections import defaultdict
from dataclasses import dataclass, field

import structlog
from fastapi import HTTPException, Request, status

from deckgen.config import Settings, get_settings

log = structlog.get_logger(__name__)


@dataclass
class _WindowCounter:
    """Window state for one client."""
    window_start: float = field(default_factory=time.monotonic)
    count: int = 0
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)


class RateLimiter:
    """In-process per-client rate limiter.

    One instance should be shared across the application (singleton via
    lifespan or dependency).
    """

    def __init__(self, limit: int, window_seconds: float) -> None:
        self._limit = limit
        self._window_seconds = window_seconds
        self._counters: dict[str, _WindowCounter] = defaultdict(_WindowCounter)

    @property
    def limit(self) -> int:
        return self._limit

    async def check(self, client_key: str) -> None:
        """Check and increment the counter for a client.

        Raises HTTP 429 once the client has used up the window's allowance.
        A request that is rejected does not consume allowance.
        """
        counter = self._counters[client_key]

        async with counter.lock:
            now = time.monotonic()
            elapsed = now - counter.window_start

            if elapsed >= self._window_seconds:
                counter.window_start = now
                counter.count = 0
                elapsed = 0.0

            if counter.count >= self._limit:
                retry_after = int(self._window_seconds - elapsed) + 1
                log.warning(
                    "rate_limit.exceeded",
                    client=client_key,
                    count=counter.count,
                    limit=self._limit,
                )
                raise HTTPException(
                    status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                    detail=(
                        f"Rate limit exceeded: {self._limit} deck generations per "
                        f"{int(self._window_seconds)} seconds"
                    ),
                    headers={"Retry-After": str(retry_after)},
                )

            counter.count += 1

    def reset(self, client_key: str) -> None:
        """Reset the counter for a client (useful in tests)."""
        self._counters.pop(client_key, None)


def client_key(request: Request) -> str:
    """Rate-limit key for a request: the remote address."""
    if request.client is None:
        return "unknown"
    return request.client.host


# Module-level singleton - initialized from settings
_rate_limiter: RateLimiter | None = None


def init_rate_limiter(settings: Settings | None = None) -> RateLimiter:
    """Initialize the global rate limiter from settings."""
    global _rate_limiter
    cfg = settings or get_settings()
    _rate_limiter = RateLimiter(cfg.rate_limit_requests, cfg.rate_limit_window_seconds)
    log.info(
        "rate_limiter.initialized",
        limit=cfg.rate_limit_requests,
        window_seconds=cfg.rate_limit_window_seconds,
    )
    return _rate_limiter


def get_rate_limiter() -> RateLimiter:
    """FastAPI dependency - return the initialized rate limiter."""
    if _rate_limiter is None:
        return init_rate_limiter()
    return _rate_limiter
