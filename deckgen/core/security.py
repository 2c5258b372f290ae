"""Security middleware and utilities.

Key protections:
- Security headers (CSP, HSTS, MIME sniffing)
- Request size limiting so oversized prompts are rejected early
- Log injection prevention via input sanitization
"""

from __future__ import annotations

import re

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp

log = structlog.get_logger(__name__)

DEFAULT_MAX_REQUEST_SIZE = 1024 * 1024

# Control characters to strip for log injection prevention
_CONTROL_CHARS_PATTERN = re.compile(r"[\x00-\x1f\x7f-\x9f]")


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses.

    - X-Content-Type-Options: Prevents MIME type sniffing
    - X-Frame-Options: Prevents clickjacking
    - Strict-Transport-Security: Enforces HTTPS in production
    - Content-Security-Policy: Restricts resource loading
    - Referrer-Policy: Limits referrer information leakage
    """

    def __init__(self, app: ASGIApp, *, is_production: bool = False) -> None:
        super().__init__(app)
        self._is_production = is_production

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"

        if self._is_production:
            response.headers["Strict-Transport-Security"] = (
                "max-age=31536000; includeSubDomains; preload"
            )

        # API-only service: nothing is loaded from anywhere
        response.headers["Content-Security-Policy"] = "default-src 'self'; frame-ancestors 'none'"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

        return response


class RequestSizeLimitMiddleware(BaseHTTPMiddleware):
    """Reject request bodies larger than ``max_size`` with 413.

    Only the Content-Length header is inspected; deck requests are small JSON
    documents and always carry one.
    """

    def __init__(self, app: ASGIApp, *, max_size: int = DEFAULT_MAX_REQUEST_SIZE) -> None:
        super().__init__(app)
        self._max_size = max_size

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        content_length = request.headers.get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > self._max_size:
            log.warning(
                "security.request_too_large",
                content_length=content_length,
                max_size=self._max_size,
                path=request.url.path,
                method=request.method,
            )
            return JSONResponse(
                status_code=413,
                content={
                    "detail": (
                        f"Request body too large. Maximum allowed: {self._max_size} bytes"
                    )
                },
            )

        return await call_next(request)


def sanitize_log_value(value: str, max_length: int = 200) -> str:
    """Sanitize user-supplied text before logging it.

    Strips control characters (including newlines) so a topic cannot forge
    log lines, and truncates to ``max_length``.
    """
    if not value:
        return ""

    sanitized = _CONTROL_CHARS_PATTERN.sub("", value)

    if len(sanitized) > max_length:
        sanitized = sanitized[:max_length] + "..."

    return sanitized
