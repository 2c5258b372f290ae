"""FastAPI application entrypoint.

Application startup order:
1. Load settings (from environment)
2. Configure structured logging
3. Initialize rate limiter
4. Register middleware (CORS, security headers, size limit, request id)
5. Include all routers
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from deckgen.api.router import api_v1_router, public_router
from deckgen.config import get_settings
from deckgen.core.rate_limit import init_rate_limiter
from deckgen.core.security import RequestSizeLimitMiddleware, SecurityHeadersMiddleware
from deckgen.telemetry.logging import RequestIdMiddleware, configure_logging

log = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: startup and shutdown."""
    settings = get_settings()

    configure_logging(
        json_logs=settings.is_prod,
        log_level="DEBUG" if settings.debug else "INFO",
    )

    log.info(
        "app.starting",
        environment=settings.environment,
        llm_provider=settings.effective_provider,
        llm_model=settings.effective_model,
    )
    if settings.effective_provider != settings.llm_provider:
        log.warning(
            "app.llm_demo_fallback",
            configured=settings.llm_provider,
            reason="missing or placeholder LLM_API_KEY",
        )

    init_rate_limiter(settings)

    log.info("app.ready")
    yield
    log.info("app.shutdown")


def _field_path(loc: tuple[int | str, ...]) -> str:
    parts = loc[1:] if loc and loc[0] == "body" else loc
    return ".".join(str(part) for part in parts)


def create_app() -> FastAPI:
    """Application factory."""
    settings = get_settings()

    app = FastAPI(
        title="deckgen",
        description=(
            "AI-assisted slide deck generation: outline, per-slide content and "
            "image prompts from a topic or documents."
        ),
        version="0.1.0",
        docs_url="/docs" if settings.is_dev else None,
        redoc_url="/redoc" if settings.is_dev else None,
        openapi_url="/openapi.json" if settings.is_dev else None,
        lifespan=lifespan,
    )

    # ------------------------------------------------------------------ #
    # Middleware (added in reverse order - last added = first executed)
    # ------------------------------------------------------------------ #

    cors_origins = ["*"] if settings.is_dev else settings.cors_allowed_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=settings.is_prod,
        allow_methods=["*"],
        allow_headers=["Content-Type"],
    )
    app.add_middleware(SecurityHeadersMiddleware, is_production=settings.is_prod)
    app.add_middleware(RequestSizeLimitMiddleware, max_size=settings.max_request_bytes)
    app.add_middleware(RequestIdMiddleware)

    # ------------------------------------------------------------------ #
    # Routers
    # ------------------------------------------------------------------ #
    app.include_router(public_router)
    app.include_router(api_v1_router)

    # ------------------------------------------------------------------ #
    # Global exception handlers
    # ------------------------------------------------------------------ #

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        details = [
            {"field": _field_path(tuple(error.get("loc", ()))), "message": error.get("msg", "")}
            for error in exc.errors()
        ]
        log.info("app.invalid_request", path=request.url.path, errors=len(details))
        return JSONResponse(
            status_code=400,
            content={"error": "Invalid request data", "details": details},
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        log.error(
            "app.unhandled_exception",
            path=request.url.path,
            method=request.method,
            error=str(exc),
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"},
        )

    return app


# Module-level app instance for uvicorn
app = create_app()
