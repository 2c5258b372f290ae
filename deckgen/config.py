"""
Application configuration via pydantic-settings.

All settings are loaded from environment variables (or a .env file in dev).
This is the single source of truth for configuration - nothing is hardcoded
elsewhere.
"""

from __future__ import annotations

from enum import StrEnum
from functools import lru_cache

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(StrEnum):
    DEV = "dev"
    PROD = "prod"
    TEST = "test"


class LLMProvider(StrEnum):
    OPENAI = "openai"
    OLLAMA = "ollama"
    DEMO = "demo"


# API key values shipped in example env files; treated as "no key".
PLACEHOLDER_API_KEYS: frozenset[str] = frozenset(
    {
        "your_openai_api_key_here",
        "your_actual_openai_api_key_here",
    }
)

_DEFAULT_BASE_URLS: dict[LLMProvider, str] = {
    LLMProvider.OPENAI: "https://api.openai.com",
    LLMProvider.OLLAMA: "http://localhost:11434",
    LLMProvider.DEMO: "",
}

_DEFAULT_MODELS: dict[LLMProvider, str] = {
    LLMProvider.OPENAI: "gpt-4",
    LLMProvider.OLLAMA: "gemma3:4b",
    LLMProvider.DEMO: "demo",
}


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ------------------------------------------------------------------ #
    # Application
    # ------------------------------------------------------------------ #
    environment: Environment = Environment.DEV
    debug: bool = False

    # ------------------------------------------------------------------ #
    # LLM provider
    # ------------------------------------------------------------------ #
    llm_provider: LLMProvider = Field(
        default=LLMProvider.DEMO,
        description="LLM backend: openai, ollama or demo (canned offline responses)",
    )
    llm_api_key: SecretStr = Field(
        default=SecretStr(""),
        description="Bearer key for the OpenAI-compatible API. Unused by ollama.",
    )
    llm_base_url: str | None = Field(
        default=None,
        description="Provider base URL. Defaults per provider when unset.",
    )
    llm_model: str | None = Field(
        default=None,
        description="Model name as the provider knows it. Defaults per provider when unset.",
    )
    llm_temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    llm_max_tokens: int = Field(default=4000, ge=1)
    llm_request_timeout_seconds: float = Field(
        default=120.0,
        gt=0,
        description="Timeout of a single HTTP request to the model",
    )
    demo_latency_seconds: float = Field(
        default=1.0,
        ge=0,
        description="Simulated response delay of the demo provider",
    )

    # ------------------------------------------------------------------ #
    # Generation pipeline deadlines
    # ------------------------------------------------------------------ #
    outline_timeout_seconds: float = Field(default=60.0, gt=0)
    slide_timeout_seconds: float = Field(default=30.0, gt=0)
    visual_timeout_seconds: float = Field(default=10.0, gt=0)

    # ------------------------------------------------------------------ #
    # Rate Limiting
    # ------------------------------------------------------------------ #
    rate_limit_requests: int = Field(
        default=20,
        ge=1,
        description="Max deck generations per client per window",
    )
    rate_limit_window_seconds: float = Field(default=3600.0, gt=0)

    # ------------------------------------------------------------------ #
    # Exports
    # ------------------------------------------------------------------ #
    export_url_scheme: str = Field(
        default="export",
        min_length=1,
        description="Scheme used for generated export references",
    )

    # ------------------------------------------------------------------ #
    # HTTP
    # ------------------------------------------------------------------ #
    cors_allowed_origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:5173"],
        description="Allowed CORS origins. In production, set to actual frontend URLs.",
    )
    max_request_bytes: int = Field(default=1024 * 1024, ge=1024)

    # ------------------------------------------------------------------ #
    # Derived / Computed
    # ------------------------------------------------------------------ #
    @model_validator(mode="after")
    def _set_debug_from_env(self) -> Settings:
        if self.environment == Environment.DEV:
            self.debug = True
        return self

    @model_validator(mode="after")
    def _validate_production_provider(self) -> Settings:
        """Refuse to start in production on a placeholder OpenAI key.

        A missing or placeholder key silently downgrades the service to
        canned demo content, which is never what a production deploy wants.
        """
        if self.environment != Environment.PROD:
            return self
        if self.llm_provider == LLMProvider.OPENAI and not self.has_usable_api_key:
            raise RuntimeError(
                "PRODUCTION STARTUP BLOCKED -- LLM_PROVIDER=openai but LLM_API_KEY "
                "is empty or a placeholder value."
            )
        return self

    @property
    def has_usable_api_key(self) -> bool:
        key = self.llm_api_key.get_secret_value().strip()
        return bool(key) and key not in PLACEHOLDER_API_KEYS

    @property
    def effective_provider(self) -> LLMProvider:
        """Provider actually used: openai without a usable key falls back to demo."""
        if self.llm_provider == LLMProvider.OPENAI and not self.has_usable_api_key:
            return LLMProvider.DEMO
        return self.llm_provider

    @property
    def effective_base_url(self) -> str:
        provider = self.effective_provider
        if provider == LLMProvider.DEMO:
            return ""
        return (self.llm_base_url or _DEFAULT_BASE_URLS[provider]).rstrip("/")

    @property
    def effective_model(self) -> str:
        provider = self.effective_provider
        if provider == LLMProvider.DEMO:
            return _DEFAULT_MODELS[provider]
        return self.llm_model or _DEFAULT_MODELS[provider]

    @property
    def is_dev(self) -> bool:
        return self.environment in (Environment.DEV, Environment.TEST)

    @property
    def is_prod(self) -> bool:
        return self.environment == Environment.PROD


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings singleton.

    Use FastAPI dependency injection via Depends(get_settings) in endpoints,
    or call directly in non-request contexts (startup, scripts).
    """
    return Settings()
