"""LiteLLM wrapper for provider-agnostic LLM calls.

LiteLLM gives one interface over the two real backends we support:
- ``openai``: any OpenAI-compatible chat-completions endpoint
- ``ollama``: a local Ollama server (``/api/generate``)

plus the offline ``demo`` provider implemented in ``deckgen.llm.demo``.

This module:
- Wraps litellm.acompletion() for single-prompt completions
- Retries upstream rate limits with exponential backoff via tenacity
- Normalizes errors to our domain exceptions with actionable messages
- Logs token usage for monitoring
"""

from __future__ import annotations

import asyncio
from typing import Any

import httpx
import litellm
import structlog
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from deckgen.config import LLMProvider, Settings, get_settings
from deckgen.llm.demo import demo_response
from deckgen.llm.json_repair import parse_json_object

log = structlog.get_logger(__name__)

_PROVIDER_LABELS: dict[LLMProvider, str] = {
    LLMProvider.OPENAI: "OpenAI API",
    LLMProvider.OLLAMA: "Ollama",
    LLMProvider.DEMO: "demo provider",
}


class LLMError(Exception):
    """Base exception for all LLM call failures."""


class LLMRateLimitError(LLMError):
    """Upstream LLM rate limit exceeded."""


class LLMUnavailableError(LLMError):
    """LLM service cannot be reached."""


class LLMTimeoutError(LLMError):
    """LLM request exceeded its timeout."""


class LLMModelNotFoundError(LLMError):
    """Configured model does not exist on the provider."""


class LLMClient:
    """Thin wrapper around LiteLLM with retry logic and structured logging."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()

    @property
    def provider(self) -> LLMProvider:
        return self._settings.effective_provider

    @property
    def model(self) -> str:
        return self._settings.effective_model

    def describe(self) -> dict[str, str]:
        """Provider, model and endpoint in use (no secrets)."""
        return {
            "provider": self.provider.value,
            "model": self.model,
            "base_url": self._settings.effective_base_url,
        }

    async def ping(self, timeout: float = 2.0) -> str:
        """Probe the provider's model listing. Returns "ok" or an error string."""
        provider = self.provider
        if provider == LLMProvider.DEMO:
            return "ok"

        base_url = self._settings.effective_base_url
        headers: dict[str, str] = {}
        if provider == LLMProvider.OLLAMA:
            url = f"{base_url}/api/tags"
        else:
            url = f"{base_url}/v1/models"
            headers["Authorization"] = f"Bearer {self._settings.llm_api_key.get_secret_value()}"

        try:
            async with httpx.AsyncClient(timeout=timeout) as client:
                response = await client.get(url, headers=headers)
                response.raise_for_status()
        except httpx.HTTPError as exc:
            return f"error: {type(exc).__name__}: {exc}"
        return "ok"

    async def complete(self, prompt: str) -> str:
        """Send ``prompt`` as a single user message and return the reply text.

        Raises:
            LLMRateLimitError: Upstream rate limit after retries
            LLMUnavailableError: Provider unreachable
            LLMTimeoutError: Request timed out
            LLMModelNotFoundError: Model not installed / unknown
            LLMError: Any other LLM failure
        """
        if self.provider == LLMProvider.DEMO:
            await asyncio.sleep(self._settings.demo_latency_seconds)
            return demo_response(prompt)
        return await self._complete_remote(prompt)

    async def complete_json(self, prompt: str) -> dict[str, Any]:
        """``complete`` followed by JSON repair.

        Raises:
            LLMError: as for ``complete``
            JSONRepairError: reply holds no JSON object
        """
        return parse_json_object(await self.complete(prompt))

    @retry(
        retry=retry_if_exception_type(LLMRateLimitError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        reraise=True,
    )
    async def _complete_remote(self, prompt: str) -> str:
        settings = self._settings
        provider = self.provider
        label = _PROVIDER_LABELS[provider]
        base_url = settings.effective_base_url
        model = self.model
        timeout = settings.llm_request_timeout_seconds

        request: dict[str, Any] = {
            "model": f"{provider.value}/{model}",
            "messages": [{"role": "user", "content": prompt}],
            "temperature": settings.llm_temperature,
            "max_tokens": settings.llm_max_tokens,
            "timeout": timeout,
            "stream": False,
        }
        if provider == LLMProvider.OPENAI:
            request["api_base"] = f"{base_url}/v1"
            request["api_key"] = settings.llm_api_key.get_secret_value()
        else:
            request["api_base"] = base_url

        log.debug(
            "llm.completion_request",
            provider=provider.value,
            model=model,
            prompt_chars=len(prompt),
            max_tokens=settings.llm_max_tokens,
        )

        try:
            response = await litellm.acompletion(**request)
        except litellm.exceptions.RateLimitError as exc:
            raise LLMRateLimitError(f"Rate limit from {label}: {exc}") from exc
        except litellm.exceptions.Timeout as exc:
            raise LLMTimeoutError(
                f"Request to {label} timed out after {timeout:g} seconds. "
                "The model may be slow or unavailable."
            ) from exc
        except litellm.exceptions.NotFoundError as exc:
            if provider == LLMProvider.OLLAMA:
                message = (
                    f'Model "{model}" not found. Please ensure the model is installed '
                    f"in Ollama. Run: ollama pull {model}"
                )
            else:
                message = f'Model "{model}" not found at {base_url}'
            raise LLMModelNotFoundError(message) from exc
        except (
            litellm.exceptions.APIConnectionError,
            litellm.exceptions.ServiceUnavailableError,
            ConnectionError,
        ) as exc:
            raise LLMUnavailableError(
                f"Cannot connect to {label} at {base_url}. "
                "Please ensure it is running and accessible."
            ) from exc
        except Exception as exc:
            raise LLMError(f"{label} error: {exc}") from exc

        content = self.extract_text(response)
        if not content:
            raise LLMError(f"Invalid response from {label}: missing content")

        usage = getattr(response, "usage", None)
        if usage:
            log.info(
                "llm.completion_done",
                provider=provider.value,
                model=model,
                prompt_tokens=usage.prompt_tokens,
                completion_tokens=usage.completion_tokens,
                total_tokens=usage.total_tokens,
            )

        return content

    @staticmethod
    def extract_text(response: Any) -> str:
        """Extract the assistant text content from a completion response."""
        try:
            return response.choices[0].message.content or ""
        except (AttributeError, IndexError, KeyError, TypeError):
            return ""
