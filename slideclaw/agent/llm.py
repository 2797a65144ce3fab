"""LiteLLM wrapper for model-agnostic chat completions with tool calling.

LiteLLM gives one OpenAI-shaped interface over many providers, so the agent
speaks the OpenAI tool-calling format regardless of which model is
configured. Calls go straight to the provider unless ``llm_base_url`` points
at a LiteLLM proxy.

This module:
- Wraps litellm.acompletion()
- Normalizes errors to our domain exceptions (no retries)
- Logs token usage
"""

from __future__ import annotations

from typing import Any

import litellm
import structlog

from slideclaw.config import Settings, get_settings

log = structlog.get_logger(__name__)


class LLMError(Exception):
    """Base exception for all LLM call failures."""


class LLMRateLimitError(LLMError):
    """Upstream LLM rate limit exceeded."""


class LLMUnavailableError(LLMError):
    """LLM service is unavailable."""


class LLMClient:
    """Thin wrapper around LiteLLM with structured logging."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()

    async def complete(
        self,
        *,
        messages: list[dict[str, Any]],
        tools: list[dict[str, Any]] | None = None,
        model: str | None = None,
        **kwargs: Any,
    ) -> litellm.ModelResponse:
        """Send a chat completion request via LiteLLM.

        Args:
            messages: OpenAI-format message dicts
            tools: OpenAI-format function tool specs
            model: Model identifier. Falls back to LLM_MODEL.
            **kwargs: Additional kwargs passed to litellm.acompletion()

        Raises:
            LLMRateLimitError: Upstream rate limit
            LLMUnavailableError: Service unavailable
            LLMError: Any other LLM failure
        """
        effective_model = model or self._settings.llm_model
        api_key = self._settings.llm_api_key
        if api_key is not None:
            kwargs.setdefault("api_key", api_key.get_secret_value())
        if self._settings.llm_base_url:
            kwargs.setdefault("api_base", self._settings.llm_base_url)
        if tools:
            kwargs["tools"] = tools

        log.debug(
            "llm.completion_request",
            model=effective_model,
            message_count=len(messages),
            tool_count=len(tools or []),
        )

        try:
            response: litellm.ModelResponse = await litellm.acompletion(
                model=effective_model,
                messages=messages,
                temperature=self._settings.llm_temperature,
                max_tokens=self._settings.llm_max_tokens,
                **kwargs,
            )
        except litellm.exceptions.RateLimitError as exc:
            raise LLMRateLimitError(f"Rate limit from upstream LLM: {exc}") from exc
        except litellm.exceptions.ServiceUnavailableError as exc:
            raise LLMUnavailableError(f"LLM service unavailable: {exc}") from exc
        except Exception as exc:
            raise LLMError(f"LLM completion failed: {exc}") from exc

        usage = getattr(response, "usage", None)
        if usage:
            log.info(
                "llm.completion_done",
                model=effective_model,
                prompt_tokens=usage.prompt_tokens,
                completion_tokens=usage.completion_tokens,
                total_tokens=usage.total_tokens,
            )

        return response
