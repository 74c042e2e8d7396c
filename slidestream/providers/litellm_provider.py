"""LiteLLM adapter implementing the ModelProvider interface.

Routes streaming completion requests to any LLM provider via LiteLLM's
unified API. Failures are mapped to TimeoutError or RuntimeError with a
short reason. Nothing is retried: a failed stream surfaces as a single
error event downstream.
"""

from __future__ import annotations

import logging
import os
from collections.abc import AsyncIterator

import litellm

# Suppress LiteLLM's "Give Feedback / Get Help" and "Provider List" banners
litellm.suppress_debug_info = True

from slidestream.providers.base import ModelProvider
from slidestream.schemas.config import ModelConfig

logger = logging.getLogger(__name__)


def _short_error_reason(error: Exception) -> str:
    """Extract a short, user-friendly reason from a LiteLLM error.

    Maps error types and status codes to concise descriptions instead
    of dumping full JSON error payloads.
    """
    error_str = str(error).lower()
    if "rate" in error_str or "429" in error_str:
        return "rate limit"
    if "overloaded" in error_str or "529" in error_str:
        return "overloaded"
    if "timeout" in error_str or isinstance(error, TimeoutError):
        return "timeout"
    if "503" in error_str or "unavailable" in error_str:
        return "service unavailable"
    if "500" in error_str or "internal" in error_str:
        return "server error"
    if "connection" in error_str:
        return "connection error"
    # Fallback: first 80 chars of the error
    return str(error)[:80]


class LiteLLMProvider(ModelProvider):
    """Streaming LLM adapter powered by LiteLLM."""

    def __init__(self, config: ModelConfig) -> None:
        super().__init__(config)
        # Resolve API key from environment
        self._api_key = os.environ.get(config.api_key_env, "")

    async def stream_text(
        self,
        messages: list[dict[str, str]],
        system: str,
        *,
        temperature: float = 0.7,
        max_tokens: int = 4000,
        timeout: int = 120,
    ) -> AsyncIterator[str]:
        """Stream a completion via litellm.acompletion(stream=True).

        Empty deltas (role-only or finish chunks) are skipped.
        """
        full_messages = [{"role": "system", "content": system}, *messages]
        kwargs = self._build_completion_kwargs(full_messages, temperature, max_tokens, timeout)

        response = await self._open_stream(kwargs)
        delta_count = 0
        try:
            async for chunk in response:
                delta = ""
                if chunk.choices and chunk.choices[0].delta:
                    delta = chunk.choices[0].delta.content or ""
                if delta:
                    delta_count += 1
                    yield delta
        except (litellm.APIConnectionError, litellm.APIError) as e:
            raise RuntimeError(
                f"Stream from {self._config.model} interrupted "
                f"({_short_error_reason(e)}) after {delta_count} deltas"
            ) from e
        finally:
            logger.debug("%s streamed %d deltas", self._config.display_name, delta_count)

    def _build_completion_kwargs(
        self,
        messages: list[dict[str, str]],
        temperature: float,
        max_tokens: int,
        timeout: int,
    ) -> dict:
        """Build the kwargs dict for litellm.acompletion."""
        kwargs: dict = {
            "model": self._config.model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
            "timeout": float(timeout),
            "stream": True,
        }

        # Set API key if available
        if self._api_key:
            kwargs["api_key"] = self._api_key

        # Set custom API base if configured
        if self._config.api_base:
            kwargs["api_base"] = self._config.api_base

        return kwargs

    async def _open_stream(self, kwargs: dict):
        """Call litellm.acompletion with stream=True.

        Raises:
            TimeoutError: If the call times out.
            RuntimeError: On any other provider failure.
        """
        try:
            return await litellm.acompletion(**kwargs)
        except (TimeoutError, litellm.Timeout):
            raise TimeoutError(
                f"Streaming call to {self._config.model} timed out after "
                f"{kwargs.get('timeout')}s"
            ) from None
        except litellm.AuthenticationError:
            raise RuntimeError(
                f"Authentication failed for {self._config.model}. "
                f"Check that {self._config.api_key_env} is set correctly."
            ) from None
        except litellm.BadRequestError as e:
            raise RuntimeError(f"Bad request to {self._config.model}: {e}") from e
        except (
            litellm.RateLimitError,
            litellm.ServiceUnavailableError,
            litellm.InternalServerError,
            litellm.APIConnectionError,
        ) as e:
            reason = _short_error_reason(e)
            logger.warning("Streaming call to %s failed (%s)", self._config.display_name, reason)
            raise RuntimeError(
                f"Streaming call to {self._config.model} failed: {reason}"
            ) from e
