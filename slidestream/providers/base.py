"""Abstract base class for completion providers.

Defines the ModelProvider interface the slide service streams from. The
pipeline only ever sees an async iterator of text deltas; it never calls
provider SDKs directly.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator

from slidestream.schemas.config import ModelConfig


class ModelProvider(ABC):
    """Abstract interface for any LLM that can stream a slide completion."""

    def __init__(self, config: ModelConfig) -> None:
        self._config = config

    # ── Identity ──────────────────────────────────────────────

    @property
    def provider_id(self) -> str:
        """Provider identifier (e.g. 'openai', 'anthropic')."""
        return self._config.provider

    @property
    def model_id(self) -> str:
        """LiteLLM model identifier used for routing."""
        return self._config.model

    @property
    def display_name(self) -> str:
        """Human-friendly model name for CLI output."""
        return self._config.display_name

    @property
    def config(self) -> ModelConfig:
        """The full ModelConfig backing this provider."""
        return self._config

    # ── Core interface ────────────────────────────────────────

    @abstractmethod
    def stream_text(
        self,
        messages: list[dict[str, str]],
        system: str,
        *,
        temperature: float = 0.7,
        max_tokens: int = 4000,
        timeout: int = 120,
    ) -> AsyncIterator[str]:
        """Open a streaming completion and yield its text deltas in order.

        Args:
            messages: Conversation messages in OpenAI format
                      (list of {"role": ..., "content": ...} dicts).
            system: System prompt for this call.
            temperature: Sampling temperature.
            max_tokens: Completion token limit.
            timeout: Timeout in seconds for the model call.

        Yields:
            Text deltas exactly as the provider delivers them. Deltas carry
            no alignment guarantees.

        Raises:
            TimeoutError: If opening the stream times out.
            RuntimeError: If the model call fails.
        """
