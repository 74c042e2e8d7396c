"""Configuration schemas for the completion model registry and generation.

Defines the model registry entries loaded from models.toml and the
generation defaults (sampling, timeout, pacing) loaded from defaults.toml.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class ModelConfig(BaseModel):
    """Configuration for a single completion model in the registry.

    Loaded from models.toml. Each entry provides the LiteLLM routing
    information used to open a streaming completion.
    """

    provider: str = Field(description="Provider identifier (e.g. 'openai', 'anthropic')")
    model: str = Field(description="LiteLLM model identifier (e.g. 'gpt-4o')")
    display_name: str = Field(description="Human-friendly model name for CLI output")
    api_key_env: str = Field(description="Environment variable name holding the API key")
    api_base: str = Field(default="", description="Custom API base URL (empty = provider default)")
    context_window: int = Field(gt=0, description="Maximum context window size in tokens")


class PacingConfig(BaseModel):
    """Artificial delays inserted between outbound events for the typing effect."""

    character_delay: float = Field(
        default=0.02, ge=0.0, description="Seconds to pause after each character event"
    )
    slide_delay: float = Field(
        default=0.1, ge=0.0, description="Seconds to pause after each slide_created event"
    )


class GenerationConfig(BaseModel):
    """Top-level configuration for a slide generation stream.

    Loaded from defaults.toml and overridden by CLI flags or request fields.
    """

    model: str = Field(default="gpt-4o", description="Registry key of the default model")
    temperature: float = Field(default=0.7, ge=0.0, le=2.0, description="Sampling temperature")
    max_tokens: int = Field(default=4000, gt=0, description="Completion token limit")
    timeout: int = Field(default=120, gt=0, description="Timeout in seconds for the model call")
    fallback_type: str = Field(
        default="TitleSlide",
        min_length=1,
        description="Slide type assigned to slides that omit one",
    )
    pacing: PacingConfig = Field(default_factory=PacingConfig, description="Event pacing")
