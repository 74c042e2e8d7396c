"""slidestream provider layer.

All LLM interactions go through LiteLLMProvider via the ModelProvider interface.
"""

from slidestream.providers.base import ModelProvider
from slidestream.providers.litellm_provider import LiteLLMProvider
from slidestream.providers.registry import (
    load_generation_config,
    load_models,
    resolve_model,
)

__all__ = [
    "LiteLLMProvider",
    "ModelProvider",
    "load_generation_config",
    "load_models",
    "resolve_model",
]
