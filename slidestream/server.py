"""FastAPI service streaming generated slides as Server-Sent Events.

The UI posts a finished system prompt; the response is a text/event-stream
carrying start, character, slide_created and a final complete or error
event, one ``data:`` frame each.

Prompt construction, persistence and auth belong to other services.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, StreamingResponse
from pydantic import BaseModel, Field

from slidestream.providers.base import ModelProvider
from slidestream.providers.litellm_provider import LiteLLMProvider
from slidestream.providers.registry import load_generation_config, load_models, resolve_model
from slidestream.schemas.config import GenerationConfig, ModelConfig
from slidestream.streaming.pacer import Pacer
from slidestream.streaming.pipeline import SlideStreamPipeline
from slidestream.streaming.sse import SSE_HEADERS, SSE_MEDIA_TYPE, sse_frames

logger = logging.getLogger(__name__)

ProviderFactory = Callable[[ModelConfig], ModelProvider]


class SlideStreamRequest(BaseModel):
    """Body of POST /api/slides/stream."""

    prompt: str = Field(default="", description="Fully rendered system prompt")
    model: str = Field(default="", description="Registry key (empty = configured default)")
    messages: list[dict[str, str]] = Field(
        default_factory=list, description="Optional extra conversation messages"
    )


def create_app(
    *,
    registry: dict[str, ModelConfig] | None = None,
    config: GenerationConfig | None = None,
    provider_factory: ProviderFactory = LiteLLMProvider,
    pacer: Pacer | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Registry and config default to the shipped TOML files. Tests inject
    a fake provider factory and an instant pacer.
    """
    registry = registry if registry is not None else load_models()
    config = config or load_generation_config()

    app = FastAPI(
        title="slidestream",
        description="Incremental slide generation over Server-Sent Events",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.post("/api/slides/stream", response_model=None)
    async def stream_slides(request: SlideStreamRequest) -> StreamingResponse | JSONResponse:
        """Stream slides for one generation request."""
        if not request.prompt.strip():
            return JSONResponse({"error": "Missing required context data"}, status_code=400)

        try:
            model_cfg = resolve_model(registry, request.model or config.model)
        except ValueError as e:
            return JSONResponse({"error": str(e)}, status_code=400)

        try:
            provider = provider_factory(model_cfg)
        except Exception:
            logger.exception("Failed to create provider for %s", model_cfg.model)
            return JSONResponse({"error": "Internal server error"}, status_code=500)

        logger.info("Streaming slides with %s", provider.display_name)
        deltas = provider.stream_text(
            request.messages,
            request.prompt,
            temperature=config.temperature,
            max_tokens=config.max_tokens,
            timeout=config.timeout,
        )
        pipeline = SlideStreamPipeline.from_config(config, pacer=pacer)
        return StreamingResponse(
            sse_frames(pipeline.run(deltas)),
            media_type=SSE_MEDIA_TYPE,
            headers=SSE_HEADERS,
        )

    @app.get("/api/models")
    async def list_models() -> list[dict[str, Any]]:
        """List registered completion models."""
        return [
            {
                "key": key,
                "provider": cfg.provider,
                "model": cfg.model,
                "display_name": cfg.display_name,
                "context_window": cfg.context_window,
            }
            for key, cfg in registry.items()
        ]

    @app.get("/api/config")
    async def get_config() -> dict[str, Any]:
        """Return the active generation configuration."""
        return config.model_dump()

    return app
