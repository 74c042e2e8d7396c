"""Server-Sent Events framing for slide events."""

from __future__ import annotations

import json
from collections.abc import AsyncIterable, AsyncIterator

from slidestream.schemas.events import SlideEvent

SSE_MEDIA_TYPE = "text/event-stream"

SSE_HEADERS: dict[str, str] = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
}


def format_sse(event: SlideEvent) -> str:
    """Frame one event as a single ``data:`` message.

    json.dumps without indent never emits a newline, so each frame is
    exactly one data line followed by the blank-line separator.
    """
    return f"data: {json.dumps(event.payload(), default=str)}\n\n"


async def sse_frames(events: AsyncIterable[SlideEvent]) -> AsyncIterator[str]:
    """Map an event stream to its SSE frames, preserving order.

    Closing this generator closes *events* as well, so a disconnected
    client stops the pipeline behind it.
    """
    try:
        async for event in events:
            yield format_sse(event)
    finally:
        aclose = getattr(events, "aclose", None)
        if aclose is not None:
            await aclose()
