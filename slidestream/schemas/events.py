"""Outbound event schemas for slide streaming.

Every event a generation stream produces is a SlideEvent. The wire
payload (what the UI receives) is the flat camelCase dict returned by
payload(); the timestamp stays server-side.
"""

from __future__ import annotations

import time
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field

from slidestream.schemas.slides import PartialFieldUpdate, SlideRecord

START_MESSAGE = "Starting slide generation..."
UNKNOWN_ERROR_MESSAGE = "Unknown error occurred"


class SlideEventType(StrEnum):
    """Types of events emitted to the downstream consumer."""

    START = "start"
    CHARACTER = "character"
    SLIDE_CREATED = "slide_created"
    COMPLETE = "complete"
    ERROR = "error"


_TERMINAL_TYPES = frozenset({SlideEventType.COMPLETE, SlideEventType.ERROR})


class SlideEvent(BaseModel):
    """A single outbound event of a generation stream."""

    type: SlideEventType = Field(description="Event type")
    timestamp: float = Field(
        default_factory=time.time,
        description="Unix timestamp when the event was produced",
    )
    data: dict[str, Any] = Field(
        default_factory=dict,
        description="Event payload — varies by event type",
    )

    @property
    def is_terminal(self) -> bool:
        """True for complete and error, the events that close a stream."""
        return self.type in _TERMINAL_TYPES

    def payload(self) -> dict[str, Any]:
        """Return the wire payload: the type tag merged with the data."""
        return {"type": self.type.value, **self.data}

    # ── Constructors ─────────────────────────────────────────────

    @classmethod
    def start(cls) -> SlideEvent:
        return cls(type=SlideEventType.START, data={"message": START_MESSAGE})

    @classmethod
    def character(cls, update: PartialFieldUpdate) -> SlideEvent:
        return cls(
            type=SlideEventType.CHARACTER,
            data={
                "slideIndex": update.slide_index,
                "field": update.field,
                "content": update.content,
                "isTyping": True,
            },
        )

    @classmethod
    def slide_created(cls, slide_index: int, slide: SlideRecord) -> SlideEvent:
        return cls(
            type=SlideEventType.SLIDE_CREATED,
            data={"slideIndex": slide_index, "slide": dict(slide)},
        )

    @classmethod
    def complete(cls, slides: list[SlideRecord]) -> SlideEvent:
        return cls(
            type=SlideEventType.COMPLETE,
            data={"slides": [dict(slide) for slide in slides], "totalSlides": len(slides)},
        )

    @classmethod
    def error(cls, message: str) -> SlideEvent:
        return cls(
            type=SlideEventType.ERROR,
            data={"message": message or UNKNOWN_ERROR_MESSAGE},
        )
