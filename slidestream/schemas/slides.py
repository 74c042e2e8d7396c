"""Slide-level schemas produced by the streaming parser."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, Field

# One decoded slide object. Values are whatever the model emitted; the
# parser guarantees only non-empty "type" and "id" keys.
SlideRecord = dict[str, Any]


class PartialFieldUpdate(BaseModel):
    """Snapshot of a recognized field's in-progress string value.

    Superseded by any later update with the same (slide_index, field).
    Never persisted; it only drives the live typing display.
    """

    slide_index: int = Field(ge=0, description="Ordinal of the slide being typed")
    field: str = Field(description="Recognized field name (title, content, ...)")
    content: str = Field(description="Value accumulated so far, including the latest character")


@dataclass(frozen=True)
class FinalizedSlide:
    """A slide whose closing brace was seen and whose text decoded cleanly."""

    slide_index: int
    slide: SlideRecord
