"""Per-stream scan state threaded through the parser."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from slidestream.schemas.slides import SlideRecord


class StreamPhase(StrEnum):
    """Lifecycle of one generation stream."""

    NOT_STARTED = "not_started"
    OUTSIDE_OBJECT = "outside_object"
    INSIDE_OBJECT = "inside_object"
    TERMINATED = "terminated"


@dataclass
class ScanState:
    """Mutable state for a single stream, owned by exactly one parser.

    Created per generation request and discarded once the terminal
    event is produced. Never shared between streams.
    """

    inside_array: bool = False
    brace_depth: int = 0
    current_object_text: str = ""
    slide_index: int = 0
    emitted_slides: list[SlideRecord] = field(default_factory=list)
    terminated: bool = False

    @property
    def phase(self) -> StreamPhase:
        if self.terminated:
            return StreamPhase.TERMINATED
        if not self.inside_array:
            return StreamPhase.NOT_STARTED
        if self.brace_depth > 0:
            return StreamPhase.INSIDE_OBJECT
        return StreamPhase.OUTSIDE_OBJECT
