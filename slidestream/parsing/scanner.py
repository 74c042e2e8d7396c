"""Incremental object scanner over an arbitrarily chunked delta stream.

SlideStreamParser is the synchronous core of a generation stream. It is
fed raw deltas in arrival order and returns, per delta, the ordered
list of things the stream produced: PartialFieldUpdate for the typing
display and FinalizedSlide for every object that closed and decoded.

Brace depth counts every '{' and '}' after the array start, including
braces inside string values. There is no string or escape awareness.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from slidestream.errors import MalformedSlideError
from slidestream.parsing.boundary import ArrayBoundaryDetector
from slidestream.parsing.fields import PartialFieldExtractor
from slidestream.parsing.finalizer import DEFAULT_SLIDE_TYPE, finalize_slide
from slidestream.parsing.state import ScanState
from slidestream.schemas.slides import FinalizedSlide, PartialFieldUpdate, SlideRecord

logger = logging.getLogger(__name__)

ParseResult = PartialFieldUpdate | FinalizedSlide


class SlideStreamParser:
    """Single-pass, resumable parser for one generation stream."""

    def __init__(
        self,
        *,
        fallback_type: str = DEFAULT_SLIDE_TYPE,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.state = ScanState()
        self._boundary = ArrayBoundaryDetector(self.state)
        self._fields = PartialFieldExtractor()
        self._fallback_type = fallback_type
        self._clock = clock
        self.malformed_count = 0

    @property
    def slides(self) -> list[SlideRecord]:
        """All slides finalized so far, in array order."""
        return list(self.state.emitted_slides)

    def feed(self, delta: str) -> list[ParseResult]:
        """Consume one delta and return what it produced, in order.

        Raises:
            RuntimeError: If the stream was already finished.
        """
        if self.state.terminated:
            raise RuntimeError("Cannot feed a finished slide stream")

        body = self._boundary.locate(delta)
        results: list[ParseResult] = []
        for char in body:
            result = self._consume(char)
            if result is not None:
                results.append(result)
        return results

    def finish(self) -> list[SlideRecord]:
        """Mark the stream ended and return the finalized slides.

        Any object still open is discarded, never force-finalized.
        """
        state = self.state
        if state.brace_depth > 0:
            logger.info(
                "Stream ended inside slide %d, discarding %d chars",
                state.slide_index, len(state.current_object_text),
            )
        state.brace_depth = 0
        state.current_object_text = ""
        state.terminated = True
        return self.slides

    # ── Internals ────────────────────────────────────────────────

    def _consume(self, char: str) -> ParseResult | None:
        state = self.state

        if char == "{":
            state.brace_depth += 1
            if state.brace_depth == 1:
                state.current_object_text = "{"
                self._fields.reset()
                return None
            state.current_object_text += char

        elif char == "}":
            if state.brace_depth == 0:
                logger.debug("Ignoring stray '}' outside an object")
                return None
            state.current_object_text += char
            state.brace_depth -= 1
            if state.brace_depth == 0:
                return self._close_object()

        elif state.brace_depth > 0:
            state.current_object_text += char

        else:
            # Separators, whitespace and the closing ']' between objects.
            return None

        return self._fields.observe(state.current_object_text, state.slide_index)

    def _close_object(self) -> FinalizedSlide | None:
        state = self.state
        text = state.current_object_text
        state.current_object_text = ""
        self._fields.reset()

        try:
            slide = finalize_slide(
                text,
                state.slide_index,
                fallback_type=self._fallback_type,
                clock=self._clock,
            )
        except MalformedSlideError as exc:
            self.malformed_count += 1
            logger.warning("Skipping slide %d: %s", state.slide_index, exc)
            return None

        finalized = FinalizedSlide(slide_index=state.slide_index, slide=slide)
        state.emitted_slides.append(slide)
        state.slide_index += 1
        return finalized
