"""Detection of the top-level array start in a completion stream."""

from __future__ import annotations

import logging

from slidestream.parsing.state import ScanState

logger = logging.getLogger(__name__)


class ArrayBoundaryDetector:
    """Strips everything up to and including the first '['.

    Models often prefix the array with explanatory text ("Here are your
    slides:"). Until a '[' arrives every delta is preamble and is dropped.
    After activation the detector is a pass-through for the rest of the
    stream.
    """

    def __init__(self, state: ScanState) -> None:
        self._state = state

    def locate(self, delta: str) -> str:
        """Return the part of *delta* that belongs to the array body."""
        if self._state.inside_array:
            return delta

        start = delta.find("[")
        if start < 0:
            if delta:
                logger.debug("Discarding %d chars of preamble", len(delta))
            return ""

        self._state.inside_array = True
        if start:
            logger.debug("Discarding %d chars of preamble before array start", start)
        return delta[start + 1:]
