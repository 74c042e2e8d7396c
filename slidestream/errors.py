"""Exception hierarchy for slidestream."""

from __future__ import annotations


class SlideStreamError(Exception):
    """Base class for all slidestream errors."""


class MalformedSlideError(SlideStreamError):
    """An object fragment could not be decoded into a slide record.

    Raised by the finalizer and always recovered by the scanner: the
    fragment is discarded and scanning continues with the next object.
    """

    def __init__(self, fragment: str, reason: str) -> None:
        super().__init__(f"Malformed slide fragment ({reason}): {fragment[:80]!r}")
        self.fragment = fragment
        self.reason = reason
