"""Live extraction of in-progress string fields from an open object.

While an object is being scanned, the extractor watches its raw text for
a recognized field whose string value has been opened but not closed, and
reports the value typed so far. The output is what a per-character
re-run of

    "(title|subtitle|subtext|content|question)"\\s*:\\s*"([^"]*)$

against the object text would report, but the state is kept
incrementally (open field plus value offset) so only quote characters
trigger a pattern search.
"""

from __future__ import annotations

import re

from slidestream.schemas.slides import PartialFieldUpdate

# Field names streamed to the typing display. Fixed for now.
RECOGNIZED_FIELDS: tuple[str, ...] = ("title", "subtitle", "subtext", "content", "question")

_FIELD_OPENING_RE = re.compile(
    r'"(' + "|".join(RECOGNIZED_FIELDS) + r')"\s*:\s*"\Z'
)


class PartialFieldExtractor:
    """Tracks the single most recently opened recognized string field.

    Quotes are not escape-aware: an escaped quote inside a value ends
    the live stream of that value, exactly like the pattern above.
    """

    def __init__(self) -> None:
        self._field: str | None = None
        self._value_start = 0

    def reset(self) -> None:
        """Forget any open field; called when a new object starts."""
        self._field = None
        self._value_start = 0

    def observe(self, object_text: str, slide_index: int) -> PartialFieldUpdate | None:
        """Inspect *object_text* after its last character was appended.

        Returns an update when the text ends inside a recognized field's
        value and that value is non-empty.
        """
        if object_text.endswith('"'):
            if self._field is not None:
                # Closing quote of the open value.
                self._field = None
                return None
            match = _FIELD_OPENING_RE.search(object_text)
            if match:
                self._field = match.group(1)
                self._value_start = len(object_text)
            return None

        if self._field is None:
            return None

        return PartialFieldUpdate(
            slide_index=slide_index,
            field=self._field,
            content=object_text[self._value_start:],
        )
