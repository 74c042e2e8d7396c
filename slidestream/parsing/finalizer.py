"""Conversion of a balanced object fragment into a slide record."""

from __future__ import annotations

import json
import logging
import time
import uuid
from collections.abc import Callable

from slidestream.errors import MalformedSlideError
from slidestream.schemas.slides import SlideRecord

logger = logging.getLogger(__name__)

DEFAULT_SLIDE_TYPE = "TitleSlide"


def synthesize_slide_id(slide_index: int, clock: Callable[[], float] = time.time) -> str:
    """Build an id from wall-clock milliseconds and the slide ordinal.

    A short random suffix keeps ids distinct across two streams that
    finalize the same ordinal within the same millisecond.
    """
    millis = int(clock() * 1000)
    return f"slide-{millis}-{slide_index}-{uuid.uuid4().hex[:6]}"


def finalize_slide(
    object_text: str,
    slide_index: int,
    *,
    fallback_type: str = DEFAULT_SLIDE_TYPE,
    clock: Callable[[], float] = time.time,
) -> SlideRecord:
    """Decode a complete ``{...}`` fragment and back-fill type and id.

    Args:
        object_text: Raw text from the opening to the matching closing brace.
        slide_index: Ordinal the slide will be emitted under.
        fallback_type: Type assigned when the fragment has none.
        clock: Time source for synthesized ids.

    Returns:
        The decoded record with non-empty "type" and "id" keys.

    Raises:
        MalformedSlideError: If the fragment is not a JSON object.
    """
    try:
        record = json.loads(object_text)
    except json.JSONDecodeError as exc:
        raise MalformedSlideError(object_text, exc.msg) from exc

    if not isinstance(record, dict):
        raise MalformedSlideError(object_text, f"decoded to {type(record).__name__}")

    if not record.get("type"):
        logger.warning("Slide %d missing type, defaulting to %s", slide_index, fallback_type)
        record["type"] = fallback_type

    if not record.get("id"):
        record["id"] = synthesize_slide_id(slide_index, clock)

    return record
