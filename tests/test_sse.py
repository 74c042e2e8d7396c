"""Tests for slidestream.streaming.sse — event-stream framing."""

from __future__ import annotations

import pytest

from slidestream.schemas.events import SlideEvent
from slidestream.schemas.slides import PartialFieldUpdate
from slidestream.streaming.sse import format_sse, sse_frames


class TestFormatSse:
    def test_single_data_line_with_blank_separator(self):
        frame = format_sse(SlideEvent.error("bad\nthing"))
        assert frame.startswith("data: ")
        assert frame.endswith("\n\n")
        # The embedded newline is JSON-escaped, so the frame has one line.
        assert frame.count("\n") == 2

    def test_frames_decode_back_in_order(self, parse_sse):
        events = [
            SlideEvent.start(),
            SlideEvent.character(PartialFieldUpdate(slide_index=0, field="title", content="A")),
            SlideEvent.slide_created(0, {"type": "T", "id": "x", "title": "A"}),
            SlideEvent.complete([{"type": "T", "id": "x", "title": "A"}]),
        ]
        text = "".join(format_sse(e) for e in events)
        decoded = parse_sse(text)
        assert [d["type"] for d in decoded] == ["start", "character", "slide_created", "complete"]
        assert decoded[1]["content"] == "A"


class TestSseFrames:
    @pytest.mark.asyncio
    async def test_maps_each_event_to_one_frame(self, parse_sse):
        async def events():
            yield SlideEvent.start()
            yield SlideEvent.complete([])

        frames = [f async for f in sse_frames(events())]
        assert len(frames) == 2
        assert parse_sse(frames[1]) == [{"type": "complete", "slides": [], "totalSlides": 0}]

    @pytest.mark.asyncio
    async def test_closing_frames_closes_events(self):
        closed = []

        async def events():
            try:
                yield SlideEvent.start()
                yield SlideEvent.complete([])
            finally:
                closed.append(True)

        frames = sse_frames(events())
        await frames.__anext__()
        await frames.aclose()
        assert closed == [True]
