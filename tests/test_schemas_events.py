"""Tests for slidestream.schemas — events, slides and configuration models."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from slidestream.schemas import (
    GenerationConfig,
    PacingConfig,
    PartialFieldUpdate,
    SlideEvent,
    SlideEventType,
)


class TestSlideEventType:
    def test_all_event_types_exist(self):
        assert [e.value for e in SlideEventType] == [
            "start", "character", "slide_created", "complete", "error",
        ]

    def test_event_type_is_string(self):
        assert SlideEventType.SLIDE_CREATED == "slide_created"
        assert str(SlideEventType.ERROR) == "error"


class TestSlideEventPayloads:
    def test_start(self):
        assert SlideEvent.start().payload() == {
            "type": "start",
            "message": "Starting slide generation...",
        }

    def test_character(self):
        update = PartialFieldUpdate(slide_index=2, field="content", content="Hel")
        assert SlideEvent.character(update).payload() == {
            "type": "character",
            "slideIndex": 2,
            "field": "content",
            "content": "Hel",
            "isTyping": True,
        }

    def test_slide_created(self):
        slide = {"type": "TitleSlide", "id": "s1", "title": "Hi"}
        assert SlideEvent.slide_created(0, slide).payload() == {
            "type": "slide_created",
            "slideIndex": 0,
            "slide": slide,
        }

    def test_complete_counts_slides(self):
        slides = [{"id": "a", "type": "T"}, {"id": "b", "type": "T"}]
        payload = SlideEvent.complete(slides).payload()
        assert payload == {"type": "complete", "slides": slides, "totalSlides": 2}

    def test_complete_copies_slide_list(self):
        slides = [{"id": "a", "type": "T"}]
        event = SlideEvent.complete(slides)
        slides.append({"id": "b", "type": "T"})
        assert event.data["totalSlides"] == 1
        assert len(event.data["slides"]) == 1

    def test_slide_payloads_are_copies(self):
        slide = {"id": "a", "type": "T", "title": "Original"}
        created = SlideEvent.slide_created(0, slide)
        complete = SlideEvent.complete([slide])

        created.data["slide"]["title"] = "Edited"
        assert slide["title"] == "Original"
        assert complete.data["slides"][0]["title"] == "Original"
        assert complete.data["slides"][0] is not slide

    def test_error(self):
        assert SlideEvent.error("boom").payload() == {"type": "error", "message": "boom"}
        assert SlideEvent.error("").data["message"] == "Unknown error occurred"

    def test_terminal_flag(self):
        assert SlideEvent.complete([]).is_terminal
        assert SlideEvent.error("x").is_terminal
        assert not SlideEvent.start().is_terminal

    def test_timestamp_not_in_payload(self):
        event = SlideEvent.start()
        assert event.timestamp > 0
        assert "timestamp" not in event.payload()

    def test_payload_is_json_serializable(self):
        event = SlideEvent.slide_created(1, {"type": "T", "id": "x", "options": ["a"]})
        assert json.loads(json.dumps(event.payload()))["slide"]["options"] == ["a"]


class TestPartialFieldUpdate:
    def test_negative_index_rejected(self):
        with pytest.raises(ValidationError):
            PartialFieldUpdate(slide_index=-1, field="title", content="x")


class TestGenerationConfig:
    def test_defaults(self):
        config = GenerationConfig()
        assert config.model == "gpt-4o"
        assert config.temperature == 0.7
        assert config.max_tokens == 4000
        assert config.fallback_type == "TitleSlide"
        assert config.pacing.character_delay == 0.02
        assert config.pacing.slide_delay == 0.1

    def test_negative_pacing_rejected(self):
        with pytest.raises(ValidationError):
            PacingConfig(character_delay=-0.1)

    def test_empty_fallback_type_rejected(self):
        with pytest.raises(ValidationError):
            GenerationConfig(fallback_type="")
