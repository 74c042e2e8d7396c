"""Pydantic schemas for configuration, slides and outbound events."""

from slidestream.schemas.config import GenerationConfig, ModelConfig, PacingConfig
from slidestream.schemas.events import SlideEvent, SlideEventType
from slidestream.schemas.slides import FinalizedSlide, PartialFieldUpdate, SlideRecord

__all__ = [
    "FinalizedSlide",
    "GenerationConfig",
    "ModelConfig",
    "PacingConfig",
    "PartialFieldUpdate",
    "SlideEvent",
    "SlideEventType",
    "SlideRecord",
]
