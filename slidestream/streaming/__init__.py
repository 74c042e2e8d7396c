"""Outbound side of a generation stream: pacing, fan-out, SSE framing."""

from slidestream.streaming.emitter import SlideEventEmitter
from slidestream.streaming.pacer import Pacer
from slidestream.streaming.pipeline import SlideStreamPipeline, iter_deltas
from slidestream.streaming.sse import SSE_HEADERS, SSE_MEDIA_TYPE, format_sse, sse_frames

__all__ = [
    "Pacer",
    "SSE_HEADERS",
    "SSE_MEDIA_TYPE",
    "SlideEventEmitter",
    "SlideStreamPipeline",
    "format_sse",
    "iter_deltas",
    "sse_frames",
]
