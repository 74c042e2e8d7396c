"""Streaming parser: array boundary, object scanning, field extraction, finalizing."""

from slidestream.parsing.boundary import ArrayBoundaryDetector
from slidestream.parsing.fields import RECOGNIZED_FIELDS, PartialFieldExtractor
from slidestream.parsing.finalizer import DEFAULT_SLIDE_TYPE, finalize_slide, synthesize_slide_id
from slidestream.parsing.scanner import ParseResult, SlideStreamParser
from slidestream.parsing.state import ScanState, StreamPhase

__all__ = [
    "ArrayBoundaryDetector",
    "DEFAULT_SLIDE_TYPE",
    "ParseResult",
    "PartialFieldExtractor",
    "RECOGNIZED_FIELDS",
    "ScanState",
    "SlideStreamParser",
    "StreamPhase",
    "finalize_slide",
    "synthesize_slide_id",
]
