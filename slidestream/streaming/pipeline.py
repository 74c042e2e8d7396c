"""Async pipeline from a delta stream to paced outbound slide events.

One SlideStreamPipeline.run() call drives one generation stream:

    start
    (character | slide_created)*      in production order, paced
    complete | error                  exactly once, always last

The parser state lives inside the run, so a pipeline instance can serve
any number of concurrent streams.
"""

from __future__ import annotations

import logging
import time
from collections.abc import AsyncIterable, AsyncIterator, Callable

from slidestream.parsing.finalizer import DEFAULT_SLIDE_TYPE
from slidestream.parsing.scanner import SlideStreamParser
from slidestream.schemas.config import GenerationConfig
from slidestream.schemas.events import SlideEvent
from slidestream.schemas.slides import FinalizedSlide
from slidestream.streaming.emitter import SlideEventEmitter
from slidestream.streaming.pacer import Pacer

logger = logging.getLogger(__name__)


class SlideStreamPipeline:
    """Turns upstream text deltas into the ordered outbound event sequence."""

    def __init__(
        self,
        *,
        pacer: Pacer | None = None,
        fallback_type: str = DEFAULT_SLIDE_TYPE,
        event_emitter: SlideEventEmitter | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._pacer = pacer or Pacer()
        self._fallback_type = fallback_type
        self._emitter = event_emitter
        self._clock = clock

    @classmethod
    def from_config(
        cls,
        config: GenerationConfig,
        *,
        pacer: Pacer | None = None,
        event_emitter: SlideEventEmitter | None = None,
    ) -> SlideStreamPipeline:
        return cls(
            pacer=pacer or Pacer.from_config(config.pacing),
            fallback_type=config.fallback_type,
            event_emitter=event_emitter,
        )

    async def run(self, deltas: AsyncIterable[str]) -> AsyncIterator[SlideEvent]:
        """Consume *deltas* and yield outbound events.

        Upstream exceptions end the stream with an error event. Task
        cancellation and consumer-side close propagate; in every case the
        upstream iterator is closed before this generator finishes.
        """
        parser = SlideStreamParser(fallback_type=self._fallback_type, clock=self._clock)

        try:
            yield await self._emit(SlideEvent.start())
            async for delta in deltas:
                if not delta:
                    continue
                for result in parser.feed(delta):
                    if isinstance(result, FinalizedSlide):
                        yield await self._emit(
                            SlideEvent.slide_created(result.slide_index, result.slide)
                        )
                        await self._pacer.after_slide()
                    else:
                        yield await self._emit(SlideEvent.character(result))
                        await self._pacer.after_character()
        except Exception as exc:
            logger.exception("Slide stream failed after %d slides", len(parser.slides))
            parser.finish()
            terminal = SlideEvent.error(str(exc))
        else:
            slides = parser.finish()
            if not parser.state.inside_array:
                logger.warning("Completion ended without a slide array")
            logger.info(
                "Slide stream complete: %d slides, %d malformed skipped",
                len(slides), parser.malformed_count,
            )
            terminal = SlideEvent.complete(slides)
        finally:
            await _close_upstream(deltas)

        yield await self._emit(terminal)

    async def collect(self, deltas: AsyncIterable[str]) -> list[SlideEvent]:
        """Run the pipeline to completion and return every event."""
        return [event async for event in self.run(deltas)]

    async def _emit(self, event: SlideEvent) -> SlideEvent:
        if self._emitter is not None:
            await self._emitter.emit(event)
        return event


async def _close_upstream(deltas: AsyncIterable[str]) -> None:
    """Close the delta source. A failing close is logged, never raised."""
    aclose = getattr(deltas, "aclose", None)
    if aclose is None:
        return
    try:
        await aclose()
    except Exception:
        logger.exception("Closing the delta stream failed")


async def iter_deltas(text: str, chunk_size: int = 1) -> AsyncIterator[str]:
    """Replay a recorded completion as fixed-size deltas."""
    if chunk_size < 1:
        raise ValueError("chunk_size must be at least 1")
    for start in range(0, len(text), chunk_size):
        yield text[start:start + chunk_size]
