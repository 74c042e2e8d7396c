"""Artificial pacing between outbound events.

The delays exist purely for the typing effect in the UI; they are not
network backpressure. The sleep function is injectable so tests can run
the whole pipeline with zero delay.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable

from slidestream.schemas.config import PacingConfig

SleepFn = Callable[[float], Awaitable[object]]


class Pacer:
    """Awaits a fixed delay after character and slide events."""

    def __init__(
        self,
        character_delay: float = 0.02,
        slide_delay: float = 0.1,
        *,
        sleep: SleepFn = asyncio.sleep,
    ) -> None:
        if character_delay < 0 or slide_delay < 0:
            raise ValueError("Pacing delays must be non-negative")
        self.character_delay = character_delay
        self.slide_delay = slide_delay
        self._sleep = sleep

    @classmethod
    def from_config(cls, config: PacingConfig, *, sleep: SleepFn = asyncio.sleep) -> Pacer:
        return cls(config.character_delay, config.slide_delay, sleep=sleep)

    @classmethod
    def instant(cls) -> Pacer:
        """A pacer that never suspends."""
        return cls(0.0, 0.0)

    async def after_character(self) -> None:
        await self._pause(self.character_delay)

    async def after_slide(self) -> None:
        await self._pause(self.slide_delay)

    async def _pause(self, seconds: float) -> None:
        if seconds > 0:
            await self._sleep(seconds)
