"""Cancellable, generation-stamped silence timer."""

from __future__ import annotations

import asyncio
from collections.abc import Callable


class SilenceTimer:
    """One-shot timer whose firing carries the generation it was armed with.

    Every ``schedule``/``cancel`` bumps the generation, so a callback that was
    already queued before a reschedule can be recognized as stale.
    """

    def __init__(self, delay_s: float, callback: Callable[[int], None]) -> None:
        self._delay_s = max(0.0, float(delay_s))
        self._callback = callback
        self._handle: asyncio.TimerHandle | None = None
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def schedule(self) -> int:
        self.cancel()
        generation = self._generation
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self._delay_s, self._fire, generation)
        return generation

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self._generation += 1

    def is_current(self, generation: int) -> bool:
        return generation == self._generation and self._handle is None

    def _fire(self, generation: int) -> None:
        if generation != self._generation:
            return
        self._handle = None
        self._callback(generation)


__all__ = ["SilenceTimer"]
