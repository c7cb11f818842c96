"""Frames-per-second counter."""

from __future__ import annotations

import time
from collections import deque
from collections.abc import Callable


class Counter:
    """Counts the ticks that happened within the last second."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._frames: deque[float] = deque()

    def tick(self) -> int:
        """Record a frame now and return how many fell in the last second."""
        now = self._clock()
        a_second_ago = now - 1.0
        while self._frames and self._frames[0] < a_second_ago:
            self._frames.popleft()
        self._frames.append(now)
        return len(self._frames)