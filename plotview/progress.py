"""Progress tracking with moving-window speed estimates."""

from __future__ import annotations

import math
import time
from typing import Callable

MARK_SIZE = 60


def _ratio(numerator: float, denominator: float) -> float:
    if denominator == 0:
        if numerator > 0:
            return math.inf
        if numerator < 0:
            return -math.inf
        return math.nan
    return numerator / denominator


class Progress:
    """Counts progress toward ``size`` and estimates speed."""

    def __init__(self, size: int = 0, clock: Callable[[], float] = time.perf_counter) -> None:
        self.size = size
        self._clock = clock
        self.reset()

    def reset(self) -> None:
        self.index = 0
        self.start_time = self._clock()
        self._mark_index = [self.index] * MARK_SIZE
        self._mark_time = [self.start_time] * MARK_SIZE
        self.mark_count = 0

    def inc(self, step: int = 1) -> None:
        self.index += step

    def set(self, index: int) -> None:
        self.index = index

    def mark(self) -> None:
        """Remember the current position and time."""
        slot = self.mark_count % MARK_SIZE
        self._mark_index[slot] = self.index
        self._mark_time[slot] = self._clock()
        self.mark_count += 1

    def _last_slot(self) -> int:
        return (self.mark_count + MARK_SIZE - 1) % MARK_SIZE

    def _oldest_slot(self) -> int:
        return self.mark_count % MARK_SIZE

    def mark_lapse(self) -> float:
        """Seconds since the last mark."""
        return self._clock() - self._mark_time[self._last_slot()]

    def smooth_lapse(self) -> float:
        """Seconds since the oldest mark in the window."""
        return self._clock() - self._mark_time[self._oldest_slot()]

    def avg_lapse(self) -> float:
        """Seconds since the start."""
        return self._clock() - self.start_time

    def mark_speed(self) -> float:
        return _ratio(self.index - self._mark_index[self._last_slot()], self.mark_lapse())

    def smooth_speed(self) -> float:
        return _ratio(self.index - self._mark_index[self._oldest_slot()], self.smooth_lapse())

    def avg_speed(self) -> float:
        return _ratio(self.index, self.avg_lapse())

    def mark_has(self) -> bool:
        return self.index > self._mark_index[self._last_slot()]

    def smooth_has(self) -> bool:
        return self.index > self._mark_index[self._oldest_slot()]

    def avg_has(self) -> bool:
        return self.index > 0

    def percent(self) -> float:
        """Percentage done, or -1 when the size is unknown."""
        return 100.0 * self.index / self.size if self.size > 0 else -1.0

    def eta(self, speed: float) -> float:
        """Seconds left at ``speed``, or -1 when that cannot be known."""
        if speed > 0 and self.size > 0:
            return (self.size - self.index) / speed
        return -1.0