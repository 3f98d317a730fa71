"""Timestamp sources for recency tracking."""

from __future__ import annotations

import time
from typing import Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    def now(self) -> int:
        """Return the current time as an integer that never decreases."""
        ...


class SystemClock:
    """Wall-clock milliseconds, clamped so a clock adjustment never goes backwards."""

    def __init__(self) -> None:
        self._last = 0

    def now(self) -> int:
        current = time.time_ns() // 1_000_000
        self._last = max(self._last, current)
        return self._last


class ManualClock:
    """Clock that only moves when told to (testing helper)."""

    def __init__(self, start: int = 0) -> None:
        self.value = start

    def now(self) -> int:
        return self.value

    def advance(self, amount: int = 1) -> int:
        self.value += amount
        return self.value
