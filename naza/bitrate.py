"""Sliding-window bitrate measurement."""

from __future__ import annotations

import enum
import threading
import time
from collections import deque


class Unit(enum.IntEnum):
    BIT_PER_SEC = 1
    BYTE_PER_SEC = 2
    KBIT_PER_SEC = 3
    KBYTE_PER_SEC = 4


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


class Bitrate:
    """Averages the bytes added during the last ``window_ms`` milliseconds."""

    def __init__(self, window_ms: int = 1000, unit: Unit = Unit.KBIT_PER_SEC) -> None:
        self.window_ms = window_ms
        self.unit = Unit(unit)
        self._lock = threading.Lock()
        self._buckets: deque[tuple[int, int]] = deque()

    def _sweep_stale(self, now: int) -> None:
        while self._buckets and now - self._buckets[0][0] > self.window_ms:
            self._buckets.popleft()

    def add(self, nbytes: int, now_ms: int | None = None) -> None:
        """Record ``nbytes`` at ``now_ms`` (current Unix time in ms by default)."""
        now = _now_ms() if now_ms is None else now_ms
        with self._lock:
            self._sweep_stale(now)
            self._buckets.append((now, nbytes))

    def rate(self, now_ms: int | None = None) -> float:
        """Rate over the window ending at ``now_ms``, in the configured unit."""
        now = _now_ms() if now_ms is None else now_ms
        with self._lock:
            self._sweep_stale(now)
            total = sum(n for _, n in self._buckets)
        if self.unit is Unit.BIT_PER_SEC:
            return total * 8 * 1000 / self.window_ms
        if self.unit is Unit.BYTE_PER_SEC:
            return total * 1000 / self.window_ms
        if self.unit is Unit.KBIT_PER_SEC:
            return total * 8 / self.window_ms
        return total / self.window_ms