"""Thread-safe integer and boolean cells with fixed-width wraparound."""

from __future__ import annotations

import threading
from typing import ClassVar


class AtomicInteger:
    """An integer guarded by a lock.

    Subclasses fix a bit width and signedness; arithmetic then wraps the way
    a machine integer of that width does.
    """

    bits: ClassVar[int | None] = None
    signed: ClassVar[bool] = True

    def __init__(self, value: int = 0) -> None:
        self._lock = threading.Lock()
        self._value = self._wrap(value)

    @classmethod
    def _wrap(cls, value: int) -> int:
        if cls.bits is None:
            return value
        value &= (1 << cls.bits) - 1
        if cls.signed and value >= 1 << (cls.bits - 1):
            value -= 1 << cls.bits
        return value

    def load(self) -> int:
        with self._lock:
            return self._value

    def store(self, value: int) -> None:
        with self._lock:
            self._value = self._wrap(value)

    def add(self, delta: int) -> int:
        """Add ``delta`` and return the new value."""
        with self._lock:
            self._value = self._wrap(self._value + delta)
            return self._value

    def sub(self, delta: int) -> int:
        """Subtract ``delta`` and return the new value."""
        with self._lock:
            self._value = self._wrap(self._value - delta)
            return self._value

    def increment(self) -> int:
        return self.add(1)

    def decrement(self) -> int:
        return self.sub(1)

    def compare_and_swap(self, old: int, new: int) -> bool:
        """Set the value to ``new`` if it equals ``old``; report whether it did."""
        with self._lock:
            if self._value != self._wrap(old):
                return False
            self._value = self._wrap(new)
            return True

    def swap(self, new: int) -> int:
        """Set the value to ``new`` and return the previous value."""
        with self._lock:
            old = self._value
            self._value = self._wrap(new)
            return old

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.load()})"


class AtomicInt32(AtomicInteger):
    bits = 32
    signed = True


class AtomicUint32(AtomicInteger):
    bits = 32
    signed = False


class AtomicInt64(AtomicInteger):
    bits = 64
    signed = True


class AtomicUint64(AtomicInteger):
    bits = 64
    signed = False


class AtomicBool:
    """A boolean guarded by a lock."""

    def __init__(self, value: bool = False) -> None:
        self._lock = threading.Lock()
        self._value = bool(value)

    def load(self) -> bool:
        with self._lock:
            return self._value

    def store(self, value: bool) -> None:
        with self._lock:
            self._value = bool(value)

    def compare_and_swap(self, old: bool, new: bool) -> bool:
        with self._lock:
            if self._value != bool(old):
                return False
            self._value = bool(new)
            return True

    def swap(self, new: bool) -> bool:
        with self._lock:
            old = self._value
            self._value = bool(new)
            return old

    def __bool__(self) -> bool:
        return self.load()

    def __repr__(self) -> str:
        return f"AtomicBool({self.load()})"