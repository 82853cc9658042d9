"""Fixed-capacity FIFO queue."""

from __future__ import annotations

from collections import deque
from typing import Any, Iterator


class CircularQueueError(IndexError):
    """Raised on pushing into a full queue or reading from an empty one."""


class CircularQueue:
    """A FIFO queue that holds at most ``capacity`` items."""

    def __init__(self, capacity: int) -> None:
        if capacity < 0:
            raise ValueError("capacity must not be negative")
        self.capacity = capacity
        self._items: deque[Any] = deque()

    def push_back(self, value: Any) -> None:
        if self.full():
            raise CircularQueueError("circular queue is full")
        self._items.append(value)

    def pop_front(self) -> Any:
        if self.empty():
            raise CircularQueueError("circular queue is empty")
        return self._items.popleft()

    def front(self) -> Any:
        if self.empty():
            raise CircularQueueError("circular queue is empty")
        return self._items[0]

    def back(self) -> Any:
        if self.empty():
            raise CircularQueueError("circular queue is empty")
        return self._items[-1]

    def at(self, index: int) -> Any:
        """Return the item ``index`` places from the front."""
        if index < 0 or index >= len(self._items):
            raise CircularQueueError(f"index {index} out of range")
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._items)

    def full(self) -> bool:
        return len(self._items) >= self.capacity

    def empty(self) -> bool:
        return not self._items