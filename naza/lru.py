"""Least-recently-used cache of fixed capacity."""

from __future__ import annotations

from collections import OrderedDict
from typing import Any, Hashable


class Lru:
    """A mapping that evicts the least recently used entry once over capacity."""

    def __init__(self, capacity: int) -> None:
        self.capacity = capacity
        self._entries: OrderedDict[Hashable, Any] = OrderedDict()

    def put(self, key: Hashable, value: Any) -> bool:
        """Insert or replace ``key`` and mark it most recently used.

        Returns True if the key was not present before.
        """
        is_new = key not in self._entries
        self._entries[key] = value
        self._entries.move_to_end(key)
        if len(self._entries) > self.capacity:
            self._entries.popitem(last=False)
        return is_new

    def get(self, key: Hashable, default: Any = None) -> Any:
        """Return the value for ``key`` and mark it most recently used."""
        if key not in self._entries:
            return default
        self._entries.move_to_end(key)
        return self._entries[key]

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)