"""Consistent hashing ring with virtual nodes."""

from __future__ import annotations

import bisect
import zlib
from typing import Callable

HashFunc = Callable[[bytes], int]

_RING_SIZE = 1 << 32


class EmptyRingError(LookupError):
    """Raised when looking up a key on a ring with no nodes."""


class ConsistentHash:
    """Maps keys onto nodes; each node occupies ``dups`` points on the ring.

    ``hash_func`` maps bytes to an unsigned 32-bit point; CRC-32 by default.
    """

    def __init__(self, dups: int, hash_func: HashFunc = zlib.crc32) -> None:
        if dups < 1:
            raise ValueError("dups must be at least 1")
        self.dups = dups
        self._hash = hash_func
        self._point_to_node: dict[int, str] = {}
        self._points: list[int] = []

    def _point(self, key: str) -> int:
        return self._hash(key.encode()) & 0xFFFFFFFF

    def _virtual_points(self, node: str):
        return (self._point(f"{node}{i}") for i in range(self.dups))

    def add(self, *args: str) -> None:
        for node in args:
            for point in self._virtual_points(node):
                self._point_to_node[point] = node
        self._points = sorted(self._point_to_node)

    def remove(self, *args: str) -> None:
        for node in args:
            for point in self._virtual_points(node):
                self._point_to_node.pop(point, None)
        self._points = sorted(self._point_to_node)

    def get(self, key: str) -> str:
        """Return the node owning ``key``: the first point at or after its hash."""
        if not self._points:
            raise EmptyRingError("consistent hash ring is empty")
        index = bisect.bisect_left(self._points, self._point(key))
        if index == len(self._points):
            index = 0
        return self._point_to_node[self._points[index]]

    def nodes(self) -> dict[str, int]:
        """Map each node to the number of ring points it accounts for.

        The values sum to 2**32; an empty ring gives an empty dict.
        """
        result: dict[str, int] = {}
        if not self._points:
            return result
        prev = 0
        for point in self._points:
            node = self._point_to_node[point]
            result[node] = result.get(node, 0) + point - prev
            prev = point
        last_node = self._point_to_node[self._points[-1]]
        result[last_node] += _RING_SIZE - self._points[-1]
        return result