"""Helpers for picking, counting and ranking items of a sequence."""

from __future__ import annotations

from collections import Counter
from typing import Any, Callable, Hashable, Iterable, Sequence, TypeVar

T = TypeVar("T")

NO_LIMIT = -1


def _normalize_limit(limit: int | None) -> int | None:
    if limit is None or limit == NO_LIMIT:
        return None
    return limit


def limit_indices(length: int, prefix_limit: int | None, suffix_limit: int | None) -> list[int]:
    """Indices of the first ``prefix_limit`` and last ``suffix_limit`` elements.

    A limit of -1 (or None) means no limit. When the limits together cover
    the whole sequence, every index is returned once.
    """
    prefix = _normalize_limit(prefix_limit)
    suffix = _normalize_limit(suffix_limit)
    if prefix is None and suffix is None:
        return list(range(length))
    if prefix is None:
        if suffix < length:
            return list(range(length - suffix, length))
    elif suffix is None:
        if prefix < length:
            return list(range(prefix))
    elif prefix + suffix < length:
        return list(range(prefix)) + list(range(length - suffix, length))
    return list(range(length))


def slice_limit(items: Sequence[T], prefix_limit: int | None, suffix_limit: int | None) -> list[T]:
    """The first ``prefix_limit`` and last ``suffix_limit`` items of ``items``."""
    return [items[i] for i in limit_indices(len(items), prefix_limit, suffix_limit)]


def unique_count(items: Iterable[T], key: Callable[[T], Hashable] | None = None) -> dict[Hashable, int]:
    """Count items grouped by ``key(item)`` (the item itself by default)."""
    fn = key if key is not None else (lambda item: item)
    return dict(Counter(fn(item) for item in items))


def min_max(items: Sequence[T], key: Callable[[T], Any] | None = None) -> tuple[T, T]:
    """Return the smallest and largest item; ties go to the earliest one.

    Raises ValueError for an empty sequence.
    """
    if not items:
        raise ValueError("min_max() of an empty sequence")
    fn = key if key is not None else (lambda item: item)
    low = high = items[0]
    low_key = high_key = fn(low)
    for item in items[1:]:
        k = fn(item)
        if k < low_key:
            low, low_key = item, k
        if high_key < k:
            high, high_key = item, k
    return low, high