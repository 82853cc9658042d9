"""Horizontal ASCII bar charts for the console."""

from __future__ import annotations

import csv
import dataclasses
import enum
import math
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping, Sequence

from naza.dataops import min_max, slice_limit

NO_NUM_LIMIT = -1


class Order(enum.IntEnum):
    ORIGIN = 1
    ASC_COUNT = 2
    DESC_COUNT = 3
    ASC_NAME = 4
    DESC_NAME = 5


@dataclass(frozen=True)
class Item:
    name: str
    num: float


@dataclass(frozen=True)
class Option:
    max_bar_length: int = 50
    draw_icon_block: str = "▇"
    draw_icon_padding: str = " "
    hide_name: bool = False
    hide_num: bool = False
    order: Order = Order.DESC_COUNT
    prefix_num_limit: int = NO_NUM_LIMIT
    suffix_num_limit: int = NO_NUM_LIMIT


def is_integer(value: float) -> bool:
    value = float(value)
    return math.isinf(value) or value.is_integer()


def _round_half_away(x: float) -> int:
    magnitude = math.floor(abs(x) + 0.5)
    return -magnitude if x < 0 else magnitude


class ChartBar:
    """Renders items as one bar per line."""

    def __init__(self, option: Option | None = None) -> None:
        self.option = option if option is not None else Option()

    def with_options(self, **kwargs: Any) -> "ChartBar":
        """A new chart with this chart's options, some of them replaced."""
        return ChartBar(dataclasses.replace(self.option, **kwargs))

    def _sorted(self, items: Sequence[Item]) -> list[Item]:
        order = self.option.order
        if order is Order.ASC_COUNT:
            return sorted(items, key=lambda it: it.num)
        if order is Order.DESC_COUNT:
            return sorted(items, key=lambda it: it.num, reverse=True)
        if order is Order.ASC_NAME:
            return sorted(items, key=lambda it: it.name)
        if order is Order.DESC_NAME:
            return sorted(items, key=lambda it: it.name, reverse=True)
        return list(items)

    def _bar_lengths(self, items: list[Item], min_num: float, max_num: float, all_int: bool) -> list[int]:
        length = self.option.max_bar_length
        if all_int and int(max_num - min_num) < length:
            if min_num >= 0:
                return [int(it.num) for it in items]
            return [int(it.num - min_num + 1) for it in items]
        counts = []
        for it in items:
            if min_num > 0:
                count = _round_half_away(it.num * length / max_num)
            elif max_num == min_num:
                count = length
            else:
                count = _round_half_away((it.num - min_num) * length / (max_num - min_num))
            counts.append(count or 1)
        return counts

    def with_items(self, items: Iterable[Item]) -> str:
        """Render ``items``; the input is left untouched. Raises ValueError if empty."""
        opt = self.option
        chosen = slice_limit(self._sorted(list(items)), opt.prefix_num_limit, opt.suffix_num_limit)
        if not chosen:
            raise ValueError("no items to draw")

        low, high = min_max(chosen, key=lambda it: it.num)
        min_num, max_num = low.num, high.num
        all_int = all(is_integer(it.num) for it in chosen)
        counts = self._bar_lengths(chosen, min_num, max_num, all_int)

        max_count = max(counts)
        num_width = max(len(f"{max_num:.2f}"), len(f"{min_num:.2f}"))
        name_width = max(len(it.name.encode("utf-8")) for it in chosen)

        def fmt_num(num: float) -> str:
            if all_int:
                return f"{num:{num_width - 3}.0f}"
            return f"{num:{num_width}.2f}"

        lines = []
        for item, count in zip(chosen, counts):
            bar = opt.draw_icon_block * count
            padding = opt.draw_icon_padding * (max_count - count)
            if not opt.hide_num and not opt.hide_name:
                lines.append(f"{fmt_num(item.num)} | {bar}{padding} | {item.name.ljust(name_width)}\n")
            elif not opt.hide_num:
                lines.append(f"{fmt_num(item.num)} | {bar}{padding}\n")
            elif not opt.hide_name:
                lines.append(f"{bar}{padding} | {item.name.ljust(name_width)}\n")
            else:
                lines.append(f"{bar}\n")
        return "".join(lines)

    def with_iterable(self, iterable: Iterable[Any], transform: Callable[[Any], Item]) -> str:
        """Render any iterable, turning each element into an :class:`Item`."""
        return self.with_items([transform(element) for element in iterable])

    def with_mapping(self, mapping: Mapping[str, float]) -> str:
        return self.with_items([Item(name, float(num)) for name, num in mapping.items()])

    def with_csv(self, filename: str) -> str:
        """Render a CSV file whose rows are ``name,number``."""
        with open(filename, newline="", encoding="utf-8") as fp:
            items = [Item(row[0], float(row[1])) for row in csv.reader(fp) if row]
        return self.with_items(items)


DEFAULT = ChartBar()