"""Batch processing of the files under a directory, and line editing helpers."""

from __future__ import annotations

import os
import stat
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

WalkFunc = Callable[[str, "bytes | None", "OSError | None"], "bytes | None"]
"""Called as ``fn(path, content, error)``.

``error`` is set (and ``content`` is None) when a path could not be read.
Returning None or the unchanged content leaves the file alone; any other
bytes overwrite it.
"""


def walk(root: str | os.PathLike[str], recursive: bool, suffix: str, fn: WalkFunc) -> None:
    """Visit the files under ``root`` in lexical order.

    Subdirectories are entered only when ``recursive`` is true; a non-empty
    ``suffix`` keeps only file names ending with it. Errors writing a file
    back are raised; errors reading are passed to ``fn``.
    """
    root = os.fspath(root)
    try:
        st = os.lstat(root)
    except OSError as exc:
        fn(root, None, exc)
        return
    if stat.S_ISDIR(st.st_mode):
        _walk_dir(root, recursive, suffix, fn)
    else:
        _visit_file(root, suffix, fn)


def _walk_dir(path: str, recursive: bool, suffix: str, fn: WalkFunc) -> None:
    try:
        with os.scandir(path) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as exc:
        fn(path, None, exc)
        return
    for entry in entries:
        full = os.path.join(path, entry.name)
        try:
            is_dir = entry.is_dir(follow_symlinks=False)
        except OSError:
            is_dir = False
        if is_dir:
            if recursive:
                _walk_dir(full, recursive, suffix, fn)
            continue
        _visit_file(full, suffix, fn)


def _visit_file(path: str, suffix: str, fn: WalkFunc) -> None:
    if suffix and not os.path.basename(path).endswith(suffix):
        return
    try:
        content = Path(path).read_bytes()
    except OSError as exc:
        fn(path, None, exc)
        return
    new_content = fn(path, content, None)
    if new_content is not None and new_content != content:
        Path(path).write_bytes(new_content)


def add_tail_content(content: bytes, tail: bytes) -> bytes:
    """Append ``tail``, first ending ``content`` with a newline if it lacks one."""
    if not content.endswith(b"\n"):
        content += b"\n"
    return content + tail


def add_head_content(content: bytes, head: bytes) -> bytes:
    """Prepend ``head``, ending it with a newline if it lacks one."""
    if not head.endswith(b"\n"):
        head += b"\n"
    return head + content


class LineRangeError(ValueError):
    """Raised for a line range that is zero-based or out of bounds."""


@dataclass(frozen=True)
class LineRange:
    """An inclusive range of lines; 1 is the first line, -1 the last."""

    start: int
    end: int

    def resolve(self, count: int) -> tuple[int, int]:
        """Zero-based, ordered ``(first, last)`` indices into ``count`` lines."""
        first = self._index(self.start, count)
        last = self._index(self.end, count)
        if first > last:
            first, last = last, first
        if first < 0 or last >= count:
            raise LineRangeError(f"line range {self.start}..{self.end} outside {count} lines")
        return first, last

    @staticmethod
    def _index(line: int, count: int) -> int:
        if line < 0:
            return count + line
        if line > 0:
            return line - 1
        raise LineRangeError("line numbers start at 1")


def delete_lines(content: bytes, line_range: LineRange) -> bytes:
    """Remove the lines in ``line_range`` from newline-separated ``content``."""
    lines = content.split(b"\n")
    first, last = line_range.resolve(len(lines))
    return b"\n".join(lines[:first] + lines[last + 1:])