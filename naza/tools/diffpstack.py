"""Compare two pstack dumps of a process and colour the threads that changed."""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator

_SEPARATOR = "-" * 73
_RED = "\033[22;31m"
_CYAN = "\033[22;36m"
_RESET = "\033[0m"

UNCHANGED = "unchanged"
CHANGED = "changed"
NEW = "new"


@dataclass
class ThreadInfo:
    num: int
    p: str
    thread_id: int
    raw_line: str
    raw_stack_lines: str = ""

    def key(self) -> str:
        """Identifies the thread across dumps."""
        return f"{self.p}_{self.thread_id}"


@dataclass
class PstackInfo:
    threads: list[ThreadInfo] = field(default_factory=list)
    _by_key: dict[str, ThreadInfo] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        if not self._by_key:
            self._by_key = {t.key(): t for t in self.threads}

    def find(self, key: str) -> ThreadInfo | None:
        return self._by_key.get(key)


def parse_thread_line(line: str) -> tuple[int, str, int]:
    """Split a ``Thread N (Thread P (LWP ID))`` header into ``(num, p, id)``.

    The id is the text between ``(LWP `` and the character before ``))``.
    Raises ValueError for a malformed header.
    """
    p1 = line.index("Thread")
    p2 = line.index("(Thread")
    num = int(line[p1 + 7:p2 - 1])
    p3 = line.index("(LWP")
    p = line[p2 + 8:p3 - 1]
    p4 = line.index("))")
    thread_id = int(line[p3 + 5:p4 - 1])
    return num, p, thread_id


def parse_pstack(text: str) -> PstackInfo:
    """Parse a pstack dump; raises ValueError for stack lines before any thread."""
    threads: list[ThreadInfo] = []
    current: ThreadInfo | None = None
    for line in text.split("\n"):
        if line.startswith("Thread"):
            num, p, thread_id = parse_thread_line(line)
            current = ThreadInfo(num, p, thread_id, line)
            threads.append(current)
            continue
        if current is None:
            raise ValueError("stack line before any thread header")
        current.raw_stack_lines += line + "\n"
    return PstackInfo(threads)


def diff_pstacks(old: PstackInfo, new: PstackInfo) -> Iterator[tuple[ThreadInfo, str]]:
    """Yield each thread of ``new`` with UNCHANGED, CHANGED or NEW."""
    for thread in new.threads:
        previous = old.find(thread.key())
        if previous is None:
            yield thread, NEW
        elif previous.raw_stack_lines == thread.raw_stack_lines:
            yield thread, UNCHANGED
        else:
            yield thread, CHANGED


def _render(thread: ThreadInfo, status: str) -> str:
    if status == UNCHANGED:
        pre = suf = ""
    else:
        pre = _RED if status == CHANGED else _CYAN
        suf = _RESET
    return "".join(
        f"{pre}{text}{suf}\n" for text in (_SEPARATOR, thread.raw_line, thread.raw_stack_lines)
    )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Diff two pstack dumps.")
    parser.add_argument("old", nargs="?", default="old.txt")
    parser.add_argument("new", nargs="?", default="new.txt")
    args = parser.parse_args(argv)
    try:
        old = parse_pstack(Path(args.old).read_text(encoding="utf-8"))
        new = parse_pstack(Path(args.new).read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    for thread, status in diff_pstacks(old, new):
        sys.stdout.write(_render(thread, status))
    return 0


if __name__ == "__main__":
    sys.exit(main())