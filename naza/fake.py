"""Test doubles: a replaceable process exit, exception swallowing and a scripted writer."""

from __future__ import annotations

import enum
import sys
from dataclasses import dataclass
from typing import Callable, Mapping

_exit_hook: Callable[[int], None] = sys.exit


@dataclass
class ExitResult:
    has_exit: bool = False
    exit_code: int = 0


def os_exit(code: int) -> None:
    """Exit the process, unless called inside :func:`with_fake_os_exit`."""
    _exit_hook(code)


def with_fake_os_exit(fn: Callable[[], None]) -> ExitResult:
    """Run ``fn`` with :func:`os_exit` recording the exit instead of exiting."""
    global _exit_hook
    result = ExitResult()

    def record(code: int) -> None:
        result.has_exit = True
        result.exit_code = code

    previous = _exit_hook
    _exit_hook = record
    try:
        fn()
    finally:
        _exit_hook = previous
    return result


def with_recover(fn: Callable[[], object]) -> Exception | None:
    """Run ``fn``, swallowing any exception; return the exception or None."""
    try:
        fn()
    except Exception as exc:  # noqa: BLE001 - swallowing is the point
        return exc
    return None


class WriterType(enum.IntEnum):
    DO_NOTHING = 0
    RETURN_ERROR = 1
    INTO_BUFFER = 2


class FakeWriterError(OSError):
    """The error a fake writer raises when told to fail."""


class FakeWriter:
    """A writer whose behaviour is chosen per call, counting calls from 0."""

    def __init__(self, writer_type: WriterType) -> None:
        self.writer_type = WriterType(writer_type)
        self._specific: dict[int, WriterType] = {}
        self._count = 0
        self.buffer = bytearray()

    def set_specific_type(self, types: Mapping[int, WriterType]) -> None:
        """Use a different behaviour for the given call numbers."""
        self._specific = dict(types)

    def write(self, data: bytes) -> int:
        writer_type = self._specific.get(self._count, self.writer_type)
        self._count += 1
        if writer_type is WriterType.RETURN_ERROR:
            raise FakeWriterError("a fake writer error")
        if writer_type is WriterType.INTO_BUFFER:
            self.buffer += data
        return len(data)