"""Run tasks after a delay on background threads."""

from __future__ import annotations

import threading
from typing import Any, Callable


class DeferTaskThread:
    """Schedules tasks to run after a delay.

    Tasks run concurrently, each on its own timer thread.
    """

    def go(self, defer_ms: int, task: Callable[..., Any], *args: Any) -> threading.Timer:
        """Run ``task(*args)`` after ``defer_ms`` milliseconds; return its timer."""
        timer = threading.Timer(defer_ms / 1000, task, args=args)
        timer.daemon = True
        timer.start()
        return timer


_thread = DeferTaskThread()


def go(defer_ms: int, task: Callable[..., Any], *args: Any) -> threading.Timer:
    """Schedule ``task`` on the shared :class:`DeferTaskThread`."""
    return _thread.go(defer_ms, task, *args)