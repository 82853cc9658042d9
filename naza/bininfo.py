"""Build information stamped into the program at build time."""

from __future__ import annotations

import platform
import sys

GIT_TAG = "unknown"
GIT_COMMIT_LOG = "unknown"
GIT_STATUS = "unknown"
BUILD_TIME = "unknown"
BUILD_VERSION = "unknown"


def beautify_git_status(status: str) -> str:
    """Map an empty status to ``cleanly`` and join multi-line status into one line."""
    if status == "":
        return "cleanly"
    return status.replace("\r\n", " |").replace("\n", " |")


GIT_STATUS = beautify_git_status(GIT_STATUS)


def _runtime() -> str:
    return f"{sys.platform}/{platform.machine() or 'unknown'}"


def stringify_single_line() -> str:
    return (
        f"GitTag={GIT_TAG}. GitCommitLog={GIT_COMMIT_LOG}. GitStatus={GIT_STATUS}. "
        f"BuildTime={BUILD_TIME}. BuildVersion={BUILD_VERSION}. runtime={_runtime()}."
    )


def stringify_multi_line() -> str:
    return (
        f"GitTag={GIT_TAG}\nGitCommitLog={GIT_COMMIT_LOG}\nGitStatus={GIT_STATUS}\n"
        f"BuildTime={BUILD_TIME}\nBuildVersion={BUILD_VERSION}\nruntime={_runtime()}\n"
    )