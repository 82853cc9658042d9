"""Append a reprint notice to every Markdown post that lacks one."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Sequence

from naza.filebatch import add_tail_content, walk

_log = logging.getLogger(__name__)

LICENSE_MARKER = "本文完，作者"
AUTHOR = "author"
AUTHOR_URL = "https://example.com/author"
SITE_URL = "https://example.com"


class MissingAbbrlinkError(ValueError):
    """Raised for a post whose front matter has no abbrlink."""


def _build_license(abbrlink: str) -> str:
    link = f"{SITE_URL}/p/{abbrlink}/"
    return (
        f"\n{LICENSE_MARKER}[{AUTHOR}]({AUTHOR_URL})，"
        f"尊重劳动人民成果，转载请注明原文出处： [{link}]({link})"
    )


def has_license(lines: Sequence[bytes]) -> bool:
    """Whether one of the last two lines already carries the notice."""
    marker = LICENSE_MARKER.encode("utf-8")
    return any(marker in line for line in lines[-2:])


def find_abbrlink(lines: Sequence[bytes]) -> str:
    """The value of the first line mentioning abbrlink, or "" if none does."""
    for line in lines:
        if b"abbrlink" in line:
            parts = line.split(b":")
            return parts[1].strip().decode("utf-8") if len(parts) > 1 else ""
    return ""


def add_licenses(root: str | os.PathLike[str]) -> tuple[int, int]:
    """Add the notice to every .md file under ``root``.

    Returns the number of posts changed and skipped. Raises
    MissingAbbrlinkError at the first post without an abbrlink; posts seen
    before it keep their changes.
    """
    modified = skipped = 0

    def visit(path: str, content: bytes | None, error: OSError | None) -> bytes | None:
        nonlocal modified, skipped
        if error is not None:
            _log.warning("read file failed. file=%s, err=%s", path, error)
            return None
        lines = content.split(b"\n")
        if has_license(lines):
            _log.debug("%s", os.path.basename(path))
            skipped += 1
            return None
        abbrlink = find_abbrlink(lines)
        if not abbrlink:
            raise MissingAbbrlinkError(f"abbrlink not exist. path={path}")
        modified += 1
        return add_tail_content(content, _build_license(abbrlink).encode("utf-8"))

    walk(root, True, ".md", visit)
    return modified, skipped


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Append a reprint notice to blog posts.")
    parser.add_argument("-d", dest="dir", default="", help="dir of posts")
    args = parser.parse_args(argv)
    if not args.dir:
        parser.print_help(sys.stderr)
        return 1

    logging.basicConfig(level=logging.INFO)
    try:
        modified, skipped = add_licenses(args.dir)
    except MissingAbbrlinkError as exc:
        _log.error("%s", exc)
        return 1
    _log.info("count. mod=%d, skip=%d", modified, skipped)
    return 0


if __name__ == "__main__":
    sys.exit(main())