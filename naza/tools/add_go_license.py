"""Prepend a header comment to every Go source file of a module."""

from __future__ import annotations

import argparse
import datetime
import logging
import os
import sys
from pathlib import Path

from naza.filebatch import add_head_content, walk

_log = logging.getLogger(__name__)

MARKER = "Notice"

_TEMPLATE = (
    "// " + MARKER + " {year}, {name}.\n"
    "// https://{repo}\n"
    "//\n"
    "// Author: {name} ({email})\n"
    "\n"
)


def read_module_path(root: str | os.PathLike[str]) -> str:
    """The module path declared on the first line of ``root``/go.mod."""
    first_line = Path(root, "go.mod").read_bytes().split(b"\n", 1)[0]
    if first_line.startswith(b"module "):
        first_line = first_line[len(b"module "):]
    return first_line.strip().decode("utf-8")


def build_license(year: int, name: str, repo: str, email: str) -> str:
    return _TEMPLATE.format(year=year, name=name, repo=repo, email=email)


def add_license(root: str | os.PathLike[str], license_text: str | bytes) -> tuple[int, int]:
    """Add the header to every .go file under ``root`` lacking one.

    A file whose first line carries the header marker is left alone. Returns
    the number of files changed and skipped.
    """
    header = license_text.encode("utf-8") if isinstance(license_text, str) else bytes(license_text)
    marker = MARKER.encode("utf-8")
    modified = skipped = 0

    def visit(path: str, content: bytes | None, error: OSError | None) -> bytes | None:
        nonlocal modified, skipped
        if error is not None:
            _log.warning("read file failed. file=%s, err=%s", path, error)
            return None
        if marker in content.split(b"\n", 1)[0]:
            skipped += 1
            return None
        modified += 1
        return add_head_content(content, header)

    walk(root, True, ".go", visit)
    return modified, skipped


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Add a header comment to Go files.")
    parser.add_argument("-d", dest="dir", default="", help="dir of repo")
    parser.add_argument("-n", dest="name", default="", help="user name")
    parser.add_argument("-e", dest="email", default="", help="user email")
    args = parser.parse_args(argv)
    if not (args.dir and args.name and args.email):
        parser.print_help(sys.stderr)
        return 1

    logging.basicConfig(level=logging.INFO)
    repo = read_module_path(args.dir)
    license_text = build_license(datetime.date.today().year, args.name, repo, args.email)
    _log.debug("%s", license_text)
    modified, skipped = add_license(args.dir, license_text)
    _log.info("count. mod=%d, skip=%d", modified, skipped)
    return 0


if __name__ == "__main__":
    sys.exit(main())