"""A minimal application that can report the build information it carries."""

from __future__ import annotations

import argparse
import sys

from naza.bininfo import stringify_multi_line


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Example application.")
    parser.add_argument("-v", action="store_true", help="show bin info")
    args = parser.parse_args(argv)
    if args.v:
        sys.stderr.write(stringify_multi_line())
        return 1
    print("my app running...")
    print("bye...")
    return 0


if __name__ == "__main__":
    sys.exit(main())