"""Draw a bar chart of a ``name,number`` CSV file on the console."""

from __future__ import annotations

import argparse
import sys

from naza.chartbar import DEFAULT


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Draw a bar chart from a CSV file.")
    parser.add_argument("-f", dest="filename", default="", help="csv filename")
    args = parser.parse_args(argv)
    if not args.filename:
        parser.print_help(sys.stderr)
        return 1
    try:
        output = DEFAULT.with_csv(args.filename)
    except (OSError, ValueError, IndexError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    print(output, end="")
    return 0


if __name__ == "__main__":
    sys.exit(main())