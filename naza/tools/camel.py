"""Find places in Go sources where several capital letters run together."""

from __future__ import annotations

import argparse
import logging
import sys

from naza.filebatch import walk

_log = logging.getLogger(__name__)

_RED = "\033[22;31m"
_RESET = "\033[0m"

_EXEMPT_PATH_PART = "/pkg/alpha/stun/"
_EXEMPT_PATH_SUFFIX = "_test.go"

# Lines containing any of these are not checked.
_IGNORE_CONTAINS = (
    # string literals
    '"',
    # hexadecimal numbers
    "0x",
    # interfaces
    "IBufWriter",
    "IClientSession",
    "IServerSession",
    "IClientSessionLifecycle",
    "IServerSessionLifecycle",
    "ISessionStat",
    "ISessionUrlContext",
    "IObject",
    "IPathStrategy",
    "IPathRequestStrategy",
    "IPathWriteStrategy",
    "IQueueObserver",
    "IHandshakeClient",
    "IRtpUnpacker",
    "IRtpUnpackContainer",
    "IRtpUnpackerProtocol",
    "IInterleavedPacketWriter",
    "filesystemlayer.IFileSystemLayer",
    "filesystemlayer.IFile",
    "IFile",
    "IFileSystemLayer",
    # RTSP
    "HeaderCSeq",
    "ARtpMap",
    "AFmtPBase",
    "AControl",
    # standard library
    ".URL",
    ".TLS",
    ".SIGUSR",
    "ServeHTTP(",
    ".URI",
    ".RequestURI",
    "io.EOF",
    "net.UDPAddr",
    "net.UDPConn",
    "net.ResolveUDPAddr",
    "net.ListenUDP",
    "WriteToUDP",
    "ReadFromUDP",
    "time.RFC1123",
    "runtime.GOOS",
    "crc32.ChecksumIEEE",
    "cipher.NewCBCEncrypter",
    "cipher.NewCBCDecrypter",
    "os.O_CREATE",
    "LAddr",
    "RAddr",
)

# Comment lines are not checked.
_IGNORE_PREFIXES = ("//", "/*")


def is_cap(char: str) -> bool:
    """Whether ``char`` is an ASCII capital letter."""
    return "A" <= char <= "Z"


def highlight_serial_cap(line: str) -> str:
    """Wrap every run of two or more capitals in ``line`` in red."""
    parts: list[str] = []
    run: list[str] = []

    def flush() -> None:
        if not run:
            return
        text = "".join(run)
        parts.append(f"{_RED}{text}{_RESET}" if len(run) > 1 else text)
        run.clear()

    for char in line:
        if is_cap(char):
            run.append(char)
        else:
            flush()
            parts.append(char)
    flush()
    return "".join(parts)


def _is_ignored(index: int, line: str) -> bool:
    if index == 3 and "MIT-style license" in line:
        return True
    if any(key in line for key in _IGNORE_CONTAINS):
        return True
    return line.strip().startswith(_IGNORE_PREFIXES)


def _has_serial_cap(line: str) -> bool:
    return any(is_cap(a) and is_cap(b) for a, b in zip(line, line[1:]))


def find_serial_caps(path: str, content: bytes) -> list[tuple[int, str]]:
    """Lines of ``content`` with adjacent capitals, as ``(line_number, highlighted)``.

    Test files and files below the exempt directory give no findings.
    """
    if _EXEMPT_PATH_PART in path or path.endswith(_EXEMPT_PATH_SUFFIX):
        return []
    text = content.decode("utf-8", errors="surrogateescape")
    findings = []
    for index, line in enumerate(text.split("\n")):
        if _is_ignored(index, line):
            continue
        if _has_serial_cap(line):
            findings.append((index + 1, highlight_serial_cap(line)))
    return findings


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Report runs of capital letters in Go sources.")
    parser.add_argument("-d", dest="dir", default="", help="dir of source")
    args = parser.parse_args(argv)
    if not args.dir:
        parser.print_help(sys.stderr)
        return 1

    def visit(path: str, content: bytes | None, error: OSError | None) -> None:
        if error is not None:
            _log.warning("read file failed. file=%s, err=%s", path, error)
            return None
        for line_number, highlighted in find_serial_caps(path, content):
            print(f"{path}:{line_number} {highlighted}")
        return None

    walk(args.dir, True, ".go", visit)
    return 0


if __name__ == "__main__":
    sys.exit(main())