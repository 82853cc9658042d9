"""Big-endian and little-endian integer encoding helpers."""

from __future__ import annotations

import struct
from typing import BinaryIO


class ShortReadError(EOFError):
    """Raised when a stream yields fewer bytes than requested.

    ``data`` holds the bytes that were read, zero padded to the requested
    length, or ``None`` when nothing could be read at all.
    """

    def __init__(self, message: str, data: bytes | None = None) -> None:
        super().__init__(message)
        self.data = data


def _take(p: bytes, n: int) -> bytes:
    if len(p) < n:
        raise ValueError(f"need at least {n} bytes, got {len(p)}")
    return bytes(p[:n])


def _ensure_room(out: bytearray, n: int) -> None:
    if len(out) < n:
        raise ValueError(f"output buffer needs at least {n} bytes, has {len(out)}")


# ----- decoding -----


def be_uint16(p: bytes) -> int:
    return int.from_bytes(_take(p, 2), "big")


def be_uint24(p: bytes) -> int:
    return int.from_bytes(_take(p, 3), "big")


def be_uint32(p: bytes) -> int:
    return int.from_bytes(_take(p, 4), "big")


def be_uint64(p: bytes) -> int:
    return int.from_bytes(_take(p, 8), "big")


def be_float64(p: bytes) -> float:
    return struct.unpack(">d", _take(p, 8))[0]


def le_uint16(p: bytes) -> int:
    return int.from_bytes(_take(p, 2), "little")


def le_uint32(p: bytes) -> int:
    return int.from_bytes(_take(p, 4), "little")


# ----- reading from streams -----


def read_bytes(reader: BinaryIO, n: int) -> bytes:
    """Read exactly ``n`` bytes with a single ``read`` call.

    A short read raises :class:`ShortReadError`; the remaining bytes are still
    consumed from the stream.
    """
    if n <= 0:
        return b""
    chunk = reader.read(n) or b""
    if not chunk:
        raise ShortReadError(f"expected {n} bytes, stream is exhausted")
    if len(chunk) != n:
        raise ShortReadError(
            f"expected {n} bytes, got {len(chunk)}",
            chunk + bytes(n - len(chunk)),
        )
    return chunk


def read_string(reader: BinaryIO, n: int) -> str:
    return read_bytes(reader, n).decode("utf-8", errors="surrogateescape")


def read_uint8(reader: BinaryIO) -> int:
    return read_bytes(reader, 1)[0]


def read_be_uint16(reader: BinaryIO) -> int:
    return be_uint16(read_bytes(reader, 2))


def read_be_uint24(reader: BinaryIO) -> int:
    return be_uint24(read_bytes(reader, 3))


def read_be_uint32(reader: BinaryIO) -> int:
    return be_uint32(read_bytes(reader, 4))


def read_be_uint64(reader: BinaryIO) -> int:
    return be_uint64(read_bytes(reader, 8))


def read_le_uint32(reader: BinaryIO) -> int:
    return le_uint32(read_bytes(reader, 4))


def read_le_uint16(reader: BinaryIO) -> int:
    # Consumes four bytes from the stream; the value is taken from the first two.
    return le_uint16(read_bytes(reader, 4))


# ----- encoding -----


def _put(out: bytearray, value: int, size: int, order: str) -> None:
    _ensure_room(out, size)
    out[0:size] = (value & ((1 << (size * 8)) - 1)).to_bytes(size, order)


def be_put_uint16(out: bytearray, value: int) -> None:
    _put(out, value, 2, "big")


def be_put_uint24(out: bytearray, value: int) -> None:
    _put(out, value, 3, "big")


def be_put_uint32(out: bytearray, value: int) -> None:
    _put(out, value, 4, "big")


def be_put_uint64(out: bytearray, value: int) -> None:
    _put(out, value, 8, "big")


def le_put_uint16(out: bytearray, value: int) -> None:
    _put(out, value, 2, "little")


def le_put_uint32(out: bytearray, value: int) -> None:
    _put(out, value, 4, "little")


def write_be_uint24(writer: BinaryIO, value: int) -> None:
    writer.write((value & 0xFFFFFF).to_bytes(3, "big"))


def write_be(writer: BinaryIO, value, fmt: str) -> None:
    """Write ``value`` packed big-endian with the :mod:`struct` format ``fmt``."""
    writer.write(struct.pack(">" + fmt, value))


def write_le(writer: BinaryIO, value, fmt: str) -> None:
    """Write ``value`` packed little-endian with the :mod:`struct` format ``fmt``."""
    writer.write(struct.pack("<" + fmt, value))