"""Bit-level reading and writing of byte buffers, most significant bit first."""

from __future__ import annotations


class BitsError(Exception):
    """Raised when a read needs more bits than remain."""


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value & 0x80000000 else value


class BitReader:
    """Streams bits out of a byte string, high bit to low bit.

    Once a read fails the reader stays failed: every later read raises and
    ``error`` holds the first failure.
    """

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._offset = 0
        self.error: BitsError | None = None

    def _reserve(self, n: int) -> None:
        if n < 0:
            raise ValueError("bit count must not be negative")
        if self.error is not None:
            raise BitsError(str(self.error))
        if len(self._data) * 8 - self._offset < n:
            self.error = BitsError("not enough bits left")
            raise BitsError(str(self.error))

    def read_bit(self) -> int:
        return self.read_bits(1)

    def read_bits(self, n: int) -> int:
        """Read ``n`` bits and return them as an unsigned integer."""
        self._reserve(n)
        start = self._offset
        end = start + n
        first, last = start // 8, (end + 7) // 8
        chunk = int.from_bytes(self._data[first:last], "big")
        self._offset = end
        return (chunk >> (last * 8 - end)) & ((1 << n) - 1)

    def read_bytes(self, n: int) -> bytes:
        if self._offset % 8 == 0:
            self._reserve(n * 8)
            start = self._offset // 8
            self._offset += n * 8
            return self._data[start:start + n]
        return bytes(self.read_bits(8) for _ in range(n))

    def read_string(self, n: int) -> str:
        return self.read_bytes(n).decode("utf-8", errors="surrogateescape")

    def read_golomb(self) -> int:
        return self.read_ue_golomb()

    def read_ue_golomb(self) -> int:
        """Read an unsigned order-0 exponential Golomb code."""
        zeros = 0
        while self.read_bit() == 0:
            zeros += 1
        suffix = self.read_bits(zeros)
        return ((1 << zeros) + suffix - 1) & 0xFFFFFFFF

    def read_se_golomb(self) -> int:
        """Read a signed order-0 exponential Golomb code."""
        v = _to_int32(_to_int32(self.read_ue_golomb()) + 1)
        sign = -(v & 1)
        return _to_int32(((v >> 1) ^ sign) - sign)

    def skip_bytes(self, n: int) -> None:
        self._reserve(n * 8)
        self._offset += n * 8

    def skip_bits(self, n: int) -> None:
        self._reserve(n)
        self._offset += n

    def avail_bits(self) -> int:
        """Number of bits still readable; raises if the reader has failed."""
        if self.error is not None:
            raise BitsError(str(self.error))
        return len(self._data) * 8 - self._offset


class BitWriter:
    """Writes bits into a caller-supplied bytearray, high bit to low bit.

    Writing past the end of the buffer raises IndexError.
    """

    def __init__(self, buf: bytearray) -> None:
        self._buf = buf
        self._index = 0
        self._pos = 0

    def write_bit(self, bit: int) -> None:
        """Write the lowest bit of ``bit``."""
        mask = 1 << (7 - self._pos)
        if bit & 1:
            self._buf[self._index] |= mask
        else:
            self._buf[self._index] &= ~mask & 0xFF
        self._pos += 1
        if self._pos == 8:
            self._pos = 0
            self._index += 1

    def write_bits(self, n: int, value: int) -> None:
        """Write the low ``n`` bits of ``value``."""
        for shift in reversed(range(n)):
            self.write_bit(value >> shift)


def get_bit8(value: int, pos: int) -> int:
    """Bit ``pos`` of ``value``, where 0 is the lowest bit."""
    return (value >> pos) & 1


def get_bits8(value: int, pos: int, n: int) -> int:
    """``n`` bits of ``value`` starting at bit ``pos`` (0 is the lowest)."""
    return (value >> pos) & ((1 << n) - 1)


def get_bit16(data: bytes, pos: int) -> int:
    """Bit ``pos`` of the big-endian 16-bit value in ``data``."""
    if pos < 8:
        return get_bit8(data[1], pos)
    return get_bit8(data[0], pos - 8)


def get_bits16(data: bytes, pos: int, n: int) -> int:
    """``n`` bits of the big-endian 16-bit value in ``data`` starting at ``pos``."""
    word = (data[0] << 8) | data[1]
    return (word >> pos) & ((1 << n) - 1)