"""Socket wrapper with optional buffering, per-call timeouts and a background writer."""

from __future__ import annotations

import contextlib
import dataclasses
import enum
import itertools
import logging
import queue
import select
import socket
import threading
import time
from dataclasses import dataclass
from typing import Any, Iterable, Iterator

from naza.atomic import AtomicBool, AtomicUint64

_log = logging.getLogger(__name__)
_ids = itertools.count(1)

_POLL_SECONDS = 0.05
_STOP = object()


class ConnectionError_(Exception):
    """Base class of the errors raised by :class:`Connection`."""


class ConnectionMisuseError(ConnectionError_, RuntimeError):
    """Raised when the connection is used in a way it does not support."""


class ConnectionClosedError(ConnectionError_):
    """Raised when using a connection that is already closed."""


class WriteChanFullError(ConnectionError_):
    """Raised when the background write queue is full."""


class WriteChanFullBehavior(enum.IntEnum):
    RETURN_ERROR = 1
    BLOCK = 2


@dataclass
class Option:
    """Connection settings; zero disables a feature.

    ``read_buf_size``/``write_buf_size`` buffer reads and writes,
    ``read_timeout_ms``/``write_timeout_ms`` bound each call, and
    ``write_chan_size`` hands writes to a background thread through a queue
    of that size.
    """

    read_buf_size: int = 0
    write_buf_size: int = 0
    read_timeout_ms: int = 0
    write_timeout_ms: int = 0
    write_chan_size: int = 0
    write_chan_full_behavior: WriteChanFullBehavior = WriteChanFullBehavior.RETURN_ERROR


@dataclass(frozen=True)
class Stat:
    read_bytes_sum: int = 0
    wrote_bytes_sum: int = 0


class _Kind(enum.Enum):
    WRITE = 1
    FLUSH = 2


def _deadline(timeout_ms: int) -> float | None:
    return time.monotonic() + timeout_ms / 1000 if timeout_ms > 0 else None


class Connection:
    """Wraps a connected socket.

    The socket is switched to non-blocking mode; timeouts are enforced per
    call. Any failure closes the connection, and :meth:`wait_done` then
    reports the error that closed it (``None`` after a local :meth:`close`).
    """

    def __init__(self, sock: socket.socket, option: Option | None = None) -> None:
        self._sock = sock
        self._option = dataclasses.replace(option) if option is not None else Option()
        self._key = f"NAZACONN{next(_ids)}"
        self._local = sock.getsockname()
        try:
            self._remote = sock.getpeername()
        except OSError:
            self._remote = None
        sock.setblocking(False)

        self._rbuf = bytearray()
        self._wbuf = bytearray()
        self._wlock = threading.RLock()
        self._closed = AtomicBool()
        self._done = threading.Event()
        self._done_error: BaseException | None = None
        self._exit = threading.Event()
        self._loop_done = threading.Event()
        self._wchan: queue.Queue[Any] | None = None
        self._read_sum = AtomicUint64()
        self._wrote_sum = AtomicUint64()

        if self._option.write_chan_size > 0:
            self._start_write_loop()
        _log.debug("[%s] lifecycle new connection", self._key)

    # ----- public API -----------------------------------------------------

    @property
    def closed(self) -> bool:
        return self._closed.load()

    def read(self, size: int) -> bytes:
        """Read up to ``size`` bytes; returns b"" at end of stream."""
        self._check_open()
        if size <= 0:
            return b""
        deadline = _deadline(self._option.read_timeout_ms)
        with self._guard():
            data = self._read_some(size, deadline)
        if not data:
            self._close(EOFError("connection closed by peer"))
            return b""
        self._read_sum.add(len(data))
        return data

    def read_at_least(self, minimum: int, size: int) -> bytes:
        """Read at least ``minimum`` and at most ``size`` bytes.

        Raises EOFError if the stream ends first.
        """
        if size < minimum:
            raise ValueError("size must not be smaller than minimum")
        self._check_open()
        deadline = _deadline(self._option.read_timeout_ms)
        received = bytearray()
        try:
            with self._guard():
                while len(received) < minimum:
                    part = self._read_some(size - len(received), deadline)
                    if not part:
                        raise EOFError("connection closed by peer")
                    received += part
        finally:
            self._read_sum.add(len(received))
        return bytes(received)

    def read_line(self) -> tuple[bytes, bool]:
        """Read one line without its line ending; needs ``read_buf_size``.

        Returns ``(line, is_prefix)``; ``is_prefix`` is true when the line did
        not fit in the read buffer and the rest follows in later calls.
        """
        size = self._option.read_buf_size
        if size <= 0:
            raise ConnectionMisuseError("read_line needs a read buffer")
        self._check_open()
        deadline = _deadline(self._option.read_timeout_ms)
        with self._guard():
            while True:
                idx = self._rbuf.find(b"\n")
                if idx >= 0:
                    line = bytes(self._rbuf[:idx])
                    del self._rbuf[: idx + 1]
                    if line.endswith(b"\r"):
                        line = line[:-1]
                    is_prefix = False
                    break
                if len(self._rbuf) >= size:
                    line = bytes(self._rbuf[:size])
                    del self._rbuf[:size]
                    if len(line) > 1 and line.endswith(b"\r"):
                        # Keep a trailing CR back: it may start a CRLF.
                        self._rbuf[0:0] = b"\r"
                        line = line[:-1]
                    is_prefix = True
                    break
                chunk = self._recv(size - len(self._rbuf), deadline)
                if not chunk:
                    if self._rbuf:
                        line = bytes(self._rbuf)
                        self._rbuf.clear()
                        is_prefix = False
                        break
                    raise EOFError("connection closed by peer")
        self._read_sum.add(len(line))
        return line, is_prefix

    def write(self, data: bytes) -> int:
        """Write ``data``; with a write queue the whole length is reported at once."""
        self._check_open()
        data = bytes(data)
        if self._wchan is not None:
            block = self._option.write_chan_full_behavior is WriteChanFullBehavior.BLOCK
            self._enqueue((_Kind.WRITE, data), block)
            return len(data)
        return self._write(data)

    def writev(self, buffers: Iterable[bytes]) -> int:
        """Write several separate buffers as one contiguous stream."""
        return self.write(b"".join(bytes(b) for b in buffers))

    def flush(self) -> None:
        """Send buffered data; with a write queue, wait until it is drained."""
        self._check_open()
        if self._wchan is None:
            self._flush()
            return
        flushed = threading.Event()
        self._enqueue((_Kind.FLUSH, flushed), block=True)
        while not flushed.wait(_POLL_SECONDS):
            if self._loop_done.is_set():
                break
        if not flushed.is_set():
            raise ConnectionClosedError("writer stopped before flushing")

    def close(self) -> None:
        """Close the connection; calling it again does nothing."""
        _log.debug("[%s] close", self._key)
        self._close(None)

    def wait_done(self, timeout: float | None = None) -> BaseException | None:
        """Block until the connection is closed and return the error that closed it.

        Raises TimeoutError if that does not happen within ``timeout`` seconds.
        """
        if not self._done.wait(timeout):
            raise TimeoutError("connection still open")
        return self._done_error

    def local_addr(self) -> Any:
        return self._local

    def remote_addr(self) -> Any:
        return self._remote

    def mod_write_chan_size(self, n: int) -> None:
        if self._option.write_chan_size > 0:
            raise ConnectionMisuseError("write queue already configured")
        if n == 0:
            return
        self._option.write_chan_size = n
        self._start_write_loop()

    def mod_write_buf_size(self, n: int) -> None:
        if self._option.write_buf_size > 0:
            raise ConnectionMisuseError("write buffer already configured")
        self._option.write_buf_size = n

    def mod_read_timeout_ms(self, n: int) -> None:
        if self._option.read_timeout_ms > 0:
            raise ConnectionMisuseError("read timeout already configured")
        self._option.read_timeout_ms = n

    def mod_write_timeout_ms(self, n: int) -> None:
        if self._option.write_timeout_ms > 0:
            raise ConnectionMisuseError("write timeout already configured")
        self._option.write_timeout_ms = n

    def stat(self) -> Stat:
        """Bytes read and written so far; queued writes count once sent."""
        return Stat(self._read_sum.load(), self._wrote_sum.load())

    def __enter__(self) -> "Connection":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    # ----- internals ------------------------------------------------------

    def _check_open(self) -> None:
        if self._closed.load():
            raise ConnectionClosedError("connection closed already")

    @contextlib.contextmanager
    def _guard(self) -> Iterator[None]:
        try:
            yield
        except (ConnectionError_, OSError, EOFError) as exc:
            self._close(exc)
            raise
        except ValueError as exc:
            err = ConnectionClosedError(str(exc))
            self._close(err)
            raise err from exc

    def _wait(self, readable: bool, deadline: float | None) -> None:
        timeout = None if deadline is None else deadline - time.monotonic()
        if timeout is not None and timeout <= 0:
            raise TimeoutError("i/o timeout")
        if self._sock.fileno() == -1:
            raise ConnectionClosedError("socket closed")
        if readable:
            ready, _, _ = select.select([self._sock], [], [], timeout)
        else:
            _, ready, _ = select.select([], [self._sock], [], timeout)
        if not ready:
            raise TimeoutError("i/o timeout")

    def _recv(self, n: int, deadline: float | None) -> bytes:
        while True:
            try:
                return self._sock.recv(n)
            except (BlockingIOError, InterruptedError):
                self._wait(True, deadline)

    def _read_some(self, n: int, deadline: float | None) -> bytes:
        size = self._option.read_buf_size
        if size <= 0:
            return self._recv(n, deadline)
        if not self._rbuf:
            if n >= size:
                return self._recv(n, deadline)
            chunk = self._recv(size, deadline)
            if not chunk:
                return b""
            self._rbuf += chunk
        taken = bytes(self._rbuf[:n])
        del self._rbuf[:n]
        return taken

    def _send_all(self, data: bytes, deadline: float | None) -> None:
        view = memoryview(data)
        while view:
            try:
                sent = self._sock.send(view)
                view = view[sent:]
            except (BlockingIOError, InterruptedError):
                self._wait(False, deadline)

    def _write(self, data: bytes) -> int:
        deadline = _deadline(self._option.write_timeout_ms)
        size = self._option.write_buf_size
        with self._wlock, self._guard():
            if size <= 0:
                self._send_all(data, deadline)
            elif len(self._wbuf) + len(data) <= size:
                self._wbuf += data
            else:
                if self._wbuf:
                    pending = bytes(self._wbuf)
                    self._wbuf.clear()
                    self._send_all(pending, deadline)
                if len(data) >= size:
                    self._send_all(data, deadline)
                else:
                    self._wbuf += data
        self._wrote_sum.add(len(data))
        return len(data)

    def _flush(self) -> None:
        with self._wlock:
            if not self._wbuf:
                return
            pending = bytes(self._wbuf)
            self._wbuf.clear()
            deadline = _deadline(self._option.write_timeout_ms)
            with self._guard():
                self._send_all(pending, deadline)

    def _enqueue(self, msg: tuple[_Kind, Any], block: bool) -> None:
        assert self._wchan is not None
        if not block:
            try:
                self._wchan.put_nowait(msg)
            except queue.Full:
                raise WriteChanFullError("write queue full") from None
            return
        while True:
            try:
                self._wchan.put(msg, timeout=_POLL_SECONDS)
                return
            except queue.Full:
                if self._loop_done.is_set() or self._closed.load():
                    raise ConnectionClosedError("connection closed already") from None

    def _start_write_loop(self) -> None:
        self._wchan = queue.Queue(maxsize=self._option.write_chan_size)
        self._loop_done.clear()
        threading.Thread(target=self._run_write_loop, name=f"{self._key}-writer", daemon=True).start()

    def _run_write_loop(self) -> None:
        assert self._wchan is not None
        try:
            while not self._exit.is_set():
                msg = self._wchan.get()
                if msg is _STOP or self._exit.is_set():
                    return
                kind, payload = msg
                if kind is _Kind.FLUSH:
                    try:
                        self._flush()
                    except (ConnectionError_, OSError, EOFError):
                        return
                    finally:
                        payload.set()
                else:
                    try:
                        self._write(payload)
                    except (ConnectionError_, OSError, EOFError):
                        return
        finally:
            self._loop_done.set()

    def _close(self, err: BaseException | None) -> None:
        if not self._closed.compare_and_swap(False, True):
            return
        _log.debug("[%s] close once. err=%r", self._key, err)
        self._exit.set()
        if self._wchan is not None:
            try:
                self._wchan.put_nowait(_STOP)
            except queue.Full:
                pass
        with contextlib.suppress(OSError):
            self._sock.shutdown(socket.SHUT_RDWR)
        self._sock.close()
        # The socket is closed before waiters are told, so they never see it open.
        self._done_error = err
        self._done.set()