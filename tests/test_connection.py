import socket

import pytest

from naza.connection import (
    Connection,
    ConnectionClosedError,
    ConnectionMisuseError,
    Option,
    Stat,
    WriteChanFullBehavior,
    WriteChanFullError,
)

GOLDEN = b"abcde"


@pytest.fixture
def pair():
    a, b = socket.socketpair()
    b.settimeout(5)
    yield a, b
    a.close()
    b.close()


def recv_exactly(sock, n):
    data = b""
    while len(data) < n:
        chunk = sock.recv(n - len(data))
        if not chunk:
            break
        data += chunk
    return data


def test_writev_unbuffered(pair):
    a, b = pair
    conn = Connection(a)
    assert conn.writev([GOLDEN[:2], GOLDEN[2:5]]) == 5
    assert recv_exactly(b, 5) == GOLDEN
    assert conn.stat().wrote_bytes_sum == 5
    conn.close()


def test_writev_with_write_queue(pair):
    a, b = pair
    conn = Connection(a, Option(write_chan_size=128))
    assert conn.writev([GOLDEN[:2], GOLDEN[2:5]]) == 5
    assert recv_exactly(b, 5) == GOLDEN
    conn.close()


def test_writev_with_write_buffer(pair):
    a, b = pair
    conn = Connection(a, Option(write_buf_size=1024))
    assert conn.writev([GOLDEN[:2], GOLDEN[2:5]]) == 5
    b.settimeout(0.2)
    with pytest.raises(TimeoutError):
        b.recv(16)
    conn.flush()
    b.settimeout(5)
    assert recv_exactly(b, 5) == GOLDEN
    assert conn.stat() == Stat(read_bytes_sum=0, wrote_bytes_sum=5)
    conn.close()


def test_write_timeout_closes_connection(pair):
    a, _ = pair
    conn = Connection(a, Option(write_timeout_ms=200))
    chunk = bytes(128 * 1024)
    with pytest.raises(TimeoutError):
        for _ in range(1000):
            conn.write(chunk)
    assert isinstance(conn.wait_done(1), TimeoutError)
    with pytest.raises(ConnectionClosedError):
        conn.write(b"x")


def test_write_queue_delivers_everything(pair):
    a, b = pair
    conn = Connection(a, Option(write_chan_size=1024, write_timeout_ms=10000))
    sizes = [17, 0, 4095, 1, 300, 2048, 99, 3000, 12, 4000]
    for size in sizes:
        assert conn.write(bytes(size)) == size
    conn.flush()
    conn.close()
    total = 0
    while True:
        chunk = b.recv(4096)
        if not chunk:
            break
        total += len(chunk)
    assert total == sum(sizes)
    assert conn.stat().wrote_bytes_sum == sum(sizes)
    assert conn.wait_done(1) is None


def test_write_queue_full_returns_error(pair):
    a, _ = pair
    conn = Connection(
        a,
        Option(write_chan_size=1, write_chan_full_behavior=WriteChanFullBehavior.RETURN_ERROR),
    )
    chunk = bytes(1024 * 1024)
    with pytest.raises(WriteChanFullError):
        for _ in range(100):
            conn.write(chunk)
    conn.close()
    assert conn.wait_done(2) is None


def test_read(pair):
    a, b = pair
    conn = Connection(a)
    b.sendall(b"hello")
    assert conn.read(16) == b"hello"
    assert conn.stat().read_bytes_sum == 5
    conn.close()


def test_buffered_read(pair):
    a, b = pair
    conn = Connection(a, Option(read_buf_size=4))
    b.sendall(b"abcdefgh")
    assert conn.read(2) == b"ab"
    assert conn.read(10) == b"cd"
    assert conn.read(10) == b"efgh"
    assert conn.stat().read_bytes_sum == 8
    conn.close()


def test_read_timeout(pair):
    a, _ = pair
    conn = Connection(a, Option(read_timeout_ms=100))
    with pytest.raises(TimeoutError):
        conn.read(16)
    assert isinstance(conn.wait_done(1), TimeoutError)
    assert conn.closed is True


def test_read_eof(pair):
    a, b = pair
    conn = Connection(a)
    b.close()
    assert conn.read(16) == b""
    assert isinstance(conn.wait_done(1), EOFError)


def test_read_at_least(pair):
    a, b = pair
    conn = Connection(a)
    b.sendall(b"abc")
    b.sendall(b"def")
    assert conn.read_at_least(5, 16) == b"abcdef"
    assert conn.stat().read_bytes_sum == 6
    conn.close()


def test_read_at_least_short_stream(pair):
    a, b = pair
    conn = Connection(a)
    b.sendall(b"ab")
    b.shutdown(socket.SHUT_WR)
    with pytest.raises(EOFError):
        conn.read_at_least(5, 16)
    assert conn.stat().read_bytes_sum == 2
    assert isinstance(conn.wait_done(1), EOFError)


def test_read_at_least_rejects_small_size(pair):
    a, _ = pair
    conn = Connection(a)
    with pytest.raises(ValueError):
        conn.read_at_least(8, 4)
    conn.close()


def test_read_line(pair):
    a, b = pair
    conn = Connection(a, Option(read_buf_size=64))
    b.sendall(b"hello\r\nworld\n")
    assert conn.read_line() == (b"hello", False)
    assert conn.read_line() == (b"world", False)
    assert conn.stat().read_bytes_sum == 10
    b.close()
    with pytest.raises(EOFError):
        conn.read_line()


def test_read_line_long_line_is_prefix(pair):
    a, b = pair
    conn = Connection(a, Option(read_buf_size=4))
    b.sendall(b"abcdef\n")
    assert conn.read_line() == (b"abcd", True)
    assert conn.read_line() == (b"ef", False)
    conn.close()


def test_read_line_needs_buffer(pair):
    a, _ = pair
    conn = Connection(a)
    with pytest.raises(ConnectionMisuseError):
        conn.read_line()
    conn.close()


def test_close_is_idempotent(pair):
    a, _ = pair
    conn = Connection(a)
    conn.close()
    conn.close()
    assert conn.wait_done(0) is None
    with pytest.raises(ConnectionClosedError):
        conn.write(b"x")
    with pytest.raises(ConnectionClosedError):
        conn.flush()


def test_wait_done_times_out_while_open(pair):
    a, _ = pair
    conn = Connection(a)
    with pytest.raises(TimeoutError):
        conn.wait_done(0.01)
    conn.close()


def test_mod_options_misuse(pair):
    a, _ = pair
    conn = Connection(a, Option(read_timeout_ms=100, write_timeout_ms=100, write_chan_size=4))
    with pytest.raises(ConnectionMisuseError):
        conn.mod_read_timeout_ms(10)
    with pytest.raises(ConnectionMisuseError):
        conn.mod_write_timeout_ms(10)
    with pytest.raises(ConnectionMisuseError):
        conn.mod_write_chan_size(8)
    conn.mod_write_buf_size(16)
    with pytest.raises(ConnectionMisuseError):
        conn.mod_write_buf_size(32)
    conn.close()


def test_mod_write_chan_size_starts_writer(pair):
    a, b = pair
    conn = Connection(a)
    conn.mod_write_chan_size(8)
    assert conn.write(GOLDEN) == 5
    conn.flush()
    assert recv_exactly(b, 5) == GOLDEN
    conn.close()


def test_addresses(pair):
    a, _ = pair
    expected = a.getsockname()
    conn = Connection(a)
    assert conn.local_addr() == expected
    conn.close()


def test_context_manager_closes(pair):
    a, b = pair
    with Connection(a) as conn:
        conn.write(b"x")
    assert conn.closed is True
    assert conn.wait_done(0) is None
    assert recv_exactly(b, 2) == b"x"