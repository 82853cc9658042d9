import time

import pytest

from naza.bitrate import Bitrate, Unit


def test_bitrate_default_clock():
    b = Bitrate(window_ms=1000)
    b.add(1000)
    assert b.rate() == 8.0


def test_bitrate_expires_after_window():
    b = Bitrate(window_ms=10)
    b.add(1000)
    time.sleep(0.1)
    assert b.rate() == 0.0


@pytest.mark.parametrize(
    "unit, expected",
    [
        (Unit.BIT_PER_SEC, 800 * 1000),
        (Unit.BYTE_PER_SEC, 100 * 1000),
        (Unit.KBIT_PER_SEC, 800),
        (Unit.KBYTE_PER_SEC, 100),
    ],
)
def test_unit(unit, expected):
    b = Bitrate(window_ms=10, unit=unit)
    b.add(1000, 5000)
    assert b.rate(5000) == expected


def test_outside_now():
    b = Bitrate(window_ms=10)
    now = time.time_ns() // 1_000_000
    b.add(1000, now)
    assert b.rate(now) == 800


def test_window_boundary():
    b = Bitrate(window_ms=10)
    b.add(1000, 100)
    b.add(500, 105)
    assert b.rate(110) == 1200
    assert b.rate(111) == 400
    assert b.rate(200) == 0