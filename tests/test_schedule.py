from __future__ import annotations

from datetime import time

import pytest

from nightwatch.schedule import in_window, minutes_left, parse_clock


def _every_minute():
    for hour in range(24):
        for minute in range(60):
            yield time(hour, minute)


def test_parse_clock_accepts_hh_mm() -> None:
    assert parse_clock("08:00") == time(8, 0)
    assert parse_clock(" 23:59 ") == time(23, 59)
    assert parse_clock("7:05") == time(7, 5)


@pytest.mark.parametrize("value", ["24:00", "8", "08:00:00", "noon", "", "12:60"])
def test_parse_clock_rejects_garbage(value: str) -> None:
    with pytest.raises(ValueError):
        parse_clock(value)


def test_same_day_window_is_half_open() -> None:
    start, end = time(8, 0), time(22, 0)
    for now in _every_minute():
        assert in_window(now, start, end) is (start <= now < end)


def test_overnight_window_wraps_midnight() -> None:
    start, end = time(22, 0), time(8, 0)
    for now in _every_minute():
        expected = now >= start or now < end
        assert in_window(now, start, end) is expected


def test_window_boundaries() -> None:
    assert in_window(time(7, 59, 59), time(8, 0), time(22, 0)) is False
    assert in_window(time(8, 0), time(8, 0), time(22, 0)) is True
    assert in_window(time(21, 59, 59), time(8, 0), time(22, 0)) is True
    assert in_window(time(22, 0), time(8, 0), time(22, 0)) is False
    assert in_window(time(0, 0), time(22, 0), time(8, 0)) is True
    assert in_window(time(8, 0), time(22, 0), time(8, 0)) is False


def test_equal_start_and_end_is_never_in_window() -> None:
    for now in (time(0, 0), time(12, 0), time(12, 0, 30), time(23, 59)):
        assert in_window(now, time(12, 0), time(12, 0)) is False


def test_minutes_left_same_day() -> None:
    assert minutes_left(time(21, 50), time(22, 0)) == 10
    assert minutes_left(time(21, 49, 30), time(22, 0)) == 10
    assert minutes_left(time(21, 59, 59), time(22, 0)) == 0
    assert minutes_left(time(8, 0), time(22, 0)) == 14 * 60


def test_minutes_left_overnight_uses_wraparound() -> None:
    assert minutes_left(time(23, 30), time(8, 0)) == 510
    assert minutes_left(time(7, 55), time(8, 0)) == 5
    assert minutes_left(time(0, 0), time(8, 0)) == 480


def test_window_helpers_are_deterministic() -> None:
    args = (time(23, 30), time(22, 0), time(8, 0))
    assert [in_window(*args) for _ in range(3)] == [True, True, True]
    assert {minutes_left(time(23, 30), time(8, 0)) for _ in range(3)} == {510}
