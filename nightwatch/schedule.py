"""Daily time window helpers."""

from __future__ import annotations

from datetime import datetime, time

_SECONDS_PER_DAY = 24 * 60 * 60


def parse_clock(value: str) -> time:
    """Parse an ``HH:MM`` wall-clock string.

    Raises ``ValueError`` for anything else, including seconds or 24:00.
    """

    text = (value or "").strip()
    try:
        parsed = datetime.strptime(text, "%H:%M")
    except ValueError as exc:
        raise ValueError(f"Invalid time {value!r}; expected HH:MM") from exc
    return parsed.time()


def _seconds(value: time) -> float:
    return value.hour * 3600 + value.minute * 60 + value.second + value.microsecond / 1_000_000


def in_window(now: time, start: time, end: time) -> bool:
    """Return True when *now* lies in the daily window ``[start, end)``.

    Windows with ``start > end`` run overnight and wrap around midnight.
    A window with ``start == end`` is empty: the server never runs.
    """

    if start == end:
        return False
    if start < end:
        return start <= now < end
    return now >= start or now < end


def minutes_left(now: time, end: time) -> int:
    """Whole minutes until *end*, wrapping past midnight when needed.

    Only meaningful while *now* is inside the window.
    """

    delta = _seconds(end) - _seconds(now)
    if now >= end:
        delta += _SECONDS_PER_DAY
    return int(delta // 60)
