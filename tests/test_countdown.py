from __future__ import annotations

from nightwatch.countdown import WARNING_MESSAGES, WarningTracker


def test_each_threshold_fires_once() -> None:
    tracker = WarningTracker()
    assert tracker.maybe_warn(10) == WARNING_MESSAGES[10]
    assert tracker.maybe_warn(10) is None
    assert tracker.warned(10) is True


def test_only_exact_minutes_fire() -> None:
    tracker = WarningTracker()
    assert tracker.maybe_warn(9) is None
    assert tracker.maybe_warn(11) is None
    assert tracker.maybe_warn(0) is None
    assert not any(tracker.warned(t) for t in (10, 5, 1))


def test_countdown_sequence_sends_three_messages_in_order() -> None:
    tracker = WarningTracker()
    sent = []
    # six 10s ticks per minute from 12 minutes out down to zero
    for minutes in range(12, -1, -1):
        for _ in range(6):
            message = tracker.maybe_warn(minutes)
            if message:
                sent.append(message)

    assert sent == [WARNING_MESSAGES[10], WARNING_MESSAGES[5], WARNING_MESSAGES[1]]


def test_reset_rearms_all_thresholds() -> None:
    tracker = WarningTracker()
    tracker.maybe_warn(10)
    tracker.maybe_warn(5)
    tracker.reset()
    assert tracker.maybe_warn(10) == WARNING_MESSAGES[10]
    assert tracker.maybe_warn(5) == WARNING_MESSAGES[5]
