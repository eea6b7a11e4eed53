"""Countdown announcements sent to players before a scheduled stop."""

from __future__ import annotations

from dataclasses import dataclass, field

WARNING_MESSAGES: dict[int, str] = {
    10: "say Server will stop in 10 minutes!",
    5: "say Server will stop in 5 minutes!",
    1: "say Server will stop in 1 minute!",
}


def _fresh_flags() -> dict[int, bool]:
    return {threshold: False for threshold in WARNING_MESSAGES}


@dataclass
class WarningTracker:
    """Remembers which thresholds were already announced for the current run."""

    _warned: dict[int, bool] = field(default_factory=_fresh_flags, init=False)

    def maybe_warn(self, minutes_left: int) -> str | None:
        """Return the announcement due at *minutes_left*, marking it as sent.

        Thresholds fire on an exact minute match only, at most one per call.
        """

        for threshold in sorted(WARNING_MESSAGES, reverse=True):
            if minutes_left == threshold and not self._warned[threshold]:
                self._warned[threshold] = True
                return WARNING_MESSAGES[threshold]
        return None

    def reset(self) -> None:
        self._warned = _fresh_flags()

    def warned(self, threshold: int) -> bool:
        return self._warned.get(threshold, False)
