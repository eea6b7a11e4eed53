"""Crash-loop detection for the supervised server."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta

CRASH_HORIZON = timedelta(minutes=5)
CRASH_THRESHOLD = 3
COOLDOWN_SECONDS = 60.0


@dataclass
class CrashLedger:
    """Restart attempts seen within a trailing time horizon."""

    horizon: timedelta = CRASH_HORIZON
    threshold: int = CRASH_THRESHOLD
    _attempts: list[datetime] = field(default_factory=list, init=False)

    def record(self, now: datetime) -> None:
        self._attempts.append(now)

    def prune(self, now: datetime) -> None:
        self._attempts = [stamp for stamp in self._attempts if now - stamp <= self.horizon]

    def count(self) -> int:
        return len(self._attempts)

    def tripped(self, now: datetime) -> bool:
        """Prune, then report whether restarts should be held back."""

        self.prune(now)
        return self.count() >= self.threshold

    def oldest(self) -> datetime | None:
        return self._attempts[0] if self._attempts else None

    def resumes_at(self) -> datetime | None:
        """When the oldest retained attempt ages out of the horizon."""

        oldest = self.oldest()
        if oldest is None:
            return None
        return oldest + self.horizon
