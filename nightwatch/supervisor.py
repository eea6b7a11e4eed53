"""The scheduling state machine that drives the game server.

Each tick checks whether the server is still alive, compares the clock to
the configured window and takes at most one action: start the server,
stop it for the schedule, send a countdown warning or hold off restarts
after a crash loop.
"""

from __future__ import annotations

import time as _time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable

from nightwatch.alerts.notifier import Notifier
from nightwatch.config import Config
from nightwatch.countdown import WarningTracker
from nightwatch.errors import SpawnError
from nightwatch.logging_config import get_logger
from nightwatch.process import ServerProcess, build_command
from nightwatch.schedule import in_window, minutes_left
from nightwatch.watchdog import COOLDOWN_SECONDS, CrashLedger


LOGGER = get_logger(__name__)

MSG_SUPERVISOR_STARTED = "Supervisor started."
MSG_STARTING = "Starting server..."
MSG_STOPPING = "Stopping server (schedule)..."
MSG_CRASH_LOOP = "Watchdog: server crashed 3 times in 5 minutes. Pausing restarts."

Launcher = Callable[..., ServerProcess]


@dataclass(frozen=True)
class TickOutcome:
    action: str
    sleep_seconds: float


@dataclass
class SupervisorState:
    """Everything the loop carries from one tick to the next."""

    process: ServerProcess | None = None
    ledger: CrashLedger = field(default_factory=CrashLedger)
    warnings: WarningTracker = field(default_factory=WarningTracker)


class Supervisor:
    def __init__(
        self,
        config: Config,
        notifier: Notifier,
        *,
        launcher: Launcher | None = None,
        clock: Callable[[], datetime] = datetime.now,
        sleep: Callable[[float], None] = _time.sleep,
    ) -> None:
        if not 0 < config.poll_seconds < 60:
            raise ValueError("poll interval must be between 0 and 60 seconds")
        self.config = config
        self.state = SupervisorState()
        self._notifier = notifier
        self._launcher = launcher or ServerProcess.spawn
        self._command = build_command(config.server_command)
        self._clock = clock
        self._sleep = sleep

    def run_forever(self, max_ticks: int | None = None) -> None:
        """Poll until the interpreter is stopped (or *max_ticks* ticks ran)."""

        self._notify(MSG_SUPERVISOR_STARTED)
        LOGGER.info(
            "Supervising %r | window=%s-%s poll=%ss",
            self.config.server_command,
            self.config.start_time.strftime("%H:%M"),
            self.config.end_time.strftime("%H:%M"),
            self.config.poll_seconds,
        )
        ticks = 0
        while max_ticks is None or ticks < max_ticks:
            try:
                outcome = self.tick(self._clock())
            except Exception:
                LOGGER.exception("Supervisor tick failed; continuing")
                outcome = TickOutcome("error", self.config.poll_seconds)
            self._sleep(outcome.sleep_seconds)
            ticks += 1

    def tick(self, now: datetime) -> TickOutcome:
        exit_code = self._check_liveness()
        alive = self.state.process is not None
        window_open = in_window(now.time(), self.config.start_time, self.config.end_time)
        if exit_code is not None and window_open:
            self._notify(f"Server exited unexpectedly (code {exit_code}).")

        if not alive:
            if window_open:
                return self._start(now)
            self.state.process = None
            return self._outcome("idle")

        if not window_open:
            return self._stop()
        return self._countdown(now)

    def _check_liveness(self) -> int | None:
        """Drop the handle of a server that has exited and return its exit code."""

        process = self.state.process
        if process is None:
            return None
        code = process.poll()
        if code is None:
            return None
        LOGGER.warning("Server exited | pid=%s code=%s", process.pid, code)
        self.state.process = None
        return code

    def _start(self, now: datetime) -> TickOutcome:
        ledger = self.state.ledger
        if ledger.tripped(now):
            resumes_at = ledger.resumes_at()
            LOGGER.warning(
                "Too many restarts (%d in %s); pausing restarts until after %s",
                ledger.count(),
                ledger.horizon,
                resumes_at.strftime("%H:%M:%S") if resumes_at else "unknown",
            )
            self._notify(MSG_CRASH_LOOP)
            return TickOutcome("cooldown", COOLDOWN_SECONDS)

        LOGGER.info("Starting server: %s", " ".join(self._command))
        self._notify(MSG_STARTING)
        try:
            process = self._launcher(self._command, cwd=self.config.working_dir)
        except SpawnError as exc:
            ledger.record(now)
            LOGGER.error("Failed to start server: %s", exc)
            self._notify(f"Server failed to start: {exc}")
            return self._outcome("spawn_failed")
        except Exception:
            ledger.record(now)
            raise

        ledger.record(now)
        self.state.process = process
        self.state.warnings.reset()
        return self._outcome("spawned")

    def _stop(self) -> TickOutcome:
        process = self.state.process
        if process is None:
            return self._outcome("idle")
        LOGGER.info("Window closed; stopping server pid=%s", process.pid)
        self._notify(MSG_STOPPING)
        code = process.stop(self.config.stop_command, self.config.stop_timeout_seconds)
        self.state.process = None
        LOGGER.info("Server stopped | code=%s", code)
        return self._outcome("stopped")

    def _countdown(self, now: datetime) -> TickOutcome:
        process = self.state.process
        if process is None:
            return self._outcome("idle")
        remaining = minutes_left(now.time(), self.config.end_time)
        message = self.state.warnings.maybe_warn(remaining)
        if message is None:
            return self._outcome("running")
        LOGGER.info("Countdown warning | minutes_left=%d", remaining)
        process.send_line(message)
        return self._outcome("warned")

    def _notify(self, text: str) -> None:
        # Delivery is best-effort; the loop never depends on the result.
        _ = self._notifier.send(text)

    def _outcome(self, action: str) -> TickOutcome:
        return TickOutcome(action, self.config.poll_seconds)
