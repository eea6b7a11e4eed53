"""Thin wrapper around the supervised server's OS process."""

from __future__ import annotations

import os
import shlex
import subprocess
from pathlib import Path

from nightwatch.errors import SpawnError
from nightwatch.logging_config import get_logger


LOGGER = get_logger(__name__)

KILL_GRACE_SECONDS = 10.0


def build_command(target: str) -> list[str]:
    """Turn the configured launch target into an argv list."""

    text = (target or "").strip()
    if not text:
        raise ValueError("Empty server command")
    if os.name == "nt":
        # .bat launchers only run through the command interpreter
        return ["cmd", "/C", text]
    return shlex.split(text)


class ServerProcess:
    """A running server with a writable console."""

    def __init__(self, popen: subprocess.Popen) -> None:
        self._popen = popen

    @classmethod
    def spawn(cls, command: list[str], cwd: Path | str | None = None) -> "ServerProcess":
        """Start *command* with a piped stdin and inherited output streams."""

        try:
            popen = subprocess.Popen(
                command,
                cwd=str(cwd) if cwd else None,
                stdin=subprocess.PIPE,
                text=True,
                bufsize=1,
            )
        except (OSError, ValueError, subprocess.SubprocessError) as exc:
            raise SpawnError(f"Failed to start {command!r}: {exc}", command=command) from exc
        LOGGER.info("Server spawned | pid=%s", popen.pid)
        return cls(popen)

    @property
    def pid(self) -> int:
        return self._popen.pid

    @property
    def returncode(self) -> int | None:
        return self._popen.returncode

    def poll(self) -> int | None:
        """Exit code when the process has ended, ``None`` while it runs."""

        try:
            return self._popen.poll()
        except OSError as exc:
            LOGGER.warning("Liveness check failed for pid=%s: %s", self.pid, exc)
            return -1

    def is_alive(self) -> bool:
        return self.poll() is None

    def send_line(self, text: str) -> None:
        stdin = self._popen.stdin
        if stdin is None:
            return
        try:
            stdin.write(text + "\n")
            stdin.flush()
        except (OSError, ValueError) as exc:
            LOGGER.debug("Could not write to pid=%s: %s", self.pid, exc)

    def wait(self, timeout: float | None = None) -> int:
        return self._popen.wait(timeout=timeout)

    def stop(self, command: str, timeout: float) -> int:
        """Ask the server to exit, forcing it down after *timeout* seconds."""

        self.send_line(command)
        try:
            return self.wait(timeout=timeout)
        except subprocess.TimeoutExpired:
            LOGGER.warning(
                "Server did not exit %.0fs after %r; terminating pid=%s",
                timeout,
                command,
                self.pid,
            )
        self._popen.terminate()
        try:
            return self.wait(timeout=KILL_GRACE_SECONDS)
        except subprocess.TimeoutExpired:
            LOGGER.error("Server ignored terminate; killing pid=%s", self.pid)
        self._popen.kill()
        return self.wait()
