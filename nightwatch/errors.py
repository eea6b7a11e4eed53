"""Domain specific exceptions for nightwatch."""

from __future__ import annotations

from pathlib import Path


class NightwatchError(RuntimeError):
    """Base class for supervisor errors."""


class ConfigError(NightwatchError):
    """Raised when the configuration file cannot be used."""

    def __init__(self, message: str, *, path: Path | str | None = None) -> None:
        self.path = str(path) if path is not None else None
        if self.path:
            message = f"{message} ({self.path})"
        super().__init__(message)


class SpawnError(NightwatchError):
    """Raised when the server process could not be started."""

    def __init__(self, message: str, *, command: list[str] | None = None) -> None:
        self.command = list(command or [])
        super().__init__(message)
