"""Loading and validation of the supervisor configuration file."""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import time
from pathlib import Path
from typing import Any

import yaml

from nightwatch.errors import ConfigError
from nightwatch.logging_config import get_logger
from nightwatch.schedule import parse_clock


LOGGER = get_logger(__name__)

DEFAULT_CONFIG_PATH = Path("config.yml")
WEBHOOK_ENV = "NIGHTWATCH_WEBHOOK_URL"

# Key names used by the first generation of config files.
_ALIASES = {
    "server_bat_path": "server_command",
    "discord_webhook_url": "webhook_url",
}


@dataclass(frozen=True)
class Config:
    server_command: str
    start_time: time
    end_time: time
    webhook_url: str = ""
    stop_command: str = "stop"
    stop_timeout_seconds: float = 120.0
    poll_seconds: float = 10.0
    working_dir: Path | None = None
    log_path: Path | None = None


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except FileNotFoundError as exc:
        raise ConfigError("Configuration file not found", path=path) from exc
    except OSError as exc:
        raise ConfigError(f"Unable to read configuration: {exc}", path=path) from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML: {exc}", path=path) from exc
    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a mapping of keys to values", path=path)
    return data


def _normalise_keys(raw: dict[str, Any]) -> dict[str, Any]:
    normalised: dict[str, Any] = {}
    for key, value in raw.items():
        name = _ALIASES.get(str(key), str(key))
        if name not in normalised or str(key) == name:
            normalised[name] = value
    return normalised


def _require_text(data: dict[str, Any], key: str, path: Path) -> str:
    value = data.get(key)
    if value is None:
        raise ConfigError(f"Missing required key '{key}'", path=path)
    text = str(value).strip()
    if not text:
        raise ConfigError(f"Key '{key}' must not be empty", path=path)
    return text


def _parse_time(data: dict[str, Any], key: str, path: Path) -> time:
    value = data.get(key)
    # YAML 1.1 reads unquoted 22:00 as the base-60 integer 1320
    if isinstance(value, int) and not isinstance(value, bool):
        if 0 <= value < 24 * 60:
            return time(value // 60, value % 60)
        raise ConfigError(
            f"{key}: cannot read {value!r} as a time; quote it, e.g. {key}: \"22:00\"",
            path=path,
        )
    text = _require_text(data, key, path)
    try:
        return parse_clock(text)
    except ValueError as exc:
        raise ConfigError(f"{key}: {exc}", path=path) from exc


def _parse_seconds(data: dict[str, Any], key: str, default: float, path: Path) -> float:
    value = data.get(key)
    if value is None:
        return default
    try:
        seconds = float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{key} must be a number, got {value!r}", path=path) from exc
    if seconds <= 0:
        raise ConfigError(f"{key} must be positive", path=path)
    return seconds


def _optional_path(value: Any) -> Path | None:
    if value is None or not str(value).strip():
        return None
    return Path(str(value).strip())


def load_config(path: Path | str = DEFAULT_CONFIG_PATH) -> Config:
    """Read *path* and return a validated :class:`Config`.

    ``NIGHTWATCH_WEBHOOK_URL`` in the environment overrides ``webhook_url``.
    Raises :class:`ConfigError` for any problem with the file.
    """

    path = Path(path)
    data = _normalise_keys(_read_yaml(path))

    server_command = _require_text(data, "server_command", path)
    start_time = _parse_time(data, "start_time", path)
    end_time = _parse_time(data, "end_time", path)

    if "webhook_url" not in data:
        raise ConfigError("Missing required key 'webhook_url'", path=path)
    webhook_url = str(data.get("webhook_url") or "").strip()
    env_url = os.getenv(WEBHOOK_ENV)
    if env_url and env_url.strip():
        webhook_url = env_url.strip()

    poll_seconds = _parse_seconds(data, "poll_seconds", 10.0, path)
    if poll_seconds >= 60:
        raise ConfigError(
            "poll_seconds must be below 60 so every countdown minute is observed",
            path=path,
        )

    stop_command = str(data.get("stop_command") or "stop").strip() or "stop"

    if start_time == end_time:
        LOGGER.warning(
            "start_time equals end_time (%s); the server will never be started",
            start_time.strftime("%H:%M"),
        )

    return Config(
        server_command=server_command,
        start_time=start_time,
        end_time=end_time,
        webhook_url=webhook_url,
        stop_command=stop_command,
        stop_timeout_seconds=_parse_seconds(data, "stop_timeout_seconds", 120.0, path),
        poll_seconds=poll_seconds,
        working_dir=_optional_path(data.get("working_dir")),
        log_path=_optional_path(data.get("log_path")),
    )
