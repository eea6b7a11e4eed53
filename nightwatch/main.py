"""Command-line entry point for the nightwatch supervisor."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Iterable

from dotenv import load_dotenv

from nightwatch.alerts.notifier import Notifier, webhook_host
from nightwatch.config import DEFAULT_CONFIG_PATH, load_config
from nightwatch.errors import ConfigError
from nightwatch.logging_config import get_logger, setup_logging
from nightwatch.supervisor import Supervisor


LOGGER = get_logger(__name__)


def parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Keep a game server running during its daily time window."
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=DEFAULT_CONFIG_PATH,
        help="Path to the YAML configuration file (default: config.yml).",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: INFO).",
    )
    parser.add_argument(
        "--ticks",
        type=int,
        default=None,
        help="Stop after this many polling ticks (debugging aid; default: run forever).",
    )
    args = parser.parse_args(list(argv) if argv is not None else None)
    if args.ticks is not None and args.ticks <= 0:
        parser.error("--ticks must be a positive integer")
    return args


def main(argv: Iterable[str] | None = None) -> int:
    args = parse_args(argv)
    load_dotenv()

    try:
        config = load_config(args.config)
    except ConfigError as exc:
        setup_logging(args.log_level)
        LOGGER.error("Cannot start: %s", exc)
        return 2

    setup_logging(args.log_level, config.log_path)
    LOGGER.info(
        "Loaded config: server_command=%r start=%s end=%s stop_command=%r webhook=%s",
        config.server_command,
        config.start_time.strftime("%H:%M"),
        config.end_time.strftime("%H:%M"),
        config.stop_command,
        webhook_host(config.webhook_url) if config.webhook_url else "disabled",
    )

    supervisor = Supervisor(config, Notifier(config.webhook_url))
    try:
        supervisor.run_forever(max_ticks=args.ticks)
    except KeyboardInterrupt:  # pragma: no cover - interactive safety
        LOGGER.info("Interrupted by user")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
