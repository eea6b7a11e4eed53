"""Stand-in game server that reads console commands from stdin."""

from __future__ import annotations

import argparse
import os
import sys
import threading
import time


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Pretend to be a game server for nightwatch runs.")
    parser.add_argument(
        "--stop-delay",
        type=float,
        default=2.0,
        help="Seconds to linger after a stop command before exiting (default: 2).",
    )
    parser.add_argument(
        "--crash-after",
        type=float,
        default=None,
        help="Exit with status 1 after this many seconds to simulate a crash.",
    )
    parser.add_argument(
        "--ignore-stop",
        action="store_true",
        help="Log stop commands but keep running, to exercise forced shutdown.",
    )
    return parser.parse_args()


def _crash_later(delay: float) -> None:
    time.sleep(delay)
    print("[Server] Crashing!", flush=True)
    # the main thread is blocked reading stdin, so sys.exit here would not end the process
    os._exit(1)


def main() -> int:
    args = parse_args()
    print("[Server] Starting mock server...", flush=True)
    print("[Server] Done loading.", flush=True)

    if args.crash_after is not None:
        threading.Thread(target=_crash_later, args=(max(0.0, args.crash_after),), daemon=True).start()

    for raw in sys.stdin:
        line = raw.strip()
        print(f"[Server] Received: {line}", flush=True)
        if line in {"stop", "/stop"}:
            if args.ignore_stop:
                print("[Server] Ignoring stop.", flush=True)
                continue
            print("[Server] Stopping...", flush=True)
            time.sleep(max(0.0, args.stop_delay))
            return 0
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
