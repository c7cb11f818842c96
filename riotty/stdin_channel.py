"""Read lines from a stream on a background thread and poll them without blocking."""

from __future__ import annotations

import argparse
import queue
import sys
import threading
import time
from typing import IO, NoReturn


def spawn_stdin_channel(stream: IO | None = None) -> queue.Queue:
    """Start a thread that puts each line of ``stream`` on a queue.

    ``None`` is put on the queue once the stream reaches its end.
    """
    source = sys.stdin if stream is None else stream
    channel: queue.Queue = queue.Queue()

    def pump() -> None:
        while line := source.readline():
            channel.put(line)
        channel.put(None)

    threading.Thread(target=pump, name="stdin-channel", daemon=True).start()
    return channel


def _interval(value: str) -> float:
    seconds = float(value)
    if seconds < 0:
        raise argparse.ArgumentTypeError("interval must not be negative")
    return seconds


def main(argv: list[str] | None = None) -> NoReturn:
    """Poll standard input once per interval and report what arrived."""
    parser = argparse.ArgumentParser(
        prog="riotty-stdin",
        description="Poll standard input without blocking.",
    )
    parser.add_argument(
        "--interval",
        type=_interval,
        default=1.0,
        help="seconds between polls (default: 1.0)",
    )
    args = parser.parse_args(argv)

    channel = spawn_stdin_channel(sys.stdin)
    while True:
        try:
            line = channel.get_nowait()
        except queue.Empty:
            print("Channel empty")
        else:
            if line is None:
                raise SystemExit("Channel disconnected")
            print(f"Received: {line}")
        time.sleep(args.interval)