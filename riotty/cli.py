"""Start a shell in a pseudoterminal, type into it and echo what it prints."""

from __future__ import annotations

import argparse
import errno
import selectors

from riotty.pty import create_pty

DEFAULT_INPUT = ("1", "2", "ls\n", "echo 1\n")


def _dimension(value: str) -> int:
    number = int(value)
    if not 0 <= number <= 0xFFFF:
        raise argparse.ArgumentTypeError("must be between 0 and 65535")
    return number


def _timeout(value: str) -> float:
    seconds = float(value)
    if seconds <= 0:
        raise argparse.ArgumentTypeError("must be positive")
    return seconds


def _parse(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="riotty",
        description="Run a shell in a pseudoterminal and print its output byte by byte.",
    )
    parser.add_argument("--shell", default="bash", help="shell to start (default: bash)")
    parser.add_argument("--columns", type=_dimension, default=80)
    parser.add_argument("--rows", type=_dimension, default=25)
    parser.add_argument(
        "--timeout",
        type=_timeout,
        default=None,
        help="stop after this many seconds without output (default: wait forever)",
    )
    parser.add_argument(
        "input",
        nargs="*",
        help="text to type; '\\n' stands for Enter (default: 1, 2, ls, echo 1)",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Run the shell, type the input and print every byte it sends back."""
    args = _parse(argv)
    typed = [text.replace("\\n", "\n") for text in args.input] or list(DEFAULT_INPUT)

    with create_pty(args.shell, args.columns, args.rows) as process, \
            selectors.DefaultSelector() as selector:
        for text in typed:
            process.write(text.encode("utf-8"))
        selector.register(process.fileno(), selectors.EVENT_READ)
        while True:
            if not selector.select(args.timeout) and args.timeout is not None:
                break
            try:
                chunk = process.read(4096)
            except BlockingIOError:
                continue
            except OSError as exc:
                if exc.errno == errno.EIO:
                    break
                raise
            if not chunk:
                break
            for byte in chunk:
                print(repr(bytes([byte]).decode("utf-8", errors="replace")))
    return 0