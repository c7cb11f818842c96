"""Pseudoterminal creation, child process control and terminfo lookup."""

from __future__ import annotations

import enum
import fcntl
import os
import selectors
import signal
import struct
import subprocess
import sys
import termios
import threading
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

_WINSIZE = struct.Struct("HHHH")
_U16_MAX = 0xFFFF
_IUTF8 = getattr(termios, "IUTF8", 0x4000)
_NCCS = getattr(termios, "NCCS", 32)


@dataclass(frozen=True)
class WinsizeBuilder:
    """Terminal window size in character cells and pixels."""

    rows: int
    cols: int
    width: int = 0
    height: int = 0

    def __post_init__(self) -> None:
        for name in ("rows", "cols", "width", "height"):
            value = getattr(self, name)
            if not 0 <= value <= _U16_MAX:
                raise ValueError(f"{name} must fit in an unsigned short, got {value}")

    def pack(self) -> bytes:
        """Return the size as a native ``struct winsize``."""
        return _WINSIZE.pack(self.rows, self.cols, self.width, self.height)


class ChildEvent(enum.Enum):
    """Events reported about the process running in a pseudoterminal."""

    EXITED = "exited"


@dataclass(frozen=True)
class Child:
    """The process attached to the main side of a pseudoterminal."""

    fd: int
    ptsname: str
    pid: int

    def set_winsize(self, winsize: WinsizeBuilder) -> None:
        """Set the terminal window size; raises OSError on failure.

        Changing the size sends SIGWINCH to the terminal's foreground group.
        """
        fcntl.ioctl(self.fd, termios.TIOCSWINSZ, winsize.pack())

    def waitpid(self) -> int | None:
        """Return the raw wait status if the child has exited, else None."""
        pid, status = os.waitpid(self.pid, os.WNOHANG)
        if pid == 0 and status == 0:
            return None
        return status

    def kill(self) -> None:
        """Send SIGHUP to the child, ignoring a child that is already gone."""
        try:
            os.kill(self.pid, signal.SIGHUP)
        except ProcessLookupError:
            pass


class _SignalPipe:
    """Turns delivered signals into bytes readable from a pipe."""

    def __init__(self, signums: Iterable[int]) -> None:
        self._read_fd, self._write_fd = os.pipe()
        os.set_blocking(self._read_fd, False)
        os.set_blocking(self._write_fd, False)
        self._previous: dict[int, object] = {}
        # Handlers can only be installed from the main thread; elsewhere no
        # signals are reported.
        if threading.current_thread() is threading.main_thread():
            for signum in signums:
                self._previous[signum] = signal.signal(signum, self._handle)

    def _handle(self, signum: int, frame: object) -> None:
        try:
            os.write(self._write_fd, bytes([signum]))
        except OSError:
            pass
        previous = self._previous.get(signum)
        if callable(previous):
            previous(signum, frame)

    def fileno(self) -> int:
        return self._read_fd

    def next_pending(self) -> int | None:
        try:
            data = os.read(self._read_fd, 1)
        except (BlockingIOError, OSError):
            return None
        return data[0] if data else None

    def close(self) -> None:
        if threading.current_thread() is threading.main_thread():
            for signum, previous in self._previous.items():
                signal.signal(signum, previous if previous is not None else signal.SIG_DFL)
        self._previous.clear()
        for fd in (self._read_fd, self._write_fd):
            try:
                os.close(fd)
            except OSError:
                pass


class Pty:
    """A running pseudoterminal: its child process and the main side's descriptor."""

    def __init__(self, child: Child, fd: int) -> None:
        self.child = child
        self._fd = fd
        self.token: object = 0
        self.signals_token: object = 0
        self._signals = _SignalPipe((signal.SIGWINCH, signal.SIGCHLD))
        self._closed = False

    def __enter__(self) -> Pty:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def read(self, size: int = 4096) -> bytes:
        """Read up to ``size`` bytes; raises BlockingIOError when nothing is ready."""
        return os.read(self._fd, size)

    def write(self, data: bytes) -> int:
        """Write bytes to the terminal and return how many were written."""
        return os.write(self._fd, data)

    def fileno(self) -> int:
        return self._fd

    def set_winsize(self, winsize: WinsizeBuilder) -> None:
        self.child.set_winsize(winsize)

    def register(
        self,
        selector: selectors.BaseSelector,
        tokens: Iterator[object],
        events: int,
    ) -> None:
        """Register the terminal and its signal pipe, taking two tokens."""
        self.token = next(tokens)
        selector.register(self._fd, events, self.token)
        self.signals_token = next(tokens)
        selector.register(self._signals.fileno(), selectors.EVENT_READ, self.signals_token)

    def reregister(self, selector: selectors.BaseSelector, events: int) -> None:
        selector.modify(self._fd, events, self.token)
        selector.modify(self._signals.fileno(), selectors.EVENT_READ, self.signals_token)

    def deregister(self, selector: selectors.BaseSelector) -> None:
        selector.unregister(self._fd)
        selector.unregister(self._signals.fileno())

    def next_child_event(self) -> ChildEvent | None:
        """Consume one pending signal and report whether the child has exited."""
        signum = self._signals.next_pending()
        if signum != signal.SIGCHLD:
            return None
        if self.child.waitpid() is None:
            return None
        return ChildEvent.EXITED

    def child_event_token(self) -> object:
        return self.signals_token

    def close(self) -> None:
        """Hang up the child and release the descriptors."""
        if self._closed:
            return
        self._closed = True
        self._signals.close()
        self.child.kill()
        try:
            os.close(self._fd)
        except OSError:
            pass


def create_termp(utf8: bool) -> list:
    """Return terminal attributes in the form ``termios.tcsetattr`` takes."""
    iflag = termios.ICRNL | termios.IXON | termios.IXANY | termios.IMAXBEL | termios.BRKINT
    if utf8:
        iflag |= _IUTF8
    oflag = termios.OPOST | termios.ONLCR
    cflag = termios.CREAD | termios.CS8 | termios.HUPCL
    lflag = (
        termios.ICANON
        | termios.ISIG
        | termios.IEXTEN
        | termios.ECHO
        | termios.ECHOE
        | termios.ECHOK
        | termios.ECHOKE
        | termios.ECHOCTL
    )

    cc = [0] * _NCCS
    control_chars = {
        termios.VEOF: 4,
        termios.VEOL: 255,
        termios.VEOL2: 255,
        termios.VERASE: 0x7F,
        termios.VWERASE: 23,
        termios.VKILL: 21,
        termios.VREPRINT: 18,
        termios.VINTR: 3,
        termios.VQUIT: 0x1C,
        termios.VSUSP: 26,
        termios.VSTART: 17,
        termios.VSTOP: 19,
        termios.VLNEXT: 22,
        termios.VDISCARD: 15,
        termios.VMIN: 1,
        termios.VTIME: 0,
    }
    if hasattr(termios, "VDSUSP"):
        control_chars[termios.VDSUSP] = 25
    if hasattr(termios, "VSTATUS"):
        control_chars[termios.VSTATUS] = 20
    for index, value in control_chars.items():
        cc[index] = value

    return [iflag, oflag, cflag, lflag, 0, 0, cc]


def _shell_argv(shell: str) -> list[str]:
    if sys.platform == "darwin":
        return [shell, "--login"]
    return [shell]


def _exec_shell(shell: str, main_fd: int, sub_fd: int) -> None:
    """Run in the forked child: attach to the terminal and exec the shell."""
    try:
        os.close(main_fd)
        os.setsid()
        if hasattr(termios, "TIOCSCTTY"):
            fcntl.ioctl(sub_fd, termios.TIOCSCTTY, 0)
        for target in (0, 1, 2):
            os.dup2(sub_fd, target)
        if sub_fd > 2:
            os.close(sub_fd)
        os.execvp(shell, _shell_argv(shell))
    finally:
        os._exit(1)


def create_pty(shell: str, columns: int, rows: int) -> Pty:
    """Start ``shell`` in a new pseudoterminal of the given size."""
    winsize = WinsizeBuilder(rows=rows, cols=columns)
    main_fd, sub_fd = os.openpty()
    try:
        termios.tcsetattr(sub_fd, termios.TCSANOW, create_termp(True))
        fcntl.ioctl(sub_fd, termios.TIOCSWINSZ, winsize.pack())
        try:
            ptsname = tty_ptsname(sub_fd)
        except OSError:
            ptsname = ""
        pid = os.fork()
    except BaseException:
        os.close(main_fd)
        os.close(sub_fd)
        raise

    if pid == 0:
        _exec_shell(shell, main_fd, sub_fd)

    os.close(sub_fd)
    os.set_blocking(main_fd, False)
    return Pty(Child(fd=main_fd, ptsname=ptsname, pid=pid), main_fd)


def terminfo_exists(terminfo: str) -> bool:
    """Check whether a terminfo entry exists on the system."""
    head = terminfo[:1]
    first = head if head.isascii() else ""
    first_hex = format(ord(first) if first else 0, "x")

    def found(base: Path) -> bool:
        return (base / first / terminfo).exists() or (base / first_hex / terminfo).exists()

    candidates: list[Path] = []
    terminfo_dir = os.environ.get("TERMINFO")
    if terminfo_dir is not None:
        candidates.append(Path(terminfo_dir))
    else:
        try:
            candidates.append(Path.home() / ".terminfo")
        except RuntimeError:
            pass

    terminfo_dirs = os.environ.get("TERMINFO_DIRS")
    if terminfo_dirs is not None:
        candidates.extend(Path(entry) for entry in terminfo_dirs.split(":"))

    prefix = os.environ.get("PREFIX")
    if prefix is not None:
        base = Path(prefix)
        candidates.extend(base / sub for sub in ("etc/terminfo", "lib/terminfo", "share/terminfo"))

    candidates.extend(
        Path(p)
        for p in (
            "/etc/terminfo",
            "/lib/terminfo",
            "/usr/share/terminfo",
            "/boot/system/data/terminfo",
        )
    )
    return any(found(base) for base in candidates)


def command_per_pid(pid: int) -> str:
    """Return the command name ``ps`` reports for ``pid``."""
    output = subprocess.run(
        ["ps", "-p", str(pid), "-o", "comm="],
        capture_output=True,
        check=False,
    ).stdout
    try:
        return output.decode("utf-8")
    except UnicodeDecodeError:
        return "zsh"


def tty_ptsname(fd: int) -> str:
    """Return the name of the terminal device open on ``fd``."""
    return os.ttyname(fd)