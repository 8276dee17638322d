"""Raw keyboard input from the controlling terminal."""

from __future__ import annotations

import errno
import os
import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass

try:
    import termios
except ImportError:  # not a POSIX platform
    termios = None  # type: ignore[assignment]

try:
    import msvcrt
except ImportError:  # not Windows
    msvcrt = None  # type: ignore[assignment]

MAX_READ_BYTES = 1024


@dataclass(frozen=True)
class WinSize:
    """Height and width of the terminal, in character cells."""

    row: int
    col: int


class ConsoleParser(ABC):
    """The input side of a prompt."""

    @abstractmethod
    def setup(self) -> None:
        """Prepare the terminal before reading input."""

    @abstractmethod
    def tear_down(self) -> None:
        """Restore the terminal after reading input."""

    @abstractmethod
    def get_win_size(self) -> WinSize:
        """Return the current terminal size."""

    @abstractmethod
    def read(self) -> bytes:
        """Return the bytes available; raise BlockingIOError when there are none."""


_saved_fd: int | None = None
_saved_attrs: list | None = None


def _require_termios() -> None:
    if termios is None:
        raise OSError("terminal control is not available on this platform")


def _original_termios(fd: int) -> list:
    """Return the terminal attributes saved before the first change to ``fd``."""
    global _saved_fd, _saved_attrs
    _require_termios()
    if _saved_attrs is None or _saved_fd != fd:
        _saved_attrs = termios.tcgetattr(fd)
        _saved_fd = fd
    return _saved_attrs


def set_raw(fd: int) -> None:
    """Put the terminal on ``fd`` into raw mode, remembering its original mode."""
    iflag, oflag, cflag, lflag, ispeed, ospeed, cc = _original_termios(fd)
    cc = list(cc)
    iflag &= ~(
        termios.IGNBRK | termios.BRKINT | termios.PARMRK | termios.ISTRIP
        | termios.INLCR | termios.IGNCR | termios.ICRNL | termios.IXON
    )
    lflag &= ~(termios.ECHO | termios.ICANON | termios.IEXTEN | termios.ISIG | termios.ECHONL)
    cflag &= ~(termios.CSIZE | termios.PARENB)
    cflag |= termios.CS8
    cc[termios.VMIN] = 1
    cc[termios.VTIME] = 0
    termios.tcsetattr(fd, termios.TCSANOW, [iflag, oflag, cflag, lflag, ispeed, ospeed, cc])


def restore() -> None:
    """Restore the terminal mode saved by :func:`set_raw`."""
    fd = _saved_fd if _saved_fd is not None else 0
    attrs = _original_termios(fd)
    termios.tcsetattr(fd, termios.TCSANOW, attrs)


class PosixParser(ConsoleParser):
    """Reads raw input from a POSIX terminal file descriptor."""

    def __init__(self, fd: int) -> None:
        self.fd = fd

    def setup(self) -> None:
        # Non-blocking, so that a reader loop can notice when it should stop.
        os.set_blocking(self.fd, False)
        set_raw(self.fd)

    def tear_down(self) -> None:
        os.set_blocking(self.fd, True)
        restore()

    def read(self) -> bytes:
        return os.read(self.fd, MAX_READ_BYTES)

    def get_win_size(self) -> WinSize:
        size = os.get_terminal_size(self.fd)
        return WinSize(row=size.lines, col=size.columns)


class WindowsParser(ConsoleParser):
    """Reads input from the Win32 console."""

    def __init__(self) -> None:
        self._open = False

    def setup(self) -> None:
        if msvcrt is None:
            raise OSError("console input is not available on this platform")
        self._open = True

    def tear_down(self) -> None:
        self._open = False

    def read(self) -> bytes:
        if not self._open:
            raise OSError("console input is not set up")
        if not msvcrt.kbhit():
            raise BlockingIOError(errno.EAGAIN, "no console input available")
        chars = [msvcrt.getwch()]
        size = len(chars[0].encode("utf-8"))
        while msvcrt.kbhit() and size < MAX_READ_BYTES:
            c = msvcrt.getwch()
            chars.append(c)
            size += len(c.encode("utf-8"))
        return "".join(chars).encode("utf-8")

    def get_win_size(self) -> WinSize:
        size = os.get_terminal_size()
        return WinSize(row=size.lines, col=size.columns)


def new_standard_input_parser() -> ConsoleParser:
    """Return a parser reading from the controlling terminal."""
    if sys.platform == "win32":
        return WindowsParser()
    return PosixParser(os.open("/dev/tty", os.O_RDONLY))