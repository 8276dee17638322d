"""Terminal output: colours, display attributes and VT100 writers."""

from __future__ import annotations

import os
import sys
import threading
from abc import ABC, abstractmethod
from enum import IntEnum
from typing import BinaryIO

FLUSH_MAX_RETRY_COUNT = 3

_ESC = b"\x1b"


class DisplayAttribute(IntEnum):
    """Display attributes such as bold, italic or blinking."""

    RESET = 0
    BOLD = 1
    LOW_INTENSITY = 2
    ITALIC = 3
    UNDERLINE = 4
    BLINK = 5
    RAPID_BLINK = 6
    REVERSE = 7
    INVISIBLE = 8
    CROSSED_OUT = 9
    DEFAULT_FONT = 10


class Color(IntEnum):
    """A terminal colour."""

    DEFAULT = 0

    # Low intensity.
    BLACK = 1
    DARK_RED = 2
    DARK_GREEN = 3
    BROWN = 4
    DARK_BLUE = 5
    PURPLE = 6
    CYAN = 7
    LIGHT_GRAY = 8

    # High intensity.
    DARK_GRAY = 9
    RED = 10
    GREEN = 11
    YELLOW = 12
    BLUE = 13
    FUCHSIA = 14
    TURQUOISE = 15
    WHITE = 16


_DISPLAY_ATTRIBUTE_PARAMETERS: dict[int, bytes] = {
    attr.value: str(attr.value).encode("ascii") for attr in DisplayAttribute
}


def _color_table(default: int, low_base: int, high_base: int) -> dict[int, bytes]:
    table = {Color.DEFAULT.value: str(default).encode("ascii")}
    low = [Color.BLACK, Color.DARK_RED, Color.DARK_GREEN, Color.BROWN,
           Color.DARK_BLUE, Color.PURPLE, Color.CYAN, Color.LIGHT_GRAY]
    high = [Color.DARK_GRAY, Color.RED, Color.GREEN, Color.YELLOW,
            Color.BLUE, Color.FUCHSIA, Color.TURQUOISE, Color.WHITE]
    for offset, color in enumerate(low):
        table[color.value] = str(low_base + offset).encode("ascii")
    for offset, color in enumerate(high):
        table[color.value] = str(high_base + offset).encode("ascii")
    return table


_FOREGROUND_ANSI_COLORS = _color_table(39, 30, 90)
_BACKGROUND_ANSI_COLORS = _color_table(49, 40, 100)


class ConsoleWriter(ABC):
    """The output side of a prompt: text, cursor, erasing, title and colours."""

    @abstractmethod
    def write_raw(self, data: bytes) -> None:
        """Write raw bytes."""

    @abstractmethod
    def write(self, data: bytes) -> None:
        """Write bytes with control sequences neutralised."""

    @abstractmethod
    def write_raw_str(self, data: str) -> None:
        """Write a raw string."""

    @abstractmethod
    def write_str(self, data: str) -> None:
        """Write a string with control sequences neutralised."""

    @abstractmethod
    def flush(self):
        """Flush pending output."""

    @abstractmethod
    def erase_screen(self) -> None:
        """Erase the screen and move the cursor home."""

    @abstractmethod
    def erase_up(self) -> None:
        """Erase from the current line up to the top of the screen."""

    @abstractmethod
    def erase_down(self) -> None:
        """Erase from the current line down to the bottom of the screen."""

    @abstractmethod
    def erase_start_of_line(self) -> None:
        """Erase from the cursor to the start of the line."""

    @abstractmethod
    def erase_end_of_line(self) -> None:
        """Erase from the cursor to the end of the line."""

    @abstractmethod
    def erase_line(self) -> None:
        """Erase the whole current line."""

    @abstractmethod
    def show_cursor(self) -> None:
        """Show the cursor and stop it blinking."""

    @abstractmethod
    def hide_cursor(self) -> None:
        """Hide the cursor."""

    @abstractmethod
    def cursor_go_to(self, row: int, col: int) -> None:
        """Move the cursor to an absolute position."""

    @abstractmethod
    def cursor_up(self, n: int) -> None:
        """Move the cursor up ``n`` rows."""

    @abstractmethod
    def cursor_down(self, n: int) -> None:
        """Move the cursor down ``n`` rows."""

    @abstractmethod
    def cursor_forward(self, n: int) -> None:
        """Move the cursor forward ``n`` columns."""

    @abstractmethod
    def cursor_backward(self, n: int) -> None:
        """Move the cursor backward ``n`` columns."""

    @abstractmethod
    def ask_for_cpr(self) -> None:
        """Ask for a cursor position report."""

    @abstractmethod
    def save_cursor(self) -> None:
        """Save the cursor position."""

    @abstractmethod
    def unsave_cursor(self) -> None:
        """Restore the saved cursor position."""

    @abstractmethod
    def scroll_down(self) -> None:
        """Scroll the display down one line."""

    @abstractmethod
    def scroll_up(self) -> None:
        """Scroll the display up one line."""

    @abstractmethod
    def set_title(self, title: str) -> None:
        """Set the terminal window title."""

    @abstractmethod
    def clear_title(self) -> None:
        """Clear the terminal window title."""

    @abstractmethod
    def set_color(self, fg: Color, bg: Color, bold: bool) -> None:
        """Set text and background colours, optionally bold."""


class VT100Writer(ConsoleWriter):
    """Collects VT100 escape sequences in memory."""

    def __init__(self) -> None:
        self._buffer = bytearray()

    @property
    def buffer(self) -> bytes:
        """The output written but not yet flushed."""
        return bytes(self._buffer)

    def write_raw(self, data: bytes) -> None:
        self._buffer += data

    def write(self, data: bytes) -> None:
        self.write_raw(bytes(data).replace(_ESC, b"?"))

    def write_raw_str(self, data: str) -> None:
        self.write_raw(data.encode("utf-8"))

    def write_str(self, data: str) -> None:
        self.write(data.encode("utf-8"))

    def flush(self) -> bytes:
        """Return the pending output and empty the buffer."""
        data = bytes(self._buffer)
        self._buffer.clear()
        return data

    def erase_screen(self) -> None:
        self.write_raw(b"\x1b[2J")

    def erase_up(self) -> None:
        self.write_raw(b"\x1b[1J")

    def erase_down(self) -> None:
        self.write_raw(b"\x1b[J")

    def erase_start_of_line(self) -> None:
        self.write_raw(b"\x1b[1K")

    def erase_end_of_line(self) -> None:
        self.write_raw(b"\x1b[K")

    def erase_line(self) -> None:
        self.write_raw(b"\x1b[2K")

    def show_cursor(self) -> None:
        self.write_raw(b"\x1b[?12l\x1b[?25h")

    def hide_cursor(self) -> None:
        self.write_raw(b"\x1b[?25l")

    def cursor_go_to(self, row: int, col: int) -> None:
        if row == 0 and col == 0:
            # Without parameters the cursor moves to the home position.
            self.write_raw(b"\x1b[H")
            return
        self.write_raw(f"\x1b[{row};{col}H".encode("ascii"))

    def _move(self, n: int, final: str, opposite) -> None:
        if n == 0:
            return
        if n < 0:
            opposite(-n)
            return
        self.write_raw(f"\x1b[{n}{final}".encode("ascii"))

    def cursor_up(self, n: int) -> None:
        self._move(n, "A", self.cursor_down)

    def cursor_down(self, n: int) -> None:
        self._move(n, "B", self.cursor_up)

    def cursor_forward(self, n: int) -> None:
        self._move(n, "C", self.cursor_backward)

    def cursor_backward(self, n: int) -> None:
        self._move(n, "D", self.cursor_forward)

    def ask_for_cpr(self) -> None:
        self.write_raw(b"\x1b[6n")

    def save_cursor(self) -> None:
        self.write_raw(b"\x1b[s")

    def unsave_cursor(self) -> None:
        self.write_raw(b"\x1b[u")

    def scroll_down(self) -> None:
        self.write_raw(b"\x1bD")

    def scroll_up(self) -> None:
        self.write_raw(b"\x1bM")

    def set_title(self, title: str) -> None:
        title_bytes = title.encode("utf-8").replace(b"\x13", b"").replace(b"\x07", b"")
        self.write_raw(b"\x1b]2;" + title_bytes + b"\x07")

    def clear_title(self) -> None:
        self.write_raw(b"\x1b]2;\x07")

    def set_color(self, fg: Color, bg: Color, bold: bool) -> None:
        # Resetting rather than using the default attribute avoids breakage
        # on some terminals.
        attr = DisplayAttribute.BOLD if bold else DisplayAttribute.RESET
        self.set_display_attributes(fg, bg, attr)

    def set_display_attributes(self, fg: Color, bg: Color, *args: DisplayAttribute) -> None:
        """Set colours and any number of display attributes; unknown ones are skipped."""
        parts = [_DISPLAY_ATTRIBUTE_PARAMETERS[a] for a in args if a in _DISPLAY_ATTRIBUTE_PARAMETERS]
        parts.append(_FOREGROUND_ANSI_COLORS.get(fg, _FOREGROUND_ANSI_COLORS[Color.DEFAULT]))
        parts.append(_BACKGROUND_ANSI_COLORS.get(bg, _BACKGROUND_ANSI_COLORS[Color.DEFAULT]))
        self.write_raw(b"\x1b[" + b";".join(parts) + b"m")


class FdWriter(VT100Writer):
    """A VT100 writer that flushes to a file descriptor."""

    def __init__(self, fd: int) -> None:
        super().__init__()
        self.fd = fd

    def flush(self) -> bytes:
        """Write the pending output to the descriptor, retrying failed writes.

        Raises OSError once the retries are used up; the output is then kept.
        """
        data = bytes(self._buffer)
        offset = 0
        retry = 0
        while offset < len(data):
            try:
                offset += os.write(self.fd, data[offset:])
            except OSError:
                if retry < FLUSH_MAX_RETRY_COUNT:
                    retry += 1
                    continue
                raise
        self._buffer.clear()
        return data


class StreamWriter(VT100Writer):
    """A VT100 writer that flushes to a binary stream."""

    def __init__(self, stream: BinaryIO) -> None:
        super().__init__()
        self.stream = stream

    def flush(self) -> bytes:
        """Write the pending output to the stream and flush it."""
        data = bytes(self._buffer)
        self.stream.write(data)
        self.stream.flush()
        self._buffer.clear()
        return data


_console_writer_lock = threading.Lock()
_console_writer: ConsoleWriter | None = None


def register_console_writer(writer: ConsoleWriter) -> None:
    """Make ``writer`` the writer used by screen-wide key bindings."""
    global _console_writer
    with _console_writer_lock:
        _console_writer = writer


def get_console_writer() -> ConsoleWriter | None:
    """Return the registered console writer, if any."""
    with _console_writer_lock:
        return _console_writer


def new_stdout_writer() -> ConsoleWriter:
    """Return a writer for standard output."""
    if sys.platform == "win32":
        return StreamWriter(sys.stdout.buffer)
    return FdWriter(1)


def new_stderr_writer() -> ConsoleWriter:
    """Return a writer for standard error."""
    if sys.platform == "win32":
        return StreamWriter(sys.stderr.buffer)
    return FdWriter(2)