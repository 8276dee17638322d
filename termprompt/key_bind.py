"""Key bindings and the editing actions they perform."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum

from termprompt import debug
from termprompt.buffer import Buffer
from termprompt.keys import Key
from termprompt.output import get_console_writer

KeyBindFunc = Callable[[Buffer], None]


@dataclass(frozen=True)
class KeyBind:
    """An action to perform when a key is pressed."""

    key: Key
    fn: KeyBindFunc


@dataclass(frozen=True)
class ASCIICodeBind:
    """An action to perform when a given byte sequence is read."""

    ascii_code: bytes
    fn: KeyBindFunc


class KeyBindMode(str, Enum):
    """Which set of built-in shortcuts is active."""

    COMMON = "common"
    EMACS = "emacs"


def go_line_end(buf: Buffer) -> None:
    """Move to the end of the line."""
    buf.cursor_right(len(buf.document().text_after_cursor()))


def go_line_beginning(buf: Buffer) -> None:
    """Move to the beginning of the line."""
    buf.cursor_left(len(buf.document().text_before_cursor()))


def delete_char(buf: Buffer) -> None:
    """Delete the character under the cursor."""
    buf.delete(1)


def delete_word(buf: Buffer) -> None:
    """Delete the word before the cursor."""
    doc = buf.document()
    buf.delete_before_cursor(len(doc.text_before_cursor()) - doc.find_start_of_previous_word_with_space())


def delete_before_char(buf: Buffer) -> None:
    """Delete the character before the cursor (backspace)."""
    buf.delete_before_cursor(1)


def go_right_char(buf: Buffer) -> None:
    """Move forward one character."""
    buf.cursor_right(1)


def go_left_char(buf: Buffer) -> None:
    """Move backward one character."""
    buf.cursor_left(1)


def go_right_word(buf: Buffer) -> None:
    """Move forward one word."""
    buf.cursor_right(buf.document().find_end_of_current_word_with_space())


def go_left_word(buf: Buffer) -> None:
    """Move backward one word."""
    doc = buf.document()
    buf.cursor_left(len(doc.text_before_cursor()) - doc.find_start_of_previous_word_with_space())


def clear_screen(buf: Buffer) -> None:
    """Clear the screen through the registered console writer."""
    writer = get_console_writer()
    if writer is None:
        raise RuntimeError("no console writer is registered")
    writer.erase_screen()
    writer.cursor_go_to(0, 0)
    try:
        writer.flush()
    except OSError as err:
        debug.assert_no_error(err)


def _delete_to_line_end(buf: Buffer) -> None:
    buf.delete(len(buf.document().text_after_cursor()))


def _delete_to_line_beginning(buf: Buffer) -> None:
    buf.delete_before_cursor(len(buf.document().text_before_cursor()))


def _delete_char_if_any(buf: Buffer) -> None:
    if buf.text():
        buf.delete(1)


def _cut_word_before_cursor(buf: Buffer) -> None:
    buf.delete_before_cursor(len(buf.document().get_word_before_cursor_with_space()))


COMMON_KEY_BINDINGS: list[KeyBind] = [
    KeyBind(Key.END, go_line_end),
    KeyBind(Key.HOME, go_line_beginning),
    KeyBind(Key.DELETE, delete_char),
    KeyBind(Key.BACKSPACE, delete_before_char),
    KeyBind(Key.RIGHT, go_right_char),
    KeyBind(Key.LEFT, go_left_char),
]

EMACS_KEY_BINDINGS: list[KeyBind] = [
    KeyBind(Key.CONTROL_E, go_line_end),
    KeyBind(Key.CONTROL_A, go_line_beginning),
    KeyBind(Key.CONTROL_K, _delete_to_line_end),
    KeyBind(Key.CONTROL_U, _delete_to_line_beginning),
    KeyBind(Key.CONTROL_D, _delete_char_if_any),
    KeyBind(Key.CONTROL_H, delete_before_char),
    KeyBind(Key.CONTROL_F, go_right_char),
    KeyBind(Key.CONTROL_B, go_left_char),
    KeyBind(Key.CONTROL_W, _cut_word_before_cursor),
    KeyBind(Key.CONTROL_L, clear_screen),
]


def apply_key_bindings(bindings: Iterable[KeyBind], buf: Buffer, key: Key) -> int:
    """Run every binding for ``key`` on ``buf``; return how many ran."""
    applied = 0
    for kb in bindings:
        if kb.key == key:
            kb.fn(buf)
            applied += 1
    return applied