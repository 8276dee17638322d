import os

import pytest

from termprompt.buffer import Buffer
from termprompt.key_bind import (
    COMMON_KEY_BINDINGS,
    EMACS_KEY_BINDINGS,
    KeyBind,
    KeyBindMode,
    apply_key_bindings,
    clear_screen,
    delete_before_char,
    delete_char,
    delete_word,
    go_left_char,
    go_left_word,
    go_line_beginning,
    go_line_end,
    go_right_char,
    go_right_word,
)
from termprompt.keys import Key
from termprompt.output import FdWriter, get_console_writer, register_console_writer


def make(text, cursor=None):
    b = Buffer()
    b.insert_text(text, False, True)
    if cursor is not None:
        b.cursor_position = cursor
    return b


@pytest.fixture
def restore_writer():
    previous = get_console_writer()
    yield
    register_console_writer(previous)


def test_emacs_key_bindings():
    buf = make("abcde")
    assert buf.cursor_position == len("abcde")

    apply_key_bindings(EMACS_KEY_BINDINGS, buf, Key.CONTROL_A)
    assert buf.cursor_position == 0

    apply_key_bindings(EMACS_KEY_BINDINGS, buf, Key.CONTROL_E)
    assert buf.cursor_position == len("abcde")


def test_emacs_cut_after_cursor():
    buf = make("abcde", cursor=2)
    apply_key_bindings(EMACS_KEY_BINDINGS, buf, Key.CONTROL_K)
    assert buf.text() == "ab"


def test_emacs_cut_before_cursor():
    buf = make("abcde", cursor=2)
    apply_key_bindings(EMACS_KEY_BINDINGS, buf, Key.CONTROL_U)
    assert buf.text() == "cde"
    assert buf.cursor_position == 0


def test_emacs_cut_word():
    buf = make("hello world")
    apply_key_bindings(EMACS_KEY_BINDINGS, buf, Key.CONTROL_W)
    assert buf.text() == "hello "


def test_emacs_control_d_on_empty_buffer():
    buf = Buffer()
    apply_key_bindings(EMACS_KEY_BINDINGS, buf, Key.CONTROL_D)
    assert buf.text() == ""


def test_emacs_control_d_deletes_under_cursor():
    buf = make("abc", cursor=1)
    apply_key_bindings(EMACS_KEY_BINDINGS, buf, Key.CONTROL_D)
    assert buf.text() == "ac"


def test_emacs_backward_and_forward():
    buf = make("abc")
    apply_key_bindings(EMACS_KEY_BINDINGS, buf, Key.CONTROL_B)
    assert buf.cursor_position == 2
    apply_key_bindings(EMACS_KEY_BINDINGS, buf, Key.CONTROL_F)
    assert buf.cursor_position == 3


def test_apply_counts_matching_bindings():
    buf = make("abc")
    assert apply_key_bindings(COMMON_KEY_BINDINGS, buf, Key.F1) == 0
    assert apply_key_bindings(COMMON_KEY_BINDINGS, buf, Key.HOME) == 1
    assert buf.cursor_position == 0


def test_custom_binding():
    calls = []
    bindings = [KeyBind(Key.F2, calls.append)]
    buf = Buffer()
    assert apply_key_bindings(bindings, buf, Key.F2) == 1
    assert calls == [buf]


def test_common_backspace_and_delete():
    buf = make("abcd", cursor=2)
    apply_key_bindings(COMMON_KEY_BINDINGS, buf, Key.BACKSPACE)
    assert buf.text() == "acd"
    apply_key_bindings(COMMON_KEY_BINDINGS, buf, Key.DELETE)
    assert buf.text() == "ad"


def test_line_navigation():
    buf = make("hello")
    go_line_beginning(buf)
    assert buf.cursor_position == 0
    go_line_end(buf)
    assert buf.cursor_position == 5


def test_char_navigation():
    buf = make("hello", cursor=2)
    go_right_char(buf)
    assert buf.cursor_position == 3
    go_left_char(buf)
    go_left_char(buf)
    assert buf.cursor_position == 1


def test_delete_char_and_before_char():
    buf = make("hello", cursor=1)
    delete_char(buf)
    assert buf.text() == "hllo"
    delete_before_char(buf)
    assert buf.text() == "llo"
    assert buf.cursor_position == 0


def test_delete_word():
    buf = make("hello world")
    delete_word(buf)
    assert buf.text() == "hello "


def test_word_navigation():
    buf = make("hello world")
    go_left_word(buf)
    assert buf.cursor_position == 6
    buf.cursor_position = 0
    go_right_word(buf)
    assert buf.cursor_position == 5


def test_key_bind_mode_values():
    assert KeyBindMode("emacs") is KeyBindMode.EMACS
    assert KeyBindMode.COMMON.value == "common"


def test_clear_screen_writes_sequences(restore_writer):
    read_fd, write_fd = os.pipe()
    try:
        register_console_writer(FdWriter(write_fd))
        clear_screen(Buffer())
        assert os.read(read_fd, 100) == b"\x1b[2J\x1b[H"
    finally:
        os.close(read_fd)
        os.close(write_fd)


def test_clear_screen_without_writer(restore_writer):
    register_console_writer(None)
    with pytest.raises(RuntimeError):
        clear_screen(Buffer())