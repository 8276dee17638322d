from collections import deque

import pytest

from termprompt.filter import Suggest, filter_has_prefix
from termprompt.input import ConsoleParser, WinSize
from termprompt.key_bind import ASCIICodeBind, KeyBind, KeyBindMode
from termprompt.keys import Key
from termprompt.output import Color, VT100Writer
from termprompt.prompt import (
    Prompt,
    choose,
    option_add_ascii_code_bind,
    option_add_key_bind,
    option_break_line_callback,
    option_completion_on_down,
    option_history,
    option_initial_buffer_text,
    option_max_suggestion,
    option_parser,
    option_prefix,
    option_prefix_text_color,
    option_set_exit_checker_on_input,
    option_switch_key_bind_mode,
    option_title,
    option_writer,
    read_input,
)

WORDS = [Suggest(text="users"), Suggest(text="groups")]


def word_completer(document):
    return filter_has_prefix(WORDS, document.get_word_before_cursor(), True)


class ScriptedParser(ConsoleParser):
    def __init__(self, *chunks):
        self.chunks = deque(chunks)
        self.setups = 0
        self.tear_downs = 0

    def setup(self):
        self.setups += 1

    def tear_down(self):
        self.tear_downs += 1

    def get_win_size(self):
        return WinSize(row=24, col=80)

    def read(self):
        if self.chunks:
            return self.chunks.popleft()
        raise BlockingIOError("no input")


def make_prompt(*options, completer=None, executor=None):
    p = Prompt(
        executor or (lambda text: None),
        completer or (lambda document: []),
        option_writer(VT100Writer()),
        *options,
    )
    p.renderer.update_win_size(WinSize(row=24, col=80))
    return p


def test_feed_inserts_text():
    p = make_prompt()
    assert p.feed(b"abc") == (False, None)
    assert p.buf.text() == "abc"


def test_feed_enter_returns_line_and_records_history():
    p = make_prompt()
    p.feed(b"abc")
    assert p.feed(b"\n") == (False, "abc")
    assert p.buf.text() == ""
    assert p.history.histories == ["abc"]


def test_feed_enter_with_empty_line_skips_history():
    p = make_prompt()
    assert p.feed(b"\n") == (False, "")
    assert p.history.histories == []


def test_control_d_on_empty_line_exits():
    p = make_prompt()
    assert p.feed(b"\x04") == (True, None)


def test_control_d_with_text_deletes_under_cursor():
    p = make_prompt()
    p.feed(b"abc")
    p.feed(b"\x01")  # Ctrl+A
    assert p.feed(b"\x04") == (False, None)
    assert p.buf.text() == "bc"


def test_control_c_discards_line():
    p = make_prompt()
    p.feed(b"abc")
    assert p.feed(b"\x03") == (False, None)
    assert p.buf.text() == ""


def test_up_arrow_recalls_history():
    p = make_prompt()
    p.feed(b"abc")
    p.feed(b"\n")
    p.feed(b"\x1b[A")
    assert p.buf.text() == "abc"
    p.feed(b"\x1b[B")
    assert p.buf.text() == ""


def test_tab_then_key_applies_selected_suggestion():
    p = make_prompt(completer=word_completer)
    p.feed(b"us")
    p.completion.update(p.buf.document())
    p.feed(b"\t")
    assert p.completion.completing()
    p.feed(b" ")
    assert p.buf.text() == "users "
    assert not p.completion.completing()


def test_down_opens_completion_only_with_option():
    plain = make_prompt(completer=word_completer)
    plain.completion.update(plain.buf.document())
    plain.feed(b"\x1b[B")
    assert not plain.completion.completing()

    with_down = make_prompt(option_completion_on_down(), completer=word_completer)
    with_down.completion.update(with_down.buf.document())
    with_down.feed(b"\x1b[B")
    assert with_down.completion.completing()


def test_ascii_code_binding_replaces_insertion():
    p = make_prompt(option_add_ascii_code_bind(
        ASCIICodeBind(b"zz", lambda buf: buf.insert_text("!", False, True))
    ))
    assert p.feed(b"zz") == (False, None)
    assert p.buf.text() == "!"


def test_custom_key_binding_runs():
    calls = []
    p = make_prompt(option_add_key_bind(KeyBind(Key.CONTROL_T, lambda buf: calls.append(buf.text()))))
    p.feed(b"ab")
    p.feed(b"\x14")
    assert calls == ["ab"]


def test_emacs_mode_moves_to_line_start():
    p = make_prompt()
    p.feed(b"abc")
    p.feed(b"\x01")
    assert p.buf.cursor_position == 0


def test_common_mode_ignores_emacs_shortcuts():
    p = make_prompt(option_switch_key_bind_mode(KeyBindMode.COMMON))
    p.feed(b"abc")
    p.feed(b"\x01")
    assert p.buf.cursor_position == len("abc")


def test_exit_checker_on_typing():
    p = make_prompt(option_set_exit_checker_on_input(lambda text, breakline: text == "q"))
    assert p.feed(b"q") == (True, None)


def test_break_line_callback_called_on_enter():
    seen = []
    p = make_prompt(option_break_line_callback(lambda doc: seen.append(doc.text)))
    p.feed(b"hi")
    p.feed(b"\n")
    assert seen == ["hi"]


def test_options_configure_prompt():
    p = make_prompt(
        option_prefix(">>> "),
        option_title("title"),
        option_prefix_text_color(Color.YELLOW),
        option_max_suggestion(3),
        option_history(["one", "two"]),
        option_initial_buffer_text("start"),
    )
    assert p.renderer.prefix == ">>> "
    assert p.renderer.title == "title"
    assert p.renderer.prefix_text_color == Color.YELLOW
    assert p.completion.max_suggestions == 3
    assert p.history.tmp == ["one", "two", ""]
    assert p.buf.text() == "start"


def test_option_error_propagates():
    def broken(_p):
        raise ValueError("bad option")

    with pytest.raises(ValueError):
        Prompt(lambda text: None, lambda doc: [], broken)


def test_read_input_returns_typed_line():
    parser = ScriptedParser(b"hello", b"\n")
    result = read_input("> ", lambda doc: [], option_parser(parser), option_writer(VT100Writer()))
    assert result == "hello"
    assert parser.setups == 1
    assert parser.tear_downs == 1


def test_read_input_control_d_returns_empty():
    parser = ScriptedParser(b"\x04")
    result = read_input("> ", lambda doc: [], option_parser(parser), option_writer(VT100Writer()))
    assert result == ""


def test_choose_completes_from_choices():
    parser = ScriptedParser(b"ap", b"\t", b"\n")
    result = choose("> ", ["apple", "banana"], option_parser(parser), option_writer(VT100Writer()))
    assert result == "apple"


def test_run_executes_until_exit_checker():
    executed = []
    parser = ScriptedParser(b"bye", b"\n")
    p = Prompt(
        executed.append,
        lambda doc: [],
        option_parser(parser),
        option_writer(VT100Writer()),
        option_set_exit_checker_on_input(lambda text, breakline: breakline and text == "bye"),
    )
    p.run()
    assert executed == ["bye"]
    assert p.skip_tear_down


def test_run_stops_on_control_d():
    executed = []
    parser = ScriptedParser(b"\x04")
    p = Prompt(executed.append, lambda doc: [], option_parser(parser), option_writer(VT100Writer()))
    p.run()
    assert executed == []
    assert parser.tear_downs == parser.setups