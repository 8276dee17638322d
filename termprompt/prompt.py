"""The interactive prompt: reads keys, edits the buffer and runs the executor."""

from __future__ import annotations

import queue
import signal
import threading
from collections.abc import Callable, Iterable, Iterator, Sequence
from contextlib import contextmanager
from typing import Any

from termprompt import debug
from termprompt.buffer import Buffer
from termprompt.completion import Completer, CompletionManager
from termprompt.document import Document
from termprompt.filter import Suggest, filter_has_prefix
from termprompt.history import History
from termprompt.input import ConsoleParser, new_standard_input_parser
from termprompt.key_bind import (
    COMMON_KEY_BINDINGS,
    EMACS_KEY_BINDINGS,
    ASCIICodeBind,
    KeyBind,
    KeyBindMode,
    apply_key_bindings,
)
from termprompt.keys import Key, get_key
from termprompt.output import (
    Color,
    ConsoleWriter,
    new_stdout_writer,
    register_console_writer,
)
from termprompt.render import Render

Executor = Callable[[str], None]
# Called with the text and whether Enter was pressed; True stops the prompt.
ExitChecker = Callable[[str, bool], bool]
Option = Callable[["Prompt"], None]
Filter = Callable[[Sequence[Suggest], str, bool], Sequence[Suggest]]

_POLL_INTERVAL = 0.01
_MAX_SUGGESTIONS = 6


class _Reader:
    """Polls a console parser on a background thread and queues what it reads."""

    def __init__(self, parser: ConsoleParser, events: queue.Queue) -> None:
        self._parser = parser
        self._events = events
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    def start(self) -> None:
        self._stop = threading.Event()
        self._thread = threading.Thread(target=self._loop, args=(self._stop,), daemon=True)
        self._thread.start()

    def stop(self) -> None:
        if self._thread is None:
            return
        self._stop.set()
        self._thread.join()
        self._thread = None

    def _loop(self, stop: threading.Event) -> None:
        debug.log("start reading buffer")
        while not stop.is_set():
            try:
                data = self._parser.read()
            except OSError:
                pass
            else:
                if data and data != b"\x00":
                    self._events.put(("input", data))
            stop.wait(_POLL_INTERVAL)
        debug.log("stop reading buffer")


class Prompt:
    """An interactive prompt with auto-completion."""

    def __init__(self, executor: Executor, completer: Completer, *options: Option) -> None:
        writer = new_stdout_writer()
        register_console_writer(writer)

        self.parser: ConsoleParser | None = None
        self.buf = Buffer()
        self.renderer = Render(out=writer)
        self.executor = executor
        self.history = History()
        self.completion = CompletionManager(completer, _MAX_SUGGESTIONS)
        self.key_bindings: list[KeyBind] = []
        self.ascii_code_bindings: list[ASCIICodeBind] = []
        # The defaults follow bash's usual Emacs-style editing.
        self.key_bind_mode = KeyBindMode.EMACS
        self.completion_on_down = False
        self.exit_checker: ExitChecker | None = None
        self.skip_tear_down = False

        for option in options:
            option(self)

    def run(self) -> None:
        """Read lines and pass each to the executor until told to stop."""
        self.skip_tear_down = False
        try:
            debug.log("start prompt")
            self._set_up()
            events: queue.Queue = queue.Queue()
            reader = _Reader(self._require_parser(), events)
            try:
                if self.completion.show_at_start:
                    self.completion.update(self.buf.document())
                self.renderer.render(self.buf, self.completion)
                reader.start()
                with self._signal_events(events):
                    self._run_loop(events, reader)
            finally:
                reader.stop()
                self._tear_down()
        finally:
            debug.teardown()

    def _run_loop(self, events: queue.Queue, reader: _Reader) -> None:
        parser = self._require_parser()
        while True:
            try:
                kind, value = events.get(timeout=_POLL_INTERVAL)
            except queue.Empty:
                continue
            if kind == "input":
                should_exit, text = self.feed(value)
                if should_exit:
                    self.renderer.break_line(self.buf)
                    return
                if text is not None:
                    reader.stop()
                    # Leave raw, non-blocking mode while the executor runs.
                    self._call_parser(parser.tear_down)
                    self.executor(text)
                    self.completion.update(self.buf.document())
                    self.renderer.render(self.buf, self.completion)
                    if self.exit_checker is not None and self.exit_checker(text, True):
                        self.skip_tear_down = True
                        return
                    self._call_parser(parser.setup)
                    reader.start()
                else:
                    self.completion.update(self.buf.document())
                    self.renderer.render(self.buf, self.completion)
            elif kind == "winsize":
                self.renderer.update_win_size(value)
                self.renderer.render(self.buf, self.completion)
            elif kind == "exit":
                self.renderer.break_line(self.buf)
                raise SystemExit(value)

    def input(self) -> str:
        """Read one line and return it; "" when input ends with Ctrl+D or an exit check."""
        try:
            debug.log("start prompt")
            self._set_up()
            events: queue.Queue = queue.Queue()
            reader = _Reader(self._require_parser(), events)
            try:
                if self.completion.show_at_start:
                    self.completion.update(self.buf.document())
                self.renderer.render(self.buf, self.completion)
                reader.start()
                while True:
                    try:
                        _, data = events.get(timeout=_POLL_INTERVAL)
                    except queue.Empty:
                        continue
                    should_exit, text = self.feed(data)
                    if should_exit:
                        self.renderer.break_line(self.buf)
                        return ""
                    if text is not None:
                        return text
                    self.completion.update(self.buf.document())
                    self.renderer.render(self.buf, self.completion)
            finally:
                reader.stop()
                self._tear_down()
        finally:
            debug.teardown()

    def feed(self, b: bytes) -> tuple[bool, str | None]:
        """Process one chunk of input.

        Returns whether the prompt should stop, and the entered line when
        Enter was pressed (None otherwise).
        """
        key = get_key(b)
        self.buf.last_key_stroke = key
        completing = self.completion.completing()
        self._handle_completion_key_binding(key, completing)

        entered: str | None = None
        if key in (Key.ENTER, Key.CONTROL_J, Key.CONTROL_M):
            self.renderer.break_line(self.buf)
            entered = self.buf.text()
            self.buf = Buffer()
            if entered:
                self.history.add(entered)
        elif key == Key.CONTROL_C:
            self.renderer.break_line(self.buf)
            self.buf = Buffer()
            self.history.clear()
        elif key in (Key.UP, Key.CONTROL_P):
            # The state before the completion keys ran decides, not the current one.
            if not completing:
                new_buf, changed = self.history.older(self.buf)
                if changed:
                    self.buf = new_buf
        elif key in (Key.DOWN, Key.CONTROL_N):
            if not completing:
                new_buf, changed = self.history.newer(self.buf)
                if changed:
                    self.buf = new_buf
                return False, None
        elif key == Key.CONTROL_D:
            if self.buf.text() == "":
                return True, None
        elif key == Key.NOT_DEFINED:
            if self._handle_ascii_code_binding(b):
                return False, None
            self.buf.insert_text(b.decode("utf-8", errors="replace"), False, True)

        return self._handle_key_binding(key), entered

    def _handle_completion_key_binding(self, key: Key, completing: bool) -> None:
        if key == Key.DOWN:
            if completing or self.completion_on_down:
                self.completion.next()
        elif key in (Key.TAB, Key.CONTROL_I):
            self.completion.next()
        elif key == Key.UP:
            if completing:
                self.completion.previous()
        elif key == Key.BACK_TAB:
            self.completion.previous()
        else:
            suggest = self.completion.get_selected_suggestion()
            if suggest is not None:
                word = self.buf.document().get_word_before_cursor_until_separator(
                    self.completion.word_separator
                )
                if word:
                    self.buf.delete_before_cursor(len(word))
                self.buf.insert_text(suggest.text, False, True)
            self.completion.reset()

    def _handle_key_binding(self, key: Key) -> bool:
        apply_key_bindings(COMMON_KEY_BINDINGS, self.buf, key)
        if self.key_bind_mode == KeyBindMode.EMACS:
            apply_key_bindings(EMACS_KEY_BINDINGS, self.buf, key)
        apply_key_bindings(self.key_bindings, self.buf, key)
        return self.exit_checker is not None and self.exit_checker(self.buf.text(), False)

    def _handle_ascii_code_binding(self, b: bytes) -> bool:
        checked = False
        for kb in self.ascii_code_bindings:
            if kb.ascii_code == b:
                kb.fn(self.buf)
                checked = True
        return checked

    def _require_parser(self) -> ConsoleParser:
        if self.parser is None:
            self.parser = new_standard_input_parser()
        return self.parser

    @staticmethod
    def _call_parser(fn: Callable[[], None]) -> None:
        try:
            fn()
        except OSError as err:
            debug.assert_no_error(err)

    def _set_up(self) -> None:
        parser = self._require_parser()
        self._call_parser(parser.setup)
        self.renderer.setup()
        self.renderer.update_win_size(parser.get_win_size())

    def _tear_down(self) -> None:
        if not self.skip_tear_down and self.parser is not None:
            self._call_parser(self.parser.tear_down)
        self.renderer.tear_down()

    @contextmanager
    def _signal_events(self, events: queue.Queue) -> Iterator[None]:
        """Turn termination and resize signals into events while running."""
        if threading.current_thread() is not threading.main_thread():
            yield
            return

        exit_codes = {"SIGINT": 0, "SIGTERM": 1, "SIGQUIT": 0}
        previous: dict[int, Any] = {}

        def on_exit(signum: int, _frame: object) -> None:
            debug.log(f"Catch {signal.Signals(signum).name}")
            events.put(("exit", codes[signum]))

        def on_resize(_signum: int, _frame: object) -> None:
            debug.log("Catch SIGWINCH")
            events.put(("winsize", self._require_parser().get_win_size()))

        codes: dict[int, int] = {}
        for name, code in exit_codes.items():
            sig = getattr(signal, name, None)
            if sig is not None:
                codes[sig] = code
                previous[sig] = signal.signal(sig, on_exit)
        winch = getattr(signal, "SIGWINCH", None)
        if winch is not None:
            previous[winch] = signal.signal(winch, on_resize)
        try:
            yield
        finally:
            for sig, handler in previous.items():
                signal.signal(sig, handler)
            debug.log("stop handleSignals")


def option_parser(x: ConsoleParser) -> Option:
    """Read input from ``x``."""
    def apply(p: Prompt) -> None:
        p.parser = x
    return apply


def option_writer(x: ConsoleWriter) -> Option:
    """Write output to ``x``."""
    def apply(p: Prompt) -> None:
        register_console_writer(x)
        p.renderer.out = x
    return apply


def option_title(x: str) -> Option:
    """Set the terminal window title."""
    def apply(p: Prompt) -> None:
        p.renderer.title = x
    return apply


def option_prefix(x: str) -> Option:
    """Set the prompt prefix."""
    def apply(p: Prompt) -> None:
        p.renderer.prefix = x
    return apply


def option_initial_buffer_text(x: str) -> Option:
    """Start with ``x`` already typed."""
    def apply(p: Prompt) -> None:
        p.buf.insert_text(x, False, True)
    return apply


def option_completion_word_separator(x: str) -> Option:
    """Set the characters that separate words for completion; empty means a space."""
    def apply(p: Prompt) -> None:
        p.completion.word_separator = x
    return apply


def option_live_prefix(f: Callable[[], tuple[str, bool]]) -> Option:
    """Compute the prefix with ``f``, which returns (prefix, use_it)."""
    def apply(p: Prompt) -> None:
        p.renderer.live_prefix_callback = f
    return apply


def _color_option(attribute: str, x: Color) -> Option:
    def apply(p: Prompt) -> None:
        setattr(p.renderer, attribute, x)
    return apply


def option_prefix_text_color(x: Color) -> Option:
    """Set the text colour of the prefix."""
    return _color_option("prefix_text_color", x)


def option_prefix_background_color(x: Color) -> Option:
    """Set the background colour of the prefix."""
    return _color_option("prefix_bg_color", x)


def option_input_text_color(x: Color) -> Option:
    """Set the text colour of the input."""
    return _color_option("input_text_color", x)


def option_input_bg_color(x: Color) -> Option:
    """Set the background colour of the input."""
    return _color_option("input_bg_color", x)


def option_preview_suggestion_text_color(x: Color) -> Option:
    """Set the text colour of the previewed completion."""
    return _color_option("preview_suggestion_text_color", x)


def option_preview_suggestion_bg_color(x: Color) -> Option:
    """Set the background colour of the previewed completion."""
    return _color_option("preview_suggestion_bg_color", x)


def option_suggestion_text_color(x: Color) -> Option:
    """Set the text colour of suggestions in the menu."""
    return _color_option("suggestion_text_color", x)


def option_suggestion_bg_color(x: Color) -> Option:
    """Set the background colour of suggestions in the menu."""
    return _color_option("suggestion_bg_color", x)


def option_selected_suggestion_text_color(x: Color) -> Option:
    """Set the text colour of the selected suggestion."""
    return _color_option("selected_suggestion_text_color", x)


def option_selected_suggestion_bg_color(x: Color) -> Option:
    """Set the background colour of the selected suggestion."""
    return _color_option("selected_suggestion_bg_color", x)


def option_description_text_color(x: Color) -> Option:
    """Set the text colour of descriptions in the menu."""
    return _color_option("description_text_color", x)


def option_description_bg_color(x: Color) -> Option:
    """Set the background colour of descriptions in the menu."""
    return _color_option("description_bg_color", x)


def option_selected_description_text_color(x: Color) -> Option:
    """Set the text colour of the selected description."""
    return _color_option("selected_description_text_color", x)


def option_selected_description_bg_color(x: Color) -> Option:
    """Set the background colour of the selected description."""
    return _color_option("selected_description_bg_color", x)


def option_scrollbar_thumb_color(x: Color) -> Option:
    """Set the colour of the scrollbar thumb."""
    return _color_option("scrollbar_thumb_color", x)


def option_scrollbar_bg_color(x: Color) -> Option:
    """Set the background colour of the scrollbar."""
    return _color_option("scrollbar_bg_color", x)


def option_max_suggestion(x: int) -> Option:
    """Set how many suggestions are shown at once."""
    def apply(p: Prompt) -> None:
        p.completion.max_suggestions = x
    return apply


def option_history(x: Iterable[str]) -> Option:
    """Start with ``x`` as the history."""
    def apply(p: Prompt) -> None:
        p.history.histories = list(x)
        p.history.clear()
    return apply


def option_switch_key_bind_mode(m: KeyBindMode) -> Option:
    """Choose the set of built-in shortcuts."""
    def apply(p: Prompt) -> None:
        p.key_bind_mode = m
    return apply


def option_completion_on_down() -> Option:
    """Let the Down arrow open the completion menu."""
    def apply(p: Prompt) -> None:
        p.completion_on_down = True
    return apply


def option_add_key_bind(*args: KeyBind) -> Option:
    """Add custom key bindings."""
    def apply(p: Prompt) -> None:
        p.key_bindings.extend(args)
    return apply


def option_add_ascii_code_bind(*args: ASCIICodeBind) -> Option:
    """Add custom bindings for raw byte sequences."""
    def apply(p: Prompt) -> None:
        p.ascii_code_bindings.extend(args)
    return apply


def option_show_completion_at_start() -> Option:
    """Show the completion menu as soon as the prompt starts."""
    def apply(p: Prompt) -> None:
        p.completion.show_at_start = True
    return apply


def option_break_line_callback(fn: Callable[[Document], None]) -> Option:
    """Call ``fn`` with the document at every line break."""
    def apply(p: Prompt) -> None:
        p.renderer.break_line_callback = fn
    return apply


def option_set_exit_checker_on_input(fn: ExitChecker) -> Option:
    """Stop the prompt when ``fn`` returns True for the input."""
    def apply(p: Prompt) -> None:
        p.exit_checker = fn
    return apply


def _dummy_executor(_text: str) -> None:
    return None


def _shortcut_prompt(prefix: str, completer: Completer, options: Iterable[Option]) -> Prompt:
    pt = Prompt(_dummy_executor, completer)
    pt.renderer.prefix_text_color = Color.DEFAULT
    pt.renderer.prefix = prefix
    for option in options:
        option(pt)
    return pt


def read_input(prefix: str, completer: Completer, *args: Option) -> str:
    """Ask for one line of input and return it."""
    return _shortcut_prompt(prefix, completer, args).input()


def _choice_completer(choices: Iterable[str], filter_fn: Filter) -> Completer:
    suggestions = [Suggest(text=c) for c in choices]

    def complete(document: Document) -> list[Suggest]:
        return list(filter_fn(suggestions, document.get_word_before_cursor(), True))

    return complete


def choose(prefix: str, choices: Iterable[str], *args: Option) -> str:
    """Ask for one line of input, completing from ``choices``."""
    completer = _choice_completer(choices, filter_has_prefix)
    return _shortcut_prompt(prefix, completer, args).input()