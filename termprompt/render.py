"""Drawing the prompt line and the completion menu on the terminal."""

from __future__ import annotations

import sys
from collections.abc import Callable
from dataclasses import dataclass

from wcwidth import wcwidth

from termprompt import debug
from termprompt.buffer import Buffer
from termprompt.completion import COMPLETION_MARGIN, CompletionManager, format_suggestions
from termprompt.document import Document
from termprompt.input import WinSize
from termprompt.output import Color, ConsoleWriter


def _width(s: str) -> int:
    return sum(max(wcwidth(c), 0) for c in s)


def _no_live_prefix() -> tuple[str, bool]:
    return "", False


def clamp(high: float, low: float, x: float) -> float:
    """Limit ``x`` to the range from ``low`` to ``high``."""
    if high < x:
        return high
    if x < low:
        return low
    return x


@dataclass
class Render:
    """Renders the state of a buffer and its completions to a console writer."""

    out: ConsoleWriter
    prefix: str = "> "
    live_prefix_callback: Callable[[], tuple[str, bool]] = _no_live_prefix
    break_line_callback: Callable[[Document], None] | None = None
    title: str = ""
    row: int = 0
    col: int = 0
    previous_cursor: int = 0

    prefix_text_color: Color = Color.BLUE
    prefix_bg_color: Color = Color.DEFAULT
    input_text_color: Color = Color.DEFAULT
    input_bg_color: Color = Color.DEFAULT
    preview_suggestion_text_color: Color = Color.GREEN
    preview_suggestion_bg_color: Color = Color.DEFAULT
    suggestion_text_color: Color = Color.WHITE
    suggestion_bg_color: Color = Color.CYAN
    selected_suggestion_text_color: Color = Color.BLACK
    selected_suggestion_bg_color: Color = Color.TURQUOISE
    description_text_color: Color = Color.BLACK
    description_bg_color: Color = Color.TURQUOISE
    selected_description_text_color: Color = Color.WHITE
    selected_description_bg_color: Color = Color.CYAN
    scrollbar_thumb_color: Color = Color.DARK_GRAY
    scrollbar_bg_color: Color = Color.CYAN

    def _flush(self) -> None:
        try:
            self.out.flush()
        except OSError as err:
            debug.assert_no_error(err)

    def setup(self) -> None:
        """Prepare the console, setting the window title if one is given."""
        if self.title:
            self.out.set_title(self.title)
            self._flush()

    def _current_prefix(self) -> str:
        prefix, use_live = self.live_prefix_callback()
        return prefix if use_live else self.prefix

    def _render_prefix(self) -> None:
        self.out.set_color(self.prefix_text_color, self.prefix_bg_color, False)
        self.out.write_str(self._current_prefix())
        self.out.set_color(Color.DEFAULT, Color.DEFAULT, False)

    def tear_down(self) -> None:
        """Clear the title and erase what was drawn below the cursor."""
        self.out.clear_title()
        self.out.erase_down()
        self._flush()

    def _prepare_area(self, lines: int) -> None:
        for _ in range(lines):
            self.out.scroll_down()
        for _ in range(lines):
            self.out.scroll_up()

    def update_win_size(self, ws: WinSize) -> None:
        """Record a new terminal size."""
        self.row = ws.row
        self.col = ws.col

    def _render_window_too_small(self) -> None:
        self.out.cursor_go_to(0, 0)
        self.out.erase_screen()
        self.out.set_color(Color.DARK_RED, Color.WHITE, False)
        self.out.write_str("Your console window is too small...")

    def _render_completion(self, buf: Buffer, completions: CompletionManager) -> None:
        suggestions = completions.get_suggestions()
        if not suggestions:
            return
        prefix = self._current_prefix()
        # One column is kept for the scrollbar.
        formatted, width = format_suggestions(suggestions, self.col - _width(prefix) - 1)
        width += 1

        window_height = min(len(formatted), completions.max_suggestions)
        scroll = completions.vertical_scroll
        formatted = formatted[scroll:scroll + window_height]
        self._prepare_area(window_height)

        cursor = _width(prefix) + _width(buf.document().text_before_cursor())
        x, _ = self._to_pos(cursor)
        if x + width >= self.col:
            cursor = self._backward(cursor, x + width - self.col)

        content_height = len(suggestions)
        fraction_visible = window_height / content_height
        fraction_above = scroll / content_height
        scrollbar_height = int(clamp(window_height, 1, window_height * fraction_visible))
        scrollbar_top = int(window_height * fraction_above)

        selected = completions.selected - scroll
        self.out.set_color(Color.WHITE, Color.CYAN, False)
        for i, item in enumerate(formatted):
            self.out.cursor_down(1)
            if i == selected:
                self.out.set_color(self.selected_suggestion_text_color, self.selected_suggestion_bg_color, True)
            else:
                self.out.set_color(self.suggestion_text_color, self.suggestion_bg_color, False)
            self.out.write_str(item.text)

            if i == selected:
                self.out.set_color(self.selected_description_text_color, self.selected_description_bg_color, False)
            else:
                self.out.set_color(self.description_text_color, self.description_bg_color, False)
            self.out.write_str(item.description)

            if scrollbar_top <= i <= scrollbar_top + scrollbar_height:
                self.out.set_color(Color.DEFAULT, self.scrollbar_thumb_color, False)
            else:
                self.out.set_color(Color.DEFAULT, self.scrollbar_bg_color, False)
            self.out.write_str(" ")
            self.out.set_color(Color.DEFAULT, Color.DEFAULT, False)

            self._line_wrap(cursor + width)
            self._backward(cursor + width, width)

        if x + width >= self.col:
            self.out.cursor_forward(x + width - self.col)

        self.out.cursor_up(window_height)
        self.out.set_color(Color.DEFAULT, Color.DEFAULT, False)

    def render(self, buffer: Buffer, completion: CompletionManager) -> None:
        """Draw the prompt, the input text and the completion menu."""
        # A freshly allocated pseudo terminal may report a 0x0 size.
        if self.col == 0:
            return
        try:
            self._move(self.previous_cursor, 0)

            line = buffer.text()
            prefix = self._current_prefix()
            cursor = _width(prefix) + _width(line)

            _, y = self._to_pos(cursor)
            if y + 1 + completion.max_suggestions > self.row or COMPLETION_MARGIN > self.col:
                self._render_window_too_small()
                return

            self.out.hide_cursor()
            try:
                self._render_prefix()
                self.out.set_color(self.input_text_color, self.input_bg_color, False)
                self.out.write_str(line)
                self.out.set_color(Color.DEFAULT, Color.DEFAULT, False)
                self._line_wrap(cursor)

                self.out.erase_down()

                cursor = self._backward(cursor, _width(line) - buffer.display_cursor_position())

                self._render_completion(buffer, completion)
                suggest = completion.get_selected_suggestion()
                if suggest is not None:
                    doc = buffer.document()
                    word = doc.get_word_before_cursor_until_separator(completion.word_separator)
                    cursor = self._backward(cursor, _width(word))

                    self.out.set_color(self.preview_suggestion_text_color, self.preview_suggestion_bg_color, False)
                    self.out.write_str(suggest.text)
                    self.out.set_color(Color.DEFAULT, Color.DEFAULT, False)
                    cursor += _width(suggest.text)

                    rest = doc.text_after_cursor()
                    self.out.write_str(rest)
                    cursor += _width(rest)
                    self._line_wrap(cursor)

                    cursor = self._backward(cursor, _width(rest))
                self.previous_cursor = cursor
            finally:
                self.out.show_cursor()
        finally:
            self._flush()

    def break_line(self, buffer: Buffer) -> None:
        """Redraw the input as a finished line and move to the next one."""
        doc = buffer.document()
        cursor = _width(doc.text_before_cursor()) + _width(self._current_prefix())
        self._clear(cursor)
        self._render_prefix()
        self.out.set_color(self.input_text_color, self.input_bg_color, False)
        self.out.write_str(doc.text + "\n")
        self.out.set_color(Color.DEFAULT, Color.DEFAULT, False)
        self._flush()
        if self.break_line_callback is not None:
            self.break_line_callback(buffer.document())
        self.previous_cursor = 0

    def _clear(self, cursor: int) -> None:
        """Erase from the beginning of the input, across wrapped lines."""
        self._move(cursor, 0)
        self.out.erase_down()

    def _backward(self, from_: int, n: int) -> int:
        return self._move(from_, from_ - n)

    def _move(self, from_: int, to: int) -> int:
        """Move the cursor between two offsets of the input, across wrapped lines."""
        from_x, from_y = self._to_pos(from_)
        to_x, to_y = self._to_pos(to)
        self.out.cursor_up(from_y - to_y)
        self.out.cursor_backward(from_x - to_x)
        return to

    def _to_pos(self, cursor: int) -> tuple[int, int]:
        """Return the (column, row) of an offset, rounding toward zero."""
        y, x = divmod(abs(cursor), self.col)
        if cursor < 0:
            return -x, -y
        return x, y

    def _line_wrap(self, cursor: int) -> None:
        if sys.platform != "win32" and cursor > 0 and cursor % self.col == 0:
            self.out.write_raw(b"\n")