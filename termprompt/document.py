"""An immutable-looking view of input text together with a cursor position."""

from __future__ import annotations

from dataclasses import dataclass

from wcwidth import wcwidth

from termprompt.keys import Key
from termprompt.strutil import (
    bisect_right,
    index_not_any,
    index_not_byte,
    last_index_not_any,
    last_index_not_byte,
)


def _index_any(s: str, chars: str, start: int = 0) -> int:
    """Return the first index at or after ``start`` of any char in ``chars``, or -1."""
    found = [i for i in (s.find(c, start) for c in set(chars)) if i != -1]
    return min(found, default=-1)


def _last_index_any(s: str, chars: str) -> int:
    """Return the last index in ``s`` of any char in ``chars``, or -1."""
    return max((s.rfind(c) for c in set(chars)), default=-1)


def _char_width(c: str) -> int:
    return max(wcwidth(c), 0)


@dataclass
class Document:
    """Text shown in the terminal and the cursor position within it.

    ``cursor_position`` counts characters, so for "日本(cursor)語" it is 2,
    while :meth:`display_cursor_position` gives the rendered column, 4.
    """

    text: str = ""
    cursor_position: int = 0
    last_key: Key | None = None

    def display_cursor_position(self) -> int:
        """Return the cursor column as rendered by a terminal emulator."""
        return sum(_char_width(c) for c in self.text[: self.cursor_position])

    def get_char_relative_to_cursor(self, offset: int) -> str:
        """Return the character at ``offset`` relative to the cursor, or ""."""
        index = self.cursor_position + offset - 1
        if 0 <= index < len(self.text):
            return self.text[index]
        return ""

    def text_before_cursor(self) -> str:
        """Return the text before the cursor."""
        return self.text[: self.cursor_position]

    def text_after_cursor(self) -> str:
        """Return the text after the cursor."""
        return self.text[self.cursor_position:]

    def get_word_before_cursor(self) -> str:
        """Return the word before the cursor; "" if whitespace precedes it."""
        return self.text_before_cursor()[self.find_start_of_previous_word():]

    def get_word_after_cursor(self) -> str:
        """Return the word after the cursor; "" if whitespace follows it."""
        return self.text_after_cursor()[: self.find_end_of_current_word()]

    def get_word_before_cursor_with_space(self) -> str:
        """Return the word before the cursor, including trailing spaces."""
        return self.text_before_cursor()[self.find_start_of_previous_word_with_space():]

    def get_word_after_cursor_with_space(self) -> str:
        """Return the word after the cursor, including leading spaces."""
        return self.text_after_cursor()[: self.find_end_of_current_word_with_space()]

    def get_word_before_cursor_until_separator(self, sep: str) -> str:
        """Return the text before the cursor back to the nearest separator."""
        return self.text_before_cursor()[self.find_start_of_previous_word_until_separator(sep):]

    def get_word_after_cursor_until_separator(self, sep: str) -> str:
        """Return the text after the cursor up to the nearest separator."""
        return self.text_after_cursor()[: self.find_end_of_current_word_until_separator(sep)]

    def get_word_before_cursor_until_separator_ignore_next_to_cursor(self, sep: str) -> str:
        """Like the separator variant, but separators next to the cursor are kept."""
        start = self.find_start_of_previous_word_until_separator_ignore_next_to_cursor(sep)
        return self.text_before_cursor()[start:]

    def get_word_after_cursor_until_separator_ignore_next_to_cursor(self, sep: str) -> str:
        """Like the separator variant, but separators next to the cursor are kept."""
        end = self.find_end_of_current_word_until_separator_ignore_next_to_cursor(sep)
        return self.text_after_cursor()[:end]

    def find_start_of_previous_word(self) -> int:
        """Return the index in the text before the cursor where the previous word starts."""
        return self.text_before_cursor().rfind(" ") + 1

    def find_start_of_previous_word_with_space(self) -> int:
        """Like :meth:`find_start_of_previous_word`, skipping spaces next to the cursor."""
        x = self.text_before_cursor()
        end = last_index_not_byte(x, " ")
        if end == -1:
            return 0
        return x.rfind(" ", 0, end) + 1

    def find_start_of_previous_word_until_separator(self, sep: str) -> int:
        """Like :meth:`find_start_of_previous_word`, with any char of ``sep`` as separator."""
        if not sep:
            return self.find_start_of_previous_word()
        return _last_index_any(self.text_before_cursor(), sep) + 1

    def find_start_of_previous_word_until_separator_ignore_next_to_cursor(self, sep: str) -> int:
        """Like :meth:`find_start_of_previous_word_with_space`, with custom separators."""
        if not sep:
            return self.find_start_of_previous_word_with_space()
        x = self.text_before_cursor()
        end = last_index_not_any(x, sep)
        if end == -1:
            return 0
        return _last_index_any(x[:end], sep) + 1

    def find_end_of_current_word(self) -> int:
        """Return the index in the text after the cursor where the current word ends."""
        x = self.text_after_cursor()
        i = x.find(" ")
        return i if i != -1 else len(x)

    def find_end_of_current_word_with_space(self) -> int:
        """Like :meth:`find_end_of_current_word`, skipping spaces next to the cursor."""
        x = self.text_after_cursor()
        start = index_not_byte(x, " ")
        if start == -1:
            return len(x)
        end = x.find(" ", start)
        return end if end != -1 else len(x)

    def find_end_of_current_word_until_separator(self, sep: str) -> int:
        """Like :meth:`find_end_of_current_word`, with any char of ``sep`` as separator."""
        if not sep:
            return self.find_end_of_current_word()
        x = self.text_after_cursor()
        i = _index_any(x, sep)
        return i if i != -1 else len(x)

    def find_end_of_current_word_until_separator_ignore_next_to_cursor(self, sep: str) -> int:
        """Like :meth:`find_end_of_current_word_with_space`, with custom separators."""
        if not sep:
            return self.find_end_of_current_word_with_space()
        x = self.text_after_cursor()
        start = index_not_any(x, sep)
        if start == -1:
            return len(x)
        end = _index_any(x, sep, start)
        return end if end != -1 else len(x)

    def current_line_before_cursor(self) -> str:
        """Return the text from the start of the line to the cursor."""
        return self.text_before_cursor().rpartition("\n")[2]

    def current_line_after_cursor(self) -> str:
        """Return the text from the cursor to the end of the line."""
        return self.text_after_cursor().partition("\n")[0]

    def current_line(self) -> str:
        """Return the whole line the cursor is on."""
        return self.current_line_before_cursor() + self.current_line_after_cursor()

    def _line_start_indexes(self) -> list[int]:
        lines = self.lines()
        indexes = [0]
        pos = 0
        for line in lines:
            pos += len(line) + 1
            indexes.append(pos)
        if len(lines) > 1:
            # The last item does not start a line.
            indexes = indexes[: len(lines)]
        return indexes

    def _find_line_start_index(self, index: int) -> tuple[int, int]:
        indexes = self._line_start_indexes()
        pos = bisect_right(indexes, index) - 1
        return pos, indexes[pos]

    def cursor_position_row(self) -> int:
        """Return the 0-based row of the cursor."""
        return self._find_line_start_index(self.cursor_position)[0]

    def cursor_position_col(self) -> int:
        """Return the 0-based column of the cursor."""
        _, start = self._find_line_start_index(self.cursor_position)
        return self.cursor_position - start

    def get_cursor_left_position(self, count: int) -> int:
        """Return the relative move for going ``count`` characters left on this line."""
        if count < 0:
            return self.get_cursor_right_position(-count)
        col = self.cursor_position_col()
        return -count if col > count else -col

    def get_cursor_right_position(self, count: int) -> int:
        """Return the relative move for going ``count`` characters right on this line."""
        if count < 0:
            return self.get_cursor_left_position(-count)
        return min(count, len(self.current_line_after_cursor()))

    def get_cursor_up_position(self, count: int, preferred_column: int | None) -> int:
        """Return the relative move for pressing arrow-up ``count`` times.

        A ``preferred_column`` of None keeps the current column.
        """
        col = self.cursor_position_col() if preferred_column is None else preferred_column
        row = max(self.cursor_position_row() - count, 0)
        return self.translate_row_col_to_index(row, col) - self.cursor_position

    def get_cursor_down_position(self, count: int, preferred_column: int | None) -> int:
        """Return the relative move for pressing arrow-down ``count`` times.

        A ``preferred_column`` of None keeps the current column.
        """
        col = self.cursor_position_col() if preferred_column is None else preferred_column
        row = self.cursor_position_row() + count
        return self.translate_row_col_to_index(row, col) - self.cursor_position

    def lines(self) -> list[str]:
        """Return all lines of the text."""
        return self.text.split("\n")

    def line_count(self) -> int:
        """Return the number of lines; a trailing newline starts a new, empty line."""
        return len(self.lines())

    def translate_index_to_position(self, index: int) -> tuple[int, int]:
        """Return the 0-based (row, col) for a character index."""
        row, row_index = self._find_line_start_index(index)
        return row, index - row_index

    def translate_row_col_to_index(self, row: int, column: int) -> int:
        """Return the character index for a 0-based (row, column), kept within the text."""
        lines = self.lines()
        indexes = self._line_start_indexes()
        row = min(max(row, 0), len(lines) - 1)
        index = indexes[row]
        line = lines[row]
        if column > 0 or line:
            index += min(column, len(line))
        return max(0, min(index, len(self.text)))

    def on_last_line(self) -> bool:
        """Return whether the cursor is on the last line."""
        return self.cursor_position_row() == self.line_count() - 1

    def get_end_of_line_position(self) -> int:
        """Return the relative move to the end of the current line."""
        return len(self.current_line_after_cursor())

    def leading_whitespace_in_current_line(self) -> str:
        """Return the whitespace margin of the current line."""
        line = self.current_line()
        return line[: len(line) - len(line.strip())]