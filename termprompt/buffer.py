"""An editable line buffer with a cursor."""

from __future__ import annotations

from termprompt import debug
from termprompt.document import Document
from termprompt.keys import Key


class Buffer:
    """The text being edited in the console, together with its cursor."""

    def __init__(self) -> None:
        self.working_lines: list[str] = [""]
        self.working_index: int = 0
        self.cursor_position: int = 0
        # Column remembered across consecutive up/down moves; None when unset.
        self.preferred_column: int | None = None
        self.last_key_stroke: Key | None = None
        self._cache_document: Document | None = None

    def text(self) -> str:
        """Return the text of the current line."""
        return self.working_lines[self.working_index]

    def document(self) -> Document:
        """Return a document for the current text and cursor position."""
        text = self.text()
        doc = self._cache_document
        if doc is None or doc.text != text or doc.cursor_position != self.cursor_position:
            doc = Document(text=text, cursor_position=self.cursor_position)
            self._cache_document = doc
        doc.last_key = self.last_key_stroke
        return doc

    def display_cursor_position(self) -> int:
        """Return the cursor column as rendered by a terminal emulator."""
        return self.document().display_cursor_position()

    def insert_text(self, v: str, overwrite: bool = False, move_cursor: bool = True) -> None:
        """Insert ``v`` at the cursor, optionally overwriting the text after it."""
        text = self.text()
        pos = self.cursor_position
        if overwrite:
            overwritten = text[pos:pos + len(v)].partition("\n")[0]
            self._set_text(text[:pos] + v + text[pos + len(overwritten):])
        else:
            self._set_text(text[:pos] + v + text[pos:])
        if move_cursor:
            self.cursor_position += len(v)

    def _set_text(self, v: str) -> None:
        debug.assert_true(
            self.cursor_position <= len(v),
            "length of input should be shorter than cursor position",
        )
        self.working_lines[self.working_index] = v

    def _set_cursor_position(self, p: int) -> None:
        self.cursor_position = max(p, 0)

    def _set_document(self, d: Document) -> None:
        self._cache_document = d
        # The cursor goes first: setting the text checks it against the length.
        self._set_cursor_position(d.cursor_position)
        self._set_text(d.text)

    def cursor_left(self, count: int) -> None:
        """Move the cursor left on the current line."""
        self.cursor_position += self.document().get_cursor_left_position(count)

    def cursor_right(self, count: int) -> None:
        """Move the cursor right on the current line."""
        self.cursor_position += self.document().get_cursor_right_position(count)

    def cursor_up(self, count: int) -> None:
        """Move the cursor to a previous line, keeping the preferred column."""
        orig = self.preferred_column
        if orig is None:
            orig = self.document().cursor_position_col()
        self.cursor_position += self.document().get_cursor_up_position(count, orig)
        self.preferred_column = orig

    def cursor_down(self, count: int) -> None:
        """Move the cursor to a following line, keeping the preferred column."""
        orig = self.preferred_column
        if orig is None:
            orig = self.document().cursor_position_col()
        self.cursor_position += self.document().get_cursor_down_position(count, orig)
        self.preferred_column = orig

    def delete_before_cursor(self, count: int) -> str:
        """Delete up to ``count`` characters before the cursor and return them."""
        debug.assert_true(count >= 0, "count should be positive")
        if self.cursor_position <= 0:
            return ""
        text = self.text()
        start = max(self.cursor_position - count, 0)
        deleted = text[start:self.cursor_position]
        self._set_document(Document(
            text=text[:start] + text[self.cursor_position:],
            cursor_position=self.cursor_position - len(deleted),
        ))
        return deleted

    def new_line(self, copy_margin: bool) -> None:
        """Insert a line break, optionally repeating the current indentation."""
        if copy_margin:
            self.insert_text("\n" + self.document().leading_whitespace_in_current_line())
        else:
            self.insert_text("\n")

    def delete(self, count: int) -> str:
        """Delete up to ``count`` characters after the cursor and return them."""
        text = self.text()
        if self.cursor_position >= len(text):
            return ""
        deleted = self.document().text_after_cursor()[:count]
        self._set_text(text[:self.cursor_position] + text[self.cursor_position + len(deleted):])
        return deleted

    def join_next_line(self, separator: str) -> None:
        """Join the next line to the current one, dropping its leading spaces."""
        if self.document().on_last_line():
            return
        self.cursor_position += self.document().get_end_of_line_position()
        self.delete(1)
        doc = self.document()
        self._set_text(doc.text_before_cursor() + separator + doc.text_after_cursor().lstrip(" "))

    def swap_characters_before_cursor(self) -> None:
        """Swap the two characters before the cursor."""
        pos = self.cursor_position
        if pos < 2:
            return
        text = self.text()
        self._set_text(text[:pos - 2] + text[pos - 1] + text[pos - 2] + text[pos:])