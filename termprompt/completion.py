"""Selection state and layout of completion suggestions."""

from __future__ import annotations

from collections.abc import Callable, Sequence

from wcwidth import wcwidth

from termprompt import debug
from termprompt.document import Document
from termprompt.filter import Suggest

SHORTEN_SUFFIX = "..."
LEFT_PREFIX = " "
LEFT_SUFFIX = " "
RIGHT_PREFIX = " "
RIGHT_SUFFIX = " "

Completer = Callable[[Document], Sequence[Suggest]]


def _width(s: str) -> int:
    return sum(max(wcwidth(c), 0) for c in s)


LEFT_MARGIN = _width(LEFT_PREFIX + LEFT_SUFFIX)
RIGHT_MARGIN = _width(RIGHT_PREFIX + RIGHT_SUFFIX)
COMPLETION_MARGIN = LEFT_MARGIN + RIGHT_MARGIN


def _truncate(s: str, width: int, tail: str) -> str:
    if _width(s) <= width:
        return s
    limit = width - _width(tail)
    used = 0
    kept = []
    for c in s:
        cw = max(wcwidth(c), 0)
        if used + cw > limit:
            break
        used += cw
        kept.append(c)
    return "".join(kept) + tail


def _fill_right(s: str, width: int) -> str:
    return s + " " * max(width - _width(s), 0)


class CompletionManager:
    """Tracks the suggestions offered and which one is selected."""

    def __init__(self, completer: Completer, max_suggestions: int = 6) -> None:
        self.completer = completer
        self.max_suggestions = max_suggestions
        self.selected = -1  # -1 means nothing is selected.
        self.suggestions: list[Suggest] = []
        self.vertical_scroll = 0
        self.word_separator = ""
        self.show_at_start = False

    def get_selected_suggestion(self) -> Suggest | None:
        """Return the selected suggestion, or None."""
        if self.selected == -1:
            return None
        if self.selected < -1:
            debug.assert_true(False, "must not reach here")
            self.selected = -1
            return None
        return self.suggestions[self.selected]

    def get_suggestions(self) -> list[Suggest]:
        """Return the current suggestions."""
        return self.suggestions

    def reset(self) -> None:
        """Select nothing and refresh suggestions for an empty document."""
        self.selected = -1
        self.vertical_scroll = 0
        self.update(Document())

    def update(self, document: Document) -> None:
        """Refresh the suggestions for ``document``."""
        self.suggestions = list(self.completer(document))

    def previous(self) -> None:
        """Select the previous suggestion."""
        if self.vertical_scroll == self.selected and self.selected > 0:
            self.vertical_scroll -= 1
        self.selected -= 1
        self._update()

    def next(self) -> None:
        """Select the next suggestion."""
        if self.vertical_scroll + self.max_suggestions - 1 == self.selected:
            self.vertical_scroll += 1
        self.selected += 1
        self._update()

    def completing(self) -> bool:
        """Return whether a suggestion is selected."""
        return self.selected != -1

    def _update(self) -> None:
        count = len(self.suggestions)
        visible = min(self.max_suggestions, count)
        if self.selected >= count:
            self.reset()
        elif self.selected < -1:
            self.selected = count - 1
            self.vertical_scroll = count - visible


def delete_break_line_characters(s: str) -> str:
    """Remove line feeds and carriage returns."""
    return s.replace("\n", "").replace("\r", "")


def format_texts(
    texts: Sequence[str], max_width: int, prefix: str, suffix: str
) -> tuple[list[str], int]:
    """Pad or shorten ``texts`` to a common width within ``max_width``.

    Returns the formatted texts and their width; when nothing fits, every
    text is empty and the width is 0.
    """
    cleaned = [delete_break_line_characters(t) for t in texts]
    len_prefix = _width(prefix)
    len_suffix = _width(suffix)
    minimum = len_prefix + len_suffix + _width(SHORTEN_SUFFIX)
    width = max((_width(t) for t in cleaned), default=0)

    if width == 0 or minimum >= max_width:
        return [""] * len(cleaned), 0
    width = min(width, max_width - len_prefix - len_suffix)

    formatted = []
    for t in cleaned:
        w = _width(t)
        if w <= width:
            body = t + " " * (width - w)
        else:
            # A truncated wide-character text may fall short of the width.
            body = _fill_right(_truncate(t, width, SHORTEN_SUFFIX), width)
        formatted.append(prefix + body + suffix)
    return formatted, len_prefix + width + len_suffix


def format_suggestions(suggests: Sequence[Suggest], max_width: int) -> tuple[list[Suggest], int]:
    """Lay out suggestions as two columns of text and description within ``max_width``."""
    left, left_width = format_texts(
        [s.text for s in suggests], max_width, LEFT_PREFIX, LEFT_SUFFIX
    )
    if left_width == 0:
        return [], 0
    right, right_width = format_texts(
        [s.description for s in suggests], max_width - left_width, RIGHT_PREFIX, RIGHT_SUFFIX
    )
    formatted = [Suggest(text=t, description=d) for t, d in zip(left, right)]
    return formatted, left_width + right_width