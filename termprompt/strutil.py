"""Small string and sequence helpers used by the editing code."""

from __future__ import annotations

import bisect
from collections.abc import Sequence


def _require_single_char(c: str) -> None:
    if len(c) != 1:
        raise ValueError(f"expected a single character, got {c!r}")


def index_not_byte(s: str, c: str) -> int:
    """Return the index of the first character of ``s`` that is not ``c``, or -1."""
    _require_single_char(c)
    rest = s.lstrip(c)
    return len(s) - len(rest) if rest else -1


def last_index_not_byte(s: str, c: str) -> int:
    """Return the index of the last character of ``s`` that is not ``c``, or -1."""
    _require_single_char(c)
    return len(s.rstrip(c)) - 1


def index_not_any(s: str, chars: str) -> int:
    """Return the index of the first character of ``s`` not in ``chars``, or -1.

    An empty ``chars`` always gives -1.
    """
    if not chars:
        return -1
    rest = s.lstrip(chars)
    return len(s) - len(rest) if rest else -1


def last_index_not_any(s: str, chars: str) -> int:
    """Return the index of the last character of ``s`` not in ``chars``, or -1.

    An empty ``chars`` always gives -1.
    """
    if not chars:
        return -1
    return len(s.rstrip(chars)) - 1


def bisect_right(a: Sequence[int], v: int) -> int:
    """Return the insertion point for ``v`` in sorted ``a``, after any equal items."""
    return bisect.bisect_right(a, v)