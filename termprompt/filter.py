"""Suggestion items and the filters that narrow them down."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class Suggest:
    """A completion candidate shown to the user."""

    text: str
    description: str = ""


Filter = Callable[[Sequence[Suggest], str, bool], Sequence[Suggest]]


def fuzzy_match(s: str, sub: str) -> bool:
    """Return whether the characters of ``sub`` occur in ``s`` in order."""
    remaining = iter(s)
    return all(c in remaining for c in sub)


def _filter_suggestions(
    suggestions: Sequence[Suggest],
    sub: str,
    ignore_case: bool,
    matches: Callable[[str, str], bool],
) -> Sequence[Suggest]:
    if not sub:
        return suggestions
    if ignore_case:
        sub = sub.upper()
    return [
        s for s in suggestions
        if matches(s.text.upper() if ignore_case else s.text, sub)
    ]


def filter_has_prefix(completions: Sequence[Suggest], sub: str, ignore_case: bool) -> Sequence[Suggest]:
    """Keep the suggestions whose text starts with ``sub``."""
    return _filter_suggestions(completions, sub, ignore_case, str.startswith)


def filter_has_suffix(completions: Sequence[Suggest], sub: str, ignore_case: bool) -> Sequence[Suggest]:
    """Keep the suggestions whose text ends with ``sub``."""
    return _filter_suggestions(completions, sub, ignore_case, str.endswith)


def filter_contains(completions: Sequence[Suggest], sub: str, ignore_case: bool) -> Sequence[Suggest]:
    """Keep the suggestions whose text contains ``sub``."""
    return _filter_suggestions(completions, sub, ignore_case, str.__contains__)


def filter_fuzzy(completions: Sequence[Suggest], sub: str, ignore_case: bool) -> Sequence[Suggest]:
    """Keep the suggestions whose text fuzzy-matches ``sub``.

    Searching for "dog" behaves like the pattern "*d*o*g*".
    """
    return _filter_suggestions(completions, sub, ignore_case, fuzzy_match)