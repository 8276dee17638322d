"""Completion of paths on the local file system."""

from __future__ import annotations

import os
import re
import sys
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from termprompt import debug
from termprompt.document import Document
from termprompt.filter import Suggest, filter_has_prefix

# Word separators to configure on the prompt when completing paths.
FILE_PATH_COMPLETION_SEPARATOR = " " + os.sep

_ENV_VAR = re.compile(r"\$(?:\{([^}]*)\}|([A-Za-z0-9_]+))")


def _expand_env(path: str) -> str:
    """Replace $VAR and ${VAR}; unset variables become empty."""
    def lookup(m: re.Match) -> str:
        name = m.group(1) if m.group(1) is not None else m.group(2)
        return os.environ.get(name, "")

    return _ENV_VAR.sub(lookup, path)


def clean_file_path(path: str) -> tuple[str, str]:
    """Split a typed path into the directory to list and the name prefix to match.

    Raises RuntimeError when "~/" is used and the home directory is unknown.
    """
    if not path:
        return ".", ""

    ends_with_separator = path.endswith(os.sep)

    if sys.platform != "win32" and path.startswith("~/"):
        path = os.path.join(str(Path.home()), path[2:])
    path = os.path.normpath(_expand_env(path))
    directory = os.path.dirname(path) or "."
    base = os.path.basename(path)

    if ends_with_separator:
        directory = path + os.sep
        base = ""
    return directory, base


@dataclass
class FilePathCompleter:
    """Suggests entries of the directory named by the word before the cursor.

    Use :data:`FILE_PATH_COMPLETION_SEPARATOR` as the prompt's word separator.
    Directory listings are cached per directory.
    """

    filter: Callable[[os.DirEntry], bool] | None = None
    ignore_case: bool = False
    _file_list_cache: dict[str, list[Suggest]] = field(
        default_factory=dict, init=False, repr=False, compare=False
    )

    def complete(self, document: Document) -> list[Suggest]:
        """Return the suggestions for the path before the cursor."""
        try:
            directory, base = clean_file_path(document.get_word_before_cursor())
        except (RuntimeError, KeyError) as err:
            debug.log(f"completer: cannot get current user: {err}")
            return []

        cached = self._file_list_cache.get(directory)
        if cached is not None:
            return list(filter_has_prefix(cached, base, self.ignore_case))

        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda e: e.name)
        except FileNotFoundError:
            return []
        except OSError as err:
            debug.log(f"completer: cannot read directory items: {err}")
            return []

        suggests = [
            Suggest(text=entry.name)
            for entry in entries
            if self.filter is None or self.filter(entry)
        ]
        self._file_list_cache[directory] = suggests
        return list(filter_has_prefix(suggests, base, self.ignore_case))