"""Opt-in diagnostics: soft assertions and a debug log file.

Assertions raise only when ``TERMPROMPT_ENABLE_ASSERT`` is ``true`` or ``1``;
otherwise a failed assertion is written to the log.  The log file is written
only when ``TERMPROMPT_ENABLE_LOG`` is ``true`` or ``1``.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from typing import Union

ENV_ENABLE_ASSERT = "TERMPROMPT_ENABLE_ASSERT"
ENV_ENABLE_LOG = "TERMPROMPT_ENABLE_LOG"
LOG_FILE_NAME = "termprompt.log"

Message = Union[str, Callable[[], str], object]

_logger = logging.getLogger("termprompt.debug")
_logger.propagate = False
_logger.setLevel(logging.DEBUG)
_handler: logging.FileHandler | None = None


class AssertionFailure(Exception):
    """Raised by a failed assertion when assertions are enabled."""


def _flag(name: str) -> bool:
    return os.environ.get(name) in ("true", "1")


def _open_handler() -> logging.FileHandler | None:
    global _handler
    if _handler is None and _flag(ENV_ENABLE_LOG):
        try:
            handler = logging.FileHandler(LOG_FILE_NAME, mode="a", encoding="utf-8")
        except OSError:
            return None
        handler.setFormatter(logging.Formatter("%(pathname)s:%(lineno)d: %(message)s"))
        _logger.addHandler(handler)
        _handler = handler
    return _handler


def _write(msg: str, depth: int) -> None:
    """Log ``msg`` attributed to the frame ``depth`` levels above our caller."""
    handler = _open_handler()
    if handler is None:
        return
    _logger.debug(msg, stacklevel=depth + 2)
    handler.flush()


def _to_string(msg: Message) -> str:
    if callable(msg):
        return str(msg())
    return str(msg)


def assert_true(cond: bool, msg: Message) -> None:
    """Check ``cond``; on failure raise or log ``msg`` (a string or a callable)."""
    if cond:
        return
    text = _to_string(msg)
    if _flag(ENV_ENABLE_ASSERT):
        raise AssertionFailure(text)
    _write("[ASSERT] " + text, 1)


def assert_no_error(err: BaseException | None) -> None:
    """Check that ``err`` is None; otherwise raise or log it."""
    if err is None:
        return
    if _flag(ENV_ENABLE_ASSERT):
        raise AssertionFailure(str(err)) from err
    _write("[ASSERT] " + str(err), 1)


def log(msg: str) -> None:
    """Write ``msg`` to the debug log, if logging is enabled."""
    _write(msg, 1)


def teardown() -> None:
    """Close the debug log file."""
    global _handler
    if _handler is None:
        return
    _logger.removeHandler(_handler)
    _handler.close()
    _handler = None