"""Key identifiers and the terminal byte sequences that produce them."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, auto


class Key(IntEnum):
    """A key pressed by the user."""

    @staticmethod
    def _generate_next_value_(name, start, count, last_values):
        return count

    ESCAPE = auto()

    CONTROL_A = auto()
    CONTROL_B = auto()
    CONTROL_C = auto()
    CONTROL_D = auto()
    CONTROL_E = auto()
    CONTROL_F = auto()
    CONTROL_G = auto()
    CONTROL_H = auto()
    CONTROL_I = auto()
    CONTROL_J = auto()
    CONTROL_K = auto()
    CONTROL_L = auto()
    CONTROL_M = auto()
    CONTROL_N = auto()
    CONTROL_O = auto()
    CONTROL_P = auto()
    CONTROL_Q = auto()
    CONTROL_R = auto()
    CONTROL_S = auto()
    CONTROL_T = auto()
    CONTROL_U = auto()
    CONTROL_V = auto()
    CONTROL_W = auto()
    CONTROL_X = auto()
    CONTROL_Y = auto()
    CONTROL_Z = auto()

    CONTROL_SPACE = auto()
    CONTROL_BACKSLASH = auto()
    CONTROL_SQUARE_CLOSE = auto()
    CONTROL_CIRCUMFLEX = auto()
    CONTROL_UNDERSCORE = auto()
    CONTROL_LEFT = auto()
    CONTROL_RIGHT = auto()
    CONTROL_UP = auto()
    CONTROL_DOWN = auto()

    UP = auto()
    DOWN = auto()
    RIGHT = auto()
    LEFT = auto()

    SHIFT_LEFT = auto()
    SHIFT_UP = auto()
    SHIFT_DOWN = auto()
    SHIFT_RIGHT = auto()

    HOME = auto()
    END = auto()
    DELETE = auto()
    SHIFT_DELETE = auto()
    CONTROL_DELETE = auto()
    PAGE_UP = auto()
    PAGE_DOWN = auto()
    BACK_TAB = auto()
    INSERT = auto()
    BACKSPACE = auto()

    TAB = auto()
    ENTER = auto()

    F1 = auto()
    F2 = auto()
    F3 = auto()
    F4 = auto()
    F5 = auto()
    F6 = auto()
    F7 = auto()
    F8 = auto()
    F9 = auto()
    F10 = auto()
    F11 = auto()
    F12 = auto()
    F13 = auto()
    F14 = auto()
    F15 = auto()
    F16 = auto()
    F17 = auto()
    F18 = auto()
    F19 = auto()
    F20 = auto()
    F21 = auto()
    F22 = auto()
    F23 = auto()
    F24 = auto()

    # Matches any key.
    ANY = auto()

    CPR_RESPONSE = auto()
    VT100_MOUSE_EVENT = auto()
    WINDOWS_MOUSE_EVENT = auto()
    BRACKETED_PASTE = auto()

    # A key whose binding should do nothing.
    IGNORE = auto()

    # The input matches no known key.
    NOT_DEFINED = auto()


@dataclass(frozen=True)
class ASCIICode:
    """A key together with a byte sequence a terminal sends for it."""

    key: Key
    ascii_code: bytes


_SEQUENCES: list[tuple[Key, bytes]] = [
    (Key.ESCAPE, b"\x1b"),

    (Key.CONTROL_SPACE, b"\x00"),
    (Key.CONTROL_A, b"\x01"),
    (Key.CONTROL_B, b"\x02"),
    (Key.CONTROL_C, b"\x03"),
    (Key.CONTROL_D, b"\x04"),
    (Key.CONTROL_E, b"\x05"),
    (Key.CONTROL_F, b"\x06"),
    (Key.CONTROL_G, b"\x07"),
    (Key.CONTROL_H, b"\x08"),
    (Key.CONTROL_K, b"\x0b"),
    (Key.CONTROL_L, b"\x0c"),
    (Key.CONTROL_M, b"\x0d"),
    (Key.CONTROL_N, b"\x0e"),
    (Key.CONTROL_O, b"\x0f"),
    (Key.CONTROL_P, b"\x10"),
    (Key.CONTROL_Q, b"\x11"),
    (Key.CONTROL_R, b"\x12"),
    (Key.CONTROL_S, b"\x13"),
    (Key.CONTROL_T, b"\x14"),
    (Key.CONTROL_U, b"\x15"),
    (Key.CONTROL_V, b"\x16"),
    (Key.CONTROL_W, b"\x17"),
    (Key.CONTROL_X, b"\x18"),
    (Key.CONTROL_Y, b"\x19"),
    (Key.CONTROL_Z, b"\x1a"),

    (Key.CONTROL_BACKSLASH, b"\x1c"),
    (Key.CONTROL_SQUARE_CLOSE, b"\x1d"),
    (Key.CONTROL_CIRCUMFLEX, b"\x1e"),
    (Key.CONTROL_UNDERSCORE, b"\x1f"),
    (Key.BACKSPACE, b"\x7f"),

    (Key.UP, b"\x1b[A"),
    (Key.DOWN, b"\x1b[B"),
    (Key.RIGHT, b"\x1b[C"),
    (Key.LEFT, b"\x1b[D"),
    (Key.HOME, b"\x1b[H"),
    (Key.HOME, b"\x1b0H"),
    (Key.END, b"\x1b[F"),
    (Key.END, b"\x1b0F"),

    (Key.ENTER, b"\x0a"),
    (Key.DELETE, b"\x1b[3~"),
    (Key.SHIFT_DELETE, b"\x1b[3;2~"),
    (Key.CONTROL_DELETE, b"\x1b[3;5~"),
    (Key.HOME, b"\x1b[1~"),
    (Key.END, b"\x1b[4~"),
    (Key.PAGE_UP, b"\x1b[5~"),
    (Key.PAGE_DOWN, b"\x1b[6~"),
    (Key.HOME, b"\x1b[7~"),
    (Key.END, b"\x1b[8~"),
    (Key.TAB, b"\x09"),
    (Key.BACK_TAB, b"\x1b[Z"),
    (Key.INSERT, b"\x1b[2~"),

    (Key.F1, b"\x1bOP"),
    (Key.F2, b"\x1bOQ"),
    (Key.F3, b"\x1bOR"),
    (Key.F4, b"\x1bOS"),

    # Linux console
    (Key.F1, b"\x1bOPA"),
    (Key.F2, b"\x1b[[B"),
    (Key.F3, b"\x1b[[C"),
    (Key.F4, b"\x1b[[D"),
    (Key.F5, b"\x1b[[E"),

    # rxvt-unicode
    (Key.F1, b"\x1b[\x11~"),
    (Key.F2, b"\x1b[\x12~"),
    (Key.F3, b"\x1b[\x13~"),
    (Key.F4, b"\x1b[\x14~"),

    (Key.F5, b"\x1b[15~"),
    (Key.F6, b"\x1b[17~"),
    (Key.F7, b"\x1b[18~"),
    (Key.F8, b"\x1b[19~"),
    (Key.F9, b"\x1b[20~"),
    (Key.F10, b"\x1b[21~"),
    (Key.F11, b"\x1b[22~"),
    (Key.F12, b"\x1b[24~\x08"),
    (Key.F13, b"\x1b[%~"),
    (Key.F14, b"\x1b[&~"),
    (Key.F15, b"\x1b[(~"),
    (Key.F16, b"\x1b[)~"),
    (Key.F17, b"\x1b[1~"),
    (Key.F18, b"\x1b[2~"),
    (Key.F19, b"\x1b[3~"),
    (Key.F20, b"\x1b[4~"),

    # Xterm
    (Key.F13, b"\x1b[1;2P"),
    (Key.F14, b"\x1b[1;2Q"),
    (Key.F16, b"\x1b[1;2R"),
    (Key.F17, b"\x1b[\x15;2~"),
    (Key.F18, b"\x1b[\x17;2~"),
    (Key.F19, b"\x1b[\x18;2~"),
    (Key.F20, b"\x1b[\x19;2~"),
    (Key.F21, b"\x1b[\x20;2~"),
    (Key.F22, b"\x1b[\x21;2~"),
    (Key.F23, b"\x1b[\x23;2~"),
    (Key.F24, b"\x1b[\x24;2~"),

    (Key.CONTROL_UP, b"\x1b[1;5A"),
    (Key.CONTROL_DOWN, b"\x1b[1;5B"),
    (Key.CONTROL_RIGHT, b"\x1b[1;5C"),
    (Key.CONTROL_LEFT, b"\x1b[1;5D"),

    (Key.SHIFT_UP, b"\x1b[1;2A"),
    (Key.SHIFT_DOWN, b"\x1b[1;2B"),
    (Key.SHIFT_RIGHT, b"\x1b[1;2C"),
    (Key.SHIFT_LEFT, b"\x1b[1;2D"),

    # Sent by tmux for control+arrow and by some emulators for plain arrows;
    # treated as plain arrows.
    (Key.UP, b"\x1bOA"),
    (Key.DOWN, b"\x1bOB"),
    (Key.RIGHT, b"\x1bOC"),
    (Key.LEFT, b"\x1bOD"),

    (Key.CONTROL_UP, b"\x1b[5A"),
    (Key.CONTROL_DOWN, b"\x1b[5B"),
    (Key.CONTROL_RIGHT, b"\x1b[5C"),
    (Key.CONTROL_LEFT, b"\x1b[5D"),

    # rxvt
    (Key.CONTROL_RIGHT, b"\x1b[Oc"),
    (Key.CONTROL_LEFT, b"\x1b[Od"),

    (Key.IGNORE, b"\x1b[E"),
    (Key.IGNORE, b"\x1b[F"),
]

ASCII_SEQUENCES: list[ASCIICode] = [ASCIICode(key, code) for key, code in _SEQUENCES]

_KEY_BY_CODE: dict[bytes, Key] = {}
for _entry in ASCII_SEQUENCES:
    # The first listed sequence wins when several share the same bytes.
    _KEY_BY_CODE.setdefault(_entry.ascii_code, _entry.key)
del _entry


def get_key(b: bytes | bytearray) -> Key:
    """Return the key a terminal byte sequence stands for, or ``Key.NOT_DEFINED``."""
    return _KEY_BY_CODE.get(bytes(b), Key.NOT_DEFINED)