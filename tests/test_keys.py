import pytest

from termprompt.keys import ASCII_SEQUENCES, ASCIICode, Key, get_key


@pytest.mark.parametrize(
    ("data", "expected"),
    [
        (bytes([0x1B]), Key.ESCAPE),
        (b"a", Key.NOT_DEFINED),
    ],
    ids=["escape", "undefined"],
)
def test_get_key(data, expected):
    assert get_key(data) == expected


@pytest.mark.parametrize(
    ("data", "expected"),
    [
        (bytes([0x1B, 0x5B, 0x41]), Key.UP),
        (bytes([0x1B, 0x4F, 0x41]), Key.UP),
        (bytes([0x0A]), Key.ENTER),
        (bytes([0x09]), Key.TAB),
        (bytes([0x7F]), Key.BACKSPACE),
        (bytes([0x03]), Key.CONTROL_C),
        (bytes([0x1B, 0x5B, 0x5A]), Key.BACK_TAB),
        (bytes([0x1B, 0x5B, 0x31, 0x3B, 0x35, 0x43]), Key.CONTROL_RIGHT),
        (bytes([0x1B, 0x5B, 0x32, 0x34, 0x7E, 0x08]), Key.F12),
    ],
)
def test_get_key_known_sequences(data, expected):
    assert get_key(data) == expected


def test_first_listed_sequence_wins():
    # The same bytes are listed for Home and later for F17.
    assert get_key(bytes([0x1B, 0x5B, 0x31, 0x7E])) == Key.HOME
    # The same bytes are listed for End and later as ignored.
    assert get_key(bytes([0x1B, 0x5B, 0x46])) == Key.END


def test_get_key_accepts_bytearray():
    assert get_key(bytearray(b"\x1b[B")) == Key.DOWN


def test_tab_and_line_feed_map_to_aliases():
    assert get_key(b"\t") == Key.TAB
    assert get_key(b"\n") == Key.ENTER


def test_empty_input_is_not_defined():
    assert get_key(b"") == Key.NOT_DEFINED


def test_ascii_code_entries_hold_bytes():
    entry = ASCIICode(Key.ESCAPE, b"\x1b")
    assert entry in ASCII_SEQUENCES
    assert all(isinstance(e.ascii_code, bytes) and e.ascii_code for e in ASCII_SEQUENCES)