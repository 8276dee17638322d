import fcntl
import os
import pty
import select
import struct
import termios

import pytest

from termprompt.input import (
    MAX_READ_BYTES,
    PosixParser,
    WindowsParser,
    WinSize,
    restore,
    set_raw,
)


@pytest.fixture
def terminal():
    master, slave = pty.openpty()
    yield master, slave
    os.close(master)
    os.close(slave)


@pytest.fixture
def pipe():
    r, w = os.pipe()
    yield r, w
    os.close(r)
    os.close(w)


def test_read_returns_available_bytes(pipe):
    r, w = pipe
    os.write(w, b"abc")
    assert PosixParser(r).read() == b"abc"


def test_read_is_limited_to_max_read_bytes(pipe):
    r, w = pipe
    os.write(w, b"x" * (MAX_READ_BYTES + 100))
    assert len(PosixParser(r).read()) == MAX_READ_BYTES
    assert MAX_READ_BYTES == 1024


def test_setup_enters_raw_non_blocking_mode(terminal):
    _, slave = terminal
    parser = PosixParser(slave)
    parser.setup()
    try:
        lflag = termios.tcgetattr(slave)[3]
        assert lflag & termios.ECHO == 0
        assert lflag & termios.ICANON == 0
        assert os.get_blocking(slave) is False
    finally:
        parser.tear_down()


def test_tear_down_restores_terminal(terminal):
    _, slave = terminal
    before = termios.tcgetattr(slave)
    parser = PosixParser(slave)
    parser.setup()
    parser.tear_down()
    after = termios.tcgetattr(slave)
    assert after[3] == before[3]
    assert after[0] == before[0]
    assert os.get_blocking(slave) is True


def test_read_without_input_raises_blocking_error(terminal):
    _, slave = terminal
    parser = PosixParser(slave)
    parser.setup()
    try:
        with pytest.raises(BlockingIOError):
            parser.read()
    finally:
        parser.tear_down()


def test_read_key_from_terminal(terminal):
    master, slave = terminal
    parser = PosixParser(slave)
    parser.setup()
    try:
        os.write(master, b"\x1b[A")
        ready, _, _ = select.select([slave], [], [], 2)
        assert ready == [slave]
        assert parser.read() == b"\x1b[A"
    finally:
        parser.tear_down()


def test_get_win_size(terminal):
    _, slave = terminal
    fcntl.ioctl(slave, termios.TIOCSWINSZ, struct.pack("HHHH", 24, 80, 0, 0))
    assert PosixParser(slave).get_win_size() == WinSize(row=24, col=80)


def test_set_raw_and_restore_round_trip(terminal):
    _, slave = terminal
    before = termios.tcgetattr(slave)
    set_raw(slave)
    raw = termios.tcgetattr(slave)
    assert raw[2] & termios.CSIZE == termios.CS8
    assert raw[0] & termios.ICRNL == 0
    restore()
    assert termios.tcgetattr(slave)[3] == before[3]


def test_set_raw_on_non_terminal_fails(pipe):
    r, _ = pipe
    with pytest.raises(termios.error):
        set_raw(r)


def test_windows_parser_read_before_setup_fails():
    with pytest.raises(OSError):
        WindowsParser().read()