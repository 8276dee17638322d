from termprompt.buffer import Buffer
from termprompt.history import History


def make_buffer(text):
    b = Buffer()
    b.insert_text(text, False, True)
    return b


def test_history_clear():
    h = History()
    h.add("foo")
    h.clear()
    assert h == History(histories=["foo"], tmp=["foo", ""], selected=1)


def test_history_add():
    h = History()
    h.add("echo 1")
    assert h == History(histories=["echo 1"], tmp=["echo 1", ""], selected=1)


def test_history_older():
    h = History()
    h.add("echo 1")

    buf1, changed = h.older(make_buffer("echo 2"))
    assert changed
    assert buf1.text() == "echo 1"

    buf = make_buffer("echo 1")
    buf2, changed = h.older(buf)
    assert not changed
    assert buf2.text() == "echo 1"
    assert buf2 is buf


def test_history_newer_restores_edited_line():
    h = History()
    h.add("echo 1")
    older, _ = h.older(make_buffer("echo 2"))
    newer, changed = h.newer(older)
    assert changed
    assert newer.text() == "echo 2"
    assert newer.cursor_position == len("echo 2")


def test_history_newer_at_latest_is_unchanged():
    h = History()
    h.add("echo 1")
    buf = make_buffer("x")
    result, changed = h.newer(buf)
    assert not changed
    assert result is buf


def test_empty_history_older_is_unchanged():
    h = History()
    buf = make_buffer("x")
    result, changed = h.older(buf)
    assert not changed
    assert result.text() == "x"