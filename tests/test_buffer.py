from termprompt.buffer import Buffer
from termprompt.document import Document
from termprompt.keys import Key


def make(text):
    b = Buffer()
    b.insert_text(text, False, True)
    return b


def test_new_buffer():
    b = Buffer()
    assert b.working_index == 0
    assert b.working_lines == [""]
    assert b.text() == ""
    assert b.cursor_position == 0


def test_insert_text():
    b = make("some_text")
    assert b.text() == "some_text"
    assert b.cursor_position == len("some_text")


def test_insert_text_without_moving_cursor():
    b = Buffer()
    b.insert_text("abc", False, False)
    assert b.text() == "abc"
    assert b.cursor_position == 0


def test_insert_text_overwrite():
    b = make("hello")
    b.cursor_position = 0
    b.insert_text("XY", True, True)
    assert b.text() == "XYllo"
    assert b.cursor_position == 2


def test_insert_text_overwrite_stops_at_newline():
    b = make("a\nbc")
    b.cursor_position = 0
    b.insert_text("XYZ", True, True)
    assert b.text() == "XYZ\nbc"


def test_cursor_movement():
    b = make("some_text")
    b.cursor_left(1)
    b.cursor_left(2)
    b.cursor_right(1)
    b.insert_text("A", False, True)
    assert b.text() == "some_teAxt"
    assert b.cursor_position == len("some_teA")

    b.cursor_left(100)
    b.insert_text("A", False, True)
    assert b.text() == "Asome_teAxt"
    assert b.cursor_position == len("A")


def test_cursor_movement_with_multibyte():
    b = make("あいうえお")
    b.cursor_left(1)
    assert b.document().text_after_cursor() == "お"


def test_cursor_up():
    b = make("long line1\nline2")
    b.cursor_up(1)
    assert b.document().cursor_position == 5

    b.cursor_up(1)
    assert b.document().cursor_position == 5

    b._set_document(Document())
    b.insert_text("line1\nlong line2", False, True)
    b.cursor_up(1)
    assert b.document().cursor_position == 5


def test_cursor_down():
    b = make("line1\nline2")
    b.cursor_position = 3
    b.cursor_down(1)
    assert b.document().cursor_position == len("line1\nlin")

    b = make("long line1\na\nb")
    b.cursor_position = 3
    b.cursor_down(1)
    assert b.document().cursor_position == len("long line1\na")


def test_delete_before_cursor():
    b = make("some_text")
    b.cursor_left(2)
    deleted = b.delete_before_cursor(1)
    assert b.text() == "some_txt"
    assert deleted == "e"
    assert b.cursor_position == len("some_t")

    deleted = b.delete_before_cursor(100)
    assert deleted == "some_t"
    assert b.text() == "xt"

    deleted = b.delete_before_cursor(1)
    assert deleted == ""
    assert b.text() == "xt"


def test_delete():
    b = make("abc")
    b.cursor_position = 0
    assert b.delete(1) == "a"
    assert b.text() == "bc"
    assert b.cursor_position == 0


def test_delete_at_end_does_nothing():
    b = make("abc")
    assert b.delete(1) == ""
    assert b.text() == "abc"


def test_new_line():
    b = make("  hello")
    b.new_line(False)
    assert b.text() == "  hello\n"

    b = make("  hello")
    b.new_line(True)
    assert b.text() == "  hello\n  "


def test_join_next_line():
    b = make("line1\nline2\nline3")
    b.cursor_up(1)
    b.join_next_line(" ")
    assert b.text() == "line1\nline2 line3"

    b = make("line1")
    b.cursor_position = 0
    b.join_next_line(" ")
    assert b.text() == "line1"


def test_swap_characters_before_cursor():
    b = make("hello world")
    b.cursor_left(2)
    b.swap_characters_before_cursor()
    assert b.text() == "hello wrold"


def test_swap_characters_needs_two_characters():
    b = make("a")
    b.swap_characters_before_cursor()
    assert b.text() == "a"


def test_document_carries_last_key_stroke():
    b = make("abc")
    b.last_key_stroke = Key.CONTROL_A
    doc = b.document()
    assert doc.last_key == Key.CONTROL_A
    assert doc.text == "abc"
    assert doc.cursor_position == 3


def test_display_cursor_position_wide_characters():
    b = make("日本語")
    b.cursor_left(1)
    assert b.display_cursor_position() == 4