"""Tests for AsciiLine and EditableAsciiLine."""

import pytest

from jv._ascii_line import TAB_STOP, AsciiLine, EditableAsciiLine, NonAsciiError


class TestConstruction:
    """ASCII validation."""

    def test_ascii_ok(self):
        line = AsciiLine("hello")
        assert line.text == "hello"
        assert line.chars_count() == 5
        assert len(line) == 5

    def test_empty(self):
        line = AsciiLine("")
        assert line.chars_count() == 0
        assert line.render(0, 10).plain == ""

    def test_non_ascii_rejected(self):
        with pytest.raises(NonAsciiError) as excinfo:
            AsciiLine("café")
        assert excinfo.value.text == "café"

    def test_non_ascii_message(self):
        with pytest.raises(ValueError, match="not ascii"):
            AsciiLine("日本")

    def test_equality(self):
        assert AsciiLine("a") == AsciiLine("a")
        assert AsciiLine("a") != AsciiLine("b")


class TestCharWidth:
    """Tab stops and per-character widths."""

    def test_plain_chars_are_one_wide(self):
        line = AsciiLine("abc")
        assert [line.char_width(i) for i in range(3)] == [1, 1, 1]

    def test_tabs_from_column_zero(self):
        line = AsciiLine("\tA\tBB")
        assert line.char_width(0) == 8
        assert line.char_width(1) == 1
        assert line.char_width(2) == 7
        assert line.char_width(3) == 1

    def test_indent_moves_tab_stops(self):
        line = AsciiLine("\tA")
        line.indent(3)
        assert line.char_width(0) == TAB_STOP - 3

    def test_indent_back_to_zero(self):
        line = AsciiLine("ab\tc")
        line.indent(5)
        assert line.char_width(2) == 1
        line.indent(0)
        assert line.char_width(2) == 6

    def test_consecutive_tabs(self):
        line = AsciiLine("\t\t")
        assert line.char_width(0) == 8
        assert line.char_width(1) == 8


class TestRender:
    """Rendering sub-ranges."""

    def test_render_full(self):
        assert AsciiLine("hello").render(0, 80).plain == "hello"

    def test_render_window(self):
        assert AsciiLine("hello world").render(6, 3).plain == "wor"

    def test_render_past_end(self):
        assert AsciiLine("abc").render(5, 10).plain == ""

    def test_render_expands_tabs(self):
        assert AsciiLine("\tA").render(0, 80).plain == " " * 8 + "A"

    def test_render_never_splits_tab(self):
        # the tab needs 8 columns; only 5 are available
        assert AsciiLine("ab\tc").render(0, 5).plain == "ab"

    def test_render_control_chars_keep_their_cell(self):
        line = AsciiLine("a\x0cb\rc")
        text = line.render(0, 80)
        assert text.plain == "a?b?c"
        assert len(text.plain) == line.chars_count()

    def test_render_control_chars_in_window(self):
        assert AsciiLine("\x07\x08x\x7f").render(1, 2).plain == "?x"

    def test_render_style(self):
        text = AsciiLine("abc").render(0, 3, style="bold")
        assert text.style == "bold"

    def test_fit(self):
        line = AsciiLine("a\tb")
        assert line.fit(0, 3) == (1, 1)
        assert line.fit(0, 8) == (2, 8)
        assert line.fit(0, 9) == (3, 9)


class TestEditableAsciiLine:
    """Editing used by the status line."""

    def test_insert_and_remove(self):
        line = EditableAsciiLine("")
        for i, ch in enumerate("abc"):
            line.insert(i, ch)
        assert line.text == "abc"
        assert line.remove(1) == "b"
        assert line.text == "ac"

    def test_insert_non_ascii(self):
        line = EditableAsciiLine("ab")
        with pytest.raises(NonAsciiError):
            line.insert(1, "é")
        assert line.text == "ab"

    def test_insert_tab_recomputes_widths(self):
        line = EditableAsciiLine("ab")
        line.insert(0, "\t")
        assert line.char_width(0) == 8
        line.insert(0, "x")
        assert line.char_width(1) == 7

    def test_remove_tab_recomputes_widths(self):
        line = EditableAsciiLine("x\ty\t")
        assert line.char_width(3) == 7
        line.remove(1)
        assert line.char_width(2) == 6

    def test_clear(self):
        line = EditableAsciiLine("\tabc")
        line.clear()
        assert line.text == ""
        assert line.char_width(0) == 1

    def test_set_text(self):
        line = EditableAsciiLine("")
        line.set_text("a\tb")
        assert line.char_width(1) == 7
        with pytest.raises(NonAsciiError):
            line.set_text("ü")
