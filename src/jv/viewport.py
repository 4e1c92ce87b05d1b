"""Scrollable, cursor-tracking window over a sequence of renderable lines."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Generic, Protocol, TypeVar

from rich.text import Text


class Line(Protocol):
    """A line the :class:`Viewport` can display."""

    def chars_count(self) -> int:
        """Number of logical characters (not screen columns)."""

    def char_width(self, i: int) -> int:
        """Screen columns occupied by character *i*."""

    def render(self, start: int, width: int) -> Text:
        """Render the characters from *start* that fit entirely in *width* columns."""

    def indent(self, first_col: int) -> None:
        """Recompute widths for a line drawn from absolute column *first_col*."""


L = TypeVar("L", bound=Line)

# " │ " between the line number and the text
_GUTTER_SEP = " │ "


class Viewport(Generic[L]):
    """A read-only window over *lines* with vim-style navigation.

    ``cursor_row``/``cursor_col`` are screen coordinates inside the text
    area; ``line_char_ix`` is the character the cursor is on and
    ``max_line_char_ix`` the column vertical moves try to return to.
    All navigation clamps; on an empty document every move is a no-op.
    """

    def __init__(self, lines: Iterable[L], size: tuple[int, int]) -> None:
        self.lines: tuple[L, ...] = tuple(lines)
        self.num_lines_padding: int = len(str(len(self.lines)))
        for line in self.lines:
            line.indent(self.gutter_width)

        self.width: int = max(1, size[0])
        self.height: int = max(1, size[1])

        self.frame_start_row: int = 0
        self.frame_start_char_ix: int = 0
        self.cursor_row: int = 0
        self.cursor_col: int = 0
        self.line_char_ix: int = 0
        self.max_line_char_ix: int = 0

    # -- Geometry ----------------------------------------------------------

    def __len__(self) -> int:
        return len(self.lines)

    @property
    def is_empty(self) -> bool:
        return not self.lines

    @property
    def gutter_width(self) -> int:
        return self.num_lines_padding + len(_GUTTER_SEP)

    @property
    def text_width(self) -> int:
        return max(1, self.width - self.gutter_width)

    @property
    def current_row(self) -> int:
        """Document row of the line under the cursor."""
        return self.frame_start_row + self.cursor_row

    @property
    def current_line(self) -> L:
        return self.lines[self.current_row]

    @property
    def position(self) -> tuple[int, int]:
        """``(row, char index)`` of the cursor in document space."""
        return self.current_row, self.line_char_ix

    def resize(self, width: int, height: int) -> None:
        """Change the terminal size, keeping the cursor on the same character."""
        self.width = max(1, width)
        self.height = max(1, height)
        if self.cursor_row >= self.height:
            self.frame_start_row += self.cursor_row - self.height + 1
            self.cursor_row = self.height - 1
        if self.lines:
            self._center_horizontally(force=True)

    # -- Navigation --------------------------------------------------------

    def move_right(self) -> None:
        if not self.lines:
            return
        last = _last_ix(self.current_line)
        self.line_char_ix = min(self.line_char_ix + 1, last)
        self.max_line_char_ix = self.line_char_ix
        self.center_horizontally()

    def move_left(self) -> None:
        if not self.lines:
            return
        self.line_char_ix = max(self.line_char_ix - 1, 0)
        self.max_line_char_ix = self.line_char_ix
        self.center_horizontally()

    def move_up(self) -> None:
        if not self.lines:
            return
        if self.cursor_row == 0:
            self.frame_start_row = max(0, self.frame_start_row - 1)
        else:
            self.cursor_row -= 1
        self._snap()

    def move_down(self) -> None:
        if not self.lines:
            return
        if self.current_row + 1 >= len(self.lines):
            return
        if self.cursor_row + 1 >= self.height:
            self.frame_start_row += 1
        else:
            self.cursor_row += 1
        self._snap()

    def move_to_sol(self) -> None:
        if not self.lines:
            return
        self.max_line_char_ix = 0
        self._snap()

    def move_to_eol(self) -> None:
        if not self.lines:
            return
        self.max_line_char_ix = _last_ix(self.current_line)
        self._snap()

    def page_up(self) -> None:
        if not self.lines:
            return
        if self.frame_start_row == 0:
            self.cursor_row = 0
        else:
            self.frame_start_row = max(0, self.frame_start_row - self.height)
        self._snap()

    def page_down(self) -> None:
        if not self.lines:
            return
        last_row = len(self.lines) - 1
        self.frame_start_row = min(self.frame_start_row + self.height, last_row)
        if self.current_row > last_row:
            self.cursor_row = last_row - self.frame_start_row
        self._snap()

    def goto(self, row: int, col: int) -> None:
        """Jump to character *col* of document line *row* (both 0-based)."""
        if not self.lines:
            return
        row = max(0, min(row, len(self.lines) - 1))
        if not self.frame_start_row <= row < self.frame_start_row + self.height:
            self.frame_start_row = max(0, row - self.height // 2)
        self.cursor_row = row - self.frame_start_row
        self.max_line_char_ix = max(0, min(col, _last_ix(self.lines[row])))
        self._snap()

    def _snap(self) -> None:
        """Put the cursor as close to the sticky column as the line allows."""
        self.line_char_ix = min(self.max_line_char_ix, _last_ix(self.current_line))
        self.center_horizontally()

    def center_horizontally(self) -> None:
        """Scroll horizontally so that the cursor character is fully visible."""
        if self.lines:
            self._center_horizontally()

    def _center_horizontally(self, force: bool = False) -> None:
        line = self.current_line
        ix = self.line_char_ix
        text_width = self.text_width

        if not force and self.frame_start_char_ix <= ix:
            used = _span_width(line, self.frame_start_char_ix, ix, text_width)
            if used + _width_at(line, ix) <= text_width:
                self.cursor_col = used
                return

        start = ix
        acc = _width_at(line, ix)
        while start > 0:
            w = line.char_width(start - 1)
            if acc + w > text_width:
                break
            acc += w
            start -= 1
        self.frame_start_char_ix = start
        self.cursor_col = acc - _width_at(line, ix)

    # -- Rendering ---------------------------------------------------------

    def render_lines(self) -> list[Text]:
        """Render every screen row of the frame, gutter included."""
        rows: list[Text] = []
        pad = self.num_lines_padding
        text_width = self.text_width
        for i in range(self.height):
            r = self.frame_start_row + i
            if r >= len(self.lines):
                rows.append(Text(f"{'~':>{pad}}", style="dim blue"))
                continue
            row = Text()
            number_style = "bold cyan" if i == self.cursor_row else "dim cyan"
            row.append(f"{r + 1:>{pad}}", style=number_style)
            row.append(_GUTTER_SEP, style="dim")
            row.append_text(self.lines[r].render(self.frame_start_char_ix, text_width))
            rows.append(row)
        return rows

    def render(self) -> Text:
        """Render the whole frame as one styled text."""
        return Text("\n").join(self.render_lines())

    def focus(self) -> tuple[int, int]:
        """Return the ``(x, y)`` terminal position of the cursor in the frame."""
        return self.gutter_width + self.cursor_col, self.cursor_row


def _last_ix(line: Line) -> int:
    return max(0, line.chars_count() - 1)


def _width_at(line: Line, i: int) -> int:
    # an empty line still shows a one column cursor
    if i >= line.chars_count():
        return 1
    return line.char_width(i)


def _span_width(line: Line, start: int, end: int, limit: int) -> int:
    """Width of characters ``[start, end)``, giving up once past *limit*."""
    total = 0
    for i in range(start, end):
        total += line.char_width(i)
        if total > limit:
            break
    return total
