"""ASCII-only text lines with tab-aware screen widths."""

from __future__ import annotations

import re

from rich.text import Text

TAB_STOP = 8
CONTROL_PLACEHOLDER = "?"

_CONTROL_RE = re.compile(r"[\x00-\x08\x0a-\x1f\x7f]")


class NonAsciiError(ValueError):
    """Raised when text containing non-ASCII characters is turned into a line."""

    def __init__(self, text: str) -> None:
        super().__init__(f"{text!r} is not ascii")
        self.text = text


class AsciiLine:
    """A line of ASCII text that knows how wide each character is on screen.

    Every character is one column wide except tabs, which extend to the next
    tab stop. Tab stops depend on the absolute column the line starts at, so
    callers that draw the line after a gutter must call :meth:`indent`.
    """

    __slots__ = ("_text", "_widths", "_first_col")

    def __init__(self, text: str) -> None:
        if not text.isascii():
            raise NonAsciiError(text)
        self._text: str = text
        # only characters whose width differs from 1
        self._widths: dict[int, int] = {}
        self._first_col: int = 0
        if "\t" in text:
            self.indent(0)

    @property
    def text(self) -> str:
        return self._text

    def __len__(self) -> int:
        return len(self._text)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AsciiLine):
            return NotImplemented
        return self._text == other._text

    def __hash__(self) -> int:
        return hash(self._text)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._text!r})"

    # -- Line protocol -----------------------------------------------------

    def chars_count(self) -> int:
        return len(self._text)

    def char_width(self, i: int) -> int:
        return self._widths.get(i, 1)

    def indent(self, first_col: int) -> None:
        """Recompute tab widths for a line starting at screen column *first_col*."""
        self._first_col = first_col
        widths: dict[int, int] = {}
        if "\t" in self._text:
            col = first_col
            for i, ch in enumerate(self._text):
                if ch == "\t":
                    w = TAB_STOP - col % TAB_STOP
                    if w != 1:
                        widths[i] = w
                    col += w
                else:
                    col += 1
        self._widths = widths

    def fit(self, start: int, width: int) -> tuple[int, int]:
        """Return ``(end, used)``: the characters ``[start, end)`` fit in *width*."""
        end = start
        used = 0
        n = len(self._text)
        widths = self._widths
        while end < n:
            w = widths.get(end, 1)
            if used + w > width:
                break
            used += w
            end += 1
        return end, used

    def render(self, start: int, width: int, style: str = "") -> Text:
        if start >= len(self._text) or width <= 0:
            return Text()
        end, _used = self.fit(start, width)
        chunk = self._text[start:end]
        if "\t" in chunk:
            chunk = "".join(
                " " * self._widths.get(start + i, 1) if ch == "\t" else ch
                for i, ch in enumerate(chunk)
            )
        # rich drops control characters; keep one visible cell for each
        chunk = _CONTROL_RE.sub(CONTROL_PLACEHOLDER, chunk)
        return Text(chunk, style=style)


class EditableAsciiLine(AsciiLine):
    """An :class:`AsciiLine` that can be edited in place (status line buffer)."""

    __slots__ = ()
    __hash__ = None  # type: ignore[assignment]

    def insert(self, ix: int, ch: str) -> None:
        if not ch.isascii():
            raise NonAsciiError(ch)
        had_tab = "\t" in self._text
        self._text = self._text[:ix] + ch + self._text[ix:]
        if had_tab or "\t" in ch:
            self.indent(self._first_col)

    def remove(self, ix: int) -> str:
        """Remove and return the character at *ix*."""
        ch = self._text[ix]
        self._text = self._text[:ix] + self._text[ix + 1 :]
        if ch == "\t" or "\t" in self._text:
            self.indent(self._first_col)
        return ch

    def clear(self) -> None:
        self._text = ""
        self._widths = {}

    def set_text(self, text: str) -> None:
        if not text.isascii():
            raise NonAsciiError(text)
        self._text = text
        self.indent(self._first_col)
