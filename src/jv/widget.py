"""Read-only JSON / text viewer widget."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from rich.text import Text
from textual import events
from textual.message import Message
from textual.widget import Widget

from jv._commands import MalformedCommand, PathNotFound, parse_goto, resolve_query
from jv._status_line import PromptMode, StatusLine
from jv.viewport import Line, Viewport

logger = logging.getLogger(__name__)

# size used until the first layout tells us the real one
_DEFAULT_SIZE = (80, 24)


class JsonViewer(Widget, can_focus=True):
    """A vim-style viewer over pre-rendered lines.

    Supported keys:
      h j k l / arrows  0 $  PgUp PgDn
      :row[:col]  goto (1-based)
      #/path      jump to a JSON value
      ?           help      q  quit
    """

    DEFAULT_CSS = """
    JsonViewer {
        height: 1fr;
        background: $surface;
    }
    """

    # -- Messages ----------------------------------------------------------

    @dataclass
    class Quit(Message):
        pass

    @dataclass
    class HelpToggleRequested(Message):
        pass

    # -- Init --------------------------------------------------------------

    def __init__(
        self,
        lines: Sequence[Line] = (),
        index: Mapping[str, tuple[int, int]] | None = None,
        *,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__(name=name, id=id, classes=classes)
        self.viewport: Viewport[Line] = Viewport(lines, (_DEFAULT_SIZE[0], _DEFAULT_SIZE[1] - 1))
        self.index: Mapping[str, tuple[int, int]] = index if index is not None else {}
        self.status_line = StatusLine()

    def set_lines(
        self, lines: Sequence[Line], index: Mapping[str, tuple[int, int]] | None = None
    ) -> None:
        width, height = self.viewport.width, self.viewport.height
        self.viewport = Viewport(lines, (width, height))
        self.index = index if index is not None else {}
        self.status_line.deactivate()
        self.status_line.no_message()
        self.refresh()

    # =====================================================================
    # Rendering
    # =====================================================================

    def _sync_size(self, width: int, height: int) -> None:
        """Fit the viewport into the area above the status line."""
        vp_height = max(1, height - 1)
        if (width, vp_height) != (self.viewport.width, self.viewport.height):
            self.viewport.resize(width, vp_height)

    def on_resize(self, event: events.Resize) -> None:
        self._sync_size(event.size.width, event.size.height)

    def _position_label(self) -> str:
        vp = self.viewport
        if vp.is_empty:
            return " [empty] "
        row, col = vp.position
        return f" Ln {row + 1}/{len(vp)}, Col {col + 1} "

    def render(self) -> Text:
        width = self.content_region.width
        height = self.content_region.height
        if height < 2 or width < 10:
            return Text("(too small)")
        self._sync_size(width, height)
        return self.render_frame(width)

    def render_frame(self, width: int) -> Text:
        vp = self.viewport
        rows = vp.render_lines()

        if not vp.is_empty and not self.status_line.active:
            x, y = vp.focus()
            line = vp.current_line
            cw = line.char_width(vp.line_char_ix) if line.chars_count() else 1
            row = rows[y]
            if len(row) < x + cw:
                row.append(" " * (x + cw - len(row)))
            row.stylize("reverse", x, x + cw)

        rows.append(self.status_line.render(width, fallback=self._position_label()))
        return Text("\n").join(rows)

    # =====================================================================
    # Key handling
    # =====================================================================

    def on_key(self, event: events.Key) -> None:
        event.prevent_default()
        event.stop()

        if self.status_line.active:
            self._handle_prompt(event)
        else:
            self.status_line.no_message()
            self._handle_view(event)

        self.refresh()

    def _handle_view(self, event: events.Key) -> None:
        key = event.key
        char = event.character or ""
        vp = self.viewport

        if char == "h" or key == "left":
            vp.move_left()
        elif char == "l" or key == "right":
            vp.move_right()
        elif char == "k" or key == "up":
            vp.move_up()
        elif char == "j" or key == "down":
            vp.move_down()
        elif char == "0" or key == "home":
            vp.move_to_sol()
        elif char == "$" or key == "end":
            vp.move_to_eol()
        elif key == "pageup" or key == "ctrl+b":
            vp.page_up()
        elif key == "pagedown" or key == "ctrl+f":
            vp.page_down()
        elif char == ":":
            self.status_line.activate(PromptMode.COMMAND)
        elif char == "#":
            self.status_line.activate(PromptMode.QUERY)
        elif char == "?":
            self.post_message(self.HelpToggleRequested())
        elif char == "q":
            self.post_message(self.Quit())

    def _handle_prompt(self, event: events.Key) -> None:
        key = event.key
        char = event.character
        status = self.status_line

        if key == "escape":
            status.deactivate()
            return

        if key == "enter":
            text = status.text
            mode = status.mode
            status.add_to_history(text)
            status.deactivate()
            self._exec_prompt(mode, text)
            return

        if key == "backspace":
            status.remove()
            if status.is_empty():
                status.deactivate()
            return

        if key == "left":
            status.left()
        elif key == "right":
            status.right()
        elif key == "up":
            status.history_prev()
        elif key == "down":
            status.history_next()
        elif char and char.isascii() and char.isprintable():
            status.insert(char)

    def _exec_prompt(self, mode: PromptMode | None, text: str) -> None:
        vp = self.viewport
        try:
            if mode is PromptMode.COMMAND:
                row, col = parse_goto(text, vp.position)
            elif mode is PromptMode.QUERY:
                row, col = resolve_query(self.index, "#" + text)
            else:
                return
        except (MalformedCommand, PathNotFound) as exc:
            logger.debug("%s%s: %s", mode.value, text, exc)
            self.status_line.set_error(str(exc))
            return
        logger.debug("%s%s -> (%d, %d)", mode.value, text, row, col)
        vp.goto(row, col)
