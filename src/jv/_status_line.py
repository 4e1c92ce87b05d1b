"""Status line prompt: a one-line editable buffer with history."""

from __future__ import annotations

from enum import Enum

from rich.text import Text

from jv._ascii_line import EditableAsciiLine


class PromptMode(Enum):
    COMMAND = ":"
    QUERY = "#"


class StatusLine:
    """Text entry for the ``:`` and ``#`` prompts, plus a message slot."""

    def __init__(self, history_max: int = 50) -> None:
        self.mode: PromptMode | None = None
        self.buffer = EditableAsciiLine("")
        self.cursor: int = 0
        self.message: str = ""
        self.is_error: bool = False
        self._history: dict[PromptMode, list[str]] = {m: [] for m in PromptMode}
        self._history_idx: int = -1
        self._history_max = history_max

    @property
    def active(self) -> bool:
        return self.mode is not None

    @property
    def text(self) -> str:
        return self.buffer.text

    def activate(self, mode: PromptMode) -> None:
        self.mode = mode
        self.buffer.clear()
        self.cursor = 0
        self._history_idx = -1
        self.no_message()

    def deactivate(self) -> None:
        self.mode = None
        self.buffer.clear()
        self.cursor = 0
        self._history_idx = -1

    def is_empty(self) -> bool:
        return not self.buffer.text

    # -- Editing -----------------------------------------------------------

    def insert(self, ch: str) -> None:
        self.buffer.insert(self.cursor, ch)
        self.cursor += 1
        self._history_idx = -1

    def remove(self) -> None:
        """Delete the character before the cursor (backspace)."""
        if self.cursor == 0:
            return
        self.cursor -= 1
        self.buffer.remove(self.cursor)
        self._history_idx = -1

    def left(self) -> None:
        self.cursor = max(0, self.cursor - 1)

    def right(self) -> None:
        self.cursor = min(self.cursor + 1, len(self.buffer))

    # -- History -----------------------------------------------------------

    def add_to_history(self, text: str) -> None:
        """Add *text* to the current mode's history, avoiding duplicates."""
        if not text or self.mode is None:
            return
        history = self._history[self.mode]
        if text in history:
            history.remove(text)
        history.insert(0, text)
        if len(history) > self._history_max:
            history.pop()

    def history_prev(self) -> None:
        if self.mode is None:
            return
        history = self._history[self.mode]
        if self._history_idx < len(history) - 1:
            self._history_idx += 1
            self._load(history[self._history_idx])

    def history_next(self) -> None:
        if self.mode is None:
            return
        history = self._history[self.mode]
        if self._history_idx > 0:
            self._history_idx -= 1
            self._load(history[self._history_idx])
        elif self._history_idx == 0:
            self._history_idx = -1
            self._load("")

    def _load(self, text: str) -> None:
        self.buffer.set_text(text)
        self.cursor = len(text)

    # -- Messages ----------------------------------------------------------

    def set_message(self, message: str, error: bool = False) -> None:
        self.message = message
        self.is_error = error

    def set_error(self, message: str) -> None:
        self.set_message(message, error=True)

    def no_message(self) -> None:
        self.message = ""
        self.is_error = False

    # -- Rendering ---------------------------------------------------------

    def render(self, width: int, fallback: str = "") -> Text:
        """Render the prompt (with a reverse-video cursor) or the message."""
        if self.mode is None:
            if self.message:
                style = "bold red" if self.is_error else "bold"
                return Text(self.message[:width], style=style)
            return Text(fallback[:width], style="dim")

        prefix = self.mode.value
        avail = max(1, width - len(prefix) - 1)
        # keep the cursor inside the visible part of the buffer
        start = max(0, self.cursor - avail + 1)
        result = Text(prefix, style="bold yellow")
        body = self.buffer.render(start, avail, style="bold yellow")
        body.append(" ")
        offset = self.cursor - start
        body.stylize("reverse", offset, offset + 1)
        result.append_text(body)
        return result
