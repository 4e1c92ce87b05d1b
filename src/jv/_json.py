"""JSON tokenizer: turns a parsed JSON value into pretty-printed token lines."""

from __future__ import annotations

import bisect
import json
import re
from dataclasses import dataclass
from enum import Enum, auto

from rich.text import Text

from jv._ascii_line import AsciiLine

INDENT = 4
REF_PREFIX = "#/"

# control characters other than tab would break the line on screen
_CONTROL_RE = re.compile(r"[\x00-\x08\x0a-\x1f\x7f]")


class JsonTokenTag(Enum):
    OBJECT_START = auto()
    OBJECT_END = auto()
    ARRAY_START = auto()
    ARRAY_END = auto()
    COLON = auto()
    COMMA = auto()
    NULL = auto()
    BOOL = auto()
    NUMBER = auto()
    STRING = auto()
    REF = auto()
    OBJECT_KEY = auto()
    WHITESPACE = auto()


CONTAINER_STARTS = frozenset({JsonTokenTag.OBJECT_START, JsonTokenTag.ARRAY_START})
CONTAINER_ENDS = frozenset({JsonTokenTag.OBJECT_END, JsonTokenTag.ARRAY_END})
VALUE_TAGS = frozenset(
    {
        JsonTokenTag.NULL,
        JsonTokenTag.BOOL,
        JsonTokenTag.NUMBER,
        JsonTokenTag.STRING,
        JsonTokenTag.REF,
    }
)

_TAG_STYLE = {
    JsonTokenTag.OBJECT_START: "bold white",
    JsonTokenTag.OBJECT_END: "bold white",
    JsonTokenTag.ARRAY_START: "bold white",
    JsonTokenTag.ARRAY_END: "bold white",
    JsonTokenTag.COLON: "white",
    JsonTokenTag.COMMA: "white",
    JsonTokenTag.NULL: "magenta",
    JsonTokenTag.BOOL: "magenta",
    JsonTokenTag.NUMBER: "yellow",
    JsonTokenTag.STRING: "green",
    JsonTokenTag.REF: "underline bright_green",
    JsonTokenTag.OBJECT_KEY: "cyan",
    JsonTokenTag.WHITESPACE: "",
}


@dataclass(frozen=True)
class JsonToken:
    """A typed piece of a pretty-printed JSON line."""

    tag: JsonTokenTag
    text: AsciiLine

    @property
    def style(self) -> str:
        return _TAG_STYLE[self.tag]

    def chars_count(self) -> int:
        return self.text.chars_count()

    # -- Constructors ------------------------------------------------------

    @classmethod
    def object_start(cls) -> JsonToken:
        return cls(JsonTokenTag.OBJECT_START, AsciiLine("{"))

    @classmethod
    def object_end(cls) -> JsonToken:
        return cls(JsonTokenTag.OBJECT_END, AsciiLine("}"))

    @classmethod
    def array_start(cls) -> JsonToken:
        return cls(JsonTokenTag.ARRAY_START, AsciiLine("["))

    @classmethod
    def array_end(cls) -> JsonToken:
        return cls(JsonTokenTag.ARRAY_END, AsciiLine("]"))

    @classmethod
    def colon(cls) -> JsonToken:
        return cls(JsonTokenTag.COLON, AsciiLine(":"))

    @classmethod
    def comma(cls) -> JsonToken:
        return cls(JsonTokenTag.COMMA, AsciiLine(","))

    @classmethod
    def null(cls) -> JsonToken:
        return cls(JsonTokenTag.NULL, AsciiLine("null"))

    @classmethod
    def boolean(cls, value: bool) -> JsonToken:
        return cls(JsonTokenTag.BOOL, AsciiLine("true" if value else "false"))

    @classmethod
    def number(cls, value: int | float) -> JsonToken:
        return cls(JsonTokenTag.NUMBER, AsciiLine(json.dumps(value)))

    @classmethod
    def string(cls, value: str) -> JsonToken:
        tag = JsonTokenTag.REF if value.startswith(REF_PREFIX) else JsonTokenTag.STRING
        return cls(tag, AsciiLine(_quote(value)))

    @classmethod
    def object_key(cls, key: str) -> JsonToken:
        return cls(JsonTokenTag.OBJECT_KEY, AsciiLine(_quote(key)))

    @classmethod
    def ws(cls, n: int) -> JsonToken:
        return cls(JsonTokenTag.WHITESPACE, AsciiLine(" " * n))


def _quote(s: str) -> str:
    """Wrap *s* in double quotes, escaping control characters except tab."""
    if _CONTROL_RE.search(s):
        s = _CONTROL_RE.sub(lambda m: json.dumps(m.group())[1:-1], s)
    return f'"{s}"'


class JsonLine:
    """An immutable sequence of tokens making up one screen line."""

    __slots__ = ("tokens", "_offsets")

    def __init__(self, tokens: list[JsonToken] | tuple[JsonToken, ...]) -> None:
        self.tokens: tuple[JsonToken, ...] = tuple(tokens)
        # character offset at which each token starts
        offsets = []
        total = 0
        for tok in self.tokens:
            offsets.append(total)
            total += tok.chars_count()
        offsets.append(total)
        self._offsets: list[int] = offsets
        # tab stops are relative to the whole line, not to each token
        self.indent(0)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JsonLine):
            return NotImplemented
        return self.tokens == other.tokens

    def __hash__(self) -> int:
        return hash(self.tokens)

    def __repr__(self) -> str:
        return f"JsonLine({self.plain()!r})"

    def plain(self) -> str:
        return "".join(tok.text.text for tok in self.tokens)

    # -- Line protocol -----------------------------------------------------

    def chars_count(self) -> int:
        return self._offsets[-1]

    def char_width(self, i: int) -> int:
        t = bisect.bisect_right(self._offsets, i) - 1
        if t >= len(self.tokens):
            return 1
        return self.tokens[t].text.char_width(i - self._offsets[t])

    def indent(self, first_col: int) -> None:
        col = first_col
        for tok in self.tokens:
            tok.text.indent(col)
            col += sum(tok.text.char_width(i) for i in range(tok.chars_count()))

    def render(self, start: int, width: int) -> Text:
        result = Text()
        remaining = width
        offsets = self._offsets
        for t, tok in enumerate(self.tokens):
            if offsets[t + 1] <= start:
                continue
            if remaining <= 0:
                break
            local_start = max(0, start - offsets[t])
            end, used = tok.text.fit(local_start, remaining)
            result.append_text(tok.text.render(local_start, remaining, tok.style))
            remaining -= used
            if end < tok.chars_count():
                break
        return result


# =====================================================================
# Tokenizing
# =====================================================================


def tokenize(value: object) -> list[JsonLine]:
    """Pretty-print a parsed JSON *value* into lines of tokens.

    Object members are sorted by key so the output (and every path index
    built from it) is the same for equal documents.

    Raises :class:`~jv._ascii_line.NonAsciiError` for any non-ASCII string
    or key; nothing is returned in that case.
    """
    return [JsonLine(tokens) for tokens in _tokenize(value, 0)]


def parse_json(text: str) -> list[JsonLine]:
    """Parse JSON *text* and tokenize it."""
    return tokenize(json.loads(text))


def _tokenize(value: object, indent: int) -> list[list[JsonToken]]:
    if value is None:
        return [[JsonToken.null()]]
    if isinstance(value, bool):
        return [[JsonToken.boolean(value)]]
    if isinstance(value, (int, float)):
        return [[JsonToken.number(value)]]
    if isinstance(value, str):
        return [[JsonToken.string(value)]]

    if isinstance(value, list):
        if not value:
            return [[JsonToken.array_start(), JsonToken.array_end()]]
        lines = [[JsonToken.array_start()]]
        last = len(value) - 1
        for i, item in enumerate(value):
            children = _tokenize(item, indent + INDENT)
            children[0].insert(0, JsonToken.ws(indent + INDENT))
            if i < last:
                children[-1].append(JsonToken.comma())
            lines.extend(children)
        lines.append(_closing(indent, JsonToken.array_end()))
        return lines

    if isinstance(value, dict):
        if not value:
            return [[JsonToken.object_start(), JsonToken.object_end()]]
        lines = [[JsonToken.object_start()]]
        items = sorted(value.items(), key=lambda kv: kv[0])
        last = len(items) - 1
        for i, (key, item) in enumerate(items):
            children = _tokenize(item, indent + INDENT)
            children[0][:0] = [
                JsonToken.ws(indent + INDENT),
                JsonToken.object_key(key),
                JsonToken.colon(),
                JsonToken.ws(1),
            ]
            if i < last:
                children[-1].append(JsonToken.comma())
            lines.extend(children)
        lines.append(_closing(indent, JsonToken.object_end()))
        return lines

    raise TypeError(f"cannot tokenize value of type {type(value).__name__}")


def _closing(indent: int, end: JsonToken) -> list[JsonToken]:
    if indent:
        return [JsonToken.ws(indent), end]
    return [end]
