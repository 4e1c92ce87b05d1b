"""Parsing of the ``:`` goto and ``#`` query prompts."""

from __future__ import annotations

from collections.abc import Mapping


class MalformedCommand(ValueError):
    """A goto or query string that cannot be parsed."""


class PathNotFound(LookupError):
    """A well-formed query that names no value of the document."""

    def __init__(self, path: str) -> None:
        super().__init__(f"{path} not found")
        self.path = path


def _parse_number(part: str, text: str) -> int:
    if not (part.isascii() and part.isdecimal()):
        raise MalformedCommand(f"invalid position: {text}")
    return max(0, int(part) - 1)


def parse_goto(text: str, current: tuple[int, int]) -> tuple[int, int]:
    """Parse ``row[:col]`` or ``:col`` (1-based) into a 0-based ``(row, col)``.

    A side that is left out keeps the matching coordinate of *current*.
    """
    text = text.strip()
    parts = text.split(":")
    if len(parts) > 2:
        raise MalformedCommand(f"invalid position: {text}")

    row_part = parts[0]
    col_part = parts[1] if len(parts) == 2 else ""
    if not row_part and not col_part:
        raise MalformedCommand(f"invalid position: {text}")

    row = _parse_number(row_part, text) if row_part else current[0]
    col = _parse_number(col_part, text) if col_part else current[1]
    return row, col


def parse_query(text: str) -> str:
    """Normalize a ``#/a/0/b`` query to the form used as path index key."""
    text = text.strip()
    if not text.startswith("#/"):
        raise MalformedCommand(f"invalid query: {text}")
    if text != "#/" and text.endswith("/"):
        text = text[:-1]
    return text


def resolve_query(index: Mapping[str, tuple[int, int]], text: str) -> tuple[int, int]:
    """Return the ``(row, col)`` the query *text* points at."""
    path = parse_query(text)
    try:
        return index[path]
    except KeyError:
        raise PathNotFound(path) from None
