"""Loading files into displayable lines."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from jv._ascii_line import AsciiLine, NonAsciiError
from jv._index import Index, build_index
from jv._json import JsonLine, tokenize

logger = logging.getLogger(__name__)


class DocumentError(Exception):
    """A file that cannot be shown; nothing of it is displayed."""


@dataclass
class Document:
    lines: list[AsciiLine] | list[JsonLine]
    index: Index = field(default_factory=dict)
    is_json: bool = False


def is_json_path(path: str | Path) -> bool:
    return str(path).endswith("json")


def split_lines(text: str) -> list[str]:
    """Split on ``\\n``, dropping a trailing ``\\r`` and a final empty line."""
    if not text:
        return []
    parts = text.split("\n")
    if parts[-1] == "":
        parts.pop()
    return [p[:-1] if p.endswith("\r") else p for p in parts]


def json_document(content: str) -> Document:
    try:
        value = json.loads(content)
    except json.JSONDecodeError as exc:
        raise DocumentError(f"invalid JSON: {exc.msg} (line {exc.lineno})") from exc
    except RecursionError as exc:
        raise DocumentError("JSON is nested too deeply") from exc
    except ValueError as exc:
        # e.g. integers past the interpreter's digit limit
        raise DocumentError(f"invalid JSON: {exc}") from exc
    try:
        lines = tokenize(value)
    except NonAsciiError as exc:
        raise DocumentError(f"{exc.text!r} is not ascii") from exc
    except RecursionError as exc:
        raise DocumentError("JSON is nested too deeply") from exc
    return Document(lines=lines, index=build_index(lines), is_json=True)


def text_document(content: str) -> Document:
    try:
        lines = [AsciiLine(line) for line in split_lines(content)]
    except NonAsciiError as exc:
        raise DocumentError(f"{exc.text!r} is not ascii") from exc
    return Document(lines=lines)


def load_document(path: str | Path, *, force_text: bool = False) -> Document:
    """Read *path* as JSON (by file name) or as plain ASCII text."""
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise DocumentError(f"file not found: {path}") from exc
    except UnicodeDecodeError as exc:
        raise DocumentError(f"{path} is not valid UTF-8") from exc
    except OSError as exc:
        raise DocumentError(f"cannot open {path}: {exc.strerror}") from exc

    as_json = is_json_path(path) and not force_text
    try:
        doc = json_document(content) if as_json else text_document(content)
    except DocumentError as exc:
        logger.warning("failed to load %s: %s", path, exc)
        raise
    logger.info(
        "loaded %s as %s: %d lines, %d indexed paths",
        path,
        "json" if doc.is_json else "text",
        len(doc.lines),
        len(doc.index),
    )
    return doc
