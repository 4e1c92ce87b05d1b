"""Path index: canonical ``#/a/0/b`` paths to screen coordinates."""

from __future__ import annotations

from collections.abc import Iterable

from jv._json import CONTAINER_ENDS, CONTAINER_STARTS, VALUE_TAGS, JsonLine, JsonTokenTag

Index = dict[str, tuple[int, int]]

ROOT = "#"
SEPARATOR = "/"


def build_index(lines: Iterable[JsonLine]) -> Index:
    """Map each container start and leaf value in *lines* to ``(row, col)``.

    The token stream is replayed once, left to right. ``col`` is the
    character index of the token within its line, which is what
    :meth:`jv.viewport.Viewport.goto` expects.
    """
    refs: Index = {}
    path: list[str] = [ROOT]
    # per open container: [array index or None, has at least one entry]
    stack: list[list] = []

    for r, line in enumerate(lines):
        c = 0
        for tok in line.tokens:
            tag = tok.tag
            if tag in CONTAINER_STARTS:
                if stack:
                    frame = stack[-1]
                    frame[1] = True
                    if frame[0] is not None:
                        path.append(str(frame[0]))
                _record(refs, path, r, c)
                path.append(SEPARATOR)
                stack.append([0 if tag is JsonTokenTag.ARRAY_START else None, False])
            elif tag in CONTAINER_ENDS:
                _ix, has_entry = stack.pop()
                if has_entry:
                    path.pop()
                path.pop()
            elif tag is JsonTokenTag.COMMA:
                frame = stack[-1]
                frame[1] = True
                if frame[0] is not None:
                    frame[0] += 1
                path.pop()
            elif tag is JsonTokenTag.OBJECT_KEY:
                path.append(tok.text.text[1:-1])
            elif tag in VALUE_TAGS:
                if stack:
                    frame = stack[-1]
                    frame[1] = True
                    if frame[0] is not None:
                        path.append(str(frame[0]))
                _record(refs, path, r, c)
            c += tok.chars_count()

    return refs


def _record(refs: Index, path: list[str], row: int, col: int) -> None:
    key = "".join(path)
    if key == ROOT:
        key = ROOT + SEPARATOR
    # an empty key directly under the root spells "#/" too; the root keeps it
    refs.setdefault(key, (row, col))
