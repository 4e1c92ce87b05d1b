"""Tests for the path index."""

import json

import pytest

from jv._index import build_index
from jv._json import CONTAINER_STARTS, VALUE_TAGS, parse_json, tokenize


def index_of(value) -> dict:
    return build_index(tokenize(value))


def indexed_token_count(lines) -> int:
    return sum(
        1
        for line in lines
        for tok in line.tokens
        if tok.tag in CONTAINER_STARTS or tok.tag in VALUE_TAGS
    )


class TestBuildIndex:
    """Paths and coordinates."""

    def test_object_document(self):
        index = index_of({"a": [1, 2], "b": {"c": None}, "d": "#/a/0"})
        assert index == {
            "#/": (0, 0),
            "#/a": (1, 9),
            "#/a/0": (2, 8),
            "#/a/1": (3, 8),
            "#/b": (5, 9),
            "#/b/c": (6, 13),
            "#/d": (8, 9),
        }

    def test_array_document(self):
        index = index_of([[1], [], 2])
        assert index == {
            "#/": (0, 0),
            "#/0": (1, 4),
            "#/0/0": (2, 8),
            "#/1": (4, 4),
            "#/2": (5, 4),
        }

    def test_scalar_root(self):
        assert index_of(5) == {"#/": (0, 0)}
        assert index_of("#/x") == {"#/": (0, 0)}

    def test_empty_root(self):
        assert index_of({}) == {"#/": (0, 0)}
        assert index_of([]) == {"#/": (0, 0)}

    def test_container_as_last_member(self):
        """Closing a container whose last member is itself a container."""
        index = index_of({"x": {"a": [1]}, "y": 2})
        assert index["#/x/a/0"] == (3, 12)
        assert index["#/y"] == (6, 9)
        assert "#/xy" not in index

    def test_deep_arrays(self):
        index = index_of([[[1, 2]], 3])
        assert index["#/0/0/1"] == (4, 12)
        assert index["#/1"] == (7, 4)

    def test_object_in_array(self):
        index = index_of([{"a": 1}, {"a": 2}])
        assert index["#/0/a"] == (2, 13)
        assert index["#/1/a"] == (5, 13)

    def test_empty_key_keeps_root(self):
        index = index_of({"": 1})
        assert index["#/"] == (0, 0)

    @pytest.mark.parametrize(
        "text",
        [
            "[1,null,true]",
            '{"b":1,"a":2}',
            '{"a" : [1,2,3, {"hello-world": null}]}',
            '{"x": [[], {}, [{}], {"y": [1, {"z": "#/x"}]}], "w": false}',
            '"just a string"',
        ],
    )
    def test_one_entry_per_container_and_leaf(self, text):
        lines = parse_json(text)
        index = build_index(lines)
        assert len(index) == indexed_token_count(lines)
        assert index["#/"] == (0, 0)

    def test_coordinates_point_at_tokens(self):
        value = {"list": [10, "s", {"k": None}], "flag": True}
        lines = tokenize(value)
        index = build_index(lines)
        for path, (row, col) in index.items():
            line = lines[row]
            starts = []
            c = 0
            for tok in line.tokens:
                starts.append((c, tok))
                c += tok.chars_count()
            tok = next(tok for c, tok in starts if c == col)
            assert tok.tag in CONTAINER_STARTS or tok.tag in VALUE_TAGS, path

    def test_every_value_reachable(self):
        value = json.loads('{"a": {"b": [1, [2, 3]]}, "c": "#/a"}')
        index = index_of(value)
        for path in ("#/a", "#/a/b", "#/a/b/0", "#/a/b/1", "#/a/b/1/0", "#/a/b/1/1", "#/c"):
            assert path in index
