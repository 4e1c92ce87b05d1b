"""Tests for loading files into documents."""

import sys

import pytest

from jv.document import DocumentError, load_document, split_lines, text_document


class TestSplitLines:
    """Plain-text line splitting."""

    def test_unix(self):
        assert split_lines("a\nb\n") == ["a", "b"]

    def test_crlf(self):
        assert split_lines("a\r\nb\r\n") == ["a", "b"]

    def test_no_trailing_newline(self):
        assert split_lines("a\n\nb") == ["a", "", "b"]

    def test_empty(self):
        assert split_lines("") == []


class TestLoadDocument:
    """JSON vs text detection and failures."""

    def test_json_file(self, tmp_path):
        path = tmp_path / "doc.json"
        path.write_text('{"b": [1, 2], "a": null}', encoding="utf-8")
        doc = load_document(path)
        assert doc.is_json
        assert len(doc.lines) == 7
        assert doc.index["#/a"] == (1, 9)
        assert doc.index["#/b/1"] == (4, 8)

    def test_text_file(self, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_text("one\r\ntwo\tcols\n", encoding="utf-8")
        doc = load_document(path)
        assert not doc.is_json
        assert [line.text for line in doc.lines] == ["one", "two\tcols"]
        assert doc.index == {}

    def test_force_text(self, tmp_path):
        path = tmp_path / "doc.json"
        path.write_text('{"a": 1}', encoding="utf-8")
        doc = load_document(path, force_text=True)
        assert not doc.is_json
        assert doc.lines[0].text == '{"a": 1}'

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text('{"a": ', encoding="utf-8")
        with pytest.raises(DocumentError, match="invalid JSON"):
            load_document(path)

    @pytest.mark.skipif(
        not hasattr(sys, "get_int_max_str_digits"), reason="no integer digit limit"
    )
    def test_huge_integer(self, tmp_path):
        path = tmp_path / "big.json"
        path.write_text("[" + "1" * 5000 + "]", encoding="utf-8")
        with pytest.raises(DocumentError, match="invalid JSON"):
            load_document(path)

    def test_deep_nesting(self, tmp_path):
        depth = sys.getrecursionlimit() * 10
        path = tmp_path / "deep.json"
        path.write_text("[" * depth + "]" * depth, encoding="utf-8")
        with pytest.raises(DocumentError, match="nested too deeply"):
            load_document(path)

    def test_uppercase_suffix_is_text(self, tmp_path):
        path = tmp_path / "DOC.JSON"
        path.write_text('{"a": 1}', encoding="utf-8")
        doc = load_document(path)
        assert not doc.is_json
        assert doc.lines[0].text == '{"a": 1}'

    def test_non_ascii_json(self, tmp_path):
        path = tmp_path / "doc.json"
        path.write_text('{"a": "café"}', encoding="utf-8")
        with pytest.raises(DocumentError, match="not ascii"):
            load_document(path)

    def test_non_ascii_text(self, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_text("ok\ncafé\n", encoding="utf-8")
        with pytest.raises(DocumentError, match="café"):
            load_document(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(DocumentError, match="file not found"):
            load_document(tmp_path / "nope.json")

    def test_empty_text(self):
        assert text_document("").lines == []
