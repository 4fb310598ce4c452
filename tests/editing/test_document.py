"""Tests for the Document / Change data model."""

import pytest

from codemend.editing.document import (
    Change, ChangeKind, Document, MergeResult, MergeStrategy, split_lines,
)


class TestSplitLines:
    def test_empty(self):
        assert split_lines("") == []

    def test_trailing_newline_dropped(self):
        assert split_lines("a\nb\n") == ["a", "b"]

    def test_single_newline(self):
        assert split_lines("\n") == [""]

    def test_carriage_returns_stripped(self):
        assert split_lines("a\r\nb") == ["a", "b"]

    def test_blank_lines_kept(self):
        assert split_lines("a\n\nb") == ["a", "", "b"]


class TestDocument:
    def test_text_has_no_trailing_newline(self):
        assert Document.from_text("a\nb\n").text == "a\nb"

    def test_is_immutable(self):
        doc = Document.from_lines(["a"])
        with pytest.raises(AttributeError):
            doc.lines = ("b",)

    def test_len_and_indexing(self):
        doc = Document.from_lines(["x", "y"])
        assert len(doc) == doc.line_count == 2
        assert doc[1] == "y"
        assert list(doc) == ["x", "y"]


class TestChange:
    def test_line_number_must_be_positive(self):
        with pytest.raises(ValueError):
            Change(ChangeKind.INSERT, 0, "x")

    def test_merge_result_counters(self):
        result = MergeResult(
            text="a",
            changes=(
                Change(ChangeKind.MODIFY, 1, "a"),
                Change(ChangeKind.INSERT, 2, "b"),
                Change(ChangeKind.DELETE, 3, "c"),
                Change(ChangeKind.DELETE, 4, "d"),
            ),
            strategy=MergeStrategy.POSITIONAL_MERGE,
        )
        assert (result.modifies, result.inserts, result.deletes) == (1, 1, 2)
        assert result.has_changes
