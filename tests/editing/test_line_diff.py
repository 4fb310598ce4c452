"""Tests for the line diff engine."""

import pytest

from codemend.editing.document import Change, ChangeKind, Document, MergeStrategy
from codemend.editing.line_diff import (
    choose_strategy, compute_merge, full_replace, positional_merge,
)

INSERT, DELETE, MODIFY = ChangeKind.INSERT, ChangeKind.DELETE, ChangeKind.MODIFY


def _doc(*lines):
    return Document.from_lines(lines)


class TestChooseStrategy:
    def test_empty_original_is_full_replace(self):
        assert choose_strategy(0, 0) is MergeStrategy.FULL_REPLACE
        assert choose_strategy(0, 5) is MergeStrategy.FULL_REPLACE

    @pytest.mark.parametrize("original,candidate,expected", [
        (10, 3, MergeStrategy.POSITIONAL_MERGE),
        (10, 5, MergeStrategy.POSITIONAL_MERGE),   # exactly 0.5 is not > 0.5
        (10, 6, MergeStrategy.FULL_REPLACE),
        (3, 3, MergeStrategy.FULL_REPLACE),
        (2, 4, MergeStrategy.FULL_REPLACE),
        (4, 0, MergeStrategy.POSITIONAL_MERGE),
    ])
    def test_ratio_threshold(self, original, candidate, expected):
        assert choose_strategy(original, candidate) is expected

    def test_custom_threshold(self):
        assert choose_strategy(3, 3, threshold=1.0) is MergeStrategy.POSITIONAL_MERGE

    def test_deterministic(self):
        picks = {choose_strategy(7, 4) for _ in range(20)}
        assert len(picks) == 1


class TestPositionalMerge:
    def test_identical_documents_have_no_changes(self):
        doc = _doc("a", "b", "c")
        result = positional_merge(doc, doc)
        assert result.changes == ()
        assert result.text == "a\nb\nc"

    def test_modification_overwrites_line(self):
        result = positional_merge(_doc("a", "b", "c"), _doc("a", "x", "c"))
        assert result.changes == (Change(MODIFY, 2, "x"),)
        assert result.text == "a\nx\nc"

    def test_extra_candidate_lines_are_appended(self):
        result = positional_merge(_doc("a"), _doc("a", "b", "c"))
        assert result.changes == (Change(INSERT, 2, "b"), Change(INSERT, 3, "c"))
        assert result.text == "a\nb\nc"

    def test_deletions_reported_but_not_applied(self):
        result = positional_merge(_doc("a", "b", "c"), _doc("a"))
        assert result.changes == (Change(DELETE, 2, "b"), Change(DELETE, 3, "c"))
        assert result.text == "a\nb\nc"

    def test_apply_deletions_truncates_output(self):
        result = positional_merge(_doc("a", "b", "c"), _doc("z"), apply_deletions=True)
        assert result.changes == (
            Change(MODIFY, 1, "z"), Change(DELETE, 2, "b"), Change(DELETE, 3, "c"))
        assert result.text == "z"

    def test_modifications_logged_before_deletions(self):
        result = positional_merge(_doc("a", "b", "c", "d"), _doc("A", "b"))
        assert [c.kind for c in result.changes] == [MODIFY, DELETE, DELETE]

    def test_line_count_is_max_of_inputs(self):
        for original, candidate in [
            (_doc("a", "b", "c", "d"), _doc("x")),
            (_doc("a"), _doc("x", "y", "z")),
            (_doc("a", "b"), _doc("b", "a")),
        ]:
            result = positional_merge(original, candidate)
            assert len(result.text.split("\n")) == max(len(original), len(candidate))

    def test_shifted_insert_shows_as_modifications(self):
        result = positional_merge(_doc("a", "b"), _doc("new", "a", "b"))
        assert result.changes == (
            Change(MODIFY, 1, "new"), Change(MODIFY, 2, "a"), Change(INSERT, 3, "b"))


class TestFullReplace:
    def test_text_equals_candidate(self):
        result = full_replace(_doc("a", "b", "c"), _doc("x", "b"))
        assert result.text == "x\nb"
        assert result.changes == (Change(MODIFY, 1, "x"), Change(DELETE, 3, "c"))

    def test_equal_lines_emit_nothing(self):
        result = full_replace(_doc("a", "b"), _doc("a", "b", "c"))
        assert result.changes == (Change(INSERT, 3, "c"),)

    def test_empty_original(self):
        result = full_replace(Document(), _doc("a", "b"))
        assert result.changes == (Change(INSERT, 1, "a"), Change(INSERT, 2, "b"))
        assert result.text == "a\nb"


class TestComputeMerge:
    def test_scenario_single_modification(self):
        result = compute_merge(["a", "b", "c"], ["a", "x", "c"])
        assert result.strategy is MergeStrategy.FULL_REPLACE  # ratio 1.0 > 0.5
        assert result.changes == (Change(MODIFY, 2, "x"),)
        assert result.text == "a\nx\nc"

    def test_scenario_growth_uses_full_replace(self):
        result = compute_merge(["a", "b"], ["a", "b", "c", "d"])
        assert result.strategy is MergeStrategy.FULL_REPLACE
        assert Change(INSERT, 3, "c") in result.changes
        assert Change(INSERT, 4, "d") in result.changes
        assert result.text == "a\nb\nc\nd"

    def test_scenario_shrink_keeps_original_lines(self):
        original = [f"line {i}" for i in range(1, 11)]
        candidate = ["line 1", "line 2", "line 3"]
        result = compute_merge(original, candidate)

        assert result.strategy is MergeStrategy.POSITIONAL_MERGE
        assert [c.line_number for c in result.changes] == list(range(4, 11))
        assert all(c.kind is DELETE for c in result.changes)
        assert result.text.split("\n") == original

    def test_identical_text_under_raised_threshold(self):
        text = "x = 1\ny = 2\n"
        result = compute_merge(text, text, full_replace_ratio=2.0)
        assert result.strategy is MergeStrategy.POSITIONAL_MERGE
        assert result.changes == ()
        assert result.text == "x = 1\ny = 2"

    def test_full_replace_text_is_candidate(self):
        candidate = Document.from_lines(["q", "r", "s"])
        result = compute_merge(["a", "b", "c", "d"], candidate)
        assert result.text == candidate.text

    def test_empty_candidate_reports_deletes(self):
        result = compute_merge("a\nb\n", Document())
        assert result.strategy is MergeStrategy.POSITIONAL_MERGE
        assert result.changes == (Change(DELETE, 1, "a"), Change(DELETE, 2, "b"))
        assert result.text == "a\nb"

    def test_both_empty(self):
        result = compute_merge("", "")
        assert result.changes == ()
        assert result.text == ""

    def test_accepts_text_inputs(self):
        result = compute_merge("a\nb\nc\n", "a\nB\nc\n")
        assert result.changes == (Change(MODIFY, 2, "B"),)
