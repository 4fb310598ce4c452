"""
Line diff engine — compares an original document with a model candidate
and produces a merged document plus an ordered change log.

Two strategies are used, picked by how much the candidate's line count
diverges from the original's:

* **Positional merge**: lines are compared index by index; differing
  lines are overwritten, extra candidate lines appended, and leftover
  original lines reported as deletions.
* **Full replace**: the candidate becomes the new document; the change
  log still lists per-line differences.

There is no alignment step: a line inserted near the top shows up as a
run of modifications, exactly as the index-by-index comparison sees it.
"""

from __future__ import annotations

import logging
from typing import Iterable, Union

from .document import (
    Change, ChangeKind, Document, MergeResult, MergeStrategy, as_document,
)

logger = logging.getLogger(__name__)

DEFAULT_FULL_REPLACE_RATIO = 0.5

DocumentLike = Union[Document, str, Iterable[str]]


def choose_strategy(original_count: int, candidate_count: int,
                    threshold: float = DEFAULT_FULL_REPLACE_RATIO) -> MergeStrategy:
    """Pick the merge strategy for the given line counts.

    An empty original has no meaningful ratio and always gets a full
    replace.
    """
    if original_count == 0:
        return MergeStrategy.FULL_REPLACE
    ratio = candidate_count / original_count
    if ratio > threshold:
        return MergeStrategy.FULL_REPLACE
    return MergeStrategy.POSITIONAL_MERGE


def _trailing_deletes(original: Document, start: int) -> list[Change]:
    return [
        Change(ChangeKind.DELETE, i + 1, original[i])
        for i in range(start, len(original))
    ]


def positional_merge(original: Document, candidate: Document,
                     apply_deletions: bool = False) -> MergeResult:
    """Overwrite the original line by line with the candidate.

    Leftover original lines are reported as DELETE changes but kept in
    the output unless *apply_deletions* is set.
    """
    output = list(original.lines)
    changes: list[Change] = []
    shared = min(len(original), len(candidate))

    for i in range(shared):
        if original[i] != candidate[i]:
            changes.append(Change(ChangeKind.MODIFY, i + 1, candidate[i]))
            output[i] = candidate[i]

    for i in range(shared, len(candidate)):
        changes.append(Change(ChangeKind.INSERT, i + 1, candidate[i]))
        output.append(candidate[i])

    changes.extend(_trailing_deletes(original, shared))
    if apply_deletions:
        del output[len(candidate):]

    return MergeResult(text="\n".join(output), changes=tuple(changes),
                       strategy=MergeStrategy.POSITIONAL_MERGE)


def full_replace(original: Document, candidate: Document) -> MergeResult:
    """Use the candidate as the new document and log what differs."""
    changes: list[Change] = []
    for i, line in enumerate(candidate):
        if i < len(original):
            if original[i] != line:
                changes.append(Change(ChangeKind.MODIFY, i + 1, line))
        else:
            changes.append(Change(ChangeKind.INSERT, i + 1, line))

    changes.extend(_trailing_deletes(original, len(candidate)))
    return MergeResult(text=candidate.text, changes=tuple(changes),
                       strategy=MergeStrategy.FULL_REPLACE)


def compute_merge(original: DocumentLike, candidate: DocumentLike, *,
                  full_replace_ratio: float = DEFAULT_FULL_REPLACE_RATIO,
                  apply_deletions: bool = False) -> MergeResult:
    """Reconcile *candidate* against *original*.

    Parameters
    ----------
    original:
        The current file content, as text, lines, or a Document.
    candidate:
        The extracted model output.  An empty candidate is valid and
        usually yields a log of deletions.
    full_replace_ratio:
        Candidate/original line ratio above which the candidate replaces
        the original outright.
    apply_deletions:
        Drop trailing original lines from a positional merge instead of
        only reporting them.

    Returns
    -------
    MergeResult
        Final text, change log and the strategy that was used.
    """
    original_doc = as_document(original)
    candidate_doc = as_document(candidate)

    strategy = choose_strategy(len(original_doc), len(candidate_doc),
                               full_replace_ratio)
    if strategy is MergeStrategy.FULL_REPLACE:
        result = full_replace(original_doc, candidate_doc)
    else:
        result = positional_merge(original_doc, candidate_doc,
                                  apply_deletions=apply_deletions)

    logger.debug(
        "[Merge] %s: original=%d candidate=%d -> %d modified, %d inserted, "
        "%d deleted",
        strategy.value, len(original_doc), len(candidate_doc),
        result.modifies, result.inserts, result.deletes,
    )
    return result
