"""Response reconciliation — extract, diff, review and apply model edits."""

from .document import (
    Document, Change, ChangeKind, MergeResult, MergeStrategy, split_lines,
)
from .extractor import extract_code_block, extract_code, has_fence
from .line_diff import (
    compute_merge, choose_strategy, positional_merge, full_replace,
    DEFAULT_FULL_REPLACE_RATIO,
)
from .review import (
    ReviewController, ReviewOutcome, render_changes, console_confirm,
    textual_confirm_factory, write_document,
)

__all__ = [
    "Document", "Change", "ChangeKind", "MergeResult", "MergeStrategy",
    "split_lines",
    "extract_code_block", "extract_code", "has_fence",
    "compute_merge", "choose_strategy", "positional_merge", "full_replace",
    "DEFAULT_FULL_REPLACE_RATIO",
    "ReviewController", "ReviewOutcome", "render_changes", "console_confirm",
    "textual_confirm_factory", "write_document",
]
