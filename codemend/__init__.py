"""
codemend — ask a language model to edit a file, then reconcile its reply
with the original before anything is written.

Public API for library usage::

    from codemend import extract_code_block, compute_merge, ReviewController

    candidate = extract_code_block(reply)
    merge = compute_merge(original_text, candidate)
    ReviewController().review(original_text, merge, "src/app.py")
"""

from .editing import (
    Document, Change, ChangeKind, MergeResult, MergeStrategy,
    extract_code_block, extract_code, compute_merge, choose_strategy,
    ReviewController, ReviewOutcome, render_changes, console_confirm,
)
from .errors import CodemendError, ApplyError, ConfigError
from .session import EditSession

__version__ = "0.1.0"

__all__ = [
    "Document", "Change", "ChangeKind", "MergeResult", "MergeStrategy",
    "extract_code_block", "extract_code", "compute_merge", "choose_strategy",
    "ReviewController", "ReviewOutcome", "render_changes", "console_confirm",
    "CodemendError", "ApplyError", "ConfigError", "EditSession",
]
