"""
Edit session — one request/reconcile/review pass over a single file.

The session only wires collaborators together: where the original text
comes from, how the model is asked, and how the user confirms are all
injected, so a pass can run without a network or a terminal.
"""

from __future__ import annotations

from typing import Callable, Optional

from .cli_display import log
from .editing.extractor import extract_code_block, has_fence
from .editing.line_diff import DEFAULT_FULL_REPLACE_RATIO, compute_merge
from .editing.review import ReviewController, ReviewOutcome

ReadFn = Callable[[str], str]
ReplyFn = Callable[[str], Optional[str]]


def read_text_file(path: str) -> str:
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def build_prompt(instruction: str, file_content: str) -> str:
    """The user message sent to the model: instruction, blank line, file."""
    return f"{instruction}\n\n{file_content}"


class EditSession:
    """Run one edit of one file through the reconciliation pipeline."""

    def __init__(self, request_reply: ReplyFn,
                 controller: ReviewController | None = None,
                 read_original: ReadFn = read_text_file,
                 out: Callable[[str], None] = print,
                 full_replace_ratio: float = DEFAULT_FULL_REPLACE_RATIO,
                 apply_deletions: bool = False,
                 echo_reply: bool = True) -> None:
        self._request_reply = request_reply
        self._controller = controller or ReviewController(out=out)
        self._read_original = read_original
        self._out = out
        self.full_replace_ratio = full_replace_ratio
        self.apply_deletions = apply_deletions
        self.echo_reply = echo_reply

    def reconcile(self, original_text: str, reply: str,
                  path: str) -> ReviewOutcome:
        """Extract, diff and review *reply* against *original_text*."""
        if not has_fence(reply):
            log.warning(f"Model reply for {path} has no fenced code block")
        candidate = extract_code_block(reply)
        merge = compute_merge(
            original_text, candidate,
            full_replace_ratio=self.full_replace_ratio,
            apply_deletions=self.apply_deletions,
        )
        log.info(f"{path}: {merge.strategy.value}, {len(merge.changes)} change(s)")
        return self._controller.review(original_text, merge, path)

    def run(self, path: str, instruction: str) -> ReviewOutcome | None:
        """Read *path*, ask the model, and reconcile its reply.

        Returns None when the model gave no reply.
        """
        original_text = self._read_original(path)
        reply = self._request_reply(build_prompt(instruction, original_text))
        if reply is None:
            log.warning(f"No reply received for {path}")
            self._out("No response received from the API.")
            return None
        if self.echo_reply:
            self._out(f"API Response:\n{reply}")
        return self.reconcile(original_text, reply, path)
