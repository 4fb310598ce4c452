"""
Code block extractor — isolates the code payload from a model reply.

Models tend to wrap the file in a fenced block and surround it with
commentary.  Only the lines strictly between the first fence and the
next one are kept; a reply without any fence yields an empty document.
"""

from __future__ import annotations

import logging

from .document import Document, split_lines

logger = logging.getLogger(__name__)

FENCE = "```"


def _is_fence(line: str) -> bool:
    return line.lstrip().startswith(FENCE)


def has_fence(reply: str) -> bool:
    """Return True if *reply* contains at least one fence marker line."""
    return any(_is_fence(line) for line in split_lines(reply))


def extract_code_block(reply: str) -> Document:
    """Return the lines of the first fenced code block in *reply*.

    The opening fence may carry a language tag.  Without a closing fence
    everything up to the end of the reply is collected.
    """
    lines = split_lines(reply)
    start = next((i for i, line in enumerate(lines) if _is_fence(line)), None)
    if start is None:
        logger.debug("[Extract] No fence marker in reply (%d lines)", len(lines))
        return Document()

    collected: list[str] = []
    for line in lines[start + 1:]:
        if _is_fence(line):
            break
        collected.append(line)
    else:
        logger.debug("[Extract] Unterminated code block, collected to end of reply")

    logger.debug("[Extract] Extracted %d lines from line %d", len(collected), start + 1)
    return Document.from_lines(collected)


def extract_code(reply: str) -> str:
    """Joined-text form of :func:`extract_code_block`."""
    return extract_code_block(reply).text
