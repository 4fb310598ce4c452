"""
Data model shared by the extractor, the line diff engine and the review
controller.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator


def split_lines(text: str) -> list[str]:
    """Split *text* on ``\\n`` the way most line readers do.

    A trailing ``\\r`` is stripped from every line and the empty segment
    left behind by a final newline is dropped, so ``"a\\n"`` gives
    ``["a"]`` while ``"\\n"`` gives ``[""]``.
    """
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


@dataclass(frozen=True)
class Document:
    """An immutable, ordered sequence of lines."""
    lines: tuple[str, ...] = ()

    @classmethod
    def from_text(cls, text: str) -> "Document":
        return cls(tuple(split_lines(text)))

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "Document":
        return cls(tuple(lines))

    @property
    def text(self) -> str:
        """Lines joined with a single newline; no trailing newline."""
        return "\n".join(self.lines)

    @property
    def line_count(self) -> int:
        return len(self.lines)

    @property
    def is_empty(self) -> bool:
        return not self.lines

    def __len__(self) -> int:
        return len(self.lines)

    def __iter__(self) -> Iterator[str]:
        return iter(self.lines)

    def __getitem__(self, index: int) -> str:
        return self.lines[index]


def as_document(value: "Document | str | Iterable[str]") -> Document:
    """Coerce text or a line iterable into a :class:`Document`."""
    if isinstance(value, Document):
        return value
    if isinstance(value, str):
        return Document.from_text(value)
    return Document.from_lines(value)


class ChangeKind(str, Enum):
    INSERT = "insert"
    DELETE = "delete"
    MODIFY = "modify"


class MergeStrategy(str, Enum):
    POSITIONAL_MERGE = "positional_merge"
    FULL_REPLACE = "full_replace"


@dataclass(frozen=True)
class Change:
    """A single line-level edit.

    ``line_number`` is 1-based: the original position for DELETE and
    MODIFY, the candidate position for INSERT.
    """
    kind: ChangeKind
    line_number: int
    content: str

    def __post_init__(self) -> None:
        if self.line_number < 1:
            raise ValueError(
                f"line_number must be >= 1, got {self.line_number}")


@dataclass(frozen=True)
class MergeResult:
    """Final document text plus the change log that produced it.

    ``changes`` is kept in discovery order (modifications, then
    insertions, then deletions), not sorted by position.
    """
    text: str
    changes: tuple[Change, ...] = field(default_factory=tuple)
    strategy: MergeStrategy = MergeStrategy.POSITIONAL_MERGE

    @property
    def document(self) -> Document:
        return Document.from_text(self.text)

    @property
    def has_changes(self) -> bool:
        return bool(self.changes)

    def _count(self, kind: ChangeKind) -> int:
        return sum(1 for c in self.changes if c.kind is kind)

    @property
    def inserts(self) -> int:
        return self._count(ChangeKind.INSERT)

    @property
    def deletes(self) -> int:
        return self._count(ChangeKind.DELETE)

    @property
    def modifies(self) -> int:
        return self._count(ChangeKind.MODIFY)
