"""
Review & apply — show a merge's change log, ask for approval, and write the
merged text back to the target file when the user accepts.

Confirmation is an injected ``confirm(question) -> bool`` callable so the
controller can be driven without a terminal.  Two providers ship here: a
blocking console prompt and a Textual approve/reject viewer.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable

from ..errors import ApplyError
from .document import Change, ChangeKind, MergeResult, MergeStrategy

logger = logging.getLogger(__name__)

ConfirmFn = Callable[[str], bool]

APPLY_QUESTION = "Do you want to apply these changes? (y/n)"

_RESET = "\033[0m"
_KIND_STYLE = {
    ChangeKind.INSERT: ("+", "\033[32m", "green"),
    ChangeKind.DELETE: ("-", "\033[31m", "red"),
    ChangeKind.MODIFY: ("~", "\033[33m", "yellow"),
}


@dataclass(frozen=True)
class ReviewOutcome:
    """What happened to a reviewed merge."""
    applied: bool
    path: str
    change_count: int
    strategy: MergeStrategy


def render_change(change: Change, color: bool = True) -> str:
    """Render one change as ``<marker> L<n>: <content>``."""
    marker, ansi, _ = _KIND_STYLE[change.kind]
    line = f"{marker} L{change.line_number}: {change.content}"
    return f"{ansi}{line}{_RESET}" if color else line


def render_changes(changes: Iterable[Change], color: bool = True) -> list[str]:
    """Render changes in their recorded order."""
    return [render_change(c, color=color) for c in changes]


def _format_rich_change(change: Change) -> str:
    """Rich markup for the Textual viewer."""
    marker, _, style = _KIND_STYLE[change.kind]
    escaped = change.content.replace("[", "\\[")
    return f"[{style}]{marker} L{change.line_number}: {escaped}[/{style}]"


def is_affirmative(answer: str | None) -> bool:
    """Only a (case-insensitive) ``y`` counts as yes."""
    return answer is not None and answer.strip().lower() == "y"


def console_confirm(question: str) -> bool:
    """Print *question* and block on one line of input."""
    print(f"\n{question}")
    try:
        answer = input()
    except (EOFError, KeyboardInterrupt):
        return False
    return is_affirmative(answer)


def write_document(path: str, text: str) -> None:
    """Overwrite *path* with *text*.  Not atomic; no rollback on failure."""
    try:
        with open(path, "w", encoding="utf-8") as f:
            f.write(text)
    except OSError as exc:
        logger.error("[Review] Write failed for %s: %s", path, exc)
        raise ApplyError(path, str(exc)) from exc


class ReviewController:
    """Render a merge result, ask for confirmation and apply it."""

    def __init__(self, confirm: ConfirmFn = console_confirm,
                 out: Callable[[str], None] = print,
                 color: bool = True,
                 confirm_factory: Callable[[MergeResult, str], ConfirmFn] | None = None) -> None:
        self._confirm = confirm
        self._confirm_factory = confirm_factory
        self._out = out
        self._color = color

    def show(self, merge: MergeResult) -> None:
        self._out("\nProposed changes:")
        self._out("------------------")
        if not merge.changes:
            self._out("No changes detected.")
            return
        for line in render_changes(merge.changes, color=self._color):
            self._out(line)

    def review(self, original_text: str, merge: MergeResult,
               path: str) -> ReviewOutcome:
        """Show *merge*, confirm, and write it to *path* on approval.

        Raises
        ------
        ApplyError
            The user accepted but the file could not be written.
        """
        self.show(merge)
        confirm = (self._confirm_factory(merge, path)
                   if self._confirm_factory else self._confirm)
        accepted = confirm(APPLY_QUESTION)
        outcome = ReviewOutcome(
            applied=accepted, path=path,
            change_count=len(merge.changes), strategy=merge.strategy,
        )

        if not accepted:
            logger.info("[Review] Discarded %d change(s) for %s",
                        len(merge.changes), path)
            self._out("Changes discarded.")
            return outcome

        if merge.text == original_text:
            logger.info("[Review] Merged text identical to %s, rewriting anyway", path)
        write_document(path, merge.text)
        logger.info("[Review] Applied %d change(s) to %s (%s)",
                    len(merge.changes), path, merge.strategy.value)
        self._out("Changes applied successfully.")
        return outcome


# ══════════════════════════════════════════════════════════════════
#  Interactive approval — Textual TUI
# ══════════════════════════════════════════════════════════════════

def textual_confirm_factory(merge: MergeResult, path: str) -> ConfirmFn:
    """Build a confirm callable that shows *merge* in a Textual viewer.

    Falls back to :func:`console_confirm` if the viewer cannot run.
    """
    def _confirm(question: str) -> bool:
        try:
            return _textual_review(merge, path)
        except Exception as e:
            logger.warning("[Review] Textual viewer failed: %s", e)
        return console_confirm(question)

    return _confirm


def _textual_review(merge: MergeResult, path: str) -> bool:
    """Launch a Textual app showing the change log and wait for a decision."""
    from textual.app import App, ComposeResult
    from textual.binding import Binding
    from textual.containers import Horizontal, VerticalScroll
    from textual.widgets import Button, Footer, Static

    class ChangeReviewApp(App):
        """Change log viewer with approve/reject."""

        CSS = """
        #title-bar {
            dock: top;
            height: 3;
            background: #1a1a2e;
            color: #e94560;
            text-align: center;
            padding: 1;
            text-style: bold;
        }
        #change-scroll {
            height: 1fr;
            margin: 1 2;
            border: round #444;
            padding: 1;
        }
        #action-buttons {
            dock: bottom;
            height: 3;
            align: center middle;
        }
        #action-buttons Button {
            margin: 0 2;
            min-width: 20;
        }
        """

        BINDINGS = [
            Binding("y", "approve", "Apply"),
            Binding("n", "reject", "Discard"),
            Binding("escape", "reject", "Discard"),
        ]

        def __init__(self) -> None:
            super().__init__()
            self._approved = False

        def compose(self) -> ComposeResult:
            yield Static(
                f" {path}: {len(merge.changes)} change(s), "
                f"{merge.strategy.value.replace('_', ' ')} ",
                id="title-bar",
            )
            with VerticalScroll(id="change-scroll"):
                if merge.changes:
                    yield Static("\n".join(
                        _format_rich_change(c) for c in merge.changes))
                else:
                    yield Static("No changes detected.")
            with Horizontal(id="action-buttons"):
                yield Button("Apply", id="approve-btn", variant="success")
                yield Button("Discard", id="reject-btn", variant="error")
            yield Footer()

        def on_button_pressed(self, event: Button.Pressed) -> None:
            self._approved = event.button.id == "approve-btn"
            self.exit()

        def action_approve(self) -> None:
            self._approved = True
            self.exit()

        def action_reject(self) -> None:
            self._approved = False
            self.exit()

    app = ChangeReviewApp()
    app.run()
    return app._approved
