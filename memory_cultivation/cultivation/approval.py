"""Interactive approval of proposed batch consolidations."""

from __future__ import annotations

import sys
from typing import TextIO

import typer

from memory_cultivation.cultivation.types import ApprovalDecision, BatchInfo, ConsolidationResult
from memory_cultivation.errors import InputClosedError

MENU = (
    "Options:\n"
    "  y - Approve consolidation (delete originals, save consolidated)\n"
    "  n - Skip this batch (keep originals)\n"
    "  edit - Write your own summary\n"
    "  retry - Regenerate with AI\n"
)
INVALID_CHOICE = "Invalid choice. Please enter y, n, edit, or retry."


class PromptSession:
    """
    The single operator conversation of one run.

    All questions go through one session so answers are consumed in order from
    one input stream. Close it once when the run ends; closing never closes the
    process's own stdin/stdout.
    """

    def __init__(self, input_stream: TextIO | None = None, output_stream: TextIO | None = None):
        self._in = input_stream if input_stream is not None else sys.stdin
        self._out = output_stream if output_stream is not None else sys.stdout
        self.closed = False

    def __enter__(self) -> PromptSession:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def say(self, text: str = "") -> None:
        typer.echo(text, file=self._out)

    def ask(self, question: str) -> str:
        """Print *question* without newline and return one line of input (newline stripped)."""
        if self.closed:
            raise InputClosedError("Prompt session is closed")
        typer.echo(question, file=self._out, nl=False)
        self._out.flush()
        line = self._in.readline()
        if not line:
            raise InputClosedError("Input closed while waiting for an answer")
        return line.rstrip("\r\n")

    def read_text(self, question: str) -> str:
        """
        Print *question* and read a free-text answer.

        Lines are collected until an empty line or end of input, so an empty
        first line gives an empty answer. End of input before any line raises.
        """
        if self.closed:
            raise InputClosedError("Prompt session is closed")
        typer.echo(question, file=self._out, nl=False)
        self._out.flush()
        lines: list[str] = []
        while True:
            line = self._in.readline()
            if not line:
                if not lines:
                    raise InputClosedError("Input closed while waiting for text")
                break
            line = line.rstrip("\r\n")
            if not line:
                break
            lines.append(line)
        return "\n".join(lines)

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        self._out.flush()


def prompt_for_approval(
    session: PromptSession,
    result: ConsolidationResult,
    batch_info: BatchInfo,
) -> ApprovalDecision:
    """Show the proposal and classify the operator's answer (y / n / edit / retry)."""
    session.say(f"\n=== Batch {batch_info.batch_number}/{batch_info.total_batches} Consolidation ===")
    session.say(f"Files: {batch_info.file_count}")
    session.say(f"\n{result.render()}\n")
    session.say(MENU)

    while True:
        choice = session.ask("Your choice: ").strip().lower()
        if choice == "y":
            return ApprovalDecision.approve()
        if choice == "n":
            return ApprovalDecision.skip()
        if choice == "retry":
            return ApprovalDecision.retry()
        if choice == "edit":
            custom_text = session.read_text("\nEnter your custom summary (end with an empty line):\n")
            return ApprovalDecision.approve(custom_text.strip())
        session.say(INVALID_CHOICE)
