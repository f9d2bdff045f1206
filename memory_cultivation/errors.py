"""Exception types raised across the cultivation workflow."""

from __future__ import annotations


class CultivationError(Exception):
    """Base class for errors this package raises on purpose."""


class AICommandError(CultivationError):
    """The external AI command could not be run or exited non-zero."""

    def __init__(self, message: str, *, returncode: int | None = None, stderr: str = "") -> None:
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


class GitCommandError(CultivationError):
    """A git invocation failed."""

    def __init__(self, args: list[str], returncode: int, stderr: str = "") -> None:
        detail = stderr.strip() or f"exit code {returncode}"
        super().__init__(f"git {' '.join(args)} failed: {detail}")
        self.git_args = args
        self.returncode = returncode
        self.stderr = stderr


class InputClosedError(CultivationError):
    """The operator's input stream ended while an answer was required."""
