"""Thin git wrapper used by capture and cleanup."""

from __future__ import annotations

import subprocess
from pathlib import Path

from memory_cultivation.errors import GitCommandError
from memory_cultivation.logging import get_logger

logger = get_logger(__name__)

DEFAULT_BRANCHES = frozenset({"main", "master"})


class GitClient:
    """Run git commands in a working tree."""

    def __init__(self, cwd: Path | None = None):
        self.cwd = cwd

    def _run(self, *args: str) -> str:
        try:
            completed = subprocess.run(
                ["git", *args],
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                cwd=self.cwd,
                check=False,
            )
        except FileNotFoundError as e:
            raise GitCommandError(list(args), 127, "git executable not found") from e
        if completed.returncode != 0:
            raise GitCommandError(list(args), completed.returncode, completed.stderr)
        return completed.stdout

    def current_branch(self) -> str:
        return self._run("rev-parse", "--abbrev-ref", "HEAD").strip()

    def staged_files(self) -> list[str]:
        out = self._run("diff", "--cached", "--name-only")
        return [line for line in out.splitlines() if line.strip()]

    def staged_diff(self) -> str:
        """Staged diff excluding markdown, so memory/instruction files never feed back in."""
        return self._run("diff", "--cached", "--", ".", ":(exclude)*.md")

    def stage_and_commit(self, paths: list[str], message: str) -> None:
        self._run("add", "--all", "--", *paths)
        self._run("commit", "-m", message)
        logger.info("Committed", paths=paths, message=message)
