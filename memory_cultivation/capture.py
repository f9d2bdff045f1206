"""Pre-commit capture: write one memory per commit on feature branches."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from pathlib import Path, PurePosixPath

import typer

from memory_cultivation.ai.command import AICommandRunner
from memory_cultivation.ai.summaries import AIRunner, summarize_diff
from memory_cultivation.config.loader import load_config
from memory_cultivation.config.schema import Config
from memory_cultivation.git import DEFAULT_BRANCHES, GitClient
from memory_cultivation.logging import get_logger
from memory_cultivation.memory.store import MemoryStore, generate_file_name
from memory_cultivation.utils.helpers import safe_filename

logger = get_logger(__name__)


def is_cultivate_commit(staged_files: list[str], memory_directory: str = ".memory") -> bool:
    """True when every staged path is an instruction file or a memory record."""
    if not staged_files:
        return False
    prefix = PurePosixPath(memory_directory.strip("/")).as_posix() + "/"
    return all("INSTRUCTIONS" in path or path.startswith(prefix) for path in staged_files)


def memory_file_prefix(branch: str, when: datetime) -> str:
    return f"{safe_filename(branch)}-{when.strftime('%H%M%S')}"


def run_capture(
    *,
    root: Path,
    config: Config | None = None,
    git: GitClient | None = None,
    runner: AIRunner | None = None,
    clock: Callable[[], datetime] = datetime.now,
) -> int:
    """Hook entry point; returns the process exit code."""
    try:
        config = config or load_config(root=root)
        git = git or GitClient(cwd=root)

        branch = git.current_branch()
        if branch in DEFAULT_BRANCHES:
            typer.echo(f"On {branch} branch, skipping memory generation")
            return 0

        if is_cultivate_commit(git.staged_files(), config.memory_directory):
            typer.echo("Cultivate commit detected, skipping memory generation")
            return 0

        diff = git.staged_diff()
        if not diff.strip():
            typer.echo("No staged changes, skipping memory generation")
            return 0

        typer.echo("Generating memory summary...")
        summary = summarize_diff(diff, config=config, runner=runner or AICommandRunner(config, cwd=root))

        when = clock()
        store = MemoryStore(config.memory_path(root))
        path = store.save_memory(generate_file_name(memory_file_prefix(branch, when), when), summary)
        logger.info("Memory captured", path=str(path), branch=branch)
        typer.echo(f"Memory saved to {path}")
        return 0
    except Exception as e:
        logger.exception("Memory capture failed")
        typer.echo(f"Pre-commit hook error: {e}", err=True)
        return 1
