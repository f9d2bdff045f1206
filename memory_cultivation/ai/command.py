"""External AI command-line invocation."""

from __future__ import annotations

import os
import shlex
import subprocess
import tempfile
from dataclasses import dataclass
from pathlib import Path

from memory_cultivation.config.schema import DEFAULT_COMMAND, DEFAULT_COMMAND_ARGS, Config
from memory_cultivation.errors import AICommandError
from memory_cultivation.logging import get_logger

logger = get_logger(__name__)

DEFAULT_PROMPTS = {
    "summarize": (
        "Review the attached diff and write a brief summary of the changes, focusing on 2 types of "
        "changes: behavioral (new functionality) and structural (refactors, style changes, etc.)"
    ),
    "consolidate": (
        "You are reviewing accumulated memories from code commits to help improve AI assistant "
        "instructions. Review the memories and suggest specific additions or improvements to the instructions."
    ),
    "consolidate-batch": (
        "You are consolidating a batch of memories captured from code commits. Merge them into a single "
        "concise memory that keeps every behavioral change, decision and recurring pattern, and drops "
        "duplicated or transient details. Reply with the consolidated memory only."
    ),
}


@dataclass(frozen=True)
class AICommand:
    """Resolved executable + arguments for one operation."""

    executable: str
    args: list[str]

    @property
    def argv(self) -> list[str]:
        return [self.executable, *self.args]


def resolve_command(config: Config | None, operation: str | None = None) -> AICommand:
    """
    Resolve the AI command for *operation*.

    The command may carry embedded arguments (``"gh copilot"``); these come
    before the configured args. Operation-level ``commandArgs`` replace the
    base args. An empty command string is rejected.
    """
    if config is None:
        return AICommand(DEFAULT_COMMAND, list(DEFAULT_COMMAND_ARGS))

    base_command = config.ai.command
    if not base_command or not base_command.strip():
        raise ValueError("AI command cannot be empty")

    args = list(config.ai.command_args)
    op_config = config.ai.operations.get(operation) if operation else None
    if op_config is not None and op_config.command_args is not None:
        args = list(op_config.command_args)

    parts = shlex.split(base_command)
    return AICommand(parts[0], [*parts[1:], *args])


def get_prompt(config: Config | None, operation: str) -> str:
    """Operation prompt: config override, else built-in default, else the summarize prompt."""
    if config is not None:
        op_config = config.ai.operations.get(operation)
        if op_config is not None and op_config.prompt:
            return op_config.prompt
    return DEFAULT_PROMPTS.get(operation, DEFAULT_PROMPTS["summarize"])


def _format_failure(command: AICommand, returncode: int, stderr: str) -> str:
    detail = stderr.strip()
    message = f"Command failed: {shlex.join(command.argv)} (exit code {returncode})"
    if detail:
        message += f"\n{detail}"
    return message


class AICommandRunner:
    """Run the configured AI tool with the prompt fed from a temp file on stdin."""

    def __init__(self, config: Config | None, *, cwd: Path | None = None):
        self.config = config
        self.cwd = cwd

    @property
    def timeout(self) -> float | None:
        return self.config.ai.timeout if self.config is not None else None

    def run(self, operation: str, prompt: str) -> str:
        """Return the tool's stdout; raise ``AICommandError`` on any execution failure."""
        command = resolve_command(self.config, operation)
        fd, prompt_file = tempfile.mkstemp(prefix="ai-prompt-", suffix=".txt")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fp:
                fp.write(prompt)

            logger.debug(
                "Running AI command",
                operation=operation,
                argv=command.argv,
                prompt_chars=len(prompt),
            )
            with open(prompt_file, encoding="utf-8") as stdin:
                try:
                    completed = subprocess.run(
                        command.argv,
                        stdin=stdin,
                        capture_output=True,
                        text=True,
                        encoding="utf-8",
                        errors="replace",
                        cwd=self.cwd,
                        timeout=self.timeout,
                        check=False,
                    )
                except FileNotFoundError as e:
                    raise AICommandError(f"AI command not found: {command.executable}") from e
                except subprocess.TimeoutExpired as e:
                    raise AICommandError(f"AI command timed out after {self.timeout} seconds") from e
                except OSError as e:
                    raise AICommandError(f"Could not run AI command {command.executable}: {e}") from e
        finally:
            try:
                os.unlink(prompt_file)
            except FileNotFoundError:
                pass

        if completed.returncode != 0:
            logger.warning(
                "AI command failed",
                operation=operation,
                returncode=completed.returncode,
                stderr=completed.stderr[-500:],
            )
            raise AICommandError(
                _format_failure(command, completed.returncode, completed.stderr),
                returncode=completed.returncode,
                stderr=completed.stderr,
            )
        return completed.stdout
