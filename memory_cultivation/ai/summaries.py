"""AI-backed text generation with non-raising fallbacks."""

from __future__ import annotations

import re
from typing import Protocol

from memory_cultivation.ai.command import get_prompt
from memory_cultivation.config.schema import Config
from memory_cultivation.logging import get_logger

logger = get_logger(__name__)

_DIFF_FILE_RE = re.compile(r"^diff --git a/.* b/(.*)$")


class AIRunner(Protocol):
    def run(self, operation: str, prompt: str) -> str: ...


def format_memories(memories: list[str]) -> str:
    """Number memories under ``### Memory N`` headings, separated by blank lines."""
    return "\n\n".join(f"### Memory {idx}\n{memory}" for idx, memory in enumerate(memories, start=1))


def _placeholder_summary(diff: str) -> str:
    lines = diff.splitlines()
    added = sum(1 for line in lines if line.startswith("+") and not line.startswith("+++"))
    removed = sum(1 for line in lines if line.startswith("-") and not line.startswith("---"))
    files: list[str] = []
    for line in lines:
        m = _DIFF_FILE_RE.match(line)
        if m and m.group(1) not in files:
            files.append(m.group(1))
    file_lines = "\n".join(f"- {f}" for f in files)
    return (
        "## Summary\n\n"
        f"**Files Changed**: {len(files)}\n"
        f"**Lines Added**: {added}\n"
        f"**Lines Removed**: {removed}\n\n"
        f"**Files**:\n{file_lines}\n\n"
        "**Note**: This is a placeholder summary. Configure an AI command "
        "(e.g. GitHub Copilot CLI) for AI-powered analysis.\n"
    )


def summarize_diff(diff: str, *, config: Config | None, runner: AIRunner) -> str:
    """Summarize a staged diff; falls back to line/file counts if the AI call fails."""
    if not diff or not diff.strip():
        return "## Summary\n\nNo changes detected."

    prompt = f"{get_prompt(config, 'summarize')}\n\nDiff content:\n{diff}"
    try:
        result = runner.run("summarize", prompt)
    except Exception as e:
        logger.warning("Diff summary failed, using placeholder", error=str(e))
        return _placeholder_summary(diff)
    return f"## Summary\n\n{result.strip()}"


def generate_consolidation_suggestions(
    memories: list[str],
    instructions: str,
    *,
    config: Config | None,
    runner: AIRunner,
) -> str:
    """Ask the AI for instruction-file suggestions covering all *memories*; never raises."""
    if not memories:
        return "No memories to consolidate."

    prompt = (
        f"{get_prompt(config, 'consolidate')}\n\n"
        f"**Current Instructions:**\n{instructions or '(No existing instructions)'}\n\n"
        f"**Accumulated Memories:**\n{format_memories(memories)}"
    )
    try:
        return runner.run("consolidate", prompt).strip()
    except Exception as e:
        logger.warning("Suggestion generation failed", error=str(e), memory_count=len(memories))
        return (
            f"Unable to generate AI suggestions (AI command failed: {e}).\n\n"
            f"Please manually review the {len(memories)} memory file(s) and consider:\n"
            "1. Adding recurring patterns to your instructions\n"
            "2. Documenting new learnings\n"
            "3. Updating technical approaches based on changes made"
        )
