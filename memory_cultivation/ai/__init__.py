"""External AI tool integration."""

from memory_cultivation.ai.command import AICommandRunner, get_prompt, resolve_command
from memory_cultivation.ai.summaries import (
    AIRunner,
    format_memories,
    generate_consolidation_suggestions,
    summarize_diff,
)

__all__ = [
    "AICommandRunner",
    "AIRunner",
    "format_memories",
    "generate_consolidation_suggestions",
    "get_prompt",
    "resolve_command",
    "summarize_diff",
]
