"""Produce one consolidated text per batch via the AI tool."""

from __future__ import annotations

from pathlib import Path

from memory_cultivation.ai.command import get_prompt
from memory_cultivation.ai.summaries import AIRunner, format_memories
from memory_cultivation.config.schema import Config
from memory_cultivation.cultivation.types import ConsolidationResult, Err, Ok
from memory_cultivation.logging import get_logger
from memory_cultivation.memory.store import MemoryStore

logger = get_logger(__name__)

OPERATION = "consolidate-batch"


def summarize_batch(
    files: list[Path],
    config: Config | None,
    *,
    store: MemoryStore,
    runner: AIRunner,
) -> ConsolidationResult:
    """Consolidate *files* into one text. Failures come back as ``Err``, never raised."""
    memories: list[str] = []
    for file in files:
        try:
            memories.append(store.read_content(file))
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Batch file unreadable", path=str(file), error=str(e))
            return Err(f"Error reading file {file}: {getattr(e, 'strerror', None) or e}")

    try:
        prompt = f"{get_prompt(config, OPERATION)}\n\n{format_memories(memories)}"
        logger.debug("Consolidating batch", file_count=len(files), prompt_chars=len(prompt))
        return Ok(runner.run(OPERATION, prompt))
    except Exception as e:
        logger.warning("Batch consolidation failed", file_count=len(files), error=str(e))
        return Err(f"Error consolidating batch: {e}")
