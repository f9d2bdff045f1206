"""Cultivation run: batch consolidation, final analysis, optional cleanup."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import Path

import typer

from memory_cultivation.ai.command import AICommandRunner
from memory_cultivation.ai.summaries import AIRunner, generate_consolidation_suggestions
from memory_cultivation.config.loader import load_config
from memory_cultivation.config.schema import Config
from memory_cultivation.cultivation.approval import PromptSession, prompt_for_approval
from memory_cultivation.cultivation.batching import get_batches
from memory_cultivation.cultivation.persister import save_consolidated_memory
from memory_cultivation.cultivation.summarizer import summarize_batch
from memory_cultivation.cultivation.types import (
    ApprovalDecision,
    Batch,
    BatchInfo,
    ConsolidationResult,
    Err,
)
from memory_cultivation.git import GitClient
from memory_cultivation.logging import get_logger
from memory_cultivation.memory.store import MemoryStore, read_instructions

logger = get_logger(__name__)

CLEANUP_COMMIT_MESSAGE = "chore: clean up memory files after cultivation"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CultivationOrchestrator:
    """
    Drive one cultivation run.

    Collaborators are injected so tests can supply a scripted session, a fake
    AI runner and a fixed clock. The session is closed exactly once, when
    ``run`` returns.
    """

    def __init__(
        self,
        *,
        root: Path,
        session: PromptSession,
        config: Config | None = None,
        runner: AIRunner | None = None,
        git: GitClient | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.root = root
        self.session = session
        self.config = config
        self.runner = runner
        self.git = git or GitClient(cwd=root)
        self.clock = clock

    def run(self) -> int:
        """Return 0 on completion (including nothing to do), 1 on any unhandled error."""
        try:
            return self._run()
        except Exception as e:
            logger.exception("Cultivation failed")
            typer.echo(f"Cultivation error: {e}", err=True)
            return 1
        finally:
            self.session.close()

    def _run(self) -> int:
        say = self.session.say
        say("=== Memory Cultivation ===\n")

        config = self.config or load_config(root=self.root)
        runner = self.runner or AICommandRunner(config, cwd=self.root)
        store = MemoryStore(config.memory_path(self.root))

        memory_files = store.list_identifiers()
        memories = [store.read_content(path) for path in memory_files]
        instructions = read_instructions(config.instruction_paths(self.root))

        if not memories:
            say("No memory files found. Nothing to cultivate.")
            return 0

        say(f"Found {len(memories)} memory file(s)\n")

        remaining = self.run_batch_consolidation(memory_files, config=config, store=store, runner=runner)
        # Any replaced batch changes the identifier list, so reload from disk.
        final_memories = store.read_all() if remaining != memory_files else memories

        self._show_final_analysis(final_memories, instructions, config=config, runner=runner)
        self._offer_cleanup(store)
        return 0

    def run_batch_consolidation(
        self,
        memory_files: list[Path],
        *,
        config: Config,
        store: MemoryStore,
        runner: AIRunner,
    ) -> list[Path]:
        """Consolidate in batches when over the threshold; return the surviving identifiers in order."""
        batch_size = config.cultivation.batch_size
        if len(memory_files) <= batch_size:
            return list(memory_files)

        self.session.say("\n=== Phase 1: Batch Consolidation ===")
        self.session.say(f"You have {len(memory_files)} memories. Let's consolidate them in batches.\n")

        batches = get_batches(memory_files, batch_size)
        logger.info("Batch consolidation started", memory_count=len(memory_files), batch_count=len(batches))

        remaining: list[Path] = []
        for batch in batches:
            remaining.extend(self.process_batch(batch, len(batches), config=config, store=store, runner=runner))
        return remaining

    def process_batch(
        self,
        batch: Batch,
        total_batches: int,
        *,
        config: Config,
        store: MemoryStore,
        runner: AIRunner,
    ) -> list[Path]:
        batch_info = BatchInfo(
            batch_number=batch.batch_number,
            total_batches=total_batches,
            file_count=len(batch.files),
        )
        attempt = 0
        while True:
            attempt += 1
            self.session.say(
                f"\n⏳ Processing batch {batch.batch_number}/{total_batches} ({len(batch.files)} memories)..."
            )
            result = summarize_batch(batch.files, config, store=store, runner=runner)
            decision = prompt_for_approval(self.session, result, batch_info)
            logger.debug(
                "Batch decision",
                batch_number=batch.batch_number,
                action=decision.action,
                attempt=attempt,
                failed=isinstance(result, Err),
            )
            if decision.action != "retry":
                return self.apply_decision(decision, result, batch, store=store)

    def apply_decision(
        self,
        decision: ApprovalDecision,
        result: ConsolidationResult,
        batch: Batch,
        *,
        store: MemoryStore,
    ) -> list[Path]:
        """Carry the batch forward (skip) or replace it with one consolidated record (approve)."""
        if decision.action == "skip":
            self.session.say(f"⏭️  Skipped batch {batch.batch_number} - keeping {len(batch.files)} original files")
            return list(batch.files)

        if decision.custom_text is None and isinstance(result, Err):
            logger.warning("Approving a failed consolidation", batch_number=batch.batch_number, reason=result.reason)
        content = decision.custom_text if decision.custom_text is not None else result.render()

        # Originals are checked before writing so a vanished file leaves no stray record.
        missing = [path for path in batch.files if not path.exists()]
        if missing:
            raise FileNotFoundError(
                f"Batch {batch.batch_number} not consolidated, memory files missing: "
                + ", ".join(str(path) for path in missing)
            )

        consolidated = save_consolidated_memory(
            content,
            batch.files,
            self.clock(),
            store=store,
            suffix=batch.batch_number,
        )
        self.session.say(f"\n✅ Batch {batch.batch_number} consolidated → {consolidated}")

        for path in batch.files:
            store.delete(path)
        self.session.say(f"   🗑️  Deleted {len(batch.files)} original memory files")
        return [consolidated]

    def _show_final_analysis(
        self,
        memories: list[str],
        instructions: str,
        *,
        config: Config,
        runner: AIRunner,
    ) -> None:
        say = self.session.say
        say("\n=== Phase 2: Final Analysis ===")
        say("=== Memories ===")
        for idx, memory in enumerate(memories, start=1):
            say(f"\n--- Memory {idx} ---")
            say(memory)

        say("\n=== Current Instructions ===")
        say(instructions or "(No instructions found)")

        say("\n\n=== AI-Generated Suggestions ===")
        say("Analyzing memories and generating consolidation suggestions...\n")
        say(generate_consolidation_suggestions(memories, instructions, config=config, runner=runner))

        say("\n\n=== Next Steps ===")
        say("Review the suggestions above and manually update your instruction files as needed.")
        say("Then clean up the memory files below.\n")

    def _offer_cleanup(self, store: MemoryStore) -> None:
        if self.session.ask("Clean up memory files? (y/n): ").strip().lower() != "y":
            return

        deleted = store.delete_all()
        self.session.say(f"\nDeleted {deleted} memory file(s)")
        logger.info("Memory files cleaned up", deleted=deleted)

        if self.session.ask("Commit cleanup? (y/n): ").strip().lower() != "y":
            return
        self.git.stage_and_commit([str(store.memory_dir)], CLEANUP_COMMIT_MESSAGE)
        self.session.say("\nCleanup committed successfully")
