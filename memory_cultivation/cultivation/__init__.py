"""Batch consolidation of memory records."""

from memory_cultivation.cultivation.approval import PromptSession, prompt_for_approval
from memory_cultivation.cultivation.batching import get_batches
from memory_cultivation.cultivation.orchestrator import CultivationOrchestrator
from memory_cultivation.cultivation.persister import save_consolidated_memory
from memory_cultivation.cultivation.summarizer import summarize_batch
from memory_cultivation.cultivation.types import ApprovalDecision, Batch, BatchInfo, Err, Ok

__all__ = [
    "ApprovalDecision",
    "Batch",
    "BatchInfo",
    "CultivationOrchestrator",
    "Err",
    "Ok",
    "PromptSession",
    "get_batches",
    "prompt_for_approval",
    "save_consolidated_memory",
    "summarize_batch",
]
