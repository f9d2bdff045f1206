"""Shared types for batch consolidation."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal, TypeAlias

ApprovalAction: TypeAlias = Literal["approve", "skip", "retry"]


@dataclass(frozen=True)
class Batch:
    """Ordered slice of memory records consolidated as one unit."""

    files: list[Path]
    batch_number: int  # 1-based


@dataclass(frozen=True)
class BatchInfo:
    batch_number: int
    total_batches: int
    file_count: int


@dataclass(frozen=True)
class Ok:
    text: str

    def render(self) -> str:
        return self.text


@dataclass(frozen=True)
class Err:
    """Failure carried as data; ``reason`` is the text the operator sees."""

    reason: str

    def render(self) -> str:
        return self.reason


ConsolidationResult: TypeAlias = Ok | Err


@dataclass(frozen=True)
class ApprovalDecision:
    action: ApprovalAction
    custom_text: str | None = None

    @classmethod
    def approve(cls, custom_text: str | None = None) -> ApprovalDecision:
        return cls("approve", custom_text)

    @classmethod
    def skip(cls) -> ApprovalDecision:
        return cls("skip")

    @classmethod
    def retry(cls) -> ApprovalDecision:
        return cls("retry")
