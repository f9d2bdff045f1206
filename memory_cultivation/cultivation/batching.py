"""Split memory records into fixed-size batches."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from memory_cultivation.cultivation.types import Batch


def get_batches(files: Sequence[Path], batch_size: int) -> list[Batch]:
    """Partition *files* into order-preserving batches of at most *batch_size*, numbered from 1."""
    if batch_size < 1:
        raise ValueError(f"batch_size must be positive, got {batch_size}")
    if not files:
        return []
    if len(files) <= batch_size:
        return [Batch(files=list(files), batch_number=1)]

    return [
        Batch(files=list(files[start:start + batch_size]), batch_number=number)
        for number, start in enumerate(range(0, len(files), batch_size), start=1)
    ]
