"""Write approved consolidations as new memory records."""

from __future__ import annotations

import re
from datetime import datetime, timezone
from pathlib import Path

from memory_cultivation.logging import get_logger
from memory_cultivation.memory.store import MemoryStore

logger = get_logger(__name__)

_DATE_RE = re.compile(r"(\d{4}-\d{2}-\d{2})")


def _as_utc(instant: datetime) -> datetime:
    # Naive instants are taken as UTC.
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc)


def consolidated_file_name(instant: datetime, suffix: str | int | None = None) -> str:
    millis = int(_as_utc(instant).timestamp() * 1000)
    tail = f"-{suffix}" if suffix is not None else ""
    return f"consolidated-{millis}{tail}.md"


def extract_date_range(original_files: list[Path]) -> tuple[str, str] | None:
    """Earliest and latest ``YYYY-MM-DD`` embedded in the file names, or None if none carry one."""
    dates = sorted(m.group(1) for m in (_DATE_RE.search(f.name) for f in original_files) if m)
    if not dates:
        return None
    return dates[0], dates[-1]


def render_consolidated_memory(content: str, original_files: list[Path], instant: datetime) -> str:
    date_range = extract_date_range(original_files)
    date_range_line = f"**Date range**: {date_range[0]} to {date_range[1]}\n" if date_range else ""
    consolidated_on = _as_utc(instant).date().isoformat()
    return (
        "# Consolidated Memory\n"
        "\n"
        f"**Original files**: {len(original_files)}\n"
        f"{date_range_line}"
        f"**Consolidated**: {consolidated_on}\n"
        "\n"
        "---\n"
        "\n"
        f"{content}"
    )


def save_consolidated_memory(
    content: str,
    original_files: list[Path],
    instant: datetime,
    *,
    store: MemoryStore,
    suffix: str | int | None = None,
) -> Path:
    """
    Persist *content* as a consolidated record and return its identifier.

    Raises ``FileExistsError`` instead of overwriting an existing record with
    the same name; other write failures propagate unchanged.
    """
    identifier = store.path_for(consolidated_file_name(instant, suffix))
    if identifier.exists():
        raise FileExistsError(f"Consolidated memory already exists: {identifier}")

    store.write_content(identifier, render_consolidated_memory(content, original_files, instant))
    logger.info(
        "Consolidated memory saved",
        path=str(identifier),
        original_count=len(original_files),
    )
    return identifier
