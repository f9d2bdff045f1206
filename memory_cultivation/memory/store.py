"""Memory record storage: one markdown file per captured commit."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from memory_cultivation.logging import get_logger
from memory_cultivation.utils.helpers import atomic_write_text, ensure_dir

logger = get_logger(__name__)

MEMORY_SUFFIX = ".md"


def generate_file_name(prefix: str, when: datetime) -> str:
    """``<prefix>-<YYYY-MM-DD>.md`` for a memory captured at *when*."""
    return f"{prefix}-{when.strftime('%Y-%m-%d')}{MEMORY_SUFFIX}"


class MemoryStore:
    """
    Directory of independent memory records.

    Identifiers are the record paths. Listing order is filename order, which is
    what the rest of the pipeline treats as chronological order.
    """

    def __init__(self, memory_dir: Path):
        self.memory_dir = memory_dir

    def path_for(self, name: str) -> Path:
        return self.memory_dir / name

    def list_identifiers(self) -> list[Path]:
        if not self.memory_dir.is_dir():
            return []
        return sorted(p for p in self.memory_dir.iterdir() if p.is_file() and p.suffix == MEMORY_SUFFIX)

    def read_content(self, identifier: Path) -> str:
        """Return the record text; raises ``FileNotFoundError`` for a missing record."""
        return identifier.read_text(encoding="utf-8")

    def read_all(self) -> list[str]:
        return [self.read_content(p) for p in self.list_identifiers()]

    def write_content(self, identifier: Path, content: str) -> None:
        ensure_dir(identifier.parent)
        atomic_write_text(identifier, content, encoding="utf-8")
        logger.debug("Memory record written", path=str(identifier), chars=len(content))

    def save_memory(self, file_name: str, content: str) -> Path:
        path = self.path_for(file_name)
        self.write_content(path, content)
        return path

    def delete(self, identifier: Path) -> None:
        identifier.unlink()
        logger.debug("Memory record deleted", path=str(identifier))

    def delete_all(self) -> int:
        identifiers = self.list_identifiers()
        for identifier in identifiers:
            self.delete(identifier)
        return len(identifiers)


def read_instructions(paths: list[Path]) -> str:
    """Concatenate the existing instruction files; empty string when none exist."""
    parts: list[str] = []
    for path in paths:
        if path.is_file():
            parts.append(path.read_text(encoding="utf-8"))
    return "\n\n".join(parts)
