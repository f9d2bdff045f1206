"""Configuration schema."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

DEFAULT_COMMAND = "copilot"
DEFAULT_COMMAND_ARGS = ["-m", "gpt-4o-mini"]
DEFAULT_BATCH_SIZE = 20
DEFAULT_MEMORY_DIRECTORY = ".memory"
DEFAULT_INSTRUCTION_FILES = [".github/copilot/COPILOT_INSTRUCTIONS.md"]


class Base(BaseModel):
    """Base model accepting both camelCase (file) and snake_case (code) keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class OperationConfig(Base):
    """Per-operation overrides, keyed by operation name (``summarize``, ``consolidate``, ...)."""

    prompt: str | None = None
    command_args: list[str] | None = None


class AIConfig(Base):
    """External AI command-line tool."""

    command: str = DEFAULT_COMMAND
    command_args: list[str] = Field(default_factory=lambda: list(DEFAULT_COMMAND_ARGS))
    operations: dict[str, OperationConfig] = Field(default_factory=dict)
    timeout: float | None = None  # seconds; None waits forever


class CultivationConfig(Base):
    batch_size: int = Field(default=DEFAULT_BATCH_SIZE, ge=1)


class Config(Base):
    """Root configuration (``.memory-cultivation.config.json``)."""

    ai: AIConfig = Field(default_factory=AIConfig)
    cultivation: CultivationConfig = Field(default_factory=CultivationConfig)
    memory_directory: str = DEFAULT_MEMORY_DIRECTORY
    instruction_files: list[str] = Field(default_factory=lambda: list(DEFAULT_INSTRUCTION_FILES))

    def memory_path(self, root: Path) -> Path:
        """Memory directory resolved against the project *root*."""
        path = Path(self.memory_directory).expanduser()
        return path if path.is_absolute() else root / path

    def instruction_paths(self, root: Path) -> list[Path]:
        out: list[Path] = []
        for raw in self.instruction_files:
            path = Path(raw).expanduser()
            out.append(path if path.is_absolute() else root / path)
        return out
