"""Load configuration from the project's JSON config file."""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import ValidationError

from memory_cultivation.config.schema import Config
from memory_cultivation.logging import get_logger

logger = get_logger(__name__)

CONFIG_FILENAME = ".memory-cultivation.config.json"


def get_config_path(root: Path | None = None) -> Path:
    return (root or Path.cwd()) / CONFIG_FILENAME


def load_config(config_path: Path | None = None, *, root: Path | None = None) -> Config:
    """
    Load configuration from *config_path* (default: ``<root>/.memory-cultivation.config.json``).

    A missing file yields defaults silently. An unreadable or invalid file is
    logged as a warning and also yields defaults, so hooks never block a commit
    because of a typo in the config.
    """
    path = config_path or get_config_path(root)
    if not path.exists():
        return Config()

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return Config.model_validate(data)
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        logger.warning("Could not load config, using defaults", path=str(path), error=str(e))
        return Config()
