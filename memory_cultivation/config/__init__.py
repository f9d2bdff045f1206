"""Configuration module for memory-cultivation."""

from memory_cultivation.config.loader import CONFIG_FILENAME, get_config_path, load_config
from memory_cultivation.config.schema import Config

__all__ = ["CONFIG_FILENAME", "Config", "get_config_path", "load_config"]
