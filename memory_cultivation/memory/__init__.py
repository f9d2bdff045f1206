"""Memory record storage."""

from memory_cultivation.memory.store import MemoryStore, generate_file_name, read_instructions

__all__ = ["MemoryStore", "generate_file_name", "read_instructions"]
