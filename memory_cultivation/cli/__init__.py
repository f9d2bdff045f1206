"""CLI module for memory-cultivation."""
