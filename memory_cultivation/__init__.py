"""
memory-cultivation - per-commit memories consolidated into AI assistant instructions.
"""

__version__ = "0.1.0"
