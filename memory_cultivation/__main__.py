"""
Entry point for running memory-cultivation as a module: python -m memory_cultivation
"""

from memory_cultivation.cli.commands import app

if __name__ == "__main__":
    app()
