"""CLI commands for memory-cultivation."""

from pathlib import Path

import typer

from memory_cultivation import __version__
from memory_cultivation.capture import run_capture
from memory_cultivation.cultivation.approval import PromptSession
from memory_cultivation.cultivation.orchestrator import CultivationOrchestrator
from memory_cultivation.logging import resolve_log_level, setup_logging

app = typer.Typer(
    name="memory-cultivation",
    help="Capture per-commit memories and cultivate them into assistant instructions.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"memory-cultivation v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None, "--version", "-v", callback=version_callback, is_eager=True
    ),
) -> None:
    """memory-cultivation - commit memories for AI assistant instructions."""
    setup_logging(json_output=False, level=resolve_log_level())


@app.command()
def cultivate() -> None:
    """Consolidate memories in batches and suggest instruction updates."""
    with PromptSession() as session:
        code = CultivationOrchestrator(root=Path.cwd(), session=session).run()
    raise typer.Exit(code)


@app.command()
def capture() -> None:
    """Pre-commit hook: summarize the staged diff into a new memory file."""
    raise typer.Exit(run_capture(root=Path.cwd()))
