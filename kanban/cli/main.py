"""
FILE: kanban/cli/main.py
PURPOSE: Typer-based CLI for one-shot board commands
EXPORTS:
  - app (Typer application)
  - main() (entry point)
  - open_store() - Load the board for a one-shot command
  - version() - Show version
  - help() - Show command list and usage
  - repl() - Launch interactive REPL
  - ls() - Show the board
  - add() - Create task
  - edit() - Update task title/description
  - rm() - Delete task
DEPENDENCIES:
  - typer (CLI framework)
  - rich (formatted output)
  - kanban.core.board (BoardStore)
  - kanban.core.exceptions (error handling)
  - kanban.config / kanban.utils (config and logging setup)
  - kanban.repl (interactive mode)
NOTES:
  - Every command loads the board fresh from the remote API
  - Remote calls run inline so they finish before the process exits
  - Moves aren't offered here: they are local-only and wouldn't outlive the command
  - Error messages go to stderr
  - Exit codes: 0=success, 1=error
"""

import sys
from typing import Optional

# Fix Windows console encoding for Unicode characters
if sys.platform == "win32":
    import io
    sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding='utf-8')
    sys.stderr = io.TextIOWrapper(sys.stderr.buffer, encoding='utf-8')

import typer
from rich.console import Console
from rich.markup import escape

from ..config import load_config, get_config
from ..core.board import BoardStore, build_store
from ..core.exceptions import GatewayError, ConfigError
from ..utils import setup_logging

# Typer app setup
app = typer.Typer(
    name="kanban",
    help="Terminal kanban board backed by a remote task API",
    add_completion=False,
)

# Rich console for formatted output
console = Console()
error_console = Console(stderr=True)

# Version
__version__ = "0.1.0"


@app.callback(invoke_without_command=True)
def default_command(
    ctx: typer.Context,
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to config.yml"),
    api_url: Optional[str] = typer.Option(None, "--api-url", help="Task API base URL"),
):
    """
    Default callback - loads config, then launches REPL when no command is specified.

    If a subcommand is invoked, this only prepares config and logging.
    If no subcommand is invoked (just 'kanban'), launch the REPL.
    """
    try:
        config = load_config(config_path, reload=config_path is not None)
    except ConfigError as e:
        error_console.print(f"[red]Config error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    if api_url:
        config.gateway.base_url = api_url
    setup_logging(config)

    if ctx.invoked_subcommand is None:
        # No command specified, launch REPL
        from ..repl import main as repl_main
        try:
            repl_main()
        except Exception as e:
            error_console.print(f"[red]Error starting REPL:[/red] {escape(str(e))}")
            raise typer.Exit(1)


def open_store() -> BoardStore:
    """
    Build a store with inline sync and load the board.

    Exits with code 1 if the remote API can't be reached.
    """
    store = build_store(get_config(), background=False)
    try:
        store.load()
    except GatewayError as e:
        error_console.print(f"[red]Could not load board:[/red] {escape(str(e))}")
        store.close()
        raise typer.Exit(1)
    return store


def report_sync_failures(store: BoardStore) -> bool:
    """Print failed remote calls. Returns True if there were any."""
    failures = store.sync.drain_failures()
    for failure in failures:
        error_console.print(
            f"[red]Not synced:[/red] {failure.operation} {escape(failure.task_id)} - {escape(failure.message)}"
        )
    return bool(failures)


# Import command modules to register commands with app
# Commands are decorated with @app.command() in their modules
from .commands import (
    # System commands
    version,
    help,
    repl,
    # Task commands
    ls,
    add,
    edit,
    rm,
)


def main():
    """Main entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
