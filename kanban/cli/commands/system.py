"""
FILE: kanban/cli/commands/system.py
PURPOSE: System commands (version, help, repl)
"""

import typer
from rich.markup import escape

# Import shared objects from main module
# These will be available after main.py imports this module
from ..main import app, console, error_console, __version__


@app.command()
def version():
    """Show Kanban version."""
    console.print(f"Kanban v{__version__}")


@app.command()
def help():
    """Show available commands and usage."""
    console.print("\n[bold cyan]Kanban[/bold cyan] - Terminal kanban board backed by a remote task API\n")
    console.print(f"[dim]Version {__version__}[/dim]\n")

    console.print("[bold]Usage:[/bold]")
    console.print("  kanban [--api-url URL] [--config PATH] [command] [options]")
    console.print("  kanban                    [dim]# Launch interactive REPL (default)[/dim]\n")

    console.print("[bold]Commands:[/bold]")

    commands = [
        ("ls", "Show the board", "kanban ls [--json] [--raw]"),
        ("add", "Create a new task in To Do", 'kanban add "Task title" [--desc "Details"]'),
        ("edit", "Update task title/description", 'kanban edit <task_id> --title "New title"'),
        ("rm", "Delete a task", "kanban rm <task_id>"),
        ("repl", "Launch interactive REPL", "kanban repl"),
        ("version", "Show version", "kanban version"),
        ("help", "Show this help message", "kanban help"),
    ]

    for cmd, desc, example in commands:
        console.print(f"  [green]{cmd:8}[/green] {desc}")
        console.print(f"           [dim]{example}[/dim]\n")

    console.print("[bold]Global Options:[/bold]")
    console.print("  [yellow]--api-url[/yellow]  Task API base URL (default http://localhost:5000)")
    console.print("  [yellow]--config[/yellow]   Config file (default ~/.kanban/config.yml)")
    console.print("  [yellow]--help[/yellow]     Show detailed help for a command\n")

    console.print("[bold]Notes:[/bold]")
    console.print("  Moving tasks between columns (mv, drag/drop) is REPL-only:")
    console.print("  moves are local to a session and are not sent to the task API.\n")


@app.command()
def repl():
    """
    Launch interactive REPL mode.

    The REPL provides:
    - Command history (up/down arrows)
    - Autocomplete (Tab key)
    - Moving tasks between columns (mv, drag/drop)
    - Inline editing with drafts (edit/save/cancel)
    - Exit with Ctrl+D or type 'exit'

    Example:
        kanban repl
    """
    # Import here to avoid loading REPL dependencies for one-shot commands
    from ...repl import main as repl_main

    try:
        repl_main()
    except Exception as e:
        error_console.print(f"[red]Error starting REPL:[/red] {escape(str(e))}")
        raise typer.Exit(1)
