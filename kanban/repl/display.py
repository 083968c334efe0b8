"""
FILE: kanban/repl/display.py
PURPOSE: Display functions for the board and single tasks
EXPORTS:
  - display_board() - Render the whole board
  - display_task() - Display a single task line
DEPENDENCIES:
  - rich (formatted output)
  - kanban.formatting (BoardFormatter)
  - kanban.config (user name for the board title)
NOTES:
  - Avoids circular imports by accepting the store and console as parameters
  - Renders snapshots only; never mutates the store
"""

from rich.console import Console
from rich.markup import escape

from ..config import get_config
from ..core.models import Task
from ..formatting import BoardFormatter

# Create console instance here to avoid circular import
console = Console()


def display_task(task: Task, message: str = "", console_instance: Console = None) -> None:
    """
    Display a single task with optional message.

    Args:
        task: Task object to display
        message: Optional message to show before task (e.g., "Created:")
        console_instance: Optional Rich console instance (defaults to module console)
    """
    if console_instance is None:
        console_instance = console

    if message:
        console_instance.print(f"[green]{message}[/green]")

    console_instance.print(f"  [cyan]{escape(task.id)}[/cyan]: {escape(task.title)}")


def display_board(store, console_instance: Console = None) -> None:
    """
    Display the board as three side-by-side columns.

    Args:
        store: BoardStore to render
        console_instance: Optional Rich console instance (defaults to module console)
    """
    if console_instance is None:
        console_instance = console

    user_name = get_config().display.user_name
    title = f"Kanban - {user_name}" if user_name else "Kanban"

    table = BoardFormatter.create_board(
        store.columns(),
        drafts=store.drafts(),
        is_pending=store.is_pending,
        title=title,
    )
    console_instance.print(table)
