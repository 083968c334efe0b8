"""
FILE: kanban/repl/pickers.py
PURPOSE: Numbered inline picker for choosing a task when the ID is omitted
EXPORTS:
  - pick_task(title: str, column: Optional[str] = None) -> Optional[str]
DEPENDENCIES:
  - kanban.repl.main (session store and console)
NOTES:
  - Lists tasks in board order, optionally limited to one column
  - Returns None on cancel (Enter, Ctrl+C, Ctrl+D) or invalid input
"""

from typing import Optional

from rich.markup import escape

# Limit for readability
MAX_PICKER_TASKS = 20


def _task_label(task) -> str:
    title = (task.title or "").strip()
    return title if len(title) <= 50 else title[:47] + "..."


def pick_task(title: str = "Select a task", column: Optional[str] = None) -> Optional[str]:
    """
    Show a numbered list of tasks and prompt for one.

    Args:
        title: Title for the picker
        column: Only offer tasks in this column (None for the whole board)

    Returns:
        Selected task ID or None if cancelled
    """
    # Import here to avoid circular imports
    from .main import repl_context, console

    store = repl_context.require_store()
    choices = [
        (col.name, task)
        for col in store.columns()
        if column is None or col.name == column
        for task in col.tasks
    ]

    if not choices:
        console.print("[yellow]No tasks on the board[/yellow]")
        console.print("[dim]Tip: 'add <title>' creates one, 'reload' fetches from the task API[/dim]")
        return None

    choices = choices[:MAX_PICKER_TASKS]

    console.print(f"\n[bold cyan]{title}[/bold cyan]")
    for idx, (column_name, task) in enumerate(choices, 1):
        console.print(f"  [{idx}] {escape(_task_label(task))} [dim](id:{escape(task.id)}, {column_name})[/dim]")

    console.print()
    try:
        selection = input("Select number (or press Enter to cancel): ").strip()
    except (KeyboardInterrupt, EOFError):
        console.print()
        return None

    if not selection:
        return None

    try:
        selection_num = int(selection)
    except ValueError:
        console.print(f"[red]Error:[/red] Invalid number: {escape(selection)}")
        return None

    if not 1 <= selection_num <= len(choices):
        console.print(f"[red]Error:[/red] Number {selection_num} out of range (1-{len(choices)})")
        return None

    return choices[selection_num - 1][1].id
