"""
FILE: kanban/cli/commands/tasks.py
PURPOSE: Task management commands (ls, add, edit, rm)
"""

from typing import Optional, Tuple

import typer
from rich.markup import escape

from ..main import app, console, error_console, open_store, report_sync_failures
from ...config import get_config
from ...core.board import BoardStore
from ...core.exceptions import KanbanError, InvalidInputError, TaskNotFoundError
from ...core.models import Task
from ...formatting import BoardFormatter


def require_title(title: str) -> None:
    """Reject blank titles before touching the remote API."""
    if not title.strip():
        raise InvalidInputError("Task title cannot be empty")


def locate(store: BoardStore, task_id: str) -> Tuple[str, Task]:
    """Column and task for task_id, or TaskNotFoundError."""
    found = store.find_task(task_id)
    if found is None:
        raise TaskNotFoundError(task_id)
    return found


@app.command()
def ls(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """
    Show the board.

    Example:
        kanban ls
        kanban ls --json
    """
    store = open_store()
    try:
        columns = store.columns()

        if json_output:
            console.print(BoardFormatter.to_json_board(columns), markup=False, highlight=False)
        elif raw:
            for line in BoardFormatter.to_raw_lines(columns):
                console.print(line, markup=False, highlight=False)
        else:
            user_name = get_config().display.user_name
            title = f"Kanban - {user_name}" if user_name else "Kanban"
            console.print(BoardFormatter.create_board(columns, title=title))
            total = sum(len(c.tasks) for c in columns)
            console.print(f"\n[dim]Total: {total} task(s)[/dim]")
    finally:
        store.close()


@app.command()
def add(
    title: str = typer.Argument(..., help="Task title"),
    description: str = typer.Option("", "--desc", "-d", help="Task description"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    raw: bool = typer.Option(False, "--raw", help="Plain text output (no colors)"),
):
    """
    Create a new task in To Do.

    Example:
        kanban add "Write documentation"
        kanban add "Fix bug" --desc "Crashes on empty input"
    """
    try:
        require_title(title)
    except InvalidInputError as e:
        error_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    store = open_store()
    try:
        task = store.add_task(title, description)
        failed = report_sync_failures(store)

        if json_output:
            console.print(task.to_json(), markup=False, highlight=False)
        elif raw:
            console.print(f"{task.id}: {task.title}", markup=False, highlight=False)
        else:
            console.print(f"[green]✓ Created task [bold]{escape(task.id)}[/bold]:[/green] {escape(task.title)}")

        if failed:
            raise typer.Exit(1)
    finally:
        store.close()


@app.command()
def edit(
    task_id: str = typer.Argument(..., help="Task ID"),
    title: Optional[str] = typer.Option(None, "--title", "-t", help="New title"),
    description: Optional[str] = typer.Option(None, "--desc", "-d", help="New description"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Update a task's title and/or description.

    Example:
        kanban edit todo-1718000000000 --title "Buy oat milk"
        kanban edit todo-1718000000000 --desc "urgent"
    """
    try:
        if title is None and description is None:
            raise InvalidInputError("Nothing to change (use --title and/or --desc)")
        if title is not None:
            require_title(title)
    except InvalidInputError as e:
        error_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    store = open_store()
    try:
        column_name, _ = locate(store, task_id)
        store.start_editing(task_id, column_name)
        task = store.save_edit(task_id, column_name, title, description)
        if task is None:
            # Remote records can arrive without a title
            raise InvalidInputError("Task title cannot be empty")
        failed = report_sync_failures(store)

        if json_output:
            console.print(task.to_json(), markup=False, highlight=False)
        else:
            console.print(f"[green]✓ Updated task [bold]{escape(task.id)}[/bold]:[/green] {escape(task.title)}")

        if failed:
            raise typer.Exit(1)
    except (TaskNotFoundError, InvalidInputError) as e:
        error_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    except KanbanError as e:
        error_console.print(f"[red]Unexpected error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    finally:
        store.close()


@app.command()
def rm(
    task_id: str = typer.Argument(..., help="Task ID to delete"),
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation"),
):
    """
    Delete a task.

    Example:
        kanban rm todo-1718000000000
        kanban rm todo-1718000000000 --force
    """
    store = open_store()
    try:
        column_name, task = locate(store, task_id)
        if not force and not typer.confirm(f"Delete '{task.title}'?"):
            console.print("[dim]Cancelled[/dim]")
            return

        store.delete_task(task_id, column_name)
        failed = report_sync_failures(store)
        console.print(f"[green]✓ Deleted task [bold]{escape(task_id)}[/bold]:[/green] {escape(task.title)}")

        if failed:
            raise typer.Exit(1)
    except TaskNotFoundError as e:
        error_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    finally:
        store.close()
