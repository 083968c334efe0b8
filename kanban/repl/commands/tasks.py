"""
FILE: kanban/repl/commands/tasks.py
PURPOSE: Task command handlers for REPL (add, edit, save, cancel, rm, show)
"""

from typing import Optional, Tuple

from rich.markup import escape

from ..main import console, repl_context
from ..parser import ParseResult
from ...core.constants import DRAG_TASK_ID
from ...formatting import BoardFormatter
from ..style import celebrate_add, celebrate_save, celebrate_delete
from ..pickers import pick_task
from ..display import display_task


# Helper functions
def ask_confirmation(message: str) -> bool:
    """Ask user for confirmation (y/n)."""
    response = input(f"{message} (y/n): ").strip().lower()
    return response in ('y', 'yes')


def resolve_task(result: ParseResult, picker_title: str) -> Optional[Tuple[str, str]]:
    """
    Work out which task a command refers to.

    Uses the first argument as the task ID, or shows a picker when there
    are no arguments. Prints an error when the ID isn't on the board.

    Returns:
        (task_id, column_name) or None
    """
    store = repl_context.require_store()

    if result.args:
        task_id = result.args[0]
    else:
        task_id = pick_task(title=picker_title)
        if task_id is None:
            return None  # User cancelled

    found = store.find_task(task_id)
    if found is None:
        console.print(f"[red]Error:[/red] Task {escape(task_id)} not found")
        return None

    column_name, _ = found
    return task_id, column_name


def handle_add_command(result: ParseResult) -> None:
    """
    Handle 'add' command - create new task in To Do.

    Args:
        result: Parsed command with args and flags

    Usage:
        add Buy groceries
        add "Plan sprint" --desc "Q3 goals"
    """
    store = repl_context.require_store()

    # Join all args as the title (in case they didn't use quotes)
    title = " ".join(result.args)
    description = result.flag_text("desc") or ""

    store.set_new_task_input(title, description)
    task = store.add_task()

    if task is None:
        console.print("[red]Error:[/red] Task title required")
        console.print("[dim]Usage: add <title> [--desc <description>][/dim]")
        return

    console.print(
        f"[green]{celebrate_add()} Created task [bold]{escape(task.id)}[/bold]:[/green] {escape(task.title)}"
    )


def handle_edit_command(result: ParseResult) -> None:
    """
    Handle 'edit' command - open the editor and/or change the draft.

    The task's committed title and description don't change until 'save'.

    Usage:
        edit todo-1718000000000                     (open editor)
        edit todo-1718000000000 Buy oat milk        (draft title)
        edit todo-1718000000000 --desc urgent       (draft description)
        edit                                        (shows picker)
    """
    store = repl_context.require_store()
    target = resolve_task(result, "Edit task")
    if target is None:
        return
    task_id, column_name = target

    title = result.flag_text("title")
    if title is None and len(result.args) > 1:
        title = " ".join(result.args[1:])
    description = result.flag_text("desc")

    task = store.start_editing(task_id, column_name)
    draft = store.update_draft(task_id, column_name, title=title, description=description)

    console.print(f"[yellow]✎ Editing[/yellow] [cyan]{escape(task.id)}[/cyan]")
    console.print(f"  [dim]Title:[/dim]       {escape(draft.title)}")
    console.print(f"  [dim]Description:[/dim] {escape(draft.description or '-')}")
    console.print(
        f"[dim]Change with 'edit {escape(task_id)} --title ... --desc ...', "
        f"then 'save {escape(task_id)}' or 'cancel {escape(task_id)}'[/dim]"
    )


def handle_save_command(result: ParseResult) -> None:
    """
    Handle 'save' command - commit the draft of a task being edited.

    Usage:
        save todo-1718000000000
        save                         (shows picker)
    """
    store = repl_context.require_store()
    target = resolve_task(result, "Save which edit?")
    if target is None:
        return
    task_id, column_name = target

    _, current = store.find_task(task_id)
    if not current.is_editing:
        console.print(f"[yellow]Task {escape(task_id)} isn't being edited[/yellow]")
        console.print(f"[dim]Use 'edit {escape(task_id)}' first[/dim]")
        return

    task = store.save_edit(task_id, column_name)
    if task is None:
        console.print("[red]Error:[/red] Task title cannot be empty - still editing")
        return

    console.print(f"[green]{celebrate_save()}[/green]")
    display_task(task, "✓ Saved:", console)


def handle_cancel_command(result: ParseResult) -> None:
    """
    Handle 'cancel' command - close the editor without saving.

    Usage:
        cancel todo-1718000000000
    """
    store = repl_context.require_store()
    target = resolve_task(result, "Cancel which edit?")
    if target is None:
        return
    task_id, column_name = target

    _, current = store.find_task(task_id)
    if not current.is_editing:
        console.print(f"[yellow]Task {escape(task_id)} isn't being edited[/yellow]")
        return

    store.cancel_edit(task_id, column_name)
    console.print(f"[dim]Discarded changes to {escape(task_id)}[/dim]")


def handle_rm_command(result: ParseResult) -> None:
    """
    Handle 'rm' command - delete a task.

    Usage:
        rm todo-1718000000000
        rm todo-1718000000000 --force    (skip confirmation)
        rm                               (shows picker)
    """
    store = repl_context.require_store()
    target = resolve_task(result, "Delete task")
    if target is None:
        return
    task_id, column_name = target

    _, task = store.find_task(task_id)
    if not result.flags.get("force") and not ask_confirmation(f"Delete '{task.title}'?"):
        console.print("[dim]Cancelled[/dim]")
        return

    store.delete_task(task_id, column_name)

    # A deleted task can't be dropped anywhere
    if repl_context.drag_payload and repl_context.drag_payload.get(DRAG_TASK_ID) == task_id:
        repl_context.drag_payload = None

    console.print(f"[green]{celebrate_delete()} Deleted:[/green] {escape(task.title)}")


def handle_show_command(result: ParseResult) -> None:
    """
    Handle 'show' command - view full task details.

    Usage:
        show todo-1718000000000
        view todo-1718000000000
    """
    store = repl_context.require_store()
    target = resolve_task(result, "Show task")
    if target is None:
        return
    task_id, column_name = target

    _, task = store.find_task(task_id)
    console.print(BoardFormatter.task_detail(column_name, task, store.get_draft(task_id)))
    if store.is_pending(task_id):
        console.print("[dim]⟳ Remote update in progress[/dim]")
