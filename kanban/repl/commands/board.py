"""
FILE: kanban/repl/commands/board.py
PURPOSE: Board command handlers for REPL (board, mv, drag, drop, reload, sync)
"""

from rich.markup import escape

from ..main import console, repl_context
from ..parser import ParseResult
from ...core.board import resolve_column
from ...core.constants import COLUMN_NAMES, DRAG_FROM_COLUMN, DRAG_TASK_ID
from ...core.exceptions import ColumnNotFoundError, GatewayError
from ..style import celebrate_move
from ..pickers import pick_task
from ..display import display_board


def _column_or_error(name: str):
    """Resolve a column name, printing an error and returning None if unknown."""
    try:
        return resolve_column(name)
    except ColumnNotFoundError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        console.print(f"[dim]Valid columns: {', '.join(COLUMN_NAMES)}[/dim]")
        return None


def handle_board_command(result: ParseResult) -> None:
    """
    Handle 'board' command - render all three columns.

    Usage:
        board
        ls
    """
    store = repl_context.require_store()
    display_board(store, console)


def handle_mv_command(result: ParseResult) -> None:
    """
    Handle 'mv' command - move a task to another column.

    Args:
        result: Parsed command with args and flags

    Usage:
        mv todo-1718000000000 Done
        mv todo-1718000000000 In Progress
        mv doing                          (shows picker)

    Notes:
        - The first argument is treated as a task ID only if it's on the board,
          so "mv In Progress" picks the task interactively
        - Moves are local-only; the task API has no columns
    """
    store = repl_context.require_store()

    if not result.args:
        console.print("[red]Error:[/red] Column required")
        console.print("[dim]Usage: mv [<id>] <column>[/dim]")
        return

    if len(result.args) >= 2 and store.find_task(result.args[0]) is not None:
        task_id = result.args[0]
        column_text = " ".join(result.args[1:])
    else:
        column_text = " ".join(result.args)
        task_id = None

    to_column = _column_or_error(column_text)
    if to_column is None:
        return

    if task_id is None:
        task_id = pick_task(title=f"Move to {to_column}")
        if task_id is None:
            return  # User cancelled

    found = store.find_task(task_id)
    if found is None:
        console.print(f"[red]Error:[/red] Task {escape(task_id)} not found")
        return
    from_column, _ = found

    if from_column == to_column:
        console.print(f"[dim]Task {escape(task_id)} is already in {to_column}[/dim]")
        return

    task = store.move_task(task_id, from_column, to_column)
    console.print(
        f"[green]{celebrate_move()}[/green] Moved [cyan]{escape(task.id)}[/cyan] "
        f"[dim]{from_column}[/dim] → [bold]{to_column}[/bold]"
    )


def handle_drag_command(result: ParseResult) -> None:
    """
    Handle 'drag' command - pick up a task so it can be dropped on a column.

    Usage:
        drag todo-1718000000000
        drag                         (shows what is being dragged, or a picker)
    """
    store = repl_context.require_store()

    if not result.args and repl_context.drag_payload:
        payload = repl_context.drag_payload
        console.print(
            f"Dragging [cyan]{escape(payload[DRAG_TASK_ID])}[/cyan] "
            f"[dim](from {payload[DRAG_FROM_COLUMN]})[/dim]"
        )
        return

    task_id = result.args[0] if result.args else pick_task(title="Drag task")
    if task_id is None:
        return  # User cancelled

    found = store.find_task(task_id)
    if found is None:
        console.print(f"[red]Error:[/red] Task {escape(task_id)} not found")
        return

    column_name, task = found
    repl_context.drag_payload = store.begin_drag(task_id, column_name)
    console.print(f"[yellow]✋ Picked up[/yellow] [cyan]{escape(task.id)}[/cyan]: {escape(task.title)}")
    console.print("[dim]Use 'drop <column>' to place it[/dim]")


def handle_drop_command(result: ParseResult) -> None:
    """
    Handle 'drop' command - drop the dragged task on a column.

    Usage:
        drop Done
        drop in progress

    Notes:
        - The drag ends whether or not the task moved
        - Dropping on the source column changes nothing
    """
    store = repl_context.require_store()

    payload = repl_context.drag_payload
    if not payload:
        console.print("[yellow]Nothing is being dragged[/yellow]")
        console.print("[dim]Use 'drag <id>' first[/dim]")
        return

    if not result.args:
        console.print("[red]Error:[/red] Column required")
        console.print("[dim]Usage: drop <column>[/dim]")
        return

    to_column = _column_or_error(" ".join(result.args))
    if to_column is None:
        return

    repl_context.drag_payload = None
    task_id = payload[DRAG_TASK_ID]
    from_column = payload[DRAG_FROM_COLUMN]

    if from_column == to_column:
        console.print(f"[dim]Dropped back on {to_column} (no change)[/dim]")
        return

    task = store.drop(payload, to_column)
    if task is None:
        console.print(f"[yellow]Task {escape(task_id)} is no longer in {from_column}[/yellow]")
        return

    console.print(
        f"[green]{celebrate_move()}[/green] Moved [cyan]{escape(task.id)}[/cyan] "
        f"[dim]{from_column}[/dim] → [bold]{to_column}[/bold]"
    )


def handle_reload_command(result: ParseResult) -> None:
    """
    Handle 'reload' command - replace the board with the remote task list.

    Usage:
        reload

    Notes:
        - Every task comes back in To Do; local moves are lost
        - Open edits are discarded
        - On failure the board is left as it was
    """
    store = repl_context.require_store()
    open_edits = len(store.drafts())

    try:
        count = store.load()
    except GatewayError as e:
        console.print(f"[red]Error:[/red] Could not reload board: {escape(str(e))}")
        return

    repl_context.drag_payload = None
    console.print(f"[green]✓ Loaded {count} task(s)[/green]")
    if open_edits:
        console.print(f"[dim]Discarded {open_edits} open edit(s)[/dim]")


def handle_sync_command(result: ParseResult) -> None:
    """
    Handle 'sync' command - show remote call status.

    Usage:
        sync

    Notes:
        - Failures are also reported automatically before each prompt
    """
    store = repl_context.require_store()

    pending = store.sync.pending_count()
    if pending:
        console.print(f"[yellow]⟳ {pending} remote call(s) pending[/yellow]")
    else:
        console.print("[green]✓ All changes sent[/green]")

    failures = store.sync.drain_failures()
    for failure in failures:
        console.print(
            f"[yellow]⚠ Not synced:[/yellow] {failure.operation} [cyan]{escape(failure.task_id)}[/cyan] "
            f"[dim]at {failure.occurred_at} ({escape(failure.message)})[/dim]"
        )

    console.print(f"[dim]Task API: {escape(store.gateway.base_url)} (moves are not sent)[/dim]")
