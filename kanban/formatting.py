"""
FILE: kanban/formatting.py
PURPOSE: Shared formatting utilities for CLI and REPL output
EXPORTS:
  - BoardFormatter: Class for rendering the board and tasks
DEPENDENCIES:
  - rich (tables, panels, text)
  - json (for JSON serialization)
  - kanban.core.models (Task, Column, Draft)
NOTES:
  - Centralized formatting logic for consistency
  - Used by both CLI and REPL
  - Works on snapshots only; never touches the store's internals
  - Task text and IDs are escaped before they go into markup
"""

import json
from typing import Callable, Dict, List, Optional

from rich.console import Group
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .core.models import Column, Draft, Task

# Header colour per column
COLUMN_STYLES = {
    "To Do": "yellow",
    "In Progress": "blue",
    "Done": "green",
}


class BoardFormatter:
    """Centralized board display formatting."""

    @staticmethod
    def task_card(
        task: Task,
        draft: Optional[Draft] = None,
        pending: bool = False,
    ) -> Text:
        """
        Render one task as card text.

        Args:
            task: Task to render
            draft: Open draft when the task is being edited
            pending: Whether a remote call for this task hasn't finished

        Returns:
            Rich Text block (title line, optional description, markers)
        """
        card = Text()
        card.append(task.id, style="cyan")
        if pending:
            card.append(" ⟳", style="dim")
        card.append("\n")

        if task.is_editing:
            shown = draft or Draft(task.title, task.description)
            card.append("✎ ", style="yellow")
            card.append(shown.title or "(empty)", style="bold yellow")
            if shown.description:
                card.append(f"\n{shown.description}", style="yellow")
            card.append("\n[editing - save or cancel]", style="dim")
        else:
            card.append(task.title, style="bold")
            if task.description:
                card.append(f"\n{task.description}", style="dim")

        if task.updated_at:
            card.append(f"\n{task.updated_at}", style="dim italic")
        return card

    @staticmethod
    def create_board(
        columns: List[Column],
        drafts: Optional[Dict[str, Draft]] = None,
        is_pending: Optional[Callable[[str], bool]] = None,
        title: str = "Kanban",
    ) -> Table:
        """
        Create a Rich table with one column per board column.

        Args:
            columns: Board snapshot in display order
            drafts: Open drafts keyed by task ID
            is_pending: Predicate for the pending-sync marker
            title: Table title (e.g., "Kanban - Ana")

        Returns:
            Rich Table object ready for display
        """
        drafts = drafts or {}
        table = Table(title=escape(title), show_header=True, expand=True, show_lines=False)
        for column in columns:
            style = COLUMN_STYLES.get(column.name, "white")
            table.add_column(
                f"[{style}]{column.name}[/{style}] [dim]({len(column.tasks)})[/dim]",
                ratio=1,
                vertical="top",
            )

        cells = []
        for column in columns:
            if not column.tasks:
                cells.append(Text("No tasks", style="dim"))
                continue
            cards = [
                Panel(
                    BoardFormatter.task_card(
                        task,
                        drafts.get(task.id),
                        bool(is_pending and is_pending(task.id)),
                    ),
                    border_style="yellow" if task.is_editing else "dim",
                    padding=(0, 1),
                )
                for task in column.tasks
            ]
            cells.append(Group(*cards))

        table.add_row(*cells)
        return table

    @staticmethod
    def task_detail(column_name: str, task: Task, draft: Optional[Draft] = None) -> Panel:
        """Full details of one task."""
        lines = [
            f"[bold]{escape(task.title)}[/bold]",
            "",
            escape(task.description) if task.description else "[dim](no description)[/dim]",
            "",
            f"[dim]Column:[/dim]  {column_name}",
            f"[dim]Created:[/dim] {escape(task.created_at or '-')}",
            f"[dim]Updated:[/dim] {escape(task.updated_at or '-')}",
        ]
        if task.is_editing and draft is not None:
            lines.append("")
            lines.append(f"[yellow]Draft title:[/yellow] {escape(draft.title)}")
            lines.append(f"[yellow]Draft description:[/yellow] {escape(draft.description or '-')}")
        return Panel("\n".join(lines), title=f"[cyan]{escape(task.id)}[/cyan]", border_style="cyan")

    @staticmethod
    def to_json_board(columns: List[Column]) -> str:
        """
        Convert the board to a JSON object string.

        Returns:
            JSON mapping column name -> list of task records
        """
        return json.dumps(
            {column.name: [t.to_record() for t in column.tasks] for column in columns},
            indent=2,
        )

    @staticmethod
    def to_raw_lines(columns: List[Column]) -> List[str]:
        """
        Convert the board to plain text lines.

        Returns:
            One header line per column followed by "  id: title" lines
        """
        lines = []
        for column in columns:
            lines.append(f"{column.name}:")
            for task in column.tasks:
                lines.append(f"  {task.id}: {task.title}")
        return lines
