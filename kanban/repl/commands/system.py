"""
FILE: kanban/repl/commands/system.py
PURPOSE: System command handlers for REPL
"""

from rich.panel import Panel

from ..main import console
from ..parser import ParseResult


def handle_help_command(result: ParseResult) -> None:
    """
    Handle 'help' command - show available commands.

    Args:
        result: Parsed command (unused)
    """
    help_text = """
[bold cyan]Available Commands:[/bold cyan]

  [cyan]board[/cyan] or [cyan]ls[/cyan]                Show the board
  [cyan]add <title> [--desc <text>][/cyan]   Create a task in To Do
  [cyan]edit [<id>] [<title>][/cyan]         Open the editor / change the draft (picker if no ID)
  [cyan]save [<id>][/cyan]                   Commit an edit
  [cyan]cancel [<id>][/cyan]                 Discard an edit
  [cyan]rm [<id>] [--force][/cyan]           Delete a task (picker if no ID)
  [cyan]show [<id>][/cyan]                   View full task details (picker if no ID)
  [cyan]mv [<id>] <column>[/cyan]            Move task to column (picker if no ID)
  [cyan]drag [<id>][/cyan]                   Pick up a task
  [cyan]drop <column>[/cyan]                 Drop the dragged task on a column
  [cyan]reload[/cyan]                        Reload the board from the task API
  [cyan]sync[/cyan]                          Show pending and failed remote calls
  [cyan]help[/cyan]                          Show this help
  [cyan]clear[/cyan]                         Clear the screen
  [cyan]exit[/cyan] or [cyan]quit[/cyan]                 Exit REPL

[bold cyan]Flags:[/bold cyan]

  [cyan]--title, -t <text>[/cyan]            Draft title for edit
  [cyan]--desc, -d <text>[/cyan]             Description for add / edit
  [cyan]--force[/cyan]                       Delete without asking

[bold cyan]Columns:[/bold cyan]

  [dim]To Do (todo), In Progress (doing, progress), Done - case doesn't matter[/dim]

[bold cyan]Examples:[/bold cyan]

  [dim]add Buy groceries
  add "Plan sprint" --desc "Q3 goals"
  edit todo-1718000000000 --title "Buy oat milk"
  save todo-1718000000000
  mv todo-1718000000000 In Progress
  mv done                     # Shows picker to select task
  drag todo-1718000000000
  drop done
  rm todo-1718000000000 --force[/dim]

[bold yellow]⟳ Syncing:[/bold yellow]
  [dim]Adds, saves and deletes show up on the board immediately and are
  sent to the task API in the background. Cards marked ⟳ are still being
  sent. Failed calls are reported before the next prompt; the board is
  not rolled back. Moves between columns stay local, and 'reload' puts
  every task back in To Do.[/dim]
"""
    console.print(Panel(help_text, title="Kanban REPL Help", border_style="cyan"))


def handle_clear_command(result: ParseResult) -> None:
    """
    Clear the screen.

    Args:
        result: Parsed command (no arguments used)
    """
    console.clear()
    console.print("[dim]Screen cleared[/dim]")
