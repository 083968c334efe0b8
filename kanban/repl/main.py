"""
FILE: kanban/repl/main.py
PURPOSE: Interactive REPL for the board with prompt-toolkit
EXPORTS:
  - REPLContext (dataclass holding the session's board store)
  - repl_context (session-wide context instance)
  - main() - Entry point for REPL mode
  - run_repl() - Main REPL loop
  - execute_command() - Dispatch a parsed command
DEPENDENCIES:
  - prompt_toolkit (REPL interface, history, completion)
  - rich (formatted output)
  - kanban.core.board (BoardStore, build_store)
  - kanban.core.exceptions (error handling)
  - kanban.repl.parser (command parsing)
  - kanban.repl.completer (autocomplete)
NOTES:
  - The REPL context owns the BoardStore for the whole session; handlers
    mutate the board only through store operations
  - Remote calls run on a background worker; failures are shown as notices
    before the next prompt
  - Bottom toolbar shows per-column counts and pending remote calls
  - Right prompt shows the task currently being dragged
  - Ctrl+D or "exit"/"quit" to exit; pending remote calls are flushed first
"""

import sys
from dataclasses import dataclass
from typing import Dict, Optional

# Fix Windows console encoding for Unicode characters
# Only wrap if not already wrapped to prevent issues
if sys.platform == "win32":
    import io
    if not isinstance(sys.stdout, io.TextIOWrapper) or sys.stdout.encoding != 'utf-8':
        try:
            sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding='utf-8')
        except (AttributeError, ValueError):
            pass  # Already wrapped or unavailable
    if not isinstance(sys.stderr, io.TextIOWrapper) or sys.stderr.encoding != 'utf-8':
        try:
            sys.stderr = io.TextIOWrapper(sys.stderr.buffer, encoding='utf-8')
        except (AttributeError, ValueError):
            pass  # Already wrapped or unavailable

from prompt_toolkit import PromptSession
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.formatted_text import HTML
from rich.console import Console
from rich.markup import escape

from ..config import get_config
from ..core.board import BoardStore, build_store
from ..core.constants import COLUMN_NAMES, DRAG_TASK_ID
from ..core.exceptions import GatewayError
from .parser import parse_command, ParseResult
from .completer import create_completer


# Rich console for formatted output
console = Console()


# --- REPL Context (Persistent State) ---


@dataclass
class REPLContext:
    """
    Persistent context for the REPL session.

    Attributes:
        store: Board store owned by this session (None until started)
        drag_payload: Payload of a drag in progress ({taskId, fromColumn})
    """
    store: Optional[BoardStore] = None
    drag_payload: Optional[Dict[str, str]] = None

    def get_prompt(self) -> str:
        """
        Generate prompt string based on current context.

        Returns:
            Prompt like "kanban> " or "kanban:[dragging todo-17...]> "
        """
        if self.drag_payload:
            return f"kanban:[dragging {self.drag_payload[DRAG_TASK_ID]}]> "
        return "kanban> "

    def require_store(self) -> BoardStore:
        """Return the session store, failing loudly if the REPL wasn't started."""
        if self.store is None:
            raise RuntimeError("REPL board store is not initialised")
        return self.store


# Global REPL context (persists during session, resets on restart)
repl_context = REPLContext()


def format_prompt() -> HTML:
    """
    Create formatted prompt text with context and colors.

    Returns:
        HTML formatted prompt: "kanban> " or "kanban:[dragging <id>]> "
    """
    if repl_context.drag_payload:
        task_id = repl_context.drag_payload[DRAG_TASK_ID]
        return HTML("<b>kanban:[<ansiyellow>dragging {}</ansiyellow>]&gt; </b>").format(task_id)
    return HTML("<b>kanban&gt; </b>")


# Rotating tips for bottom toolbar
_TOOLBAR_TIPS = [
    "Tip: 'drag <id>' then 'drop <column>' moves a task",
    "Tip: 'edit <id> --title ...' changes the draft, 'save <id>' commits it",
    "Tip: Omit the task ID to get a numbered picker",
    "Tip: Moves stay local - the task API has no columns",
    "Tip: Press Ctrl+D or type 'exit' to quit",
    "Tip: Type 'help' to see all available commands",
]
_tip_index = 0


def get_bottom_toolbar() -> HTML:
    """
    Create bottom toolbar showing column counts, pending syncs and rotating tips.

    Returns:
        HTML formatted toolbar with stats and tips
    """
    try:
        store = repl_context.require_store()
        counts = store.counts()
        stats = " | ".join(f"{counts[name]} {name}" for name in COLUMN_NAMES)

        pending = store.sync.pending_count()
        if pending:
            stats += f" | ⟳ {pending} syncing"

        tip = _TOOLBAR_TIPS[_tip_index % len(_TOOLBAR_TIPS)]
        toolbar_text = f"{stats} | {tip}"

        return HTML(f"<style bg='#444444' fg='#ffffff'> {toolbar_text} </style>")
    except Exception:
        # Fallback if there's an error
        return HTML("<style bg='#444444' fg='#ffffff'> Kanban </style>")


def get_right_prompt() -> HTML:
    """
    Create right prompt showing the dragged task and its source column.

    Returns:
        HTML formatted right prompt (empty when nothing is being dragged)
    """
    if not repl_context.drag_payload:
        return HTML("")
    source = repl_context.drag_payload.get("fromColumn", "")
    return HTML(f"<style fg='#888888'>[from {source}]</style>")


def show_sync_notices() -> None:
    """Print remote calls that failed since the last prompt."""
    if repl_context.store is None:
        return
    for failure in repl_context.store.sync.drain_failures():
        console.print(
            f"[yellow]⚠ Not synced:[/yellow] {failure.operation} [cyan]{escape(failure.task_id)}[/cyan] "
            f"[dim]({escape(failure.message)})[/dim]"
        )


# Import command handlers from command modules
from .commands import (
    # Task handlers
    handle_add_command,
    handle_edit_command,
    handle_save_command,
    handle_cancel_command,
    handle_rm_command,
    handle_show_command,
    # Board handlers
    handle_board_command,
    handle_mv_command,
    handle_drag_command,
    handle_drop_command,
    handle_reload_command,
    handle_sync_command,
    # System handlers
    handle_help_command,
    handle_clear_command,
)


def execute_command(result: ParseResult) -> bool:
    """
    Execute a parsed command.

    Args:
        result: Parsed command from parser

    Returns:
        True to continue REPL loop, False to exit

    Dispatches to appropriate handler based on command name.
    """
    command = result.command.lower()

    # Exit commands
    if command in ("exit", "quit"):
        console.print("[dim]Goodbye![/dim]")
        return False

    # Empty command (just Enter pressed)
    if not command:
        return True

    # Dispatch to command handlers
    handlers = {
        "add": handle_add_command,
        "edit": handle_edit_command,
        "save": handle_save_command,
        "cancel": handle_cancel_command,
        "rm": handle_rm_command,
        "show": handle_show_command,
        "view": handle_show_command,
        "board": handle_board_command,
        "ls": handle_board_command,
        "mv": handle_mv_command,
        "drag": handle_drag_command,
        "drop": handle_drop_command,
        "reload": handle_reload_command,
        "sync": handle_sync_command,
        "help": handle_help_command,
        "clear": handle_clear_command,
    }

    handler = handlers.get(command)
    if handler:
        handler(result)
        # Add whitespace after command output for readability
        console.print()
    else:
        console.print(f"[red]Unknown command:[/red] {escape(command)}")
        console.print("[dim]Type 'help' for available commands[/dim]")
        console.print()

    return True


def start_session(store: Optional[BoardStore] = None) -> BoardStore:
    """
    Attach a store to the REPL context and load the board.

    A failed load doesn't stop the session: the board starts empty and
    'reload' can be used once the task API is reachable.
    """
    if store is None:
        store = build_store(get_config(), background=True)
    repl_context.store = store
    repl_context.drag_payload = None

    try:
        count = store.load()
        console.print(f"[dim]Loaded {count} task(s) from {escape(store.gateway.base_url)}[/dim]")
    except GatewayError as e:
        console.print(f"[yellow]Warning:[/yellow] Could not load board: {escape(str(e))}")
        console.print("[dim]Starting with an empty board - use 'reload' to try again[/dim]")
    return store


def end_session() -> None:
    """Flush pending remote calls and release the store."""
    store = repl_context.store
    if store is None:
        return

    pending = store.sync.pending_count()
    if pending:
        console.print(f"[dim]Waiting for {pending} remote call(s) to finish...[/dim]")
    store.close(wait=True)
    show_sync_notices()
    repl_context.store = None
    repl_context.drag_payload = None


def run_repl() -> None:
    """
    Main REPL loop.

    Sets up prompt_toolkit session with:
    - Command history (in-memory, not persisted)
    - Autocomplete (commands, flags, task IDs, column names)
    - Custom prompt formatting

    Exits on:
    - Ctrl+D (EOFError)
    - "exit" or "quit" commands
    """
    global _tip_index

    # Check if we have a proper TTY
    # In piped/test environments, skip prompt_toolkit entirely
    has_tty = sys.stdin.isatty() and sys.stdout.isatty()

    session = None
    use_simple_input = not has_tty

    if has_tty:
        # Create prompt session with history and autocomplete
        history = InMemoryHistory()
        completer = create_completer()

        try:
            # Try to create a proper session with terminal support
            session = PromptSession(
                history=history,
                completer=completer,
                complete_while_typing=True,
                bottom_toolbar=get_bottom_toolbar,
                rprompt=get_right_prompt,
            )
        except Exception as e:
            # Fallback to simple input if prompt_toolkit fails
            console.print(f"[yellow]Warning:[/yellow] Running in simple input mode: {escape(str(e))}")
            use_simple_input = True

    # Welcome message
    console.print("[bold cyan]Kanban REPL[/bold cyan] - Type 'help' for commands, 'exit' to quit")
    if use_simple_input:
        console.print("[dim](Running in simple mode - no autocomplete)[/dim]")

    start_session()
    console.print()

    try:
        # Main REPL loop
        while True:
            try:
                show_sync_notices()

                # Get user input
                if use_simple_input or session is None:
                    # Use simple input() for non-TTY or when prompt_toolkit failed
                    user_input = input(repl_context.get_prompt())
                else:
                    try:
                        user_input = session.prompt(format_prompt())
                    except (KeyboardInterrupt, EOFError):
                        raise
                    except Exception as e:
                        # If prompt fails, switch to simple mode
                        console.print(f"[yellow]Switching to simple input mode: {escape(str(e))}[/yellow]")
                        use_simple_input = True
                        user_input = input(repl_context.get_prompt())

                # Parse command
                result = parse_command(user_input)

                # Execute command (returns False to exit)
                if not execute_command(result):
                    break

                # Rotate tip after each command
                _tip_index += 1

            except KeyboardInterrupt:
                # Ctrl+C - show message and continue
                console.print("[dim]^C (Press Ctrl+D or type 'exit' to quit)[/dim]")
                continue
            except EOFError:
                # Ctrl+D or end of input - exit cleanly
                console.print()
                console.print("[dim]Goodbye![/dim]")
                break
            except Exception as e:
                # Unexpected error - show but don't crash
                console.print(f"[red]Unexpected error:[/red] {escape(str(e))}")
                import traceback
                console.print("[dim]" + escape(traceback.format_exc()) + "[/dim]")
    finally:
        end_session()


def main() -> None:
    """
    Entry point for REPL mode.

    Called when user runs: kanban repl
    """
    try:
        run_repl()
    except Exception as e:
        console.print(f"[red]Fatal error:[/red] {escape(str(e))}")
        sys.exit(1)


if __name__ == "__main__":
    main()
