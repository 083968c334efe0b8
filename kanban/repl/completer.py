"""
FILE: kanban/repl/completer.py
PURPOSE: Autocomplete logic for REPL commands and arguments
EXPORTS:
  - KanbanCompleter (Completer for command/arg completion)
  - create_completer() -> KanbanCompleter
DEPENDENCIES:
  - prompt_toolkit.completion (Completer, Completion)
  - typing (type hints)
  - kanban.repl.main (session store for task IDs)
NOTES:
  - Suggests command names when at start of line
  - Suggests task IDs for commands expecting an ID first
  - Suggests column names after "mv <id>" and "drop"
  - Suggests flags after commands (--desc, --title)
  - Case-insensitive matching
"""

from typing import Iterable, List
from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document

from ..core.constants import COLUMN_NAMES


class KanbanCompleter(Completer):
    """
    Custom completer for Kanban REPL.

    Provides context-aware autocomplete:
    - Command names at start of input
    - Task IDs and column names as arguments
    - Flags after command names
    """

    # Available commands
    COMMANDS = [
        "add", "edit", "save", "cancel", "rm", "show", "view", "board", "ls",
        "mv", "drag", "drop", "reload", "sync", "help", "clear", "exit", "quit"
    ]

    # Commands whose first argument is a task ID
    ID_FIRST_COMMANDS = {"edit", "save", "cancel", "rm", "show", "view", "mv", "drag"}

    # Command-specific flags
    COMMAND_FLAGS = {
        "add": ["--desc"],
        "edit": ["--title", "--desc"],
    }

    COMMAND_DESCRIPTIONS = {
        "add": "Create a task in To Do",
        "edit": "Open the editor / change the draft",
        "save": "Commit an edit",
        "cancel": "Discard an edit",
        "rm": "Delete a task",
        "show": "View full task details",
        "view": "View full task details",
        "board": "Show the board",
        "ls": "Show the board",
        "mv": "Move a task to a column",
        "drag": "Pick up a task",
        "drop": "Drop the dragged task on a column",
        "reload": "Reload the board from the task API",
        "sync": "Show pending and failed remote calls",
        "help": "Show help",
        "clear": "Clear the screen",
        "exit": "Exit the REPL",
        "quit": "Exit the REPL",
    }

    FLAG_DESCRIPTIONS = {
        "--desc": "Task description",
        "--title": "Task title",
    }

    def get_completions(
        self, document: Document, complete_event
    ) -> Iterable[Completion]:
        """
        Generate completions based on current input.

        Logic:
            1. If at start or only whitespace -> suggest commands
            2. If command takes a task ID and we're on the first arg -> suggest IDs
            3. If "mv <id> " or "drop " -> suggest column names
            4. If after command -> suggest flags
        """
        text_before_cursor = document.text_before_cursor
        words = text_before_cursor.split()
        at_space = text_before_cursor.endswith(" ")

        # Case 1: Empty input or typing the command
        if not words or (not at_space and len(words) == 1):
            word = words[0] if words else ""
            yield from self._complete_commands(word)
            return

        command = words[0].lower()

        # Case 2: Task ID as first argument
        if command in self.ID_FIRST_COMMANDS:
            if len(words) == 1 and at_space:
                yield from self._complete_task_ids("")
                return
            if len(words) == 2 and not at_space:
                yield from self._complete_task_ids(words[1])
                return

        # Case 3: Column names ("mv <id> <column>", "drop <column>")
        column_start = {"mv": 2, "drop": 1}.get(command)
        if column_start is not None and len(words) >= column_start:
            typed = words[column_start:]
            if at_space:
                typed.append("")
            if typed and not any(w.startswith("-") for w in typed):
                yield from self._complete_column_names(typed)
                return

        # Case 4: Flags
        last_word = words[-1] if words else ""
        if not last_word.startswith("--") and not at_space:
            return
        yield from self._complete_flags(command, "" if at_space else last_word)

    def _complete_commands(self, word: str) -> Iterable[Completion]:
        word_lower = word.lower()
        for command in self.COMMANDS:
            if command.startswith(word_lower):
                yield Completion(
                    command,
                    start_position=-len(word),
                    display=command,
                    display_meta=self.COMMAND_DESCRIPTIONS.get(command, ""),
                )

    def _complete_flags(self, command: str, word: str) -> Iterable[Completion]:
        word_lower = word.lower()
        for flag in self.COMMAND_FLAGS.get(command, []):
            if flag.startswith(word_lower):
                yield Completion(
                    flag,
                    start_position=-len(word),
                    display=flag,
                    display_meta=self.FLAG_DESCRIPTIONS.get(flag, ""),
                )

    def _complete_task_ids(self, word: str) -> Iterable[Completion]:
        """
        Complete task IDs from the session board.

        Yields nothing when the REPL has no store (e.g., in isolation).
        """
        from .main import repl_context

        store = repl_context.store
        if store is None:
            return

        for column_name, task in self._board_tasks(store):
            if task.id.startswith(word):
                title = task.title if len(task.title) <= 30 else task.title[:27] + "..."
                yield Completion(
                    task.id,
                    start_position=-len(word),
                    display=task.id,
                    display_meta=f"{title} [{column_name}]",
                )

    def _complete_column_names(self, typed: List[str]) -> Iterable[Completion]:
        """
        Complete a (possibly multi-word) column name.

        Args:
            typed: Words of the column name typed so far (last may be partial)
        """
        partial = " ".join(typed).lower()
        for name in COLUMN_NAMES:
            if name.lower().startswith(partial):
                # Replaces everything typed for the column name
                yield Completion(
                    name,
                    start_position=-len(partial),
                    display=name,
                )

    @staticmethod
    def _board_tasks(store):
        for column in store.columns():
            for task in column.tasks:
                yield column.name, task


def create_completer() -> KanbanCompleter:
    """Create the REPL completer."""
    return KanbanCompleter()
