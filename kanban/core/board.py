"""
FILE: kanban/core/board.py
PURPOSE: Board state store - single source of truth for what is rendered
EXPORTS:
  - BoardStore (all board mutations and read-only queries)
  - resolve_column(name) -> str
  - build_store(config, background) -> BoardStore
DEPENDENCIES:
  - kanban.core.models (Task, Column, Draft)
  - kanban.core.gateway (TaskGateway)
  - kanban.core.sync (RemoteSync)
  - kanban.core.exceptions (ColumnNotFoundError, GatewayError)
  - datetime, copy (stdlib)
NOTES:
  - Local state changes synchronously; remote calls go through RemoteSync
    and their outcome is never merged back (fire-and-forget)
  - Moves are local-only: the remote API has no concept of columns
  - load() places every fetched task in "To Do" and raises GatewayError
    on failure, leaving the board as it was
  - Validation failures and unknown task IDs are no-ops returning None
  - Editing happens on a Draft; the Task only changes on save_edit()
  - Queries return copies so rendering code can't mutate the board
"""

import copy
import logging
from dataclasses import replace
from datetime import datetime
from typing import Callable, Dict, List, Optional, Tuple

from .constants import (
    COLUMN_ALIASES,
    COLUMN_NAMES,
    DEFAULT_COLUMN,
    DRAG_FROM_COLUMN,
    DRAG_TASK_ID,
    TASK_ID_PREFIX,
    TIMESTAMP_FORMAT,
)
from .exceptions import ColumnNotFoundError
from .gateway import TaskGateway
from .models import Column, Draft, Task
from .sync import RemoteSync

logger = logging.getLogger(__name__)


def resolve_column(name: str) -> str:
    """
    Resolve user input to a board column name.

    Args:
        name: Column display name (any case) or alias ("todo", "doing", ...)

    Returns:
        Canonical column name

    Raises:
        ColumnNotFoundError: If name matches no column
    """
    key = name.strip().lower()
    for column_name in COLUMN_NAMES:
        if column_name.lower() == key:
            return column_name
    if key in COLUMN_ALIASES:
        return COLUMN_ALIASES[key]
    raise ColumnNotFoundError(name)


class BoardStore:
    """
    In-memory board of three columns, kept in step with the remote store.

    Every mutation goes through one of the methods below. Methods that
    touch a task take the column it is expected in, mirroring how the
    board UI always knows which column a card was rendered in.
    """

    def __init__(
        self,
        gateway: TaskGateway,
        sync: Optional[RemoteSync] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.gateway = gateway
        self.sync = sync if sync is not None else RemoteSync(background=False)
        self._clock = clock
        self._columns: Dict[str, Column] = {name: Column(name) for name in COLUMN_NAMES}
        self._drafts: Dict[str, Draft] = {}

        # New-task input fields (cleared after a successful add)
        self.new_title = ""
        self.new_description = ""

    # --- Internal helpers ---

    def _column(self, name: str) -> Optional[Column]:
        return self._columns.get(name)

    def _locate(self, task_id: str, column_name: str) -> Optional[Tuple[Column, int]]:
        column = self._column(column_name)
        if column is None:
            return None
        index = column.index_of(task_id)
        if index < 0:
            return None
        return column, index

    def _timestamp(self, now: Optional[datetime] = None) -> str:
        return (now or self._clock()).strftime(TIMESTAMP_FORMAT)

    def _generate_id(self, now: datetime) -> str:
        # Millisecond timestamp, bumped until unique on this board
        millis = int(now.timestamp() * 1000)
        existing = set(self.task_ids())
        while f"{TASK_ID_PREFIX}{millis}" in existing:
            millis += 1
        return f"{TASK_ID_PREFIX}{millis}"

    # --- Loading ---

    def load(self) -> int:
        """
        Replace the board with the remote task list.

        Returns:
            Number of tasks placed on the board

        Raises:
            GatewayError: If the fetch fails (board left unchanged)

        Notes:
            - Every fetched task goes to "To Do", whatever the record says
            - Drafts and editing flags are discarded
            - Records without an id, or repeating an earlier id, are skipped
        """
        records = self.gateway.list_tasks()

        tasks: List[Task] = []
        seen = set()
        for record in records:
            if not isinstance(record, dict) or record.get("id") in (None, ""):
                logger.warning(f"Skipping remote record without id: {record!r}")
                continue
            task = Task.from_record(record)
            if task.id in seen:
                logger.warning(f"Skipping duplicate remote task id {task.id}")
                continue
            seen.add(task.id)
            tasks.append(task)

        self._columns = {name: Column(name) for name in COLUMN_NAMES}
        self._columns[DEFAULT_COLUMN].tasks.extend(tasks)
        self._drafts.clear()

        logger.info(f"Loaded {len(tasks)} task(s) from {self.gateway.base_url}")
        return len(tasks)

    # --- Task lifecycle ---

    def set_new_task_input(self, title: str = "", description: str = "") -> None:
        """Set the new-task input fields used by add_task() without arguments."""
        self.new_title = title
        self.new_description = description

    def add_task(self, title: Optional[str] = None, description: Optional[str] = None) -> Optional[Task]:
        """
        Create a task at the end of "To Do" and mirror it remotely.

        Args:
            title: Task title (defaults to the new-task input field)
            description: Task description (defaults to the input field)

        Returns:
            The new Task, or None if the title is empty after trimming
        """
        if title is None:
            title = self.new_title
        if description is None:
            description = self.new_description

        if not title.strip():
            logger.debug("Rejected task with empty title")
            return None

        now = self._clock()
        timestamp = self._timestamp(now)
        task = Task(
            id=self._generate_id(now),
            title=title,
            description=description,
            created_at=timestamp,
            updated_at=timestamp,
        )
        self._columns[DEFAULT_COLUMN].tasks.append(task)
        self.sync.submit("create", task.id, self.gateway.create_task, task.to_record())

        self.new_title = ""
        self.new_description = ""

        logger.info(f"Created task {task.id}")
        return replace(task)

    def start_editing(self, task_id: str, column_name: str) -> Optional[Task]:
        """
        Open the inline editor for a task (Viewing -> Editing).

        An existing draft is kept, so re-opening the editor doesn't lose
        unsaved changes. No remote effect.
        """
        found = self._locate(task_id, column_name)
        if found is None:
            return None

        column, index = found
        task = column.tasks[index]
        task.is_editing = True
        if task_id not in self._drafts:
            self._drafts[task_id] = Draft(title=task.title, description=task.description)
        return replace(task)

    def update_draft(
        self,
        task_id: str,
        column_name: str,
        title: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Optional[Draft]:
        """Change the draft of a task in the Editing state. The task itself is untouched."""
        found = self._locate(task_id, column_name)
        if found is None:
            return None

        column, index = found
        if not column.tasks[index].is_editing:
            return None

        draft = self._drafts[task_id]
        if title is not None:
            draft.title = title
        if description is not None:
            draft.description = description
        return replace(draft)

    def save_edit(
        self,
        task_id: str,
        column_name: str,
        new_title: Optional[str] = None,
        new_description: Optional[str] = None,
    ) -> Optional[Task]:
        """
        Commit an edit (Editing -> Viewing) and push the record remotely.

        Args:
            task_id: Task to save
            column_name: Column the task is in
            new_title: Title to save (defaults to the draft, then the current title)
            new_description: Description to save (same defaulting)

        Returns:
            The updated Task, or None if not found or the title is blank

        Notes:
            - id and created_at are preserved; updated_at is refreshed
            - A blank title leaves the task in the Editing state
        """
        found = self._locate(task_id, column_name)
        if found is None:
            return None

        column, index = found
        current = column.tasks[index]
        draft = self._drafts.get(task_id)

        if new_title is None:
            new_title = draft.title if draft else current.title
        if new_description is None:
            new_description = draft.description if draft else current.description

        if not new_title.strip():
            logger.debug(f"Rejected blank title for task {task_id}")
            return None

        updated = replace(
            current,
            title=new_title,
            description=new_description,
            updated_at=self._timestamp(),
            is_editing=False,
        )
        column.tasks[index] = updated
        self._drafts.pop(task_id, None)
        self.sync.submit("update", task_id, self.gateway.update_task, task_id, updated.to_record())

        logger.info(f"Saved task {task_id}")
        return replace(updated)

    def cancel_edit(self, task_id: str, column_name: str) -> Optional[Task]:
        """Close the editor without saving; the draft is discarded."""
        found = self._locate(task_id, column_name)
        if found is None:
            return None

        column, index = found
        task = column.tasks[index]
        task.is_editing = False
        self._drafts.pop(task_id, None)
        return replace(task)

    def delete_task(self, task_id: str, column_name: str) -> Optional[Task]:
        """
        Remove a task from its column and delete it remotely.

        Returns:
            The removed Task, or None if it wasn't in the column (no remote call)
        """
        found = self._locate(task_id, column_name)
        if found is None:
            return None

        column, index = found
        task = column.tasks.pop(index)
        self._drafts.pop(task_id, None)
        self.sync.submit("delete", task_id, self.gateway.delete_task, task_id)

        logger.info(f"Deleted task {task_id}")
        return replace(task)

    def move_task(self, task_id: str, from_column: str, to_column: str) -> Optional[Task]:
        """
        Move a task to the end of another column. Local-only, never raises.

        Returns:
            The moved Task, or None when the columns are equal, either
            column is unknown, or the task isn't in from_column
        """
        if from_column == to_column or self._column(to_column) is None:
            return None

        found = self._locate(task_id, from_column)
        if found is None:
            return None

        column, index = found
        task = column.tasks.pop(index)
        self._columns[to_column].tasks.append(task)

        logger.debug(f"Moved task {task_id}: {from_column} -> {to_column}")
        return replace(task)

    # --- Drag and drop ---

    def begin_drag(self, task_id: str, column_name: str) -> Optional[Dict[str, str]]:
        """Build the drag payload for a task, or None if it isn't in column_name."""
        if self._locate(task_id, column_name) is None:
            return None
        return {DRAG_TASK_ID: task_id, DRAG_FROM_COLUMN: column_name}

    def drop(self, payload: Dict[str, str], to_column: str) -> Optional[Task]:
        """Finish a drag: move the dragged task when dropped on a different column."""
        task_id = payload.get(DRAG_TASK_ID, "")
        from_column = payload.get(DRAG_FROM_COLUMN, "")
        if not task_id or from_column == to_column:
            return None
        return self.move_task(task_id, from_column, to_column)

    # --- Queries ---

    def columns(self) -> List[Column]:
        """Snapshot of the board in display order."""
        return [copy.deepcopy(self._columns[name]) for name in COLUMN_NAMES]

    def tasks_in(self, column_name: str) -> List[Task]:
        """Copies of the tasks in a column (empty for unknown columns)."""
        column = self._column(column_name)
        if column is None:
            return []
        return [replace(t) for t in column.tasks]

    def find_task(self, task_id: str) -> Optional[Tuple[str, Task]]:
        """Find which column holds task_id."""
        for name in COLUMN_NAMES:
            column = self._columns[name]
            index = column.index_of(task_id)
            if index >= 0:
                return name, replace(column.tasks[index])
        return None

    def get_draft(self, task_id: str) -> Optional[Draft]:
        draft = self._drafts.get(task_id)
        return replace(draft) if draft else None

    def drafts(self) -> Dict[str, Draft]:
        """Copies of all open drafts, keyed by task ID."""
        return {task_id: replace(d) for task_id, d in self._drafts.items()}

    def is_pending(self, task_id: str) -> bool:
        return self.sync.is_pending(task_id)

    def task_ids(self) -> List[str]:
        return [t.id for name in COLUMN_NAMES for t in self._columns[name].tasks]

    def counts(self) -> Dict[str, int]:
        return {name: len(self._columns[name].tasks) for name in COLUMN_NAMES}

    def close(self, wait: bool = True) -> None:
        """Flush outstanding remote calls and release the HTTP client."""
        self.sync.close(wait=wait)
        self.gateway.close()


def build_store(config=None, background: bool = True) -> BoardStore:
    """
    Create a BoardStore wired to the configured remote API.

    Args:
        config: Config object (defaults to get_config())
        background: Run remote calls on a worker thread (REPL) or inline (CLI)
    """
    from ..config import get_config

    config = config or get_config()
    gateway = TaskGateway(
        base_url=config.gateway.base_url,
        timeout=config.gateway.timeout,
        tasks_path=config.gateway.tasks_path,
    )
    return BoardStore(gateway, sync=RemoteSync(background=background))
