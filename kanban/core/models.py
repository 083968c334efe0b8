"""
FILE: kanban/core/models.py
PURPOSE: Domain models for tasks, columns, and edit drafts
EXPORTS:
  - Task (dataclass)
  - Column (dataclass)
  - Draft (dataclass)
DEPENDENCIES:
  - dataclasses (stdlib)
  - json (stdlib)
  - typing (stdlib)
NOTES:
  - Task has from_record()/to_record() for the remote API wire format
  - Wire records use camelCase keys (createdAt, updatedAt)
  - is_editing is UI-only and never part of a wire record
  - Task has to_json() for CLI output; whole boards go through BoardFormatter.to_json_board
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List
import json


@dataclass
class Task:
    """A unit of work shown as a card on the board."""

    id: str
    title: str
    description: str = ""
    created_at: str = ""
    updated_at: str = ""
    is_editing: bool = False

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Task":
        """
        Convert a remote API record to a Task.

        Unknown keys (a remote status, a stray isEditing) are ignored;
        tasks always arrive in the Viewing state.
        """
        description = record.get("description")
        return cls(
            id=str(record["id"]),
            title=str(record.get("title") or ""),
            description=str(description) if description is not None else "",
            created_at=str(record.get("createdAt") or ""),
            updated_at=str(record.get("updatedAt") or ""),
        )

    def to_record(self) -> Dict[str, Any]:
        """Serialize to the remote API record (no UI-only fields)."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    def to_json(self) -> str:
        """Serialize task to JSON string."""
        return json.dumps(self.to_record(), indent=2)


@dataclass
class Column:
    """A named, ordered bucket of tasks (e.g., To Do, In Progress, Done)."""

    name: str
    tasks: List[Task] = field(default_factory=list)

    def index_of(self, task_id: str) -> int:
        """Position of task_id in this column, or -1."""
        for i, task in enumerate(self.tasks):
            if task.id == task_id:
                return i
        return -1


@dataclass
class Draft:
    """Uncommitted title/description for a task being edited."""

    title: str
    description: str = ""
