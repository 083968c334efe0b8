"""
Tests for task records, columns and exceptions.
"""

import json

# Path setup handled by conftest.py
from kanban.core.models import Task, Column, Draft
from kanban.core.exceptions import (
    KanbanError,
    ColumnNotFoundError,
    GatewayError,
    TaskNotFoundError,
)


def test_task_from_record(records):
    """Test converting a wire record to a Task."""
    task = Task.from_record(records[0])

    assert task.id == "todo-1"
    assert task.title == "Buy milk"
    assert task.description == "2 litres"
    assert task.created_at == "2024-06-01 08:00:00"
    assert task.updated_at == "2024-06-01 08:00:00"
    assert task.is_editing is False
    print("✓ Record converts to Task")


def test_task_from_record_ignores_remote_extras():
    """A remote status or isEditing flag never reaches the Task."""
    task = Task.from_record({"id": 7, "title": "x", "status": "Done", "isEditing": True})

    assert task.id == "7"
    assert task.is_editing is False
    assert task.description == ""
    assert task.created_at == ""
    print("✓ Unknown record keys are ignored")


def test_task_to_record_has_wire_keys():
    """Test that to_record uses camelCase keys and omits UI-only state."""
    task = Task("todo-1", "Buy milk", "2 litres", "2024-06-01 08:00:00", "2024-06-02 09:00:00", is_editing=True)
    record = task.to_record()

    assert record == {
        "id": "todo-1",
        "title": "Buy milk",
        "description": "2 litres",
        "createdAt": "2024-06-01 08:00:00",
        "updatedAt": "2024-06-02 09:00:00",
    }
    assert json.loads(task.to_json()) == record
    print("✓ Task serializes to wire record")


def test_column_index_of():
    column = Column("To Do", [Task("a", "A"), Task("b", "B")])

    assert column.index_of("b") == 1
    assert column.index_of("missing") == -1


def test_draft_defaults():
    draft = Draft("Title")
    assert draft.description == ""


def test_exception_messages():
    """Test that exceptions carry context in their messages."""
    assert str(TaskNotFoundError("todo-9")) == "Task todo-9 not found"
    assert str(ColumnNotFoundError("Later")) == "Column 'Later' not found"

    with_status = GatewayError("update task", "Not Found", 404)
    assert str(with_status) == "update task failed (404): Not Found"
    assert with_status.status_code == 404
    assert with_status.operation == "update task"

    without_status = GatewayError("list tasks", "timed out after 10.0s")
    assert str(without_status) == "list tasks failed: timed out after 10.0s"
    assert without_status.status_code is None

    assert isinstance(with_status, KanbanError)
    print("✓ Exception messages include context")
