"""Quick test of completer functionality."""

import pytest

# Path setup handled by conftest.py
from kanban.repl.completer import create_completer
from kanban.repl.main import repl_context
from prompt_toolkit.document import Document


def complete(text):
    completer = create_completer()
    doc = Document(text, cursor_position=len(text))
    return [c.text for c in completer.get_completions(doc, None)]


@pytest.fixture
def session_store(loaded_store):
    repl_context.store = loaded_store
    yield loaded_store
    repl_context.store = None
    repl_context.drag_payload = None


def test_command_completion():
    """Test that commands are available for completion."""
    assert "drag" in complete("dr")
    assert "drop" in complete("dr")
    assert complete("m") == ["mv"]
    print("✓ Command completion works")


def test_task_id_completion(session_store):
    """Test that task IDs are suggested for commands taking an ID."""
    assert complete("edit ") == ["todo-1", "todo-2"]
    assert complete("drag todo-2") == ["todo-2"]
    print("✓ Task ID completion works")


def test_no_task_ids_without_store():
    assert complete("edit ") == []


def test_column_completion(session_store):
    """Test that column names are suggested after 'mv <id>' and 'drop'."""
    assert complete("mv todo-1 ") == ["To Do", "In Progress", "Done"]
    assert complete("drop in") == ["In Progress"]
    assert complete("drop in p") == ["In Progress"]
    print("✓ Column name completion works")


def test_flag_completion():
    """Test that flags are suggested for add and edit."""
    assert complete("add Milk --") == ["--desc"]
    assert complete("edit todo-1 --t") == ["--title"]
    assert complete("board --") == []
