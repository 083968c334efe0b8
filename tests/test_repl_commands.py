"""
Tests for REPL command handlers.

Commands are run through execute_command() against a board backed by
the in-memory gateway, with output captured from the REPL console.
"""

import pytest
from prompt_toolkit.formatted_text import fragment_list_to_text, to_formatted_text

# Path setup handled by conftest.py
from kanban.repl.main import (
    REPLContext,
    end_session,
    execute_command,
    format_prompt,
    repl_context,
    show_sync_notices,
    start_session,
)
from kanban.repl.parser import parse_command


@pytest.fixture
def session(loaded_store):
    """REPL session around the sample board."""
    repl_context.store = loaded_store
    repl_context.drag_payload = None
    yield loaded_store
    repl_context.store = None
    repl_context.drag_payload = None


def run(line):
    return execute_command(parse_command(line))


def answer(monkeypatch, *replies):
    """Feed replies to input() prompts (pickers, confirmations)."""
    replies = iter(replies)
    monkeypatch.setattr("builtins.input", lambda prompt="": next(replies))


# --- Context ---


def test_repl_context_prompt():
    ctx = REPLContext()
    assert ctx.get_prompt() == "kanban> "

    ctx.drag_payload = {"taskId": "todo-1", "fromColumn": "To Do"}
    assert ctx.get_prompt() == "kanban:[dragging todo-1]> "


def test_require_store_without_session():
    with pytest.raises(RuntimeError):
        REPLContext().require_store()


# --- Dispatch ---


def test_exit_and_quit(session, capsys):
    assert run("exit") is False
    assert run("quit") is False
    assert "Goodbye!" in capsys.readouterr().out


def test_empty_and_unknown_commands(session, capsys):
    assert run("") is True
    assert run("frobnicate") is True
    assert "Unknown command: frobnicate" in capsys.readouterr().out


def test_help(session, capsys):
    run("help")
    assert "Kanban REPL Help" in capsys.readouterr().out


# --- Task commands ---


def test_add_command(session, capsys):
    """Test that 'add' creates a task in To Do."""
    run('add "Plan sprint" --desc "Q3 goals"')

    task = session.tasks_in("To Do")[-1]
    assert task.title == "Plan sprint"
    assert task.description == "Q3 goals"
    assert "Created task" in capsys.readouterr().out
    assert session.gateway.operations() == ["create task"]
    print("✓ REPL add works")


def test_add_unquoted_title(session):
    run("add Buy more milk")
    assert session.tasks_in("To Do")[-1].title == "Buy more milk"


def test_add_requires_title(session, capsys):
    run("add")
    assert "Task title required" in capsys.readouterr().out
    assert len(session.task_ids()) == 2


def test_edit_save_flow(session, capsys):
    """Test edit -> save commits the draft."""
    run("edit todo-1 --title Oat milk")
    out = capsys.readouterr().out
    assert "Editing" in out

    # Committed title is unchanged until save
    assert session.find_task("todo-1")[1].title == "Buy milk"
    assert session.get_draft("todo-1").title == "Oat"

    run('edit todo-1 --title "Oat milk" -d "1 litre"')
    run("save todo-1")

    _, task = session.find_task("todo-1")
    assert task.title == "Oat milk"
    assert task.description == "1 litre"
    assert task.is_editing is False
    assert "Saved" in capsys.readouterr().out
    assert session.gateway.operations() == ["update task"]
    print("✓ REPL edit/save works")


def test_edit_positional_title(session):
    run("edit todo-2 Final report")
    assert session.get_draft("todo-2").title == "Final report"


def test_edit_unknown_task(session, capsys):
    run("edit todo-99")
    assert "Task todo-99 not found" in capsys.readouterr().out


def test_edit_with_picker(session, monkeypatch):
    answer(monkeypatch, "2")
    run("edit")
    assert session.find_task("todo-2")[1].is_editing is True


def test_picker_cancel(session, monkeypatch):
    answer(monkeypatch, "")
    run("edit")
    assert session.drafts() == {}


def test_save_requires_editing(session, capsys):
    run("save todo-1")
    assert "isn't being edited" in capsys.readouterr().out
    assert session.gateway.calls == []


def test_save_blank_title_keeps_editing(session, capsys):
    run("edit todo-1")
    run('edit todo-1 --title ""')
    run("save todo-1")

    assert "cannot be empty" in capsys.readouterr().out
    assert session.find_task("todo-1")[1].is_editing is True
    assert session.gateway.calls == []


def test_cancel_discards_draft(session, capsys):
    run("edit todo-1 --title Changed")
    run("cancel todo-1")

    _, task = session.find_task("todo-1")
    assert task.title == "Buy milk"
    assert task.is_editing is False
    assert "Discarded changes" in capsys.readouterr().out


def test_rm_with_confirmation(session, monkeypatch, capsys):
    answer(monkeypatch, "y")
    run("rm todo-1")

    assert session.task_ids() == ["todo-2"]
    assert "Deleted" in capsys.readouterr().out
    assert session.gateway.operations() == ["delete task"]


def test_rm_declined(session, monkeypatch, capsys):
    answer(monkeypatch, "n")
    run("rm todo-1")

    assert session.task_ids() == ["todo-1", "todo-2"]
    assert "Cancelled" in capsys.readouterr().out


def test_rm_force_clears_drag(session):
    run("drag todo-1")
    run("rm todo-1 --force")

    assert repl_context.drag_payload is None
    assert session.task_ids() == ["todo-2"]


def test_show_command(session, capsys):
    run("show todo-1")
    out = capsys.readouterr().out
    assert "Buy milk" in out
    assert "2 litres" in out
    assert "To Do" in out


# --- Board commands ---


def test_board_command(session, capsys):
    run("board")
    out = capsys.readouterr().out
    assert "To Do" in out
    assert "In Progress" in out
    assert "Done" in out


def test_mv_command(session, capsys):
    """Test that mv moves locally and sends nothing remotely."""
    run("mv todo-1 In Progress")

    assert session.find_task("todo-1")[0] == "In Progress"
    assert "Moved" in capsys.readouterr().out
    assert session.gateway.calls == []
    print("✓ REPL mv works")


def test_mv_alias_and_picker(session, monkeypatch):
    answer(monkeypatch, "1")
    run("mv done")
    assert session.find_task("todo-1")[0] == "Done"


def test_mv_multi_word_column_with_picker(session, monkeypatch):
    answer(monkeypatch, "2")
    run("mv In Progress")
    assert session.find_task("todo-2")[0] == "In Progress"


def test_mv_unknown_column(session, capsys):
    run("mv todo-1 Later")
    assert "Column 'Later' not found" in capsys.readouterr().out
    assert session.find_task("todo-1")[0] == "To Do"


def test_mv_same_column(session, capsys):
    run("mv todo-1 todo")
    assert "already in To Do" in capsys.readouterr().out


def test_drag_and_drop(session, capsys):
    """Test drag then drop moves the task and ends the drag."""
    run("drag todo-2")
    assert repl_context.drag_payload == {"taskId": "todo-2", "fromColumn": "To Do"}
    assert repl_context.get_prompt() == "kanban:[dragging todo-2]> "

    run("drop done")

    assert repl_context.drag_payload is None
    assert session.find_task("todo-2")[0] == "Done"
    assert "Moved" in capsys.readouterr().out
    print("✓ REPL drag/drop works")


def test_drop_on_source_column(session, capsys):
    run("drag todo-1")
    run("drop To Do")

    assert repl_context.drag_payload is None
    assert [t.id for t in session.tasks_in("To Do")] == ["todo-1", "todo-2"]
    assert "no change" in capsys.readouterr().out


def test_drop_without_drag(session, capsys):
    run("drop done")
    assert "Nothing is being dragged" in capsys.readouterr().out


def test_drop_unknown_column_keeps_drag(session):
    run("drag todo-1")
    run("drop nowhere")
    assert repl_context.drag_payload is not None


def test_reload_resets_board(session, capsys):
    run("mv todo-1 Done")
    run("edit todo-2 --title Draft")
    run("drag todo-1")

    run("reload")

    assert [t.id for t in session.tasks_in("To Do")] == ["todo-1", "todo-2"]
    assert repl_context.drag_payload is None
    out = capsys.readouterr().out
    assert "Loaded 2 task(s)" in out
    assert "Discarded 1 open edit(s)" in out


def test_reload_failure_keeps_board(session, capsys):
    run("mv todo-1 Done")
    session.gateway.fail_on.add("list tasks")

    run("reload")

    assert session.find_task("todo-1")[0] == "Done"
    assert "Could not reload board" in capsys.readouterr().out


def test_sync_reports_failures(session, capsys):
    session.gateway.fail_on.add("create task")
    run("add Offline")

    run("sync")

    out = capsys.readouterr().out
    assert "Not synced" in out
    assert "create" in out
    assert session.sync.drain_failures() == []


def test_sync_notices_before_prompt(session, capsys):
    session.gateway.fail_on.add("delete task")
    run("rm todo-2 --force")

    show_sync_notices()

    assert "Not synced: delete todo-2" in capsys.readouterr().out


# --- Session lifecycle ---


def test_start_session_load_failure_starts_empty(store, gateway, capsys):
    """An unreachable API leaves an empty board rather than stopping the REPL."""
    gateway.fail_on.add("list tasks")
    try:
        start_session(store)
        assert repl_context.store is store
        assert store.task_ids() == []
        assert "Could not load board" in capsys.readouterr().out
    finally:
        end_session()

    assert repl_context.store is None
    assert gateway.closed is True


def test_start_session_loads_board(gateway, store, records, capsys):
    gateway.records = {r["id"]: r for r in records}
    try:
        start_session(store)
        assert store.task_ids() == ["todo-1", "todo-2"]
        assert "Loaded 2 task(s)" in capsys.readouterr().out
    finally:
        end_session()


# --- Titles and IDs with markup characters ---


def test_markup_characters_print_literally(session, capsys):
    run('add "Fix [/bold] tag" --desc "[red]odd[/red]"')
    task = session.tasks_in("To Do")[-1]
    assert task.title == "Fix [/bold] tag"
    assert "Fix [/bold] tag" in capsys.readouterr().out

    run(f"show {task.id}")
    out = capsys.readouterr().out
    assert "Fix [/bold] tag" in out
    assert "[red]odd[/red]" in out

    run(f"edit {task.id}")
    assert "Fix [/bold] tag" in capsys.readouterr().out

    run(f"drag {task.id}")
    assert "Fix [/bold] tag" in capsys.readouterr().out
    print("✓ Markup characters in titles print literally")


def test_drag_prompt_escapes_task_id():
    repl_context.drag_payload = {"taskId": "x<b>&y", "fromColumn": "To Do"}
    try:
        prompt = fragment_list_to_text(to_formatted_text(format_prompt()))
    finally:
        repl_context.drag_payload = None

    assert prompt == "kanban:[dragging x<b>&y]> "
