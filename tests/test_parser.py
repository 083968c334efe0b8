"""
Tests for REPL input parsing.
"""

# Path setup handled by conftest.py
from kanban.repl.parser import parse_command


def test_simple_command():
    result = parse_command("add Buy milk")

    assert result.command == "add"
    assert result.args == ["Buy", "milk"]
    assert result.flags == {}
    print("✓ Simple command parsed")


def test_quoted_args_and_flags():
    result = parse_command('add "Plan sprint" --desc "Q3 goals"')

    assert result.args == ["Plan sprint"]
    assert result.flags == {"desc": "Q3 goals"}


def test_equals_and_short_flags():
    result = parse_command("edit todo-1 --title=Milk -d urgent")

    assert result.args == ["todo-1"]
    assert result.flags == {"title": "Milk", "desc": "urgent"}


def test_boolean_flag():
    result = parse_command("rm todo-1 --force")

    assert result.args == ["todo-1"]
    assert result.flags == {"force": True}


def test_flag_text():
    result = parse_command("edit todo-1 --desc --title New")

    assert result.flag_text("desc") == ""
    assert result.flag_text("title") == "New"
    assert result.flag_text("missing") is None


def test_multi_word_column():
    result = parse_command("MV todo-1 In Progress")

    assert result.command == "mv"
    assert result.args == ["todo-1", "In", "Progress"]


def test_unknown_single_dash_is_positional():
    result = parse_command("add -x thing")

    assert result.args == ["-x", "thing"]
    assert result.flags == {}


def test_empty_input():
    assert parse_command("").command == ""
    assert parse_command("   ").args == []


def test_unclosed_quote_falls_back_to_split():
    result = parse_command('add "unfinished title')

    assert result.command == "add"
    assert result.args == ['"unfinished', "title"]
