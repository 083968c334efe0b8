"""
FILE: kanban/repl/parser.py
PURPOSE: Parse user input into commands and arguments for REPL
EXPORTS:
  - ParseResult (dataclass for parsed commands)
  - parse_command(input_str) -> ParseResult
DEPENDENCIES:
  - shlex (for shell-like parsing with quotes)
  - dataclasses (for ParseResult)
  - typing (type hints)
NOTES:
  - Handles quoted strings: add "task with spaces"
  - Supports flags: --desc "text", --title=New, -d text
  - Short flags map to long names (-t -> title, -d -> desc)
  - Preserves argument order for positional args
  - Case-insensitive command names
"""

import shlex
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

# Short flag -> long flag name
SHORT_FLAGS = {
    "t": "title",
    "d": "desc",
}


@dataclass
class ParseResult:
    """
    Result of parsing a REPL command.

    Attributes:
        command: The command name (e.g., "add", "mv", "drop")
        args: Positional arguments (e.g., ["todo-1718000000000", "Done"])
        flags: Flag arguments as dict (e.g., {"desc": "urgent", "json": True})
        raw_input: Original input string
    """
    command: str
    args: List[str] = field(default_factory=list)
    flags: Dict[str, Union[str, bool]] = field(default_factory=dict)
    raw_input: str = ""

    def flag_text(self, name: str) -> Optional[str]:
        """
        Value of a text flag, or None if absent.

        A flag given without a value (--desc at the end of the line)
        counts as an empty string, so "edit 5 --desc" clears the text.
        """
        if name not in self.flags:
            return None
        value = self.flags[name]
        return "" if value is True else str(value)


def parse_command(input_str: str) -> ParseResult:
    """
    Parse REPL input into command, args, and flags.

    Examples:
        >>> parse_command("add Buy milk")
        ParseResult(command="add", args=["Buy", "milk"], flags={})

        >>> parse_command('add "Plan sprint" --desc "Q3 goals"')
        ParseResult(command="add", args=["Plan sprint"], flags={"desc": "Q3 goals"})

        >>> parse_command("mv todo-1 In Progress")
        ParseResult(command="mv", args=["todo-1", "In", "Progress"], flags={})

        >>> parse_command("edit todo-1 --title=Milk")
        ParseResult(command="edit", args=["todo-1"], flags={"title": "Milk"})

    Args:
        input_str: Raw user input from REPL prompt

    Returns:
        ParseResult with command, args, and flags extracted

    Notes:
        - Command is always the first token (case-insensitive)
        - Flags start with -- or are a known single-letter -x flag
        - Boolean flags don't need values (--json sets json=True)
        - Value flags take the next token unless it is another flag
        - Quoted strings are treated as single args
        - Empty input returns command="" with no args/flags
    """
    # Handle empty input
    input_str = input_str.strip()
    if not input_str:
        return ParseResult(command="", args=[], flags={}, raw_input=input_str)

    # Use shlex to handle quoted strings properly
    try:
        tokens = shlex.split(input_str)
    except ValueError:
        # If parsing fails (e.g., unclosed quote), treat as plain split
        tokens = input_str.split()

    if not tokens:
        return ParseResult(command="", args=[], flags={}, raw_input=input_str)

    # First token is always the command (case-insensitive)
    command = tokens[0].lower()

    args = []
    flags = {}
    i = 1

    while i < len(tokens):
        token = tokens[i]
        flag_name = _flag_name(token)

        if flag_name is None:
            # Regular positional argument
            args.append(token)
            i += 1
            continue

        # --name=value form
        if "=" in flag_name:
            flag_name, value = flag_name.split("=", 1)
            flags[flag_name] = value
            i += 1
            continue

        # Check if next token is a value or another flag
        if i + 1 < len(tokens) and _flag_name(tokens[i + 1]) is None:
            flags[flag_name] = tokens[i + 1]
            i += 2
        else:
            # Boolean flag (no value)
            flags[flag_name] = True
            i += 1

    return ParseResult(
        command=command,
        args=args,
        flags=flags,
        raw_input=input_str
    )


def _flag_name(token: str) -> Optional[str]:
    """Flag name for a token, or None if it is a positional argument."""
    if token.startswith("--") and len(token) > 2:
        return token[2:]
    if token.startswith("-") and token[1:] in SHORT_FLAGS:
        return SHORT_FLAGS[token[1:]]
    return None
