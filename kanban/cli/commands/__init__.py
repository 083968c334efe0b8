"""
FILE: kanban/cli/commands/__init__.py
PURPOSE: CLI command modules
"""

# Export all command handlers for easy importing
from .tasks import (
    ls,
    add,
    edit,
    rm,
)
from .system import (
    version,
    help,
    repl,
)

__all__ = [
    "ls",
    "add",
    "edit",
    "rm",
    "version",
    "help",
    "repl",
]
