"""
FILE: kanban/repl/commands/__init__.py
PURPOSE: REPL command handler modules
"""

# Export all command handlers for easy importing
from .tasks import (
    handle_add_command,
    handle_edit_command,
    handle_save_command,
    handle_cancel_command,
    handle_rm_command,
    handle_show_command,
)
from .board import (
    handle_board_command,
    handle_mv_command,
    handle_drag_command,
    handle_drop_command,
    handle_reload_command,
    handle_sync_command,
)
from .system import (
    handle_help_command,
    handle_clear_command,
)

__all__ = [
    "handle_add_command",
    "handle_edit_command",
    "handle_save_command",
    "handle_cancel_command",
    "handle_rm_command",
    "handle_show_command",
    "handle_board_command",
    "handle_mv_command",
    "handle_drag_command",
    "handle_drop_command",
    "handle_reload_command",
    "handle_sync_command",
    "handle_help_command",
    "handle_clear_command",
]
