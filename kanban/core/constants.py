"""
FILE: kanban/core/constants.py
PURPOSE: Constants used throughout the application
EXPORTS:
  - COLUMN_NAMES: The fixed, ordered set of board columns
  - DEFAULT_COLUMN: Column that receives new and loaded tasks
  - COLUMN_ALIASES: Short names accepted from user input
  - DRAG_TASK_ID / DRAG_FROM_COLUMN: Drag payload field names
  - TIMESTAMP_FORMAT: Human-readable timestamp format for tasks
  - TASK_ID_PREFIX: Prefix for client-generated task IDs
DEPENDENCIES:
  - None (stdlib only)
NOTES:
  - Single source of truth for column names
  - The column set never changes at runtime
"""

# Board columns (display order)
COLUMN_TODO = "To Do"
COLUMN_IN_PROGRESS = "In Progress"
COLUMN_DONE = "Done"
COLUMN_NAMES = (COLUMN_TODO, COLUMN_IN_PROGRESS, COLUMN_DONE)
DEFAULT_COLUMN = COLUMN_TODO

# Lowercase aliases accepted wherever a user types a column name
COLUMN_ALIASES = {
    "todo": COLUMN_TODO,
    "to-do": COLUMN_TODO,
    "progress": COLUMN_IN_PROGRESS,
    "in-progress": COLUMN_IN_PROGRESS,
    "doing": COLUMN_IN_PROGRESS,
    "done": COLUMN_DONE,
}

# Drag payload fields
DRAG_TASK_ID = "taskId"
DRAG_FROM_COLUMN = "fromColumn"

# Task defaults
TASK_ID_PREFIX = "todo-"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

# Gateway defaults
DEFAULT_API_URL = "http://localhost:5000"
DEFAULT_TASKS_PATH = "/tasks"
DEFAULT_TIMEOUT = 10.0
