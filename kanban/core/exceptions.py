"""
FILE: kanban/core/exceptions.py
PURPOSE: Custom exception classes for error handling
EXPORTS:
  - KanbanError (base exception)
  - TaskNotFoundError
  - ColumnNotFoundError
  - InvalidInputError
  - GatewayError
  - ConfigError
DEPENDENCIES:
  - None (stdlib only)
NOTES:
  - All exceptions inherit from KanbanError for easy catching
  - Exceptions include context (IDs, names, status codes) for helpful messages
  - Core raises these, UI layers catch and display
"""

from typing import Optional


class KanbanError(Exception):
    """Base exception for all Kanban errors."""
    pass


class TaskNotFoundError(KanbanError):
    """Task with given ID isn't on the board."""

    def __init__(self, task_id: str):
        self.task_id = task_id
        super().__init__(f"Task {task_id} not found")


class ColumnNotFoundError(KanbanError):
    """Column name doesn't match any board column."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Column '{name}' not found")


class InvalidInputError(KanbanError):
    """Input validation failed."""

    def __init__(self, message: str):
        super().__init__(message)


class GatewayError(KanbanError):
    """A call to the remote task API failed."""

    def __init__(self, operation: str, message: str, status_code: Optional[int] = None):
        self.operation = operation
        self.status_code = status_code
        if status_code is not None:
            super().__init__(f"{operation} failed ({status_code}): {message}")
        else:
            super().__init__(f"{operation} failed: {message}")


class ConfigError(KanbanError):
    """Configuration file or override is invalid."""

    def __init__(self, message: str):
        super().__init__(message)
