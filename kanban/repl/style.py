"""
FILE: kanban/repl/style.py
PURPOSE: Simple feedback flourishes for REPL messages
EXPORTS:
  - celebrate_add() -> str
  - celebrate_move() -> str
  - celebrate_save() -> str
  - celebrate_delete() -> str
DEPENDENCIES:
  - random (for variety)
NOTES:
  - Subtle, one short token per message
"""

import random


# Add celebrations (new task created)
ADD_CELEBRATIONS = [
    "✓ *noted*",
    "+ *added*",
    "📝 *captured*",
]

# Move animations (task changed column)
MOVE_ANIMATIONS = [
    "→ *whoosh*",
    "⇢ *slide*",
    "➜ *shift*",
]

# Save celebrations (edit committed)
SAVE_CELEBRATIONS = [
    "✎ *saved*",
    "✓ *updated*",
]

# Delete animations
DELETE_ANIMATIONS = [
    "💨 *poof*",
    "× *removed*",
    "∅ *gone*",
]


def celebrate_add() -> str:
    """Return a random flourish for adding a task."""
    return random.choice(ADD_CELEBRATIONS)


def celebrate_move() -> str:
    """Return a random flourish for moving a task between columns."""
    return random.choice(MOVE_ANIMATIONS)


def celebrate_save() -> str:
    """Return a random flourish for saving an edit."""
    return random.choice(SAVE_CELEBRATIONS)


def celebrate_delete() -> str:
    """Return a random flourish for deleting a task."""
    return random.choice(DELETE_ANIMATIONS)
