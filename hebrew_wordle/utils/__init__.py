"""
Utilities Package

Contains Hebrew letter helpers, the game logger, and request helpers.
"""

from .letters import (
    BASE_LETTERS,
    FINAL_LETTERS,
    KEYBOARD_LETTERS,
    final_form,
    is_hebrew_letter,
    normalize_letter,
    normalize_word,
)

__all__ = [
    'BASE_LETTERS', 'FINAL_LETTERS', 'KEYBOARD_LETTERS',
    'final_form', 'is_hebrew_letter', 'normalize_letter', 'normalize_word',
]
