"""
Hebrew Letter Helpers

Final-form ("sofit") normalization used before every letter comparison.
Display strings are never normalized; the typed form is kept for rendering.
"""

from typing import Dict, Final, List, Optional

FINAL_TO_BASE: Final[Dict[str, str]] = {
    'ן': 'נ',
    'ם': 'מ',
    'ף': 'פ',
    'ך': 'כ',
    'ץ': 'צ',
}

BASE_TO_FINAL: Final[Dict[str, str]] = {base: final for final, base in FINAL_TO_BASE.items()}

FINAL_LETTERS: Final[List[str]] = list(FINAL_TO_BASE.keys())

# On-screen keyboard order, finals included
KEYBOARD_LETTERS: Final[str] = 'קראטוןםפשדגכעיחלךףזסבהנמצתץ'

BASE_LETTERS: Final[List[str]] = [c for c in KEYBOARD_LETTERS if c not in FINAL_TO_BASE]


def normalize_letter(letter: Optional[str]) -> Optional[str]:
    """Map a final-form letter to its base letter; everything else passes through."""
    if not letter:
        return None
    return FINAL_TO_BASE.get(letter, letter)


def normalize_word(word: str) -> str:
    return ''.join(FINAL_TO_BASE.get(c, c) for c in word)


def final_form(letter: str) -> Optional[str]:
    """Return the final glyph of a base letter, or None if it has none."""
    return BASE_TO_FINAL.get(normalize_letter(letter))


def is_hebrew_letter(ch: str) -> bool:
    return isinstance(ch, str) and len(ch) == 1 and ch in KEYBOARD_LETTERS
