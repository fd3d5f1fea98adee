"""
Data Models Package

Contains all data models and schemas used throughout the application.
"""

from .game import (
    CellLocation,
    Correctness,
    GameState,
    GameStatus,
    GameType,
    GameView,
    LineHint,
    WordGuess,
    best_correctness,
    compare_correctness,
)
from .progress import RevealedWord

__all__ = [
    'CellLocation', 'Correctness', 'GameState', 'GameStatus', 'GameType', 'GameView',
    'LineHint', 'WordGuess', 'best_correctness', 'compare_correctness', 'RevealedWord',
]
