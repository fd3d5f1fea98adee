"""
Services Package

Contains all business logic and service classes.
"""

from .evaluator import evaluate_guess, fold_keyboard, initial_keyboard, key_state
from .hint_service import calculate_hint_for_letter, display_hint, give_hint, merge_hints
from .word_service import WordPoolProvider, select_daily_word, pick_random_word
from .storage_service import MemoryProgressStore, MongoProgressStore, initialize_progress_store
from .progress_service import ProgressLedger
from .game_service import GameService, get_game_service, initialize_game_service

__all__ = [
    'evaluate_guess', 'fold_keyboard', 'initial_keyboard', 'key_state',
    'calculate_hint_for_letter', 'display_hint', 'give_hint', 'merge_hints',
    'WordPoolProvider', 'select_daily_word', 'pick_random_word',
    'MemoryProgressStore', 'MongoProgressStore', 'initialize_progress_store',
    'ProgressLedger',
    'GameService', 'get_game_service', 'initialize_game_service',
]
