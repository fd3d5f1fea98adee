"""
Game Configuration Constants Module

This module defines the game rules and loads the curated word pools.
All game parameters are centralized here to enable easy modification.
"""

import json
import os
from typing import Dict, Final, List

from ..utils.letters import FINAL_LETTERS, is_hebrew_letter, normalize_word

# Core Game Configuration Constants
MAX_ATTEMPTS: Final[int] = 6
"""
Maximum number of guess attempts allowed per game.
Type: Final[int] - Immutable to prevent accidental modification
"""

WORD_LENGTHS: Final[List[int]] = [3, 4, 5]

HINT_REVEAL_CAP: Final[int] = 2
"""Most letters a single reveal hint may disclose beyond those already correct."""

HINT_COST: Final[int] = 10
ABOUT_COST: Final[int] = 5

CATEGORIES: Final[List[str]] = ['GENERAL', 'ANIMALS', 'GEOGRAPHY', 'SCIENCE', 'SPORT']
DIFFICULTIES: Final[List[str]] = ['easy', 'medium', 'hard']

MAP_CATEGORY_NAME: Final[Dict[str, str]] = {
    'GENERAL': 'ידע כללי',
    'ANIMALS': 'בעלי חיים',
    'GEOGRAPHY': 'גאוגרפיה',
    'SCIENCE': 'מדעים',
    'SPORT': 'ספורט',
}

MAP_DIFFICULTY_NAME: Final[Dict[str, str]] = {
    'easy': 'קל',
    'medium': 'בינוני',
    'hard': 'קשה',
}

# Daily challenge draws from these pools
DAILY_CATEGORY: Final[str] = 'GENERAL'
DAILY_WORD_LENGTH: Final[int] = 5
DAILY_DIFFICULTIES: Final[List[str]] = ['easy', 'medium']

WordPools = Dict[str, Dict[int, Dict[str, Dict[str, str]]]]


def _load_word_pools() -> WordPools:
    """
    Load word pools from words/word_pools.json.

    Returns:
        WordPools: category -> word length -> difficulty -> {word: about text}

    Raises:
        FileNotFoundError: If the JSON file is not found
        ValueError: If the JSON file is malformed or has an unexpected shape
    """
    config_dir = os.path.dirname(os.path.abspath(__file__))
    json_file_path = os.path.join(config_dir, 'words', 'word_pools.json')

    try:
        with open(json_file_path, 'r', encoding='utf-8') as f:
            raw = json.load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Word pool file not found: {json_file_path}")
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in word_pools.json: {e}")

    if not isinstance(raw, dict) or not raw:
        raise ValueError("Word pool file must contain a non-empty object")

    # JSON keys are strings; word lengths are used as ints everywhere else
    return {
        category: {int(length): difficulties for length, difficulties in lengths.items()}
        for category, lengths in raw.items()
    }


# Curated word pools loaded from JSON file
WORD_POOLS: Final[WordPools] = _load_word_pools()


def _load_dictionaries() -> Dict[int, List[str]]:
    """
    Load the guess dictionaries from words/dictionary_{length}.json.

    Returns:
        Dict[int, List[str]]: word length -> accepted spellings

    Raises:
        FileNotFoundError: If a dictionary file is not found
        ValueError: If a dictionary file is malformed
    """
    config_dir = os.path.dirname(os.path.abspath(__file__))
    dictionaries = {}

    for length in WORD_LENGTHS:
        json_file_path = os.path.join(config_dir, 'words', f'dictionary_{length}.json')
        try:
            with open(json_file_path, 'r', encoding='utf-8') as f:
                words = json.load(f)
        except FileNotFoundError:
            raise FileNotFoundError(f"Dictionary file not found: {json_file_path}")
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in dictionary_{length}.json: {e}")

        if not isinstance(words, list):
            raise ValueError(f"dictionary_{length}.json must contain a list of words")
        dictionaries[length] = [word.strip() for word in words]

    return dictionaries


# Guess dictionaries; any pooled word is accepted as well
DICTIONARIES: Final[Dict[int, List[str]]] = _load_dictionaries()


def validate_word_pool_integrity(pools: WordPools = WORD_POOLS) -> bool:
    """
    Validates the integrity and consistency of the word pools.

    This function performs validation to ensure:
    1. Every category and difficulty is known
    2. Every word matches the length of the pool it is filed under
    3. Only Hebrew letters are used
    4. A word is not filed twice under the same category and length, even
       with different final forms

    Returns:
        bool: True if the pools pass all validation checks

    Raises:
        ValueError: If any validation check fails with detailed error message
    """
    if not pools:
        raise ValueError("Word pools cannot be empty")

    for category, lengths in pools.items():
        if category not in CATEGORIES:
            raise ValueError(f"Unknown category '{category}'")
        for length, difficulties in lengths.items():
            if length not in WORD_LENGTHS:
                raise ValueError(f"Unsupported word length {length} in category '{category}'")
            seen = set()
            for difficulty, words in difficulties.items():
                if difficulty not in DIFFICULTIES:
                    raise ValueError(f"Unknown difficulty '{difficulty}' in category '{category}'")
                for word in words:
                    if len(word) != length:
                        raise ValueError(
                            f"Word '{word}' in {category}/{length}/{difficulty} is not {length} letters long"
                        )
                    if not all(is_hebrew_letter(c) for c in word):
                        raise ValueError(f"Word '{word}' contains non-Hebrew characters")
                    # Spellings differing only in final forms evaluate identically
                    if normalize_word(word) in seen:
                        raise ValueError(f"Duplicate word '{word}' in {category}/{length}")
                    seen.add(normalize_word(word))

    return True


def validate_dictionary_integrity(dictionaries: Dict[int, List[str]] = DICTIONARIES) -> bool:
    """
    Validates the guess dictionaries.

    Every word must match the length of its file, use Hebrew letters only, and
    use final-form letters nowhere but the last position.

    Raises:
        ValueError: If any validation check fails with detailed error message
    """
    for length, words in dictionaries.items():
        if length not in WORD_LENGTHS:
            raise ValueError(f"Unsupported dictionary word length {length}")
        for word in words:
            if len(word) != length:
                raise ValueError(f"Dictionary word '{word}' is not {length} letters long")
            if not all(is_hebrew_letter(c) for c in word):
                raise ValueError(f"Dictionary word '{word}' contains non-Hebrew characters")
            if any(c in FINAL_LETTERS for c in word[:-1]):
                raise ValueError(f"Dictionary word '{word}' has a final-form letter before its end")

    return True


def get_word_statistics(
pools: WordPools = WORD_POOLS) -> dict:
    """
    Analyzes the word pools and returns statistical information for game balancing.

    Returns:
        dict: Statistical analysis including:
            - total_words: Number of words across all pools
            - words_per_category: Totals per category
            - letter_frequency: Distribution of letters across all words
            - most_common_letters: Top five letters
    """
    if not pools:
        return {"error": "Word pools are empty"}

    words_per_category = {}
    letter_frequency = {}
    total = 0
    for category, lengths in pools.items():
        count = 0
        for difficulties in lengths.values():
            for words in difficulties.values():
                count += len(words)
                for word in words:
                    for char in word:
                        letter_frequency[char] = letter_frequency.get(char, 0) + 1
        words_per_category[category] = count
        total += count

    return {
        "total_words": total,
        "words_per_category": words_per_category,
        "letter_frequency": letter_frequency,
        "most_common_letters": sorted(letter_frequency.items(), key=lambda x: x[1], reverse=True)[:5]
    }


if __name__ == "__main__":

    try:
        validate_word_pool_integrity()
        validate_dictionary_integrity()
        print(" Word pool validation passed")

        stats = get_word_statistics()
        print(f" Word statistics: {stats}")
    except ValueError as config_error:
        print(f" Configuration validation failed: {config_error}")
        exit(1)
