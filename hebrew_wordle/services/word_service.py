"""
Word Service

Supplies secret words: the read-only word pools, the date-deterministic daily
word, and random selection that prefers words the player has not solved yet.
"""

import random
from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence, Set

from ..config.game_settings import (
    DAILY_CATEGORY,
    DAILY_DIFFICULTIES,
    DAILY_WORD_LENGTH,
    DICTIONARIES,
    WORD_POOLS,
    WordPools,
)
from ..models.progress import RevealedWord


@dataclass(frozen=True)
class WordHandle:
    """A chosen secret word and the descriptive text shown by the about feature."""
    selected_word: str
    about: str


class WordPoolProvider:
    """
    Read-only access to the curated word pools and the guess dictionaries.

    The pools are loaded once; lookups for unknown categories, difficulties or
    lengths return an empty mapping rather than failing.
    """

    def __init__(self,
                 pools: Optional[WordPools] = None,
                 dictionaries: Optional[Dict[int, List[str]]] = None):
        self.pools: WordPools = pools if pools is not None else WORD_POOLS
        self.dictionaries = dictionaries if dictionaries is not None else DICTIONARIES
        self._accepted: Dict[int, Set[str]] = {}

    def get_pool(self, category: str, difficulty: str, word_length: int) -> Dict[str, str]:
        return dict(self.pools.get(category, {}).get(word_length, {}).get(difficulty, {}))

    def get_all_words(self, word_length: int) -> Dict[str, str]:
        """Every pooled word of the given length, across categories and difficulties."""
        words: Dict[str, str] = {}
        for lengths in self.pools.values():
            for pool in lengths.get(word_length, {}).values():
                words.update(pool)
        return words

    def daily_pool(self) -> Dict[str, str]:
        pool: Dict[str, str] = {}
        for difficulty in DAILY_DIFFICULTIES:
            pool.update(self.get_pool(DAILY_CATEGORY, difficulty, DAILY_WORD_LENGTH))
        return pool

    def daily_difficulty(self, word: str) -> str:
        """The daily difficulty whose pool holds the word; the first one otherwise."""
        for difficulty in DAILY_DIFFICULTIES:
            if word in self.get_pool(DAILY_CATEGORY, difficulty, DAILY_WORD_LENGTH):
                return difficulty
        return DAILY_DIFFICULTIES[0]

    def is_valid_word(self, word: str) -> bool:
        """
        Guess dictionary check against the exact spelling, so a final-form
        letter typed in its base form is rejected. Pooled words always pass.
        """
        length = len(word)
        if length not in self._accepted:
            accepted = set(self.dictionaries.get(length, []))
            accepted.update(self.get_all_words(length))
            self._accepted[length] = accepted
        return word in self._accepted[length]

    def total_words(self, category: str, difficulty: str) -> int:
        return sum(
            len(difficulties.get(difficulty, {}))
            for difficulties in self.pools.get(category, {}).values()
        )


def daily_key(day: date) -> str:
    """Date key without zero padding, e.g. '2024-3-7'."""
    return f"{day.year}-{day.month}-{day.day}"


def date_hash(key: str) -> int:
    """Polynomial rolling hash (h * 31 + c) with signed 32-bit wraparound."""
    value = 0
    for char in key:
        value = _to_int32((value << 5) - value + ord(char))
    return value


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value >= 0x80000000 else value


def select_daily_word(day: date, word_pool: Dict[str, str]) -> str:
    """
    Pick the word of the day.

    The pool keys are sorted so the choice depends only on the date and the
    pool's contents.

    Raises:
        ValueError: If the pool is empty
    """
    words = sorted(word_pool)
    if not words:
        raise ValueError("Cannot select a daily word from an empty pool")
    index = abs(date_hash(daily_key(day))) % len(words)
    return words[index]


def get_daily_word(day: date, provider: WordPoolProvider) -> WordHandle:
    pool = provider.daily_pool()
    selected = select_daily_word(day, pool)
    return WordHandle(selected_word=selected, about=pool[selected])


def pick_random_word(pool: Dict[str, str],
                     revealed: Iterable[RevealedWord] = (),
                     rng: Optional[random.Random] = None) -> WordHandle:
    """
    Pick a secret word for a random game.

    Unsolved words come first. Once every word has been solved, the pick comes
    from the weakest third of past results (lowest score, then longest time).

    Raises:
        ValueError: If the pool is empty
    """
    if not pool:
        raise ValueError("No words available for this category, difficulty and length")

    rng = rng or random
    revealed_in_pool: List[RevealedWord] = [r for r in revealed if r.word in pool]
    solved = {r.word for r in revealed_in_pool}

    unrevealed = sorted(word for word in pool if word not in solved)
    if unrevealed:
        selected = rng.choice(unrevealed)
        return WordHandle(selected_word=selected, about=pool[selected])

    revealed_sorted = sorted(revealed_in_pool, key=lambda r: (r.score, -r.time))
    selection_pool: Sequence[RevealedWord] = revealed_sorted[:max(1, len(revealed_sorted) // 3)]
    selected = rng.choice(selection_pool).word
    return WordHandle(selected_word=selected, about=pool[selected])
