"""
Progress Ledger

Explicit player-progress state: running score, solved words, and daily
challenge completion. The ledger answers reads from memory and hands every
write to the progress store without waiting for it. A failed write is logged
as a warning and never reaches game logic.
"""

import queue
import threading
from datetime import date
from typing import Any, Callable, Dict, List, Optional

from ..config.game_settings import CATEGORIES, DIFFICULTIES
from ..models.progress import RevealedWord
from ..utils.game_logger import game_logger


def format_daily_date(day: date) -> str:
    return day.strftime('%d.%m.%Y')


class ProgressLedger:
    """
    Score and reveal bookkeeping in front of a progress store.

    Args:
        store: MongoProgressStore or MemoryProgressStore
        background: Run store writes on a worker thread (True) or inline (False)
    """

    def __init__(self, store, background: bool = True):
        self.store = store
        self.background = background
        self._lock = threading.Lock()
        self._queue: "queue.Queue" = queue.Queue()
        self._worker: Optional[threading.Thread] = None

        self._score: int = self._load('load_score', store.load_score, 0)
        self._revealed: Dict[str, Dict[str, List[RevealedWord]]] = self._load(
            'load_revealed_words', store.load_revealed_words, {}
        )
        self._daily_done: Optional[str] = self._load('load_daily_done', store.load_daily_done, None)

    @property
    def score(self) -> int:
        return self._score

    def apply_score_delta(self, delta: int) -> int:
        """Add `delta` (negative for assist costs) to the running score."""
        with self._lock:
            self._score += delta
            score = self._score
        self._dispatch('save_score', self.store.save_score, score)
        return score

    def record_reveal(self,
                      word: str,
                      elapsed_time: float,
                      score: int,
                      hint_text: str,
                      category: str,
                      difficulty: str) -> RevealedWord:
        """
        Record a solved word, keeping the best result seen for it.

        Returns:
            RevealedWord: The record as stored after merging
        """
        new_record = RevealedWord(word=word, time=int(elapsed_time), score=score, hint=hint_text)
        with self._lock:
            section = self._revealed.setdefault(category, {}).setdefault(difficulty, [])
            for i, existing in enumerate(section):
                if existing.word == word:
                    merged = existing.improved_by(new_record)
                    section[i] = merged
                    break
            else:
                merged = new_record
                section.append(merged)
        self._dispatch('save_revealed_word', self.store.save_revealed_word, category, difficulty, merged)
        return merged

    def revealed_words(self, category: str, difficulty: str) -> List[RevealedWord]:
        with self._lock:
            return list(self._revealed.get(category, {}).get(difficulty, []))

    def reveals_and_totals(self, provider) -> Dict[str, Dict[str, Dict[str, Any]]]:
        """Solved words next to the pool size, per category and difficulty."""
        return {
            category: {
                difficulty: {
                    'reveals': [r.to_dict() for r in self.revealed_words(category, difficulty)],
                    'total': provider.total_words(category, difficulty),
                }
                for difficulty in DIFFICULTIES
            }
            for category in CATEGORIES
        }

    def mark_daily_done(self, day: date) -> None:
        date_str = format_daily_date(day)
        with self._lock:
            self._daily_done = date_str
        self._dispatch('save_daily_done', self.store.save_daily_done, date_str)

    def is_daily_done(self, day: date) -> bool:
        return self._daily_done == format_daily_date(day)

    def save_game(self, game_key: str, state: Optional[Dict[str, Any]]) -> None:
        self._dispatch('save_game', self.store.save_game, game_key, state)

    def load_game(self, game_key: str) -> Optional[Dict[str, Any]]:
        # Pending writes must land before reading a session back
        self.flush()
        return self._load('load_game', lambda: self.store.load_game(game_key), None)

    def flush(self) -> None:
        """Block until every queued write has been attempted."""
        if self._worker is not None:
            self._queue.join()

    def _load(self, operation: str, fn: Callable[[], Any], default: Any) -> Any:
        try:
            return fn()
        except Exception as e:
            game_logger.log_storage_failure(operation, e)
            return default

    def _dispatch(self, operation: str, fn: Callable, *args) -> None:
        if not self.background:
            self._run(operation, fn, args)
            return
        self._ensure_worker()
        self._queue.put((operation, fn, args))

    def _run(self, operation: str, fn: Callable, args: tuple) -> None:
        try:
            fn(*args)
        except Exception as e:
            game_logger.log_storage_failure(operation, e)

    def _ensure_worker(self) -> None:
        with self._lock:
            if self._worker is None:
                self._worker = threading.Thread(target=self._drain, name='progress-writer', daemon=True)
                self._worker.start()

    def _drain(self) -> None:
        while True:
            operation, fn, args = self._queue.get()
            try:
                self._run(operation, fn, args)
            finally:
                self._queue.task_done()
