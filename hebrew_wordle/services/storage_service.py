"""
Progress Storage

Persists the player's score, solved words, daily-challenge completion and
saved game sessions. MongoDB backs a deployed server; the in-memory store
serves tests and servers started without MONGO_URI.
"""

import copy
import datetime
import threading
from typing import Any, Dict, List, Optional

from pymongo.mongo_client import MongoClient
from pymongo.server_api import ServerApi

from ..models.progress import RevealedWord
from ..utils.game_logger import game_logger

RevealedHierarchy = Dict[str, Dict[str, List[RevealedWord]]]


class MongoProgressStore:
    """
    MongoDB-backed progress store.
    """

    def __init__(self, mongo_uri: str, db_name: str = 'hebrew_wordle'):
        """
        Initialize the store with a MongoDB connection.

        Args:
            mongo_uri: MongoDB connection string
            db_name: Database holding the progress collections
        """
        self.client = MongoClient(mongo_uri, server_api=ServerApi('1'))
        self.db = self.client[db_name]
        self.progress_collection = self.db.progress
        self.revealed_collection = self.db.revealed_words
        self.games_collection = self.db.saved_games

        # Fail fast so the caller can fall back to memory
        try:
            self.client.admin.command('ping')
        except Exception:
            self.client.close()
            raise

        self.revealed_collection.create_index(
            [("category", 1), ("difficulty", 1), ("word", 1)], unique=True
        )

    def load_score(self) -> int:
        doc = self.progress_collection.find_one({"_id": "score"})
        return int(doc["value"]) if doc else 0

    def save_score(self, score: int) -> None:
        self.progress_collection.replace_one({"_id": "score"}, {"_id": "score", "value": score}, upsert=True)

    def load_revealed_words(self) -> RevealedHierarchy:
        hierarchy: RevealedHierarchy = {}
        for doc in self.revealed_collection.find({}, {"_id": 0}):
            section = hierarchy.setdefault(doc["category"], {}).setdefault(doc["difficulty"], [])
            section.append(RevealedWord.from_dict(doc))
        return hierarchy

    def save_revealed_word(self, category: str, difficulty: str, record: RevealedWord) -> None:
        key = {"category": category, "difficulty": difficulty, "word": record.word}
        self.revealed_collection.replace_one(key, {**key, **record.to_dict()}, upsert=True)

    def save_game(self, game_key: str, state: Optional[Dict[str, Any]]) -> None:
        """Store a session under `game_key`; passing None removes it."""
        if state is None:
            self.games_collection.delete_one({"_id": game_key})
            return
        self.games_collection.replace_one(
            {"_id": game_key},
            {"_id": game_key, "state": state, "date": datetime.datetime.now(datetime.timezone.utc).isoformat()},
            upsert=True
        )

    def load_game(self, game_key: str) -> Optional[Dict[str, Any]]:
        doc = self.games_collection.find_one({"_id": game_key})
        return doc["state"] if doc else None

    def load_daily_done(self) -> Optional[str]:
        doc = self.progress_collection.find_one({"_id": "daily"})
        return doc["date"] if doc else None

    def save_daily_done(self, date_str: str) -> None:
        self.progress_collection.replace_one({"_id": "daily"}, {"_id": "daily", "date": date_str}, upsert=True)

    def close(self):
        """Close the MongoDB connection."""
        if self.client:
            self.client.close()


class MemoryProgressStore:
    """In-process store with the same interface as MongoProgressStore."""

    def __init__(self):
        self._lock = threading.Lock()
        self.score = 0
        self.revealed: RevealedHierarchy = {}
        self.games: Dict[str, Dict[str, Any]] = {}
        self.daily_done: Optional[str] = None

    def load_score(self) -> int:
        return self.score

    def save_score(self, score: int) -> None:
        with self._lock:
            self.score = score

    def load_revealed_words(self) -> RevealedHierarchy:
        with self._lock:
            return {c: {d: list(words) for d, words in section.items()} for c, section in self.revealed.items()}

    def save_revealed_word(self, category: str, difficulty: str, record: RevealedWord) -> None:
        with self._lock:
            section = self.revealed.setdefault(category, {}).setdefault(difficulty, [])
            for i, existing in enumerate(section):
                if existing.word == record.word:
                    section[i] = record
                    return
            section.append(record)

    def save_game(self, game_key: str, state: Optional[Dict[str, Any]]) -> None:
        with self._lock:
            if state is None:
                self.games.pop(game_key, None)
            else:
                self.games[game_key] = copy.deepcopy(state)

    def load_game(self, game_key: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            state = self.games.get(game_key)
            return copy.deepcopy(state) if state is not None else None

    def load_daily_done(self) -> Optional[str]:
        return self.daily_done

    def save_daily_done(self, date_str: str) -> None:
        with self._lock:
            self.daily_done = date_str

    def close(self):
        pass


def initialize_progress_store(mongo_uri: Optional[str], db_name: str = 'hebrew_wordle'):
    """
    Build the progress store for the server.

    Falls back to an in-memory store when no URI is configured or the
    database cannot be reached.
    """
    if not mongo_uri:
        return MemoryProgressStore()
    try:
        store = MongoProgressStore(mongo_uri, db_name)
        game_logger.logger.info("Connected to MongoDB progress store")
        return store
    except Exception as e:
        game_logger.log_storage_failure('connect', e)
        return MemoryProgressStore()
