"""
Game Data Models

Contains all game-related data structures and enums.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class Correctness(Enum):
    """Per-position classification of a guessed letter."""
    CORRECT = "correct"
    EXISTS = "exists"
    NOT_IN_USE = "notInUse"
    UNKNOWN = "unknown"

    @property
    def priority(self) -> int:
        return _PRIORITY[self]

    def to_json(self) -> Optional[str]:
        """UNKNOWN is sent to clients as null."""
        return None if self is Correctness.UNKNOWN else self.value

    @classmethod
    def from_json(cls, value: Optional[str]) -> "Correctness":
        if value is None or value == "":
            return cls.UNKNOWN
        return cls(value)


_PRIORITY = {
    Correctness.CORRECT: 3,
    Correctness.EXISTS: 2,
    Correctness.NOT_IN_USE: 1,
    Correctness.UNKNOWN: 0,
}


def compare_correctness(a: Correctness, b: Correctness) -> int:
    """
    Total order over Correctness: correct > exists > notInUse > unknown.

    Returns:
        Negative if a ranks below b, zero if equal, positive if a ranks above b
    """
    return a.priority - b.priority


def best_correctness(a: Correctness, b: Correctness) -> Correctness:
    """Return the higher-priority value, preferring `a` on a tie."""
    return a if compare_correctness(a, b) >= 0 else b


class GameStatus(Enum):
    PLAYING = "PLAYING"
    SUCCESS = "SUCCESS"
    FAILURE = "FAILURE"


class GameType(Enum):
    DAILY = "DAILY"
    RANDOM = "RANDOM"


@dataclass(frozen=True)
class CellLocation:
    """A letter cell on the grid, addressed by attempt row and column."""
    row: int
    col: int

    def to_dict(self) -> Dict[str, int]:
        return {'row': self.row, 'col': self.col}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CellLocation":
        return cls(row=int(data['row']), col=int(data['col']))


@dataclass(frozen=True)
class WordGuess:
    """A submitted guess: letters as typed plus the evaluator's verdict."""
    letters: List[str]
    correctness: List[Correctness]

    def __post_init__(self):
        if len(self.letters) != len(self.correctness):
            raise ValueError("Guess letters and correctness must have the same length")

    def to_dict(self) -> Dict[str, Any]:
        return {
            'letters': list(self.letters),
            'correctness': [c.to_json() for c in self.correctness],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WordGuess":
        return cls(
            letters=list(data['letters']),
            correctness=[Correctness.from_json(c) for c in data['correctness']],
        )


@dataclass(frozen=True)
class LineHint:
    """
    Partial view of the secret word for one row.

    Undisclosed positions carry an empty letter and Correctness.UNKNOWN.
    """
    letters: List[str]
    correctness: List[Correctness]

    def __post_init__(self):
        if len(self.letters) != len(self.correctness):
            raise ValueError("Hint letters and correctness must have the same length")

    @classmethod
    def empty(cls, length: int) -> "LineHint":
        return cls(letters=[''] * length, correctness=[Correctness.UNKNOWN] * length)

    def __len__(self) -> int:
        return len(self.letters)

    def is_empty(self) -> bool:
        return all(c is Correctness.UNKNOWN for c in self.correctness)

    def revealed_positions(self) -> List[int]:
        return [i for i, c in enumerate(self.correctness) if c is not Correctness.UNKNOWN]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'letters': list(self.letters),
            'correctness': [c.to_json() for c in self.correctness],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LineHint":
        return cls(
            letters=[letter or '' for letter in data['letters']],
            correctness=[Correctness.from_json(c) for c in data['correctness']],
        )


def _optional_hint(data: Optional[Dict[str, Any]]) -> Optional[LineHint]:
    return LineHint.from_dict(data) if data else None


@dataclass
class GameState:
    """
    Full session state for one game.

    This is the structure a host persists and resumes verbatim, so it holds the
    secret word. Clients receive a GameView instead.
    """
    game_id: str
    game_type: GameType
    category: str
    difficulty: str
    word_length: int
    max_attempts: int
    secret_word: str
    about_word: str
    current_attempt: int = 0
    guesses: List[WordGuess] = field(default_factory=list)
    keyboard: Dict[str, Correctness] = field(default_factory=dict)
    correct_letters: List[bool] = field(default_factory=list)
    selected_cell: Optional[CellLocation] = None
    line_hint: Optional[LineHint] = None
    line_search: Optional[LineHint] = None
    status: GameStatus = GameStatus.PLAYING
    about_shown: bool = False
    about_was_shown: bool = False
    special_hint_used: bool = False
    score: int = 0
    started_at: float = 0.0
    elapsed_before_resume: float = 0.0
    date: Optional[str] = None

    @property
    def game_over(self) -> bool:
        return self.status is not GameStatus.PLAYING

    def to_dict(self) -> Dict[str, Any]:
        return {
            'game_id': self.game_id,
            'game_type': self.game_type.value,
            'category': self.category,
            'difficulty': self.difficulty,
            'word_length': self.word_length,
            'max_attempts': self.max_attempts,
            'secret_word': self.secret_word,
            'about_word': self.about_word,
            'current_attempt': self.current_attempt,
            'guesses': [g.to_dict() for g in self.guesses],
            'keyboard': {letter: c.to_json() for letter, c in self.keyboard.items()},
            'correct_letters': list(self.correct_letters),
            'selected_cell': self.selected_cell.to_dict() if self.selected_cell else None,
            'line_hint': self.line_hint.to_dict() if self.line_hint else None,
            'line_search': self.line_search.to_dict() if self.line_search else None,
            'status': self.status.value,
            'about_shown': self.about_shown,
            'about_was_shown': self.about_was_shown,
            'special_hint_used': self.special_hint_used,
            'score': self.score,
            'started_at': self.started_at,
            'elapsed_before_resume': self.elapsed_before_resume,
            'date': self.date,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameState":
        selected = data.get('selected_cell')
        keyboard = data.get('keyboard') or {}
        if not isinstance(keyboard, dict):
            raise ValueError("Keyboard must map letters to their state")
        return cls(
            game_id=data['game_id'],
            game_type=GameType(data['game_type']),
            category=data['category'],
            difficulty=data['difficulty'],
            word_length=int(data['word_length']),
            max_attempts=int(data['max_attempts']),
            secret_word=data['secret_word'],
            about_word=data.get('about_word', ''),
            current_attempt=int(data.get('current_attempt', 0)),
            guesses=[WordGuess.from_dict(g) for g in data.get('guesses', [])],
            keyboard={letter: Correctness.from_json(c) for letter, c in keyboard.items()},
            correct_letters=[bool(c) for c in data.get('correct_letters', [])],
            selected_cell=CellLocation.from_dict(selected) if selected else None,
            line_hint=_optional_hint(data.get('line_hint')),
            line_search=_optional_hint(data.get('line_search')),
            status=GameStatus(data.get('status', GameStatus.PLAYING.value)),
            about_shown=bool(data.get('about_shown', False)),
            about_was_shown=bool(data.get('about_was_shown', False)),
            special_hint_used=bool(data.get('special_hint_used', False)),
            score=int(data.get('score', 0)),
            started_at=float(data.get('started_at', 0.0)),
            elapsed_before_resume=float(data.get('elapsed_before_resume', 0.0)),
            date=data.get('date'),
        )


@dataclass
class GameView:
    """Client-facing game snapshot; the answer is included only once the game is over."""
    game_id: str
    game_type: str
    category: str
    difficulty: str
    word_length: int
    max_attempts: int
    current_attempt: int
    status: str
    game_over: bool
    won: bool
    guesses: List[Dict[str, Any]]
    keyboard: Dict[str, Optional[str]]
    selected_cell: Optional[Dict[str, int]]
    display_hint: Optional[Dict[str, Any]]
    score: int
    about_word: Optional[str] = None
    answer: Optional[str] = None
