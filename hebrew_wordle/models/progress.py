"""
Progress Data Models

Contains the revealed-word record kept per category and difficulty.
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class RevealedWord:
    """A solved word with the best score and time achieved on it."""
    word: str
    time: int
    score: int
    hint: str = ''

    def improved_by(self, other: "RevealedWord") -> "RevealedWord":
        """
        Merge a new result for the same word into this record.

        A higher score replaces score and time. An equal score with a lower
        time replaces only the time. Anything else keeps the record as is.
        """
        if other.score > self.score:
            return RevealedWord(word=self.word, time=other.time, score=other.score, hint=self.hint or other.hint)
        if other.score == self.score and other.time < self.time:
            return RevealedWord(word=self.word, time=other.time, score=self.score, hint=self.hint or other.hint)
        return self

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RevealedWord":
        return cls(
            word=data['word'],
            time=int(data.get('time', 0)),
            score=int(data.get('score', 0)),
            hint=data.get('hint', ''),
        )
