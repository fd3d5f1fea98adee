"""
Game Service

Contains the session logic for random and daily games: word selection,
guess submission, assist features, and save/restore.
"""

import random
import time
import uuid
from datetime import date
from typing import Any, Callable, Dict, Optional, Tuple

from ..config.game_settings import (
    ABOUT_COST,
    CATEGORIES,
    DAILY_CATEGORY,
    DAILY_WORD_LENGTH,
    DIFFICULTIES,
    HINT_COST,
    HINT_REVEAL_CAP,
    MAX_ATTEMPTS,
    WORD_LENGTHS,
)
from ..models.game import (
    CellLocation,
    Correctness,
    GameState,
    GameStatus,
    GameType,
    GameView,
    WordGuess,
)
from ..utils.letters import KEYBOARD_LETTERS, is_hebrew_letter
from .evaluator import evaluate_guess, fold_keyboard, initial_keyboard, key_state, newly_correct_positions
from .hint_service import calculate_hint_for_letter, display_hint, give_hint, merge_hints
from .progress_service import ProgressLedger
from .storage_service import MemoryProgressStore
from .word_service import WordPoolProvider, get_daily_word, pick_random_word


class GameService:
    """
    Core game service managing multiple game sessions.

    This class handles:
    - Session management with unique game IDs
    - Secret word selection (random pools or the daily word)
    - Guess validation, evaluation and keyboard tracking
    - Reveal hints, letter searches and the about text, with their costs
    - Handing score and solved words to the progress ledger
    """

    def __init__(self,
                 provider: Optional[WordPoolProvider] = None,
                 ledger: Optional[ProgressLedger] = None,
                 max_attempts: int = MAX_ATTEMPTS,
                 hint_reveal_cap: int = HINT_REVEAL_CAP,
                 hint_cost: int = HINT_COST,
                 about_cost: int = ABOUT_COST,
                 rng: Optional[random.Random] = None,
                 clock: Callable[[], float] = time.time,
                 today: Callable[[], date] = date.today):
        self.games: Dict[str, GameState] = {}
        self.provider = provider or WordPoolProvider()
        self.ledger = ledger or ProgressLedger(MemoryProgressStore(), background=False)
        self.max_attempts = max_attempts
        self.hint_reveal_cap = hint_reveal_cap
        self.hint_cost = hint_cost
        self.about_cost = about_cost
        self.rng = rng or random.Random()
        self.clock = clock
        self.today = today

    def create_new_game(self,
                        word_length: int = 5,
                        category: str = 'GENERAL',
                        difficulty: str = 'easy',
                        game_type: str = 'RANDOM') -> str:
        """
        Creates a new game session.

        Args:
            word_length: 3, 4 or 5 (daily games are always 5)
            category: One of CATEGORIES
            difficulty: One of DIFFICULTIES (daily games take the difficulty
                of the pool holding the day's word)
            game_type: "RANDOM" or "DAILY"

        Returns:
            str: Unique game ID for this session

        Raises:
            ValueError: If an argument is outside the supported values or the
                selected pool is empty
        """
        try:
            kind = GameType(game_type)
        except ValueError:
            raise ValueError('Invalid game type. Must be "RANDOM" or "DAILY"')
        if difficulty not in DIFFICULTIES:
            raise ValueError(f"Invalid difficulty '{difficulty}'")

        game_date = None
        if kind is GameType.DAILY:
            day = self.today()
            handle = get_daily_word(day, self.provider)
            # Daily games ignore the requested pool settings
            category, word_length = DAILY_CATEGORY, DAILY_WORD_LENGTH
            difficulty = self.provider.daily_difficulty(handle.selected_word)
            game_date = day.isoformat()
        else:
            if word_length not in WORD_LENGTHS:
                raise ValueError(f"Word length must be one of {WORD_LENGTHS}")
            if category not in CATEGORIES:
                raise ValueError(f"Invalid category '{category}'")
            pool = self.provider.get_pool(category, difficulty, word_length)
            handle = pick_random_word(pool, self.ledger.revealed_words(category, difficulty), self.rng)

        game_id = str(uuid.uuid4())
        # Hard games open with the about text already shown, at no cost
        hard = difficulty == 'hard'
        state = GameState(
            game_id=game_id,
            game_type=kind,
            category=category,
            difficulty=difficulty,
            word_length=word_length,
            max_attempts=self.max_attempts,
            secret_word=handle.selected_word,
            about_word=handle.about,
            keyboard=initial_keyboard(),
            correct_letters=[False] * word_length,
            selected_cell=CellLocation(0, 0),
            about_shown=hard,
            about_was_shown=hard,
            started_at=self.clock(),
            date=game_date,
        )

        self.games[game_id] = state
        self._persist(state)
        return game_id

    def get_game_state(self, game_id: str) -> Optional[GameView]:
        """
        Returns the client view of a session (without revealing the answer).

        Returns:
            GameView or None if game not found
        """
        state = self.games.get(game_id)
        if state is None:
            return None
        return self._view(state)

    def is_valid_guess(self, game_id: str, guess: Any) -> Tuple[bool, str]:
        """
        Validates a guess for a specific game session.

        Returns:
            Tuple of (is_valid, error_message)
        """
        if game_id not in self.games:
            return False, "Game not found"

        state = self.games[game_id]

        if state.game_over:
            return False, "Game is already over"

        if not guess or not isinstance(guess, str):
            return False, "Guess must be a valid string"

        normalized_guess = guess.strip()

        if len(normalized_guess) != state.word_length:
            return False, f"Guess must be exactly {state.word_length} letters"

        if not all(is_hebrew_letter(c) for c in normalized_guess):
            return False, "Guess must contain only Hebrew letters"

        if not self.provider.is_valid_word(normalized_guess):
            return False, "Word not in word list"

        return True, ""

    def make_guess(self, game_id: str, guess: str) -> Optional[GameView]:
        """
        Processes a guess and updates game state.

        Every position revealed as correct for the first time adds one point
        to the game score and the player's running score.

        Returns:
            Updated GameView or None if invalid
        """
        is_valid, _ = self.is_valid_guess(game_id, guess)
        if not is_valid:
            return None

        state = self.games[game_id]
        letters = list(guess.strip())

        correctness = evaluate_guess(state.secret_word, letters)
        state.correct_letters, added_score = newly_correct_positions(state.correct_letters, correctness)

        state.guesses.append(WordGuess(letters=letters, correctness=correctness))
        state.keyboard = fold_keyboard(state.keyboard, letters, correctness)
        state.current_attempt += 1
        state.selected_cell = CellLocation(state.current_attempt, 0)
        state.line_hint = None
        state.line_search = None

        if added_score:
            state.score += added_score
            self.ledger.apply_score_delta(added_score)

        if all(c is Correctness.CORRECT for c in correctness):
            self._end_game(state, GameStatus.SUCCESS)
        elif state.current_attempt >= state.max_attempts:
            self._end_game(state, GameStatus.FAILURE)

        self._persist(state)
        return self._view(state)

    def request_hint(self, game_id: str) -> Optional[GameView]:
        """
        Reveal up to `hint_reveal_cap` more letters, merged into the row hint.

        Returns:
            Updated GameView or None if the game is missing or over
        """
        state = self.games.get(game_id)
        if state is None or state.game_over:
            return None

        hint = give_hint(state.secret_word, state.guesses, state.line_hint, self.hint_reveal_cap, self.rng)
        state.line_hint = merge_hints(state.line_hint, hint)
        state.special_hint_used = True
        self._charge(state, self.hint_cost)

        self._persist(state)
        return self._view(state)

    def select_cell(self, game_id: str, row: int, col: int) -> Optional[GameView]:
        """
        Select a grid cell. Selecting a letter on a submitted row searches for
        the positions that letter could still take.

        Returns:
            Updated GameView or None if the game is missing, over, or the cell is off the grid
        """
        state = self.games.get(game_id)
        if state is None or state.game_over:
            return None
        if not (0 <= row < state.max_attempts and 0 <= col < state.word_length):
            return None

        cell = CellLocation(row, col)
        state.selected_cell = cell
        if row == state.current_attempt:
            state.line_search = None
        else:
            state.line_search = calculate_hint_for_letter(state.guesses, cell, state.word_length)

        self._persist(state)
        return self._view(state)

    def show_about(self, game_id: str) -> Optional[GameView]:
        """Show the descriptive text for the secret word; only the first showing costs points."""
        state = self.games.get(game_id)
        if state is None:
            return None

        state.about_shown = True
        if not state.about_was_shown:
            state.about_was_shown = True
            self._charge(state, self.about_cost)

        self._persist(state)
        return self._view(state)

    def export_game(self, game_id: str) -> Optional[Dict[str, Any]]:
        """Full serializable session, secret word included, for a host to save verbatim."""
        state = self.games.get(game_id)
        if state is None:
            return None
        return self._snapshot(state)

    def restore_game(self, data: Dict[str, Any]) -> str:
        """
        Register an exported session and resume its clock.

        Raises:
            ValueError: If the data does not describe a consistent session
        """
        try:
            state = GameState.from_dict(data)
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Invalid saved game: {e}")

        if len(state.secret_word) != state.word_length:
            raise ValueError("Saved secret word does not match the word length")
        if any(len(g.letters) != state.word_length for g in state.guesses):
            raise ValueError("Saved guesses do not match the word length")
        if len(state.guesses) != state.current_attempt:
            raise ValueError("Saved attempt counter does not match the guess history")
        for hint in (state.line_hint, state.line_search):
            if hint is not None and len(hint) != state.word_length:
                raise ValueError("Saved hint does not match the word length")

        if not state.keyboard:
            state.keyboard = initial_keyboard()
        if len(state.correct_letters) != state.word_length:
            state.correct_letters = [False] * state.word_length
        state.started_at = self.clock()

        self.games[state.game_id] = state
        return state.game_id

    def resume_game(self, game_id: str) -> Optional[GameView]:
        """Load a session persisted through the progress ledger."""
        if game_id in self.games:
            return self._view(self.games[game_id])
        data = self.ledger.load_game(game_id)
        if data is None:
            return None
        try:
            self.restore_game(data)
        except ValueError:
            return None
        return self._view(self.games[game_id])

    def daily_status(self) -> Dict[str, Any]:
        day = self.today()
        return {'date': day.isoformat(), 'done': self.ledger.is_daily_done(day)}

    def delete_game(self, game_id: str) -> bool:
        """
        Removes a game session from memory and from saved sessions.

        Returns:
            bool: True if game was deleted, False if not found
        """
        if game_id in self.games:
            del self.games[game_id]
            self.ledger.save_game(game_id, None)
            return True
        return False

    def _end_game(self, state: GameState, status: GameStatus) -> None:
        state.status = status
        state.selected_cell = None
        state.line_hint = None
        state.line_search = None

        if status is GameStatus.SUCCESS:
            self.ledger.record_reveal(
                state.secret_word,
                self._elapsed(state),
                state.score,
                state.about_word,
                state.category,
                state.difficulty,
            )
            if state.game_type is GameType.DAILY:
                self.ledger.mark_daily_done(self.today())

    def _charge(self, state: GameState, cost: int) -> None:
        state.score -= cost
        self.ledger.apply_score_delta(-cost)

    def _elapsed(self, state: GameState) -> float:
        return state.elapsed_before_resume + max(0.0, self.clock() - state.started_at)

    def _snapshot(self, state: GameState) -> Dict[str, Any]:
        data = state.to_dict()
        data['elapsed_before_resume'] = self._elapsed(state)
        return data

    def _persist(self, state: GameState) -> None:
        """Playing sessions are saved; finished ones are dropped from storage."""
        self.ledger.save_game(state.game_id, None if state.game_over else self._snapshot(state))

    def _view(self, state: GameState) -> GameView:
        hint = display_hint(state)
        return GameView(
            game_id=state.game_id,
            game_type=state.game_type.value,
            category=state.category,
            difficulty=state.difficulty,
            word_length=state.word_length,
            max_attempts=state.max_attempts,
            current_attempt=state.current_attempt,
            status=state.status.value,
            game_over=state.game_over,
            won=state.status is GameStatus.SUCCESS,
            guesses=[g.to_dict() for g in state.guesses],
            keyboard={key: key_state(state.keyboard, key).to_json() for key in KEYBOARD_LETTERS},
            selected_cell=state.selected_cell.to_dict() if state.selected_cell else None,
            display_hint=hint.to_dict() if hint else None,
            score=state.score,
            about_word=state.about_word if state.about_shown or state.game_over else None,
            answer=state.secret_word if state.game_over else None,
        )


# Global service instance
_game_service = None


def get_game_service() -> Optional[GameService]:
    """Get the global game service instance."""
    return _game_service


def initialize_game_service(provider: Optional[WordPoolProvider] = None,
                            ledger: Optional[ProgressLedger] = None,
                            **kwargs) -> GameService:
    """Initialize the global game service instance."""
    global _game_service
    _game_service = GameService(provider, ledger, **kwargs)
    return _game_service
