"""
Hint Service

Derives partial-information hints from the guess history. Every hint here is
a pure function of its inputs and never contradicts a position already
disclosed as correct.
"""

import random
from typing import List, Optional, Sequence, Set

from ..config.game_settings import HINT_REVEAL_CAP
from ..models.game import (
    CellLocation,
    Correctness,
    GameState,
    LineHint,
    WordGuess,
    best_correctness,
)
from ..utils.letters import final_form, normalize_letter


def calculate_hint_for_letter(guesses: Sequence[WordGuess],
                              cell: CellLocation,
                              word_length: Optional[int] = None) -> LineHint:
    """
    Answer "where else could this letter go?" for a previously guessed cell.

    Positions already settled by another letter, and positions where this
    letter was tried and ruled out, are left undisclosed. The remaining
    candidates show the letter as `exists`, or as `correct` when only one
    slot is left for it.

    Args:
        guesses: Submitted guesses in attempt order
        cell: The tapped cell
        word_length: Row length; taken from the history when omitted

    Returns:
        LineHint: Candidate positions for the letter, or an empty hint when
        nothing can be said
    """
    if word_length is None:
        word_length = len(guesses[0].letters) if guesses else 0
    if not guesses or not 0 <= cell.row < len(guesses) or not 0 <= cell.col < word_length:
        return LineHint.empty(word_length)

    current_guess = guesses[cell.row]
    letter_correctness = current_guess.correctness[cell.col]
    letter_value = normalize_letter(current_guess.letters[cell.col])

    if letter_value is None or letter_correctness in (Correctness.NOT_IN_USE, Correctness.UNKNOWN):
        return LineHint.empty(word_length)

    excluded: Set[int] = set()
    was_correct_at: Set[int] = set()

    for guess in guesses:
        for i, correctness in enumerate(guess.correctness[:word_length]):
            same_letter = normalize_letter(guess.letters[i]) == letter_value
            if correctness is Correctness.CORRECT:
                excluded.add(i)
                if same_letter:
                    was_correct_at.add(i)
            elif same_letter and correctness in (Correctness.EXISTS, Correctness.NOT_IN_USE):
                excluded.add(i)

    correct_occurrences = sum(
        1 for letter, correctness in zip(current_guess.letters, current_guess.correctness)
        if normalize_letter(letter) == letter_value and correctness is Correctness.CORRECT
    )

    is_single = (
        len(was_correct_at) == correct_occurrences
        and word_length - len(excluded) <= 1
    )
    candidate = Correctness.CORRECT if is_single else Correctness.EXISTS

    return LineHint(
        letters=[letter_value if i not in excluded else '' for i in range(word_length)],
        correctness=[candidate if i not in excluded else Correctness.UNKNOWN for i in range(word_length)],
    )


def give_hint(secret_word: Sequence[str],
              guesses: Sequence[WordGuess],
              line_hint: Optional[LineHint] = None,
              max_reveal: int = HINT_REVEAL_CAP,
              rng: Optional[random.Random] = None) -> LineHint:
    """
    Reveal up to `max_reveal` secret letters not yet known as correct.

    Positions already correct in any guess or in `line_hint` are never
    revealed again. Which positions are kept is random per call.
    """
    rng = rng or random
    letters = list(secret_word)
    reveals = [True] * len(letters)

    for guess in guesses:
        for i, correctness in enumerate(guess.correctness[:len(letters)]):
            if correctness is Correctness.CORRECT:
                reveals[i] = False
    if line_hint is not None:
        for i, correctness in enumerate(line_hint.correctness[:len(letters)]):
            if correctness is Correctness.CORRECT:
                reveals[i] = False

    revealed_letters = [letter if reveals[i] else '' for i, letter in enumerate(letters)]

    shuffled = list(letters)
    rng.shuffle(shuffled)
    for letter in shuffled:
        if _revealed_count(revealed_letters) <= max_reveal:
            break
        if letter in revealed_letters:
            revealed_letters[revealed_letters.index(letter)] = ''

    return LineHint(
        letters=revealed_letters,
        correctness=[Correctness.CORRECT if letter else Correctness.UNKNOWN for letter in revealed_letters],
    )


def _revealed_count(letters: List[str]) -> int:
    return sum(1 for letter in letters if letter)


def merge_hints(hint_a: Optional[LineHint], hint_b: Optional[LineHint]) -> Optional[LineHint]:
    """
    Combine two hint lines position by position.

    The higher-priority marking wins (correct > exists > notInUse >
    undisclosed), hint_a on a tie. When exactly one position is left as
    `exists` and no other merged position carries that letter, it is
    upgraded to `correct`.
    """
    if hint_a is None:
        return hint_b
    if hint_b is None:
        return hint_a
    if len(hint_a) != len(hint_b):
        raise ValueError(f"Cannot merge hints of length {len(hint_a)} and {len(hint_b)}")

    letters: List[str] = []
    correctness: List[Correctness] = []
    for i in range(len(hint_a)):
        status = best_correctness(hint_a.correctness[i], hint_b.correctness[i])
        letter = hint_a.letters[i] if status is hint_a.correctness[i] else hint_b.letters[i]
        if status is Correctness.UNKNOWN:
            letter = ''
        letters.append(letter)
        correctness.append(status)

    exists_positions = [i for i, status in enumerate(correctness) if status is Correctness.EXISTS]
    if len(exists_positions) == 1:
        index = exists_positions[0]
        target = normalize_letter(letters[index])
        if sum(1 for letter in letters if normalize_letter(letter) == target) == 1:
            correctness[index] = Correctness.CORRECT

    return LineHint(letters=letters, correctness=correctness)


def display_hint(state: GameState) -> Optional[LineHint]:
    """
    The hint drawn over the current row: the cell search merged with revealed
    letters. A search that found nothing is not drawn.

    Letters are shown in their written form, with the final glyph in the last
    column and the base glyph everywhere else.
    """
    line_search = None
    if state.selected_cell is not None and state.selected_cell.row != state.current_attempt:
        line_search = state.line_search
    if line_search is not None and line_search.is_empty():
        line_search = None

    merged = merge_hints(line_search, state.line_hint)
    if merged is None:
        return None

    last = len(merged) - 1
    letters = [
        (final_form(letter) or letter) if i == last else (normalize_letter(letter) or '')
        for i, letter in enumerate(merged.letters)
    ]
    return LineHint(letters=letters, correctness=list(merged.correctness))
