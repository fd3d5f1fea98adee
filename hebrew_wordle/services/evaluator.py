"""
Guess Evaluation

Scores a guess against the secret word and folds the result into the
cumulative keyboard state.
"""

from typing import Dict, List, Optional, Sequence, Tuple

from ..models.game import Correctness
from ..utils.letters import BASE_LETTERS, normalize_letter


def evaluate_guess(secret_word: Sequence[str], guess: Sequence[str]) -> List[Correctness]:
    """
    Implements the two-pass Wordle evaluation over normalized letters.

    Args:
        secret_word: The hidden word (string or list of letters)
        guess: The submitted word, same length as the secret

    Returns:
        List[Correctness]: One verdict per position

    Raises:
        ValueError: If the guess and secret lengths differ
    """
    if len(guess) != len(secret_word):
        raise ValueError(
            f"Guess length {len(guess)} does not match secret word length {len(secret_word)}"
        )

    word_length = len(secret_word)
    evaluation = [Correctness.NOT_IN_USE] * word_length

    # Working copies to track letter consumption
    secret_chars: List[Optional[str]] = [normalize_letter(c) for c in secret_word]
    guess_chars: List[Optional[str]] = [normalize_letter(c) for c in guess]

    # First pass: exact position matches
    for i in range(word_length):
        if guess_chars[i] is not None and guess_chars[i] == secret_chars[i]:
            evaluation[i] = Correctness.CORRECT
            secret_chars[i] = None
            guess_chars[i] = None

    # Second pass: displaced letters, consuming the first remaining occurrence
    for i in range(word_length):
        letter = guess_chars[i]
        if letter is not None and letter in secret_chars:
            evaluation[i] = Correctness.EXISTS
            secret_chars[secret_chars.index(letter)] = None

    return evaluation


def initial_keyboard() -> Dict[str, Correctness]:
    return {letter: Correctness.UNKNOWN for letter in BASE_LETTERS}


def fold_keyboard(keyboard: Dict[str, Correctness],
                  letters: Sequence[str],
                  correctness: Sequence[Correctness]) -> Dict[str, Correctness]:
    """
    Fold one evaluated guess into the keyboard state.

    Status can only progress in priority order: correct always wins, exists
    replaces anything but correct, notInUse only fills an unset key.
    """
    new_keyboard = dict(keyboard)
    for letter, new_status in zip(letters, correctness):
        key = normalize_letter(letter)
        if key is None:
            continue
        current_status = new_keyboard.get(key, Correctness.UNKNOWN)

        if new_status is Correctness.CORRECT:
            new_keyboard[key] = Correctness.CORRECT
        elif new_status is Correctness.EXISTS and current_status is not Correctness.CORRECT:
            new_keyboard[key] = Correctness.EXISTS
        elif new_status is Correctness.NOT_IN_USE and current_status is Correctness.UNKNOWN:
            new_keyboard[key] = Correctness.NOT_IN_USE
    return new_keyboard


def key_state(keyboard: Dict[str, Correctness], key: str) -> Correctness:
    """State of an on-screen key; a final form shares its base letter's state."""
    return keyboard.get(normalize_letter(key), Correctness.UNKNOWN)


def newly_correct_positions(correct_letters: Sequence[bool],
                            correctness: Sequence[Correctness]) -> Tuple[List[bool], int]:
    """
    Update the per-position "already revealed" flags with a new verdict.

    Returns:
        Tuple of (updated flags, number of positions revealed for the first time)
    """
    updated = list(correct_letters) or [False] * len(correctness)
    revealed = 0
    for i, status in enumerate(correctness):
        if status is Correctness.CORRECT and not updated[i]:
            updated[i] = True
            revealed += 1
    return updated, revealed
