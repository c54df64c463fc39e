"""
Guess Evaluation

Implements the Wordle letter scoring algorithm, including the handling of
repeated letters, and the keyboard status aggregation built on top of it.
"""

from typing import Dict, List, Optional

from ..models.game import STATUS_PRIORITY, UNUSED, LetterResult, LetterStatus


def evaluate_guess(guess: str, target: str) -> Optional[List[LetterResult]]:
    """
    Scores a guess against the target word letter by letter.

    Each target letter can be matched at most once: exact position matches
    are consumed first, then the remaining guess letters claim the earliest
    unconsumed occurrence in the target.

    Args:
        guess: The guessed word (any case)
        target: The hidden word (any case)

    Returns:
        List of LetterResult in guess order, or None if the lengths differ
    """
    if len(guess) != len(target):
        return None

    guess = guess.upper()
    target = target.upper()

    # Target letters still available for matching; consumed ones become None
    remaining: List[Optional[str]] = list(target)
    statuses: List[Optional[LetterStatus]] = [None] * len(guess)

    # First pass: exact position matches
    for i, letter in enumerate(guess):
        if letter == remaining[i]:
            statuses[i] = LetterStatus.CORRECT
            remaining[i] = None

    # Second pass: earliest unconsumed occurrence, left to right
    for i, letter in enumerate(guess):
        if statuses[i] is not None:
            continue

        if letter in remaining:
            statuses[i] = LetterStatus.PRESENT
            remaining[remaining.index(letter)] = None
        else:
            statuses[i] = LetterStatus.ABSENT

    return [LetterResult(letter, status) for letter, status in zip(guess, statuses)]


def is_winning_result(result: Optional[List[LetterResult]]) -> bool:
    """True when every letter of a non-empty result is correct."""
    if not result:
        return False
    return all(letter.status is LetterStatus.CORRECT for letter in result)


def merge_letter_status(keyboard: Dict[str, str], result: List[LetterResult]) -> Dict[str, str]:
    """
    Folds a guess result into a keyboard status map.

    Status can only progress in priority order (absent < present < correct).
    """
    for letter_result in result:
        current = keyboard.get(letter_result.letter, UNUSED)
        current_priority = 0 if current == UNUSED else STATUS_PRIORITY[LetterStatus(current)]

        if STATUS_PRIORITY[letter_result.status] > current_priority:
            keyboard[letter_result.letter] = letter_result.status.value

    return keyboard


def build_keyboard(results: List[List[LetterResult]], alphabet: str) -> Dict[str, str]:
    """Keyboard map for every letter of the alphabet, starting from unused."""
    keyboard = {letter: UNUSED for letter in alphabet}
    for result in results:
        merge_letter_status(keyboard, result)
    return keyboard
