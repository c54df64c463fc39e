"""
Game Configuration Constants Module

This module defines the game rules and constants. All game parameters are
centralized here; the environment-driven overrides live in app_config.py.
"""

import os
from typing import Dict, Final, Iterable

# Core Game Configuration Constants
MAX_GUESSES: Final[int] = 6
"""
Maximum number of guess attempts allowed per game.
"""

WORD_LENGTH: Final[int] = 5
"""
Number of letters in every guess and target word.
"""

RECENT_GAMES_DEFAULT_LIMIT: Final[int] = 10
RECENT_GAMES_MAX_LIMIT: Final[int] = 100

ALPHABET: Final[str] = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"

# Bundled word lists
_WORDS_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'words')

DEFAULT_VALID_WORDS_PATH: Final[str] = os.path.join(_WORDS_DIR, 'valid_words.txt')
"""
Validation set: every word a player may guess.
"""

DEFAULT_TARGET_WORDS_PATH: Final[str] = os.path.join(_WORDS_DIR, 'target_words.txt')
"""
Target set: common words eligible to be chosen as the hidden word.
"""


def get_word_statistics(words: Iterable[str], word_length: int = WORD_LENGTH) -> Dict:
    """
    Analyzes a word list and returns statistical information for game balancing.

    Args:
        words: Words to analyze (any case)
        word_length: Length considered playable

    Returns:
        dict: Statistical analysis including:
            - total_words: Number of words analyzed
            - playable_words: Words of the configured length
            - length_distribution: Word count per length
            - avg_vowel_count: Average vowels per playable word
            - letter_frequency: Distribution of letters across playable words
            - most_common_letters: Top five letters
    """
    words = [word.upper() for word in words]
    if not words:
        return {"total_words": 0, "playable_words": 0, "error": "Word list is empty"}

    length_distribution: Dict[int, int] = {}
    for word in words:
        length_distribution[len(word)] = length_distribution.get(len(word), 0) + 1

    playable = [word for word in words if len(word) == word_length]

    vowels = set('AEIOU')
    total_vowels = sum(len([char for char in word if char in vowels]) for word in playable)

    # Calculate letter frequency distribution
    letter_frequency: Dict[str, int] = {}
    for word in playable:
        for char in word:
            letter_frequency[char] = letter_frequency.get(char, 0) + 1

    return {
        "total_words": len(words),
        "playable_words": len(playable),
        "length_distribution": dict(sorted(length_distribution.items())),
        "avg_vowel_count": round(total_vowels / len(playable), 2) if playable else 0.0,
        "letter_frequency": letter_frequency,
        "most_common_letters": sorted(letter_frequency.items(), key=lambda x: x[1], reverse=True)[:5]
    }
