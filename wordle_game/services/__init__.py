"""
Services Package

Contains all business logic and service classes.
"""

from .evaluator import evaluate_guess, is_winning_result
from .game_service import GameService, get_game_service, initialize_game_service
from .word_corpus import WordCorpus

__all__ = [
    'GameService', 'get_game_service', 'initialize_game_service',
    'WordCorpus', 'evaluate_guess', 'is_winning_result'
]
