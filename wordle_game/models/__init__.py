"""
Data Models Package

Contains all data models and schemas used throughout the application.
"""

from .game import Game, GameResponse, GameWithGuesses, Guess, LetterResult, LetterStatus

__all__ = ['Game', 'GameResponse', 'GameWithGuesses', 'Guess', 'LetterResult', 'LetterStatus']
