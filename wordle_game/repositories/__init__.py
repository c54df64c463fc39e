"""
Repositories Package

Persistence interfaces for games and guesses, with in-memory and MongoDB
implementations.
"""

from .base import GameRepository, GuessRepository
from .memory import InMemoryGameRepository, InMemoryGuessRepository, InMemoryStore
from .mongo import MongoGameRepository, MongoGuessRepository, MongoStore

__all__ = [
    'GameRepository', 'GuessRepository',
    'InMemoryStore', 'InMemoryGameRepository', 'InMemoryGuessRepository',
    'MongoStore', 'MongoGameRepository', 'MongoGuessRepository'
]
