"""
Repository Interfaces

The game service depends only on these interfaces, never on a concrete store.
Implementations raise GameNotFoundError / GuessNotFoundError for missing
records, DuplicateGuessError when a guess number is already taken for a game,
and StorageError for any other persistence failure.
"""

from abc import ABC, abstractmethod
from typing import List

from ..models.game import Game, Guess, LetterResult


class GameRepository(ABC):
    """Storage for Game records."""

    @abstractmethod
    def create_game(self, target_word: str, max_guesses: int) -> Game:
        """Persists a new game with no guesses and returns it."""

    @abstractmethod
    def get_game(self, game_id: str) -> Game:
        """Returns the game or raises GameNotFoundError."""

    @abstractmethod
    def update_game(self, game: Game) -> None:
        """Saves progress fields (guess count, win/completion state)."""

    @abstractmethod
    def delete_game(self, game_id: str) -> None:
        """Deletes the game and all of its guesses."""

    @abstractmethod
    def get_recent_games(self, limit: int) -> List[Game]:
        """Most recently created games first."""


class GuessRepository(ABC):
    """Storage for Guess records, unique per (game_id, guess_number)."""

    @abstractmethod
    def create_guess(self, game_id: str, guess_word: str, guess_number: int,
                     result: List[LetterResult]) -> Guess:
        pass

    @abstractmethod
    def get_guess(self, guess_id: str) -> Guess:
        pass

    @abstractmethod
    def get_guesses_by_game_id(self, game_id: str) -> List[Guess]:
        """All guesses of a game ordered by guess number ascending."""

    @abstractmethod
    def get_latest_guess(self, game_id: str) -> Guess:
        """Highest numbered guess; GuessNotFoundError if the game has none."""

    @abstractmethod
    def delete_guess(self, guess_id: str) -> None:
        pass
