"""
In-Memory Repositories

Dictionary-backed storage used for local play and tests. Records are copied
on the way in and out so callers never share mutable state with the store.
"""

import copy
import threading
import uuid
from datetime import datetime, timezone
from typing import Dict, List

from ..errors import DuplicateGuessError, GameNotFoundError, GuessNotFoundError
from ..models.game import Game, Guess, LetterResult
from .base import GameRepository, GuessRepository


class InMemoryStore:
    """Shared state for the in-memory game and guess repositories."""

    def __init__(self):
        self.lock = threading.RLock()
        self.games: Dict[str, Game] = {}
        self.guesses: Dict[str, Guess] = {}
        self.games_repository = InMemoryGameRepository(self)
        self.guesses_repository = InMemoryGuessRepository(self)


class InMemoryGameRepository(GameRepository):

    def __init__(self, store: InMemoryStore):
        self.store = store

    def create_game(self, target_word: str, max_guesses: int) -> Game:
        game = Game(
            id=str(uuid.uuid4()),
            target_word=target_word,
            max_guesses=max_guesses,
            created_at=datetime.now(timezone.utc)
        )
        with self.store.lock:
            self.store.games[game.id] = copy.deepcopy(game)
        return game

    def get_game(self, game_id: str) -> Game:
        with self.store.lock:
            if game_id not in self.store.games:
                raise GameNotFoundError(game_id)
            return copy.deepcopy(self.store.games[game_id])

    def update_game(self, game: Game) -> None:
        with self.store.lock:
            if game.id not in self.store.games:
                raise GameNotFoundError(game.id)
            self.store.games[game.id] = copy.deepcopy(game)

    def delete_game(self, game_id: str) -> None:
        with self.store.lock:
            if game_id not in self.store.games:
                raise GameNotFoundError(game_id)
            del self.store.games[game_id]

            # Guesses go with their game
            orphaned = [guess_id for guess_id, guess in self.store.guesses.items()
                        if guess.game_id == game_id]
            for guess_id in orphaned:
                del self.store.guesses[guess_id]

    def get_recent_games(self, limit: int) -> List[Game]:
        with self.store.lock:
            games = sorted(self.store.games.values(), key=lambda g: g.created_at, reverse=True)
            return [copy.deepcopy(game) for game in games[:limit]]


class InMemoryGuessRepository(GuessRepository):

    def __init__(self, store: InMemoryStore):
        self.store = store

    def create_guess(self, game_id: str, guess_word: str, guess_number: int,
                     result: List[LetterResult]) -> Guess:
        with self.store.lock:
            if game_id not in self.store.games:
                raise GameNotFoundError(game_id)

            # Uniqueness of (game_id, guess_number)
            for existing in self.store.guesses.values():
                if existing.game_id == game_id and existing.guess_number == guess_number:
                    raise DuplicateGuessError(game_id, guess_number)

            guess = Guess(
                id=str(uuid.uuid4()),
                game_id=game_id,
                guess_word=guess_word,
                guess_number=guess_number,
                result=list(result),
                created_at=datetime.now(timezone.utc)
            )
            self.store.guesses[guess.id] = copy.deepcopy(guess)
            return guess

    def get_guess(self, guess_id: str) -> Guess:
        with self.store.lock:
            if guess_id not in self.store.guesses:
                raise GuessNotFoundError(guess_id)
            return copy.deepcopy(self.store.guesses[guess_id])

    def get_guesses_by_game_id(self, game_id: str) -> List[Guess]:
        with self.store.lock:
            guesses = [guess for guess in self.store.guesses.values() if guess.game_id == game_id]
            return [copy.deepcopy(guess) for guess in sorted(guesses, key=lambda g: g.guess_number)]

    def get_latest_guess(self, game_id: str) -> Guess:
        guesses = self.get_guesses_by_game_id(game_id)
        if not guesses:
            raise GuessNotFoundError(f"latest guess of game {game_id}")
        return guesses[-1]

    def delete_guess(self, guess_id: str) -> None:
        with self.store.lock:
            if guess_id not in self.store.guesses:
                raise GuessNotFoundError(guess_id)
            del self.store.guesses[guess_id]
