"""
MongoDB Repositories

Persists games and guesses in two collections. The unique compound index on
(game_id, guess_number) turns two concurrent submissions of the same guess
number into a DuplicateGuessError instead of silent corruption.
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pymongo import ASCENDING, DESCENDING
from pymongo.errors import DuplicateKeyError, PyMongoError
from pymongo.mongo_client import MongoClient
from pymongo.server_api import ServerApi

from ..errors import DuplicateGuessError, GameNotFoundError, GuessNotFoundError, StorageError
from ..models.game import Game, Guess, LetterResult
from .base import GameRepository, GuessRepository


def _game_from_document(doc: Dict[str, Any]) -> Game:
    return Game(
        id=doc["_id"],
        target_word=doc["target_word"],
        max_guesses=doc["max_guesses"],
        created_at=doc["created_at"],
        guess_count=doc.get("guess_count", 0),
        is_won=doc.get("is_won", False),
        is_completed=doc.get("is_completed", False),
        completed_at=doc.get("completed_at")
    )


def _guess_from_document(doc: Dict[str, Any]) -> Guess:
    return Guess(
        id=doc["_id"],
        game_id=doc["game_id"],
        guess_word=doc["guess_word"],
        guess_number=doc["guess_number"],
        result=[LetterResult.from_dict(item) for item in doc.get("result", [])],
        created_at=doc["created_at"]
    )


class MongoStore:
    """
    MongoDB connection shared by the game and guess repositories.

    Args:
        mongo_uri: MongoDB connection string
        db_name: Database holding the games and guesses collections
        max_pool_size: Connection pool size
        timeout_ms: Server selection timeout
        client: Pre-built client (tests)
    """

    def __init__(self, mongo_uri: Optional[str] = None, db_name: str = "wordle_game",
                 max_pool_size: int = 25, timeout_ms: int = 5000,
                 client: Optional[MongoClient] = None):
        if client is None:
            client = MongoClient(
                mongo_uri,
                server_api=ServerApi('1'),
                maxPoolSize=max_pool_size,
                serverSelectionTimeoutMS=timeout_ms,
                tz_aware=True
            )
        self.client = client
        self.db = self.client[db_name]
        self.games_collection = self.db.games
        self.guesses_collection = self.db.guesses

        self.games_repository = MongoGameRepository(self)
        self.guesses_repository = MongoGuessRepository(self)

    def ensure_indexes(self) -> None:
        """Checks the connection and creates the indexes the repositories rely on."""
        try:
            self.client.admin.command('ping')
            self.games_collection.create_index([("created_at", DESCENDING)])
            self.guesses_collection.create_index(
                [("game_id", ASCENDING), ("guess_number", ASCENDING)],
                unique=True
            )
            self.guesses_collection.create_index([("created_at", ASCENDING)])
        except PyMongoError as e:
            raise StorageError(f"MongoDB setup failed: {e}") from e

    def close_connection(self):
        """Close the MongoDB connection."""
        if self.client:
            self.client.close()


class MongoGameRepository(GameRepository):

    def __init__(self, store: MongoStore):
        self.store = store

    @property
    def collection(self):
        return self.store.games_collection

    def create_game(self, target_word: str, max_guesses: int) -> Game:
        game = Game(
            id=str(uuid.uuid4()),
            target_word=target_word,
            max_guesses=max_guesses,
            created_at=datetime.now(timezone.utc)
        )
        game_doc = {
            "_id": game.id,
            "target_word": game.target_word,
            "created_at": game.created_at,
            "completed_at": None,
            "is_completed": False,
            "is_won": False,
            "guess_count": 0,
            "max_guesses": max_guesses
        }

        try:
            self.collection.insert_one(game_doc)
        except PyMongoError as e:
            raise StorageError(f"Failed to create game: {e}") from e
        return game

    def get_game(self, game_id: str) -> Game:
        try:
            doc = self.collection.find_one({"_id": game_id})
        except PyMongoError as e:
            raise StorageError(f"Failed to get game: {e}") from e

        if doc is None:
            raise GameNotFoundError(game_id)
        return _game_from_document(doc)

    def update_game(self, game: Game) -> None:
        try:
            result = self.collection.update_one(
                {"_id": game.id},
                {"$set": {
                    "completed_at": game.completed_at,
                    "is_completed": game.is_completed,
                    "is_won": game.is_won,
                    "guess_count": game.guess_count
                }}
            )
        except PyMongoError as e:
            raise StorageError(f"Failed to update game: {e}") from e

        if result.matched_count == 0:
            raise GameNotFoundError(game.id)

    def delete_game(self, game_id: str) -> None:
        try:
            result = self.collection.delete_one({"_id": game_id})
            if result.deleted_count == 0:
                raise GameNotFoundError(game_id)
            self.store.guesses_collection.delete_many({"game_id": game_id})
        except PyMongoError as e:
            raise StorageError(f"Failed to delete game: {e}") from e

    def get_recent_games(self, limit: int) -> List[Game]:
        try:
            cursor = self.collection.find().sort("created_at", DESCENDING).limit(limit)
            return [_game_from_document(doc) for doc in cursor]
        except PyMongoError as e:
            raise StorageError(f"Failed to get recent games: {e}") from e


class MongoGuessRepository(GuessRepository):

    def __init__(self, store: MongoStore):
        self.store = store

    @property
    def collection(self):
        return self.store.guesses_collection

    def create_guess(self, game_id: str, guess_word: str, guess_number: int,
                     result: List[LetterResult]) -> Guess:
        guess = Guess(
            id=str(uuid.uuid4()),
            game_id=game_id,
            guess_word=guess_word,
            guess_number=guess_number,
            result=list(result),
            created_at=datetime.now(timezone.utc)
        )
        guess_doc = {
            "_id": guess.id,
            "game_id": game_id,
            "guess_word": guess_word,
            "guess_number": guess_number,
            "result": [letter.to_dict() for letter in guess.result],
            "created_at": guess.created_at
        }

        try:
            self.collection.insert_one(guess_doc)
        except DuplicateKeyError as e:
            raise DuplicateGuessError(game_id, guess_number) from e
        except PyMongoError as e:
            raise StorageError(f"Failed to save guess: {e}") from e
        return guess

    def get_guess(self, guess_id: str) -> Guess:
        try:
            doc = self.collection.find_one({"_id": guess_id})
        except PyMongoError as e:
            raise StorageError(f"Failed to get guess: {e}") from e

        if doc is None:
            raise GuessNotFoundError(guess_id)
        return _guess_from_document(doc)

    def get_guesses_by_game_id(self, game_id: str) -> List[Guess]:
        try:
            cursor = self.collection.find({"game_id": game_id}).sort("guess_number", ASCENDING)
            return [_guess_from_document(doc) for doc in cursor]
        except PyMongoError as e:
            raise StorageError(f"Failed to get guesses: {e}") from e

    def get_latest_guess(self, game_id: str) -> Guess:
        try:
            doc = self.collection.find_one(
                {"game_id": game_id},
                sort=[("guess_number", DESCENDING)]
            )
        except PyMongoError as e:
            raise StorageError(f"Failed to get latest guess: {e}") from e

        if doc is None:
            raise GuessNotFoundError(f"latest guess of game {game_id}")
        return _guess_from_document(doc)

    def delete_guess(self, guess_id: str) -> None:
        try:
            result = self.collection.delete_one({"_id": guess_id})
        except PyMongoError as e:
            raise StorageError(f"Failed to delete guess: {e}") from e

        if result.deleted_count == 0:
            raise GuessNotFoundError(guess_id)
