"""
Game Service

Contains the core game logic: game creation, guess validation and evaluation,
and the game state machine (in progress -> won / lost).
"""

import logging
import random
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Type

from ..config import ALPHABET, Config, RECENT_GAMES_DEFAULT_LIMIT, RECENT_GAMES_MAX_LIMIT
from ..errors import ErrorKind, GuessRejectedError, NoTargetWordsAvailableError
from ..models.game import Game, GameResponse, GameWithGuesses, Guess
from ..repositories.base import GameRepository, GuessRepository
from .evaluator import build_keyboard, evaluate_guess
from .word_corpus import WordCorpus

logger = logging.getLogger(__name__)


def _plural(count: int, word: str = "guess") -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}es"


class GameService:
    """
    Core game service managing game sessions.

    This class handles:
    - Target word selection from the word corpus
    - Guess validation and evaluation
    - Game state transitions and completion messages
    - Repairing game records whose progress lags behind their stored guesses

    Args:
        game_repository: Storage for games
        guess_repository: Storage for guesses
        word_corpus: Validation and target word lists
        max_guesses: Guesses allowed per game
        word_length: Letters per word
        clock: Returns the current time (tests)
    """

    def __init__(self,
                 game_repository: GameRepository,
                 guess_repository: GuessRepository,
                 word_corpus: WordCorpus,
                 max_guesses: int = Config.MAX_GUESSES,
                 word_length: int = Config.WORD_LENGTH,
                 clock: Optional[Callable[[], datetime]] = None):
        self.game_repository = game_repository
        self.guess_repository = guess_repository
        self.word_corpus = word_corpus
        self.max_guesses = max_guesses
        self.word_length = word_length
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    def create_new_game(self) -> Game:
        """
        Creates a new game session with a randomly selected target word.

        Raises:
            NoTargetWordsAvailableError: If the target word list is empty
        """
        target_word = self.word_corpus.random_target()
        if not target_word:
            raise NoTargetWordsAvailableError()

        return self.game_repository.create_game(target_word.upper(), self.max_guesses)

    def get_game(self, game_id: str) -> Game:
        """Returns a game, repaired from its stored guesses if needed."""
        game = self.game_repository.get_game(game_id)
        return self._reconcile(game, self.guess_repository.get_guesses_by_game_id(game_id))

    def get_game_with_guesses(self, game_id: str) -> GameWithGuesses:
        """Returns a game, its guesses and the keyboard letter status."""
        game = self.game_repository.get_game(game_id)
        guesses = self.guess_repository.get_guesses_by_game_id(game_id)
        game = self._reconcile(game, guesses)

        return GameWithGuesses(
            game=game,
            guesses=guesses,
            letter_status=build_keyboard([guess.result for guess in guesses], ALPHABET)
        )

    def canonicalize(self, word) -> str:
        if not isinstance(word, str):
            return ""
        return word.strip().upper()

    def make_guess(self, game_id: str, raw_guess: str) -> GameResponse:
        """
        Processes a guess and updates game state.

        Validation failures are raised before anything is written.

        Args:
            game_id: Unique game identifier
            raw_guess: The submitted word, in any case, possibly padded

        Returns:
            GameResponse with the updated game, all guesses and a status message

        Raises:
            GameNotFoundError: If the game does not exist
            GuessRejectedError: If the game is over or the guess is invalid
            DuplicateGuessError: If another guess with the same number was
                stored concurrently
            StorageError: If persisting the guess or the game fails
        """
        game = self.game_repository.get_game(game_id)
        guesses = self.guess_repository.get_guesses_by_game_id(game_id)
        game = self._reconcile(game, guesses)

        if game.is_completed:
            raise GuessRejectedError("Game is already completed", ErrorKind.GAME_ALREADY_COMPLETED)

        guess_word = self.canonicalize(raw_guess)
        if len(guess_word) != self.word_length:
            raise GuessRejectedError(
                f"Guess must be {self.word_length} letters long",
                ErrorKind.INVALID_GUESS_LENGTH
            )

        if not self.word_corpus.contains(guess_word):
            raise GuessRejectedError(f"'{guess_word}' is not a valid word", ErrorKind.WORD_NOT_RECOGNIZED)

        # Unreachable through this service alone; guards against records
        # modified behind its back
        if game.guess_count >= game.max_guesses:
            raise GuessRejectedError("No remaining guesses", ErrorKind.NO_REMAINING_GUESSES)

        result = evaluate_guess(guess_word, game.target_word)
        if result is None:
            raise GuessRejectedError(
                f"Guess must be {len(game.target_word)} letters long",
                ErrorKind.INVALID_GUESS_LENGTH
            )

        guess_number = game.guess_count + 1
        guess = self.guess_repository.create_guess(game_id, guess_word, guess_number, result)

        game.guess_count = guess_number
        game.is_won = guess_word == game.target_word
        game.is_completed = game.is_won or game.guess_count >= game.max_guesses
        if game.is_completed:
            game.completed_at = self.clock()

        self.game_repository.update_game(game)

        return GameResponse(
            game=game,
            guesses=guesses + [guess],
            message=self.build_message(game)
        )

    @staticmethod
    def build_message(game: Game) -> str:
        if game.is_won:
            return f"Congratulations! You won in {_plural(game.guess_count)}!"
        if game.is_completed:
            return f"Game over! The word was '{game.target_word}'"
        return f"Good guess! {_plural(game.remaining_guesses)} remaining"

    def _reconcile(self, game: Game, guesses: List[Guess]) -> Game:
        """
        Derives progress from the stored guesses when the game record lags.

        A guess can be stored without the matching game update if the process
        or the store fails in between; the guess history is authoritative.
        """
        if not guesses or guesses[-1].guess_number <= game.guess_count:
            return game

        logger.warning(
            "Game %s records %d guess(es) but %d are stored; repairing",
            game.id, game.guess_count, guesses[-1].guess_number
        )

        game.guess_count = guesses[-1].guess_number
        winning = next((g for g in guesses if g.guess_word == game.target_word), None)
        game.is_won = winning is not None
        game.is_completed = game.is_game_complete()

        if game.is_completed and game.completed_at is None:
            completing = winning if winning is not None else guesses[-1]
            game.completed_at = completing.created_at
        return game

    def get_recent_games(self, limit: Optional[int] = None) -> List[Game]:
        """Most recent games; limits outside [1, 100] fall back to 10."""
        if limit is None or limit <= 0 or limit > RECENT_GAMES_MAX_LIMIT:
            limit = RECENT_GAMES_DEFAULT_LIMIT
        games = self.game_repository.get_recent_games(limit)
        return [self._reconcile(game, self.guess_repository.get_guesses_by_game_id(game.id))
                for game in games]

    def delete_game(self, game_id: str) -> None:
        self.game_repository.delete_game(game_id)

    def validate_word(self, word: str) -> bool:
        """Checks if a word is a valid guess (length and word list membership)."""
        if not isinstance(word, str):
            return False
        word = word.strip()
        if len(word) != self.word_length:
            return False
        return self.word_corpus.contains(word)

    def get_game_stats(self) -> Dict:
        return {
            "total_words": self.word_corpus.size(),
            "target_words": self.word_corpus.target_size(),
            "playable_words": len(self.word_corpus.words_of_length(self.word_length)),
            "max_guesses": self.max_guesses,
            "word_length": self.word_length
        }

    def get_word_statistics(self) -> Dict:
        return self.word_corpus.statistics(self.word_length)

    def reload_word_list(self) -> Dict:
        """Reloads both word lists from their sources and returns the new sizes."""
        self.word_corpus.reload()
        return {
            "total_words": self.word_corpus.size(),
            "target_words": self.word_corpus.target_size()
        }


# Global service instance
_game_service = None


def get_game_service() -> Optional[GameService]:
    """Get the global game service instance."""
    return _game_service


def build_word_corpus(config_class: Type[Config] = Config) -> WordCorpus:
    """Loads the word lists named by the configuration."""
    rng = random.Random(config_class.RANDOM_SEED)
    return WordCorpus(
        config_class.VALID_WORDS_PATH,
        config_class.TARGET_WORDS_PATH,
        rng=rng,
        strict=config_class.STRICT_WORD_LISTS
    )


def initialize_game_service(config_class: Type[Config] = Config,
                            game_repository: Optional[GameRepository] = None,
                            guess_repository: Optional[GuessRepository] = None,
                            word_corpus: Optional[WordCorpus] = None) -> GameService:
    """
    Initialize the global game service instance.

    Missing collaborators are built from the configuration: MongoDB when
    MONGO_URI is set, the in-memory store otherwise.

    Raises:
        CorpusLoadError: If a word list cannot be read
        CorpusConsistencyError: If strict word lists disagree
        StorageError: If MongoDB is unreachable
    """
    global _game_service

    if word_corpus is None:
        word_corpus = build_word_corpus(config_class)

    if game_repository is None or guess_repository is None:
        if config_class.MONGO_URI:
            from ..repositories.mongo import MongoStore

            store = MongoStore(
                config_class.MONGO_URI,
                config_class.MONGO_DB_NAME,
                max_pool_size=config_class.MONGO_MAX_POOL_SIZE,
                timeout_ms=config_class.MONGO_TIMEOUT_MS
            )
            store.ensure_indexes()
        else:
            from ..repositories.memory import InMemoryStore

            logger.warning("MONGO_URI not configured; games are kept in memory only")
            store = InMemoryStore()

        game_repository = game_repository or store.games_repository
        guess_repository = guess_repository or store.guesses_repository

    _game_service = GameService(
        game_repository,
        guess_repository,
        word_corpus,
        max_guesses=config_class.MAX_GUESSES,
        word_length=config_class.WORD_LENGTH
    )
    return _game_service
