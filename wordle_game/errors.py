"""
Error Types

Every failure the game server reports carries an ErrorKind tag. Callers
(controllers, scripts, tests) branch on the kind, never on message text.
"""

from enum import Enum
from typing import Dict, Optional


class ErrorCategory(Enum):
    """Broad classification used to pick a response status."""
    CLIENT = "client"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INFRASTRUCTURE = "infrastructure"
    CONFIGURATION = "configuration"


class ErrorKind(Enum):
    """Closed set of failure kinds."""
    INVALID_GUESS_LENGTH = "invalid_guess_length"
    WORD_NOT_RECOGNIZED = "word_not_recognized"
    GAME_ALREADY_COMPLETED = "game_already_completed"
    NO_REMAINING_GUESSES = "no_remaining_guesses"
    NO_TARGET_WORDS_AVAILABLE = "no_target_words_available"
    GAME_NOT_FOUND = "game_not_found"
    GUESS_NOT_FOUND = "guess_not_found"
    CONCURRENT_GUESS = "concurrent_guess"
    STORAGE_FAILURE = "storage_failure"
    CORPUS_LOAD_FAILURE = "corpus_load_failure"
    CORPUS_INCONSISTENT = "corpus_inconsistent"


_CATEGORIES: Dict[ErrorKind, ErrorCategory] = {
    ErrorKind.INVALID_GUESS_LENGTH: ErrorCategory.CLIENT,
    ErrorKind.WORD_NOT_RECOGNIZED: ErrorCategory.CLIENT,
    ErrorKind.GAME_ALREADY_COMPLETED: ErrorCategory.CLIENT,
    ErrorKind.NO_REMAINING_GUESSES: ErrorCategory.CLIENT,
    ErrorKind.NO_TARGET_WORDS_AVAILABLE: ErrorCategory.CLIENT,
    ErrorKind.GAME_NOT_FOUND: ErrorCategory.NOT_FOUND,
    ErrorKind.GUESS_NOT_FOUND: ErrorCategory.NOT_FOUND,
    ErrorKind.CONCURRENT_GUESS: ErrorCategory.CONFLICT,
    ErrorKind.STORAGE_FAILURE: ErrorCategory.INFRASTRUCTURE,
    ErrorKind.CORPUS_LOAD_FAILURE: ErrorCategory.CONFIGURATION,
    ErrorKind.CORPUS_INCONSISTENT: ErrorCategory.CONFIGURATION,
}

_HTTP_STATUS: Dict[ErrorCategory, int] = {
    ErrorCategory.CLIENT: 400,
    ErrorCategory.NOT_FOUND: 404,
    ErrorCategory.CONFLICT: 409,
    ErrorCategory.INFRASTRUCTURE: 500,
    ErrorCategory.CONFIGURATION: 500,
}


class WordleError(Exception):
    """
    Base class for all game server errors.

    Args:
        message: Human readable description
        kind: Failure kind; subclasses provide a default
    """

    kind: ErrorKind = ErrorKind.STORAGE_FAILURE

    def __init__(self, message: str, kind: Optional[ErrorKind] = None):
        super().__init__(message)
        self.message = message
        if kind is not None:
            self.kind = kind

    @property
    def category(self) -> ErrorCategory:
        return _CATEGORIES[self.kind]

    @property
    def http_status(self) -> int:
        return _HTTP_STATUS[self.category]

    @property
    def retryable(self) -> bool:
        """Only concurrent guess conflicts are worth retrying as-is."""
        return self.kind is ErrorKind.CONCURRENT_GUESS

    def to_dict(self) -> Dict:
        return {
            'success': False,
            'error': self.message,
            'kind': self.kind.value,
            'retryable': self.retryable
        }


class GuessRejectedError(WordleError):
    """A guess failed validation and was not recorded."""
    kind = ErrorKind.INVALID_GUESS_LENGTH


class GameNotFoundError(WordleError):
    kind = ErrorKind.GAME_NOT_FOUND

    def __init__(self, game_id: str):
        super().__init__(f"Game not found: {game_id}")
        self.game_id = game_id


class GuessNotFoundError(WordleError):
    kind = ErrorKind.GUESS_NOT_FOUND

    def __init__(self, guess_id: str):
        super().__init__(f"Guess not found: {guess_id}")
        self.guess_id = guess_id


class DuplicateGuessError(WordleError):
    """Another guess with the same number was already stored for the game."""
    kind = ErrorKind.CONCURRENT_GUESS

    def __init__(self, game_id: str, guess_number: int):
        super().__init__(
            f"Guess {guess_number} for game {game_id} was already submitted; "
            f"reload the game and try again"
        )
        self.game_id = game_id
        self.guess_number = guess_number


class StorageError(WordleError):
    kind = ErrorKind.STORAGE_FAILURE


class NoTargetWordsAvailableError(WordleError):
    kind = ErrorKind.NO_TARGET_WORDS_AVAILABLE

    def __init__(self, message: str = "No target words available"):
        super().__init__(message)


class CorpusLoadError(WordleError):
    kind = ErrorKind.CORPUS_LOAD_FAILURE


class CorpusConsistencyError(WordleError):
    kind = ErrorKind.CORPUS_INCONSISTENT
