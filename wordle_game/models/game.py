"""
Game Data Models

Contains all game-related data structures and enums.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional


class LetterStatus(Enum):
    """Letter evaluation status for a single guess position."""
    CORRECT = "correct"
    PRESENT = "present"
    ABSENT = "absent"


# Keyboard ranking: a letter keeps the best status it has ever received
STATUS_PRIORITY: Dict[LetterStatus, int] = {
    LetterStatus.ABSENT: 1,
    LetterStatus.PRESENT: 2,
    LetterStatus.CORRECT: 3,
}

UNUSED = "unused"


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


@dataclass(frozen=True)
class LetterResult:
    """Outcome for one letter of a guess."""
    letter: str
    status: LetterStatus

    def to_dict(self) -> Dict[str, str]:
        return {'letter': self.letter, 'status': self.status.value}

    @classmethod
    def from_dict(cls, data: Dict[str, str]) -> "LetterResult":
        return cls(letter=data['letter'], status=LetterStatus(data['status']))


@dataclass
class Game:
    """A single game session as stored between guesses."""
    id: str
    target_word: str
    max_guesses: int
    created_at: datetime
    guess_count: int = 0
    is_won: bool = False
    is_completed: bool = False
    completed_at: Optional[datetime] = None

    def is_game_complete(self) -> bool:
        return self.is_won or self.guess_count >= self.max_guesses

    @property
    def remaining_guesses(self) -> int:
        return max(self.max_guesses - self.guess_count, 0)

    def to_dict(self, reveal_target: Optional[bool] = None) -> Dict:
        """
        Serialize for API responses.

        The target word is withheld while the game is in progress unless
        reveal_target is passed explicitly.
        """
        if reveal_target is None:
            reveal_target = self.is_completed

        return {
            'id': self.id,
            'target_word': self.target_word if reveal_target else None,
            'created_at': _isoformat(self.created_at),
            'completed_at': _isoformat(self.completed_at),
            'is_completed': self.is_completed,
            'is_won': self.is_won,
            'guess_count': self.guess_count,
            'max_guesses': self.max_guesses,
            'remaining_guesses': self.remaining_guesses
        }


@dataclass
class Guess:
    """One recorded guess of a game."""
    id: str
    game_id: str
    guess_word: str
    guess_number: int
    result: List[LetterResult]
    created_at: datetime

    def to_dict(self) -> Dict:
        return {
            'id': self.id,
            'game_id': self.game_id,
            'guess_word': self.guess_word,
            'guess_number': self.guess_number,
            'result': [letter.to_dict() for letter in self.result],
            'created_at': _isoformat(self.created_at)
        }


@dataclass
class GameWithGuesses:
    """A game together with its guesses, ordered by guess number."""
    game: Game
    guesses: List[Guess] = field(default_factory=list)
    letter_status: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict:
        return {
            'game': self.game.to_dict(),
            'guesses': [guess.to_dict() for guess in self.guesses],
            'letter_status': self.letter_status
        }


@dataclass
class GameResponse:
    """Result of a successful guess."""
    game: Game
    guesses: List[Guess]
    message: str

    def to_dict(self) -> Dict:
        return {
            'game': self.game.to_dict(),
            'guesses': [guess.to_dict() for guess in self.guesses],
            'message': self.message
        }
