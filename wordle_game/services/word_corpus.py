"""
Word Corpus

Loads and indexes the two word lists used by the game:
- the validation set, checked on every guess
- the target set, from which hidden words are drawn

Both sets live in a single immutable snapshot. Loading builds a new snapshot
and swaps it in under a lock, so readers always see a matching pair.
"""

import logging
import os
import random
import threading
from dataclasses import dataclass
from typing import FrozenSet, IO, Iterable, List, Optional, Tuple, Union

from ..config.game_settings import WORD_LENGTH, get_word_statistics
from ..errors import CorpusConsistencyError, CorpusLoadError

logger = logging.getLogger(__name__)

WordSource = Union[str, "os.PathLike[str]", IO[str]]


@dataclass(frozen=True)
class _CorpusSnapshot:
    validation_words: Tuple[str, ...]
    validation_set: FrozenSet[str]
    target_words: Tuple[str, ...]


_EMPTY = _CorpusSnapshot((), frozenset(), ())


def _missing_targets(snapshot: _CorpusSnapshot) -> List[str]:
    return sorted({word for word in snapshot.target_words if word not in snapshot.validation_set})


def _normalize_lines(lines: Iterable[str]) -> List[str]:
    """Trim and lower-case every non-blank line."""
    words = []
    for line in lines:
        word = line.strip()
        if word:
            words.append(word.lower())
    return words


def _read_words(source: WordSource, label: str) -> List[str]:
    """
    Reads a line-oriented word source.

    Args:
        source: File path or an open text stream
        label: Name of the list, used in error messages

    Raises:
        CorpusLoadError: If the source cannot be read
    """
    if hasattr(source, 'read'):
        try:
            return _normalize_lines(source)
        except (OSError, UnicodeDecodeError) as e:
            raise CorpusLoadError(f"Error reading {label} word list: {e}") from e

    try:
        with open(source, 'r', encoding='utf-8') as f:
            return _normalize_lines(f)
    except (OSError, UnicodeDecodeError) as e:
        raise CorpusLoadError(f"Failed to open {label} word file {source}: {e}") from e


class WordCorpus:
    """
    Validation and target word lists with atomic reload.

    Args:
        validation_source: Path or stream with every acceptable guess
        target_source: Path or stream with candidate hidden words
        rng: Random source for word selection; a fresh one when omitted
        strict: Reject target words missing from the validation set
    """

    def __init__(self,
                 validation_source: Optional[WordSource] = None,
                 target_source: Optional[WordSource] = None,
                 rng: Optional[random.Random] = None,
                 strict: bool = True):
        self._validation_source = validation_source
        self._target_source = target_source
        self._rng = rng if rng is not None else random.Random()
        self._rng_lock = threading.Lock()
        self._load_lock = threading.Lock()
        self.strict = strict
        self._snapshot = _EMPTY

        if validation_source is not None and target_source is not None:
            self.load(validation_source, target_source)

    @classmethod
    def from_words(cls,
                   validation_words: Iterable[str],
                   target_words: Iterable[str],
                   rng: Optional[random.Random] = None,
                   strict: bool = True) -> "WordCorpus":
        """Builds a corpus from in-memory word lists."""
        corpus = cls(rng=rng, strict=strict)
        corpus._install(_normalize_lines(validation_words), _normalize_lines(target_words))
        return corpus

    def load(self, validation_source: WordSource, target_source: WordSource) -> None:
        """
        Reads both sources and replaces the current word lists.

        Nothing is replaced if either source fails to load.

        Raises:
            CorpusLoadError: If a source is unreadable
            CorpusConsistencyError: In strict mode, if a target word is not
                a valid guess
        """
        validation_words = _read_words(validation_source, 'validation')
        target_words = _read_words(target_source, 'target')
        snapshot = self._install(validation_words, target_words, (validation_source, target_source))

        logger.info(
            "Word lists loaded: %d validation words, %d target words",
            len(snapshot.validation_words), len(snapshot.target_words)
        )

    def reload(self) -> None:
        """Re-reads the sources the corpus was last loaded from."""
        with self._load_lock:
            sources = (self._validation_source, self._target_source)
        if sources[0] is None or sources[1] is None:
            raise CorpusLoadError("Word corpus has no sources to reload from")
        self.load(*sources)

    def _install(self, validation_words: List[str], target_words: List[str],
                 sources: Optional[Tuple[WordSource, WordSource]] = None) -> "_CorpusSnapshot":
        """Validates and swaps in a new snapshot, together with the sources it came from."""
        validation_set = frozenset(validation_words)
        missing = sorted({word for word in target_words if word not in validation_set})

        if missing:
            if self.strict:
                raise CorpusConsistencyError(
                    f"{len(missing)} target word(s) are not valid guesses: "
                    f"{', '.join(missing[:10])}"
                )
            logger.warning(
                "%d target word(s) are not valid guesses: %s",
                len(missing), ', '.join(missing[:10])
            )

        snapshot = _CorpusSnapshot(
            validation_words=tuple(validation_words),
            validation_set=validation_set,
            target_words=tuple(target_words)
        )
        with self._load_lock:
            self._snapshot = snapshot
            if sources is not None:
                self._validation_source, self._target_source = sources
        return snapshot

    def contains(self, word: str) -> bool:
        """Case-insensitive membership test against the validation set."""
        return word.strip().lower() in self._snapshot.validation_set

    def __contains__(self, word: str) -> bool:
        return self.contains(word)

    def _choice(self, words: Tuple[str, ...]) -> Optional[str]:
        if not words:
            return None
        with self._rng_lock:
            return self._rng.choice(words)

    def random_target(self) -> Optional[str]:
        """Uniformly selected target word, or None when the target set is empty."""
        return self._choice(self._snapshot.target_words)

    def random_valid_word(self) -> Optional[str]:
        """Uniformly selected validation word, or None when empty."""
        return self._choice(self._snapshot.validation_words)

    def words_of_length(self, length: int) -> List[str]:
        return [word for word in self._snapshot.validation_words if len(word) == length]

    def target_words_of_length(self, length: int) -> List[str]:
        return [word for word in self._snapshot.target_words if len(word) == length]

    def size(self) -> int:
        return len(self._snapshot.validation_words)

    def target_size(self) -> int:
        return len(self._snapshot.target_words)

    def validation_words(self) -> List[str]:
        return list(self._snapshot.validation_words)

    def target_words(self) -> List[str]:
        return list(self._snapshot.target_words)

    def missing_targets(self) -> List[str]:
        """Target words that would fail their own validation check."""
        return _missing_targets(self._snapshot)

    def statistics(self, word_length: int = WORD_LENGTH) -> dict:
        snapshot = self._snapshot
        return {
            'validation': get_word_statistics(snapshot.validation_words, word_length),
            'target': get_word_statistics(snapshot.target_words, word_length),
            'missing_targets': len(_missing_targets(snapshot))
        }
