"""Tests for the game session engine."""

import random
from datetime import datetime, timezone
from unittest.mock import Mock

import pytest

from wordle_game.errors import (
    DuplicateGuessError,
    ErrorKind,
    GameNotFoundError,
    GuessRejectedError,
    NoTargetWordsAvailableError,
    StorageError,
)
from wordle_game.models.game import LetterStatus
from wordle_game.repositories.base import GameRepository
from wordle_game.repositories.memory import InMemoryGuessRepository
from wordle_game.services.game_service import GameService
from wordle_game.services.word_corpus import WordCorpus

FIXED_NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def guess_kind(callable_, *args):
    with pytest.raises(GuessRejectedError) as exc_info:
        callable_(*args)
    return exc_info.value.kind


# ── create_new_game ───────────────────────────────────────────────────────

class TestCreateNewGame:
    def test_new_game_defaults(self, service):
        game = service.create_new_game()
        assert game.target_word == "HELLO"
        assert game.guess_count == 0
        assert game.is_won is False
        assert game.is_completed is False
        assert game.completed_at is None
        assert game.max_guesses == 6

    def test_new_game_is_persisted(self, service, store):
        game = service.create_new_game()
        assert store.games_repository.get_game(game.id).target_word == "HELLO"

    def test_no_target_words(self, store):
        corpus = WordCorpus.from_words(["hello"], [])
        service = GameService(store.games_repository, store.guesses_repository, corpus)
        with pytest.raises(NoTargetWordsAvailableError) as exc_info:
            service.create_new_game()
        assert exc_info.value.kind is ErrorKind.NO_TARGET_WORDS_AVAILABLE
        assert store.games == {}


# ── make_guess ────────────────────────────────────────────────────────────

class TestMakeGuess:
    def test_in_progress_guess(self, service):
        game = service.create_new_game()
        response = service.make_guess(game.id, "world")

        assert response.game.guess_count == 1
        assert response.game.is_completed is False
        assert response.message == "Good guess! 5 guesses remaining"
        assert len(response.guesses) == 1

        guess = response.guesses[0]
        assert guess.guess_word == "WORLD"
        assert guess.guess_number == 1
        assert [r.status for r in guess.result] == [
            LetterStatus.ABSENT, LetterStatus.PRESENT, LetterStatus.ABSENT,
            LetterStatus.CORRECT, LetterStatus.ABSENT
        ]

    def test_guess_is_trimmed_and_uppercased(self, service):
        game = service.create_new_game()
        response = service.make_guess(game.id, "  llama \n")
        assert response.guesses[0].guess_word == "LLAMA"

    def test_win(self, store, corpus):
        service = GameService(store.games_repository, store.guesses_repository, corpus,
                              clock=lambda: FIXED_NOW)
        game = service.create_new_game()
        service.make_guess(game.id, "world")
        response = service.make_guess(game.id, "hello")

        assert response.game.is_won is True
        assert response.game.is_completed is True
        assert response.game.completed_at == FIXED_NOW
        assert response.message == "Congratulations! You won in 2 guesses!"
        assert [g.guess_number for g in response.guesses] == [1, 2]

        stored = store.games_repository.get_game(game.id)
        assert stored.is_won and stored.is_completed

    def test_win_on_first_guess_message(self, service):
        game = service.create_new_game()
        assert service.make_guess(game.id, "HELLO").message == "Congratulations! You won in 1 guess!"

    def test_no_guess_accepted_after_win(self, service, store):
        game = service.create_new_game()
        service.make_guess(game.id, "hello")
        assert guess_kind(service.make_guess, game.id, "world") is ErrorKind.GAME_ALREADY_COMPLETED
        assert len(store.guesses) == 1

    def test_loss_after_max_guesses(self, store, corpus):
        service = GameService(store.games_repository, store.guesses_repository, corpus,
                              max_guesses=2, clock=lambda: FIXED_NOW)
        game = service.create_new_game()
        first = service.make_guess(game.id, "world")
        assert first.message == "Good guess! 1 guess remaining"

        response = service.make_guess(game.id, "crane")
        assert response.game.is_completed is True
        assert response.game.is_won is False
        assert response.game.completed_at == FIXED_NOW
        assert response.message == "Game over! The word was 'HELLO'"

        assert guess_kind(service.make_guess, game.id, "apple") is ErrorKind.GAME_ALREADY_COMPLETED

    @pytest.mark.parametrize("raw", ["hell", "helloo", "", "   ", None, 12345])
    def test_wrong_length_is_rejected_before_persisting(self, store, corpus, raw):
        guesses = Mock(wraps=store.guesses_repository)
        games = Mock(wraps=store.games_repository)
        service = GameService(games, guesses, corpus)
        game = service.create_new_game()

        assert guess_kind(service.make_guess, game.id, raw) is ErrorKind.INVALID_GUESS_LENGTH
        guesses.create_guess.assert_not_called()
        games.update_game.assert_not_called()

    def test_unknown_word(self, service, store):
        game = service.create_new_game()
        assert guess_kind(service.make_guess, game.id, "zzzzz") is ErrorKind.WORD_NOT_RECOGNIZED
        assert store.guesses == {}
        assert store.games_repository.get_game(game.id).guess_count == 0

    def test_game_not_found(self, service):
        with pytest.raises(GameNotFoundError) as exc_info:
            service.make_guess("missing", "hello")
        assert exc_info.value.kind is ErrorKind.GAME_NOT_FOUND

    def test_no_remaining_guesses_when_record_is_exhausted(self, service, store):
        game = service.create_new_game()
        # Counter advanced behind the service's back without completing the game
        game.guess_count = game.max_guesses
        store.games_repository.update_game(game)

        assert guess_kind(service.make_guess, game.id, "world") is ErrorKind.NO_REMAINING_GUESSES
        assert store.guesses == {}

    def test_concurrent_guess_is_a_conflict(self, store, corpus):
        class RacingGuessRepository(InMemoryGuessRepository):
            """Another request stores the same guess number first."""

            def create_guess(self, game_id, guess_word, guess_number, result):
                super().create_guess(game_id, "CRANE", guess_number, result)
                return super().create_guess(game_id, guess_word, guess_number, result)

        service = GameService(store.games_repository, RacingGuessRepository(store), corpus)
        game = service.create_new_game()

        with pytest.raises(DuplicateGuessError) as exc_info:
            service.make_guess(game.id, "world")
        assert exc_info.value.kind is ErrorKind.CONCURRENT_GUESS
        assert exc_info.value.retryable is True

    def test_failed_game_update_keeps_guess_and_is_repaired_on_read(self, store, corpus):
        games = Mock(wraps=store.games_repository)
        games.update_game.side_effect = StorageError("write failed")
        service = GameService(games, store.guesses_repository, corpus)
        game = service.create_new_game()

        with pytest.raises(StorageError):
            service.make_guess(game.id, "hello")
        assert len(store.guesses) == 1
        assert store.games_repository.get_game(game.id).guess_count == 0

        repaired = service.get_game_with_guesses(game.id).game
        assert repaired.guess_count == 1
        assert repaired.is_won is True
        assert repaired.is_completed is True
        assert repaired.completed_at is not None

        assert guess_kind(service.make_guess, game.id, "world") is ErrorKind.GAME_ALREADY_COMPLETED

    def test_every_game_read_repairs_a_lagging_record(self, store, corpus):
        games = Mock(wraps=store.games_repository)
        games.update_game.side_effect = StorageError("write failed")
        service = GameService(games, store.guesses_repository, corpus)
        game = service.create_new_game()

        with pytest.raises(StorageError):
            service.make_guess(game.id, "hello")

        loaded = service.get_game(game.id)
        assert (loaded.guess_count, loaded.is_won, loaded.is_completed) == (1, True, True)

        [recent] = service.get_recent_games()
        assert (recent.guess_count, recent.is_won, recent.is_completed) == (1, True, True)
        assert recent.completed_at is not None


# ── queries ───────────────────────────────────────────────────────────────

class TestQueries:
    def test_game_with_guesses(self, service):
        game = service.create_new_game()
        service.make_guess(game.id, "world")
        service.make_guess(game.id, "llama")

        result = service.get_game_with_guesses(game.id)
        assert [g.guess_word for g in result.guesses] == ["WORLD", "LLAMA"]
        assert result.letter_status["L"] == "correct"
        assert result.letter_status["M"] == "absent"
        assert result.letter_status["Q"] == "unused"

    def test_game_with_guesses_not_found(self, service):
        with pytest.raises(GameNotFoundError):
            service.get_game_with_guesses("missing")

    @pytest.mark.parametrize("requested,expected", [
        (None, 10), (0, 10), (-5, 10), (1, 1), (50, 50), (100, 100), (101, 10),
    ])
    def test_recent_games_limit(self, corpus, requested, expected):
        games = Mock(spec=GameRepository)
        games.get_recent_games.return_value = []
        service = GameService(games, Mock(), corpus)

        service.get_recent_games(requested)
        games.get_recent_games.assert_called_once_with(expected)

    def test_recent_games_returns_stored_games(self, service):
        first = service.create_new_game()
        second = service.create_new_game()
        assert {g.id for g in service.get_recent_games()} == {first.id, second.id}
        assert len(service.get_recent_games(1)) == 1

    def test_delete_game(self, service, store):
        game = service.create_new_game()
        service.make_guess(game.id, "world")
        service.delete_game(game.id)
        assert store.guesses == {}
        with pytest.raises(GameNotFoundError):
            service.get_game(game.id)

    @pytest.mark.parametrize("word,expected", [
        ("hello", True),
        (" HELLO ", True),
        ("zzzzz", False),
        ("hell", False),
        ("", False),
        (None, False),
    ])
    def test_validate_word(self, service, word, expected):
        assert service.validate_word(word) is expected

    def test_game_stats(self, service, corpus):
        stats = service.get_game_stats()
        assert stats["total_words"] == corpus.size()
        assert stats["target_words"] == 1
        assert stats["max_guesses"] == 6
        assert stats["word_length"] == 5
        assert stats["playable_words"] == corpus.size()

    def test_reload_word_list(self, store, tmp_path):
        valid = tmp_path / "valid.txt"
        target = tmp_path / "target.txt"
        valid.write_text("hello\n", encoding="utf-8")
        target.write_text("hello\n", encoding="utf-8")
        service = GameService(store.games_repository, store.guesses_repository,
                              WordCorpus(valid, target, rng=random.Random(1)))

        valid.write_text("hello\ncrane\n", encoding="utf-8")
        target.write_text("crane\n", encoding="utf-8")

        assert service.reload_word_list() == {"total_words": 2, "target_words": 1}
        assert service.create_new_game().target_word == "CRANE"
