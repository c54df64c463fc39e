"""Shared fixtures: seeded word corpus, in-memory store, Flask test client."""

import os
import random
import tempfile

# Keep test logs out of the working tree; must happen before wordle_game is imported
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="wordle-test-logs-"))

import pytest

from wordle_game import create_app
from wordle_game.config import TestingConfig
from wordle_game.repositories.memory import InMemoryStore
from wordle_game.services import game_service as game_service_module
from wordle_game.services.game_service import GameService, initialize_game_service
from wordle_game.services.word_corpus import WordCorpus

VALID_WORDS = ["hello", "world", "llama", "speed", "erase", "crane", "apple", "level", "three", "eerie"]
TARGET_WORDS = ["hello"]


@pytest.fixture
def corpus():
    return WordCorpus.from_words(VALID_WORDS, TARGET_WORDS, rng=random.Random(7))


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def service(store, corpus):
    return GameService(store.games_repository, store.guesses_repository, corpus)


@pytest.fixture
def client(store, corpus):
    initialize_game_service(
        TestingConfig,
        game_repository=store.games_repository,
        guess_repository=store.guesses_repository,
        word_corpus=corpus
    )
    app = create_app(TestingConfig)
    yield app.test_client()
    game_service_module._game_service = None
