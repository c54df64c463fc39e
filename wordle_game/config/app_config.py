"""
Configuration Management Module

Centralized configuration management following the 12-factor app methodology.
All configuration is loaded from environment variables with sensible defaults.
"""

import os
from typing import Optional

from dotenv import load_dotenv

from .game_settings import (
    DEFAULT_TARGET_WORDS_PATH,
    DEFAULT_VALID_WORDS_PATH,
    MAX_GUESSES,
    WORD_LENGTH,
)

# Load environment variables from config.env next to this module
load_dotenv(os.path.join(os.path.dirname(os.path.abspath(__file__)), 'config.env'))


def _env_int(key: str, default: int) -> int:
    """Integer setting; malformed values fall back to the default."""
    value = os.getenv(key)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _env_optional_int(key: str) -> Optional[int]:
    value = os.getenv(key)
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def _env_bool(key: str, default: bool) -> bool:
    value = os.getenv(key)
    if not value:
        return default
    return value.lower() in ('1', 'true', 'yes')


class Config:
    """Base configuration class with all settings."""

    # Flask Settings
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    DEBUG = _env_bool('DEBUG', False)

    # Server Settings
    HOST = os.getenv('HOST', '127.0.0.1')
    PORT = _env_int('PORT', 5000)

    # Database Settings (no URI means the in-memory store)
    MONGO_URI = os.getenv('MONGO_URI')
    MONGO_DB_NAME = os.getenv('MONGO_DB_NAME', 'wordle_game')
    MONGO_MAX_POOL_SIZE = _env_int('MONGO_MAX_POOL_SIZE', 25)
    MONGO_TIMEOUT_MS = _env_int('MONGO_TIMEOUT_MS', 5000)

    # Game Settings
    MAX_GUESSES = _env_int('MAX_GUESSES', MAX_GUESSES)
    WORD_LENGTH = _env_int('WORD_LENGTH', WORD_LENGTH)

    # Word List Settings
    VALID_WORDS_PATH = os.getenv('VALID_WORDS_PATH', DEFAULT_VALID_WORDS_PATH)
    TARGET_WORDS_PATH = os.getenv('TARGET_WORDS_PATH', DEFAULT_TARGET_WORDS_PATH)
    STRICT_WORD_LISTS = _env_bool('STRICT_WORD_LISTS', True)
    RANDOM_SEED = _env_optional_int('RANDOM_SEED')

    # Logging Settings
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_DIR = os.getenv('LOG_DIR', 'logs')


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    DEBUG = True
    MONGO_URI = None
    RANDOM_SEED = 1234


# Configuration mapping
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
