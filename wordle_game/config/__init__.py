"""
Configuration Package

Contains all configuration-related files and settings.

This package separates two types of configuration:
- app_config.py: Flask application configuration (environment-based)
- game_settings.py: Game rules and constants (business logic)
"""

from .app_config import Config, DevelopmentConfig, ProductionConfig, TestingConfig, config
from .game_settings import (
    ALPHABET,
    MAX_GUESSES,
    RECENT_GAMES_DEFAULT_LIMIT,
    RECENT_GAMES_MAX_LIMIT,
    WORD_LENGTH,
    get_word_statistics,
)

__all__ = [
    # App configuration
    'Config', 'DevelopmentConfig', 'ProductionConfig', 'TestingConfig', 'config',
    # Game rules
    'ALPHABET', 'MAX_GUESSES', 'WORD_LENGTH', 'RECENT_GAMES_DEFAULT_LIMIT',
    'RECENT_GAMES_MAX_LIMIT', 'get_word_statistics'
]
