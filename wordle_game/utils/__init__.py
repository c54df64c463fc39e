"""
Utilities Package

Contains utility functions, decorators, and helper modules.
"""

from .decorators import require_game_service
from .helpers import get_user_identity, parse_limit
from .game_logger import game_logger

__all__ = ['require_game_service', 'get_user_identity', 'parse_limit', 'game_logger']
