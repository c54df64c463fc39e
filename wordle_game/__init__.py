"""
Wordle Game Server Application Package

This package contains the Wordle game server: word lists, guess evaluation,
the game session engine, persistence, and the HTTP API on top of them.
"""

from flask import Flask
from flask_cors import CORS
from .config import Config


def create_app(config_class=Config):
    """
    Application factory pattern for creating Flask app instances.

    The game service is initialized separately (see initialize_game_service)
    so that tests and scripts can supply their own collaborators.

    Args:
        config_class: Configuration class to use

    Returns:
        Flask application instance with all extensions initialized
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    # Initialize extensions
    CORS(app)

    # Register blueprints
    from .controllers.game_controller import game_bp

    app.register_blueprint(game_bp, url_prefix='/api')

    return app
