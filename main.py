"""
Wordle Game Server - Main Entry Point

This is the main entry point for the Wordle game server.
It loads the word lists, initializes the game service and starts the Flask application.
"""

from wordle_game import create_app
from wordle_game.config import Config
from wordle_game.errors import WordleError
from wordle_game.services.game_service import initialize_game_service
from wordle_game.utils.game_logger import game_logger


def main():
    """Main function to initialize services and start the server."""
    try:
        print("Initializing services...")

        # Word lists and storage must be available before serving anything
        game_service = initialize_game_service(Config)
        print("✓ Game service initialized successfully")
        print(f"  Validation words: {game_service.word_corpus.size()}")
        print(f"  Target words: {game_service.word_corpus.target_size()}")
        print(f"  Storage: {type(game_service.game_repository).__name__}")

        print("Creating Flask application...")
        app = create_app(Config)
        print("✓ Flask application created successfully")

        game_logger.logger.info("Wordle Server Starting")

        print(f"\nStarting Wordle Game Server on {Config.HOST}:{Config.PORT}")
        print(f"Debug mode: {Config.DEBUG}")
        print("=" * 50)

        app.run(host=Config.HOST, port=Config.PORT, debug=Config.DEBUG)

    except KeyboardInterrupt:
        print("\nServer shutting down...")
        game_logger.logger.info("Wordle Server shutting down (KeyboardInterrupt)")
    except WordleError as e:
        print(f"✗ Failed to start server [{e.kind.value}]: {e}")
        game_logger.logger.error(f"Startup failed [{e.kind.value}]: {e}")
        raise
    except Exception as e:
        print(f"Error starting server: {e}")
        game_logger.logger.error(f"Error starting server: {e}")
        raise


if __name__ == '__main__':
    main()
