"""
Game Controller

Handles all game-related HTTP endpoints. Failures raised by the game service
carry an ErrorKind; the response status comes from that kind.
"""

from flask import Blueprint, request, jsonify

from ..errors import WordleError
from ..utils.decorators import require_game_service
from ..utils.game_logger import game_logger
from ..utils.helpers import parse_limit

game_bp = Blueprint('game', __name__)


def _error_response(action: str, error: Exception, game_id=None):
    """Log a failure and build the matching JSON response."""
    game_logger.log_error(request, error, action, game_id)

    if isinstance(error, WordleError):
        error_response = error.to_dict()
        status = error.http_status
    else:
        error_response = {
            'success': False,
            'error': str(error),
            'kind': 'internal_error',
            'retryable': False
        }
        status = 500

    game_logger.log_server_response(request, action, False, error_response, game_id)
    return jsonify(error_response), status


@game_bp.route('/new_game', methods=['POST'])
@require_game_service
def new_game(game_service):
    """Create a new game session."""
    try:
        game_logger.log_user_action(request, 'new_game')

        game = game_service.create_new_game()

        response_data = {
            'success': True,
            'game': game.to_dict()
        }

        game_logger.log_server_response(
            request, 'new_game', True, response_data, game.id,
            word_length=game_service.word_length, max_guesses=game.max_guesses
        )
        game_logger.log_game_event(game.id, 'game_created', request.remote_addr)

        return jsonify(response_data), 201

    except Exception as e:
        return _error_response('new_game', e)


@game_bp.route('/game/<game_id>', methods=['GET'])
@require_game_service
def get_game(game_id, game_service):
    """Get a game with all of its guesses."""
    try:
        game_logger.log_user_action(request, 'get_game', game_id)

        game_with_guesses = game_service.get_game_with_guesses(game_id)

        response_data = {
            'success': True,
            **game_with_guesses.to_dict()
        }

        game_logger.log_server_response(
            request, 'get_game', True, response_data, game_id,
            guess_count=game_with_guesses.game.guess_count,
            is_completed=game_with_guesses.game.is_completed
        )

        return jsonify(response_data)

    except Exception as e:
        return _error_response('get_game', e, game_id)


@game_bp.route('/game/<game_id>/guess', methods=['POST'])
@require_game_service
def make_guess(game_id, game_service):
    """Submit a guess for validation and evaluation."""
    try:
        data = request.get_json(silent=True)
        if not isinstance(data, dict) or 'guess' not in data:
            error_response = {
                'success': False,
                'error': 'Guess is required',
                'kind': 'missing_guess',
                'retryable': False
            }
            game_logger.log_server_response(request, 'submit_guess', False, error_response, game_id)
            return jsonify(error_response), 400

        guess = data['guess']

        game_logger.log_user_action(
            request, 'submit_guess', game_id,
            guess=guess, guess_length=len(guess) if isinstance(guess, str) else None
        )

        result = game_service.make_guess(game_id, guess)
        game = result.game

        response_data = {
            'success': True,
            **result.to_dict()
        }

        game_logger.log_server_response(
            request, 'submit_guess', True, response_data, game_id,
            guess=guess, guess_number=game.guess_count, is_completed=game.is_completed
        )

        if game.is_completed:
            if game.is_won:
                game_logger.log_game_event(
                    game_id, 'game_won', request.remote_addr,
                    guesses_used=game.guess_count, target_word=game.target_word,
                    winning_guess=result.guesses[-1].guess_word
                )
            else:
                game_logger.log_game_event(
                    game_id, 'game_lost', request.remote_addr,
                    guesses_used=game.guess_count, target_word=game.target_word,
                    final_guess=result.guesses[-1].guess_word
                )

        return jsonify(response_data)

    except Exception as e:
        return _error_response('submit_guess', e, game_id)


@game_bp.route('/game/<game_id>', methods=['DELETE'])
@require_game_service
def delete_game(game_id, game_service):
    """Delete a game session and its guesses."""
    try:
        game_logger.log_user_action(request, 'delete_game', game_id)

        game_service.delete_game(game_id)

        response_data = {
            'success': True
        }

        game_logger.log_server_response(request, 'delete_game', True, response_data, game_id)
        game_logger.log_game_event(game_id, 'game_deleted', request.remote_addr)

        return jsonify(response_data)

    except Exception as e:
        return _error_response('delete_game', e, game_id)


@game_bp.route('/games/recent', methods=['GET'])
@require_game_service
def recent_games(game_service):
    """List the most recently created games."""
    try:
        limit = parse_limit(request.args.get('limit'))
        game_logger.log_user_action(request, 'recent_games', limit=limit)

        games = game_service.get_recent_games(limit)

        response_data = {
            'success': True,
            'games': [game.to_dict() for game in games]
        }

        game_logger.log_server_response(request, 'recent_games', True, response_data)
        return jsonify(response_data)

    except Exception as e:
        return _error_response('recent_games', e)


@game_bp.route('/validate/<word>', methods=['GET'])
@require_game_service
def validate_word(word, game_service):
    """Check whether a word would be accepted as a guess."""
    try:
        game_logger.log_user_action(request, 'validate_word', word=word)

        response_data = {
            'success': True,
            'word': word,
            'valid': game_service.validate_word(word)
        }

        game_logger.log_server_response(request, 'validate_word', True, response_data)
        return jsonify(response_data)

    except Exception as e:
        return _error_response('validate_word', e)


@game_bp.route('/stats', methods=['GET'])
@require_game_service
def game_stats(game_service):
    """Word list sizes and game limits."""
    try:
        response_data = {
            'success': True,
            'stats': game_service.get_game_stats()
        }
        return jsonify(response_data)

    except Exception as e:
        return _error_response('game_stats', e)


@game_bp.route('/stats/words', methods=['GET'])
@require_game_service
def word_stats(game_service):
    """Detailed word list statistics."""
    try:
        response_data = {
            'success': True,
            'stats': game_service.get_word_statistics()
        }
        return jsonify(response_data)

    except Exception as e:
        return _error_response('word_stats', e)


@game_bp.route('/words/reload', methods=['POST'])
@require_game_service
def reload_words(game_service):
    """Reload both word lists from disk."""
    try:
        game_logger.log_user_action(request, 'reload_words')

        response_data = {
            'success': True,
            'stats': game_service.reload_word_list()
        }

        game_logger.log_server_response(request, 'reload_words', True, response_data)
        game_logger.log_game_event(None, 'word_lists_reloaded', request.remote_addr, **response_data['stats'])

        return jsonify(response_data)

    except Exception as e:
        return _error_response('reload_words', e)


@game_bp.route('/health', methods=['GET'])
@require_game_service
def health_check(game_service):
    """Health check endpoint."""
    try:
        game_logger.log_user_action(request, 'health_check')

        log_stats = game_logger.get_log_stats()

        response_data = {
            'status': 'healthy',
            'storage': type(game_service.game_repository).__name__,
            'word_lists': {
                'total_words': game_service.word_corpus.size(),
                'target_words': game_service.word_corpus.target_size()
            },
            'log_stats': log_stats
        }

        game_logger.log_server_response(request, 'health_check', True, response_data)
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'health_check')
        error_response = {
            'status': 'error',
            'error': str(e)
        }
        game_logger.log_server_response(request, 'health_check', False, error_response)
        return jsonify(error_response), 500
