"""
Game Controller

Handles all game-related HTTP endpoints.
"""

from flask import Blueprint, request, jsonify
from dataclasses import asdict
from ..config.game_settings import ALPHABET, MAX_FAILS, WORD_LENGTH, get_word_statistics
from ..utils.decorators import require_game
from ..utils.game_logger import game_logger
from ..utils.helpers import get_game_service

game_bp = Blueprint('game', __name__)


@game_bp.route('/new_game', methods=['POST'])
def new_game():
    """Create a new game session and start its first round."""
    try:
        game_service = get_game_service()
        if not game_service:
            return jsonify({
                'success': False,
                'error': 'Game service unavailable'
            }), 500

        # Log user action
        game_logger.log_user_action(request, 'new_game')

        game_id = game_service.create_new_game()
        state = game_service.start_round(game_id)

        response_data = {
            'success': True,
            'game_id': game_id,
            'state': asdict(state)
        }

        # Log successful response
        game_logger.log_server_response(
            request, 'new_game', True, response_data, game_id,
            word_length=WORD_LENGTH, max_fails=state.max_fails
        )

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'new_game')
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'new_game', False, error_response)
        return jsonify(error_response), 500


@game_bp.route('/game/<game_id>/round', methods=['POST'])
@require_game
def start_round(game_id, game_service=None):
    """Start a new round, abandoning the current one."""
    try:
        game_logger.log_user_action(request, 'start_round', game_id)

        state = game_service.start_round(game_id)

        response_data = {
            'success': True,
            'state': asdict(state)
        }

        game_logger.log_server_response(
            request, 'start_round', True, response_data, game_id,
            round_number=state.round_number
        )

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'start_round', game_id)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'start_round', False, error_response, game_id)
        return jsonify(error_response), 500


@game_bp.route('/game/<game_id>/state', methods=['GET'])
@require_game
def get_state(game_id, game_service=None):
    """Get current game state."""
    try:
        game_logger.log_user_action(request, 'get_state', game_id)

        state = game_service.get_game_state(game_id)

        response_data = {
            'success': True,
            'state': asdict(state)
        }

        game_logger.log_server_response(
            request, 'get_state', True, response_data, game_id,
            status=state.status
        )

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'get_state', game_id)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'get_state', False, error_response, game_id)
        return jsonify(error_response), 500


@game_bp.route('/game/<game_id>/guess', methods=['POST'])
@require_game
def make_guess(game_id, game_service=None):
    """Submit a letter guess."""
    try:
        data = request.get_json(silent=True)
        if not data or 'letter' not in data:
            error_response = {
                'success': False,
                'error': 'Letter is required'
            }
            game_logger.log_server_response(request, 'guess', False, error_response, game_id)
            return jsonify(error_response), 400

        letter = data['letter']

        game_logger.log_user_action(request, 'guess', game_id, letter=letter)

        # Validate format first; repeated letters are not errors
        is_valid, error = game_service.is_valid_guess(game_id, letter)
        if not is_valid:
            error_response = {
                'success': False,
                'error': error
            }
            game_logger.log_server_response(
                request, 'guess', False, error_response, game_id,
                validation_error=error, attempted_letter=letter
            )
            return jsonify(error_response), 400

        result = game_service.make_guess(game_id, letter)
        if result is None:
            error_response = {
                'success': False,
                'error': 'Failed to process guess'
            }
            game_logger.log_server_response(request, 'guess', False, error_response, game_id)
            return jsonify(error_response), 500

        state, accepted = result
        response_data = {
            'success': True,
            'accepted': accepted,
            'state': asdict(state)
        }

        game_logger.log_server_response(
            request, 'guess', True, response_data, game_id,
            letter=letter, accepted=accepted, status=state.status
        )

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'guess', game_id)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'guess', False, error_response, game_id)
        return jsonify(error_response), 500


@game_bp.route('/game/<game_id>', methods=['DELETE'])
def delete_game(game_id):
    """Delete a game session."""
    try:
        game_service = get_game_service()
        if not game_service:
            return jsonify({
                'success': False,
                'error': 'Game service unavailable'
            }), 500

        game_logger.log_user_action(request, 'delete_game', game_id)

        success = game_service.delete_game(game_id)

        response_data = {
            'success': success
        }

        game_logger.log_server_response(request, 'delete_game', success, response_data, game_id)

        if success:
            game_logger.log_game_event(game_id, 'game_deleted', request.remote_addr)
            return jsonify(response_data)

        response_data['error'] = 'Game not found'
        return jsonify(response_data), 404

    except Exception as e:
        game_logger.log_error(request, e, 'delete_game', game_id)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'delete_game', False, error_response, game_id)
        return jsonify(error_response), 500


@game_bp.route('/config', methods=['GET'])
def game_config():
    """Game constants the client needs to build its keyboard."""
    game_service = get_game_service()
    return jsonify({
        'success': True,
        'max_fails': game_service.max_fails if game_service else MAX_FAILS,
        'word_length': WORD_LENGTH,
        'alphabet': ALPHABET
    })


@game_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    try:
        game_service = get_game_service()

        game_logger.log_user_action(request, 'health_check')

        response_data = {
            'status': 'healthy',
            'active_games': len(game_service.games) if game_service else 0,
            'word_provider': getattr(game_service.word_provider, 'mode', 'custom') if game_service else None,
            'fallback_words': get_word_statistics(),
            'log_stats': game_logger.get_log_stats()
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
