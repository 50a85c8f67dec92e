"""
Session Decorators

Contains decorators that resolve the game session for HTTP and WebSocket handlers.
"""

from functools import wraps
from flask import request, jsonify
from flask_socketio import emit

from .game_logger import game_logger
from .helpers import get_game_service


def require_game(f):
    """
    Decorator for HTTP endpoints taking a game_id URL parameter.

    Responds 500 if the game service is missing and 404 if the game is
    unknown; otherwise passes the service as the game_service keyword.
    """
    @wraps(f)
    def decorated_function(game_id, *args, **kwargs):
        game_service = get_game_service()
        if not game_service:
            return jsonify({
                'success': False,
                'error': 'Game service unavailable'
            }), 500

        if game_id not in game_service.games:
            error_response = {
                'success': False,
                'error': 'Game not found'
            }
            game_logger.log_server_response(request, f.__name__, False, error_response, game_id)
            return jsonify(error_response), 404

        kwargs['game_service'] = game_service
        return f(game_id, *args, **kwargs)

    return decorated_function


def websocket_game_required(f):
    """Decorator for WebSocket events carrying a game_id in their payload."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        game_service = get_game_service()
        if not game_service:
            emit('error', {'error': 'Game service unavailable'})
            return

        data = args[0] if args and isinstance(args[0], dict) else {}
        game_id = data.get('game_id')
        if not game_id:
            emit('error', {'error': 'Game ID is required'})
            return

        if game_id not in game_service.games:
            emit('error', {'error': 'Game not found', 'game_id': game_id})
            return

        kwargs['game_service'] = game_service
        kwargs['game_id'] = game_id
        return f(data, *args[1:], **kwargs)

    return decorated_function
