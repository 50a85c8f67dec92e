"""
WebSocket Event Handlers

Pushes game state to clients as rounds resolve and guesses land.
"""

from dataclasses import asdict
from flask import request
from flask_socketio import emit, join_room, leave_room
from ..utils.decorators import websocket_game_required
from ..utils.game_logger import game_logger


def game_room(game_id: str) -> str:
    return f"game_{game_id}"


def register_websocket_handlers(socketio, game_service):
    """Register all WebSocket event handlers."""

    def broadcast_round_state(game_id, snapshot):
        """Round listener: push loading and ready states to the room."""
        socketio.emit('game_state', asdict(snapshot), room=game_room(game_id))

    game_service.add_round_listener(broadcast_round_state)

    @socketio.on('join_game')
    @websocket_game_required
    def handle_join_game(data, game_service=None, game_id=None):
        """Join a game room to receive its state updates."""
        join_room(game_room(game_id))
        game_logger.log_user_action(request, 'join_game', game_id)
        emit('game_state', asdict(game_service.get_game_state(game_id)))

    @socketio.on('leave_game')
    @websocket_game_required
    def handle_leave_game(data, game_service=None, game_id=None):
        """Stop receiving updates for a game."""
        leave_room(game_room(game_id))
        game_logger.log_user_action(request, 'leave_game', game_id)

    @socketio.on('start_round')
    @websocket_game_required
    def handle_start_round(data, game_service=None, game_id=None):
        """Start a new round; its states reach the room via the round listener."""
        game_logger.log_user_action(request, 'start_round', game_id)
        try:
            snapshot = game_service.start_round(game_id)
        except Exception as e:
            game_logger.log_error(request, e, 'start_round', game_id)
            emit('error', {'error': str(e), 'game_id': game_id})
            return

        if snapshot is None:
            emit('error', {'error': 'Game not found', 'game_id': game_id})

    @socketio.on('guess')
    @websocket_game_required
    def handle_guess(data, game_service=None, game_id=None):
        """Apply a letter guess and broadcast the new state."""
        letter = data.get('letter')
        game_logger.log_user_action(request, 'guess', game_id, letter=letter)

        is_valid, error = game_service.is_valid_guess(game_id, letter)
        if not is_valid:
            emit('error', {'error': error, 'game_id': game_id})
            return

        result = game_service.make_guess(game_id, letter)
        if result is None:
            emit('error', {'error': 'Failed to process guess', 'game_id': game_id})
            return

        snapshot, accepted = result
        if accepted:
            socketio.emit('game_state', asdict(snapshot), room=game_room(game_id))
