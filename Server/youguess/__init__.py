"""
You Guess Game Server Application Package

Serves the four-letter word guessing game: a Flask JSON API and Socket.IO
events on top of per-session game engines.
"""

from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from .config import Config


def create_app(config_class=Config, game_service=None):
    """
    Application factory pattern for creating Flask app instances.

    Args:
        config_class: Configuration class to use
        game_service: GameService to serve; built from config_class if omitted

    Returns:
        Tuple of (Flask application, SocketIO instance)
    """
    from .services.game_service import GameService
    from .services.word_provider import build_word_provider
    from .utils.game_logger import game_logger

    app = Flask(__name__)
    app.config.from_object(config_class)

    game_logger.configure(config_class.LOG_DIR, config_class.LOG_LEVEL)

    # Initialize extensions
    CORS(app)
    socketio = SocketIO(app, cors_allowed_origins="*", logger=False, engineio_logger=False)

    if game_service is None:
        dispatcher = None
        if config_class.ROUND_DISPATCH == 'background':
            dispatcher = socketio.start_background_task
        game_service = GameService(build_word_provider(config_class), dispatcher=dispatcher)

    # Register blueprints
    from .controllers.game_controller import game_bp
    app.register_blueprint(game_bp, url_prefix='/api')

    # Register WebSocket handlers
    from .websocket.handlers import register_websocket_handlers
    register_websocket_handlers(socketio, game_service)

    # Owned instances for use in controllers and handlers
    app.socketio = socketio
    app.game_service = game_service

    return app, socketio
