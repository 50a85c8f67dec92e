"""
You Guess Game Server - Main Entry Point

This is the main entry point for the game server.
It builds the game service and starts the Flask-SocketIO application.
"""

import threading
import time
from youguess import create_app
from youguess.config import Config
from youguess.services.game_service import GameService
from youguess.services.word_provider import build_word_provider
from youguess.utils.game_logger import game_logger


def session_cleanup_worker(game_service, interval_seconds, max_idle_seconds):
    """
    Background worker that periodically removes idle game sessions.
    Runs every interval_seconds.
    """
    print("Session cleanup worker started")
    while True:
        try:
            expired = game_service.cleanup_expired_games(max_idle_seconds)
            if expired:
                game_logger.logger.info(f"Session cleanup: Removed {len(expired)} idle game(s)")
                for game_id in expired:
                    game_logger.log_game_event(
                        game_id, 'game_expired', 'system',
                        max_idle_seconds=max_idle_seconds
                    )
        except Exception as e:
            game_logger.logger.error(f"Error in session cleanup worker: {e}")

        time.sleep(interval_seconds)


def main():
    """Main function to initialize services and start the server."""
    try:
        print("Initializing services...")

        word_provider = build_word_provider(Config)
        if word_provider.mode == 'gemini' and not Config.GEMINI_API_KEY:
            print("✗ GEMINI_API_KEY not configured - using the local word list")
        else:
            print(f"✓ Word provider initialized ({word_provider.mode})")

        game_service = GameService(word_provider)

        print("Creating Flask application...")
        app, socketio = create_app(Config, game_service)
        if Config.ROUND_DISPATCH == 'background':
            game_service.dispatcher = socketio.start_background_task
        print("✓ Flask application created successfully")

        cleanup_thread = threading.Thread(
            target=session_cleanup_worker,
            args=(game_service, Config.CLEANUP_INTERVAL_SECONDS, Config.SESSION_IDLE_SECONDS),
            daemon=True
        )
        cleanup_thread.start()
        print(f"✓ Session cleanup worker started - checking every {Config.CLEANUP_INTERVAL_SECONDS} seconds")

        game_logger.logger.info("You Guess Server Starting")

        print(f"\nStarting You Guess Server on {Config.HOST}:{Config.PORT}")
        print(f"Debug mode: {Config.DEBUG}")
        print("=" * 50)

        socketio.run(app, host=Config.HOST, port=Config.PORT, debug=Config.DEBUG,
                     allow_unsafe_werkzeug=True)

    except KeyboardInterrupt:
        print("\nServer shutting down...")
        game_logger.logger.info("You Guess Server shutting down (KeyboardInterrupt)")
    except Exception as e:
        print(f"Error starting server: {e}")
        game_logger.logger.error(f"Error starting server: {e}")
        raise


if __name__ == '__main__':
    main()
