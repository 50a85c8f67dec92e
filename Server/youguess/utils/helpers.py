"""
Helper Functions

Contains utility functions used throughout the application.
"""

from typing import Dict, Optional
from flask import current_app


def get_user_identity(request_obj=None) -> Dict[str, Optional[str]]:
    """Extract user identity information from a request, if there is one."""
    if request_obj is None:
        return {'user_ip': 'system', 'session_id': None}

    return {
        'user_ip': getattr(request_obj, 'remote_addr', None) or 'unknown',
        # Socket.IO requests carry a session id, plain HTTP requests don't
        'session_id': getattr(request_obj, 'sid', None)
    }


def get_game_service():
    """Get the GameService owned by the current Flask app."""
    return getattr(current_app, 'game_service', None)


def normalize_letter(letter) -> str:
    """Upper-case and strip a guessed letter; non-strings become ''."""
    if not isinstance(letter, str):
        return ''
    return letter.strip().upper()
