"""
Services Package

Contains all business logic and service classes.
"""

from .game_engine import GameEngine
from .game_service import GameService, run_inline
from .word_provider import (
    FallbackWordProvider, GeminiWordProvider, WordProviderError,
    build_word_provider, normalize_entry
)

__all__ = [
    'GameEngine',
    'GameService', 'run_inline',
    'FallbackWordProvider', 'GeminiWordProvider', 'WordProviderError',
    'build_word_provider', 'normalize_entry'
]
