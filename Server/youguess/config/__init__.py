"""
Configuration Package

Contains all configuration-related files and settings.

This package separates two types of configuration:
- app_config.py: Flask application configuration (environment-based)
- game_settings.py: Game rules, constants and the fallback word list
"""

from .app_config import Config, DevelopmentConfig, ProductionConfig, TestingConfig, config
from .game_settings import (
    MAX_FAILS, WORD_LENGTH, ALPHABET, FALLBACK_WORDS,
    is_playable_word, validate_fallback_integrity, get_word_statistics
)

__all__ = [
    # App configuration
    'Config', 'DevelopmentConfig', 'ProductionConfig', 'TestingConfig', 'config',
    # Game rules
    'MAX_FAILS', 'WORD_LENGTH', 'ALPHABET', 'FALLBACK_WORDS',
    'is_playable_word', 'validate_fallback_integrity', 'get_word_statistics'
]
