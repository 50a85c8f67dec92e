"""
Data Models Package

Contains all data models and schemas used throughout the application.
"""

from .game import GameSnapshot, GameState, GameStatus, LetterStatus, WordEntry

__all__ = ['GameSnapshot', 'GameState', 'GameStatus', 'LetterStatus', 'WordEntry']
