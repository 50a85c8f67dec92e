"""
Game Data Models

Contains all game-related data structures and enums.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Set


class GameStatus(Enum):
    """Lifecycle of a single game session."""
    LANDING = "landing"
    LOADING = "loading"
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"

    @property
    def is_terminal(self) -> bool:
        return self in (GameStatus.WON, GameStatus.LOST)


class LetterStatus(Enum):
    """Keyboard state of a single letter."""
    HIT = "HIT"
    MISS = "MISS"
    UNUSED = "UNUSED"


@dataclass(frozen=True)
class WordEntry:
    """A mystery word and its short definition."""
    word: str
    definition: str


@dataclass
class GameState:
    """Mutable state of one round, owned by a GameEngine."""
    target_word: str = ""
    guessed_letters: Set[str] = field(default_factory=set)
    fails: List[str] = field(default_factory=list)
    status: GameStatus = GameStatus.LANDING
    definition: str = ""


@dataclass
class GameSnapshot:
    """Read-only view of a session handed to clients."""
    game_id: str
    round_number: int
    status: str
    word_length: int
    slots: List[Optional[str]]
    guessed_letters: List[str]
    fails: List[str]
    fails_count: int
    max_fails: int
    letter_status: Dict[str, str]
    enabled_letters: List[str]
    last_guessed_letter: Optional[str] = None
    word: Optional[str] = None  # Only included when the round is over
    definition: Optional[str] = None  # Only included when the round is over
