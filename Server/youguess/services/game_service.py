"""
Game Service

Manages game sessions, each owning one GameEngine, and runs the word
provider for new rounds.
"""

import threading
import time
import uuid
from typing import Callable, Dict, List, Optional, Tuple

from ..config.game_settings import ALPHABET, MAX_FAILS, WORD_LENGTH
from ..models.game import GameSnapshot, GameStatus, LetterStatus, WordEntry
from ..utils.game_logger import game_logger
from ..utils.helpers import normalize_letter
from .game_engine import GameEngine
from .word_provider import FallbackWordProvider

RoundListener = Callable[[str, GameSnapshot], None]

IN_ROUND = (GameStatus.PLAYING, GameStatus.WON, GameStatus.LOST)


def run_inline(func, *args):
    """Dispatcher that resolves the round before returning."""
    func(*args)


class GameService:
    """
    Core game service managing multiple game sessions.

    This class handles:
    - Game session management with unique game IDs
    - Dispatching word fetches for new rounds
    - Guess validation and application
    - Game state snapshots without exposing the word mid-round
    """

    def __init__(self, word_provider, dispatcher=None, max_fails: int = MAX_FAILS,
                 fallback_provider=None):
        self.games: Dict[str, Dict] = {}  # Store active games by game_id
        self.word_provider = word_provider
        # Used when word_provider raises or returns an unplayable word
        self.fallback_provider = fallback_provider or FallbackWordProvider()
        self.dispatcher = dispatcher or run_inline
        self.max_fails = max_fails
        self._listeners: List[RoundListener] = []
        self._lock = threading.Lock()

    def add_round_listener(self, listener: RoundListener) -> None:
        """Register a callback(game_id, snapshot) fired when a round starts and when it is ready."""
        self._listeners.append(listener)

    def create_new_game(self) -> str:
        """
        Creates a new game session on the landing screen.

        Returns:
            str: Unique game ID for this session
        """
        game_id = str(uuid.uuid4())
        now = time.time()

        with self._lock:
            self.games[game_id] = {
                "engine": GameEngine(self.word_provider, self.max_fails),
                "created_at": now,
                "last_activity": now
            }
        return game_id

    def _get_game(self, game_id: str) -> Optional[Dict]:
        game = self.games.get(game_id)
        if game is not None:
            game["last_activity"] = time.time()
        return game

    def start_round(self, game_id: str) -> Optional[GameSnapshot]:
        """
        Puts the session into "loading" and dispatches the word fetch.

        Args:
            game_id: Unique game identifier

        Returns:
            GameSnapshot taken after dispatch, or None if game not found
        """
        game = self._get_game(game_id)
        if game is None:
            return None

        token = game["engine"].begin_round()
        game_logger.log_game_event(game_id, 'round_started', round_number=token)
        self._notify(game_id)

        self.dispatcher(self._resolve_round, game_id, token)
        return self.get_game_state(game_id)

    def _resolve_round(self, game_id: str, token: int) -> None:
        try:
            applied = self._apply_word(game_id, token, self.word_provider.get_word())
        except Exception as e:
            # A round never stays in "loading": finish it from the local list
            game_logger.log_game_event(
                game_id, 'round_failed', round_number=token,
                error_type=type(e).__name__, error_message=str(e)
            )
            applied = self._apply_word(game_id, token, self.fallback_provider.get_word())

        if applied:
            game_logger.log_game_event(game_id, 'round_ready', round_number=token)
            self._notify(game_id)

    def _apply_word(self, game_id: str, token: int, entry: WordEntry) -> bool:
        game = self.games.get(game_id)
        if game is None:
            game_logger.log_game_event(game_id, 'round_dropped', round_number=token, reason='game_deleted')
            return False

        if not game["engine"].complete_round(token, entry):
            game_logger.log_game_event(game_id, 'round_dropped', round_number=token, reason='superseded')
            return False

        return True

    def _notify(self, game_id: str) -> None:
        snapshot = self.get_game_state(game_id)
        if snapshot is None:
            return
        for listener in list(self._listeners):
            listener(game_id, snapshot)

    def is_valid_guess(self, game_id: str, letter) -> Tuple[bool, str]:
        """
        Validates the format of a guess for a specific game session.

        Repeated letters and guesses outside a round are not errors; the
        engine ignores them.

        Returns:
            Tuple of (is_valid, error_message)
        """
        if game_id not in self.games:
            return False, "Game not found"

        if not isinstance(letter, str) or not letter.strip():
            return False, "Letter is required"

        if normalize_letter(letter) not in ALPHABET:
            return False, "Letter must be a single character A-Z"

        return True, ""

    def make_guess(self, game_id: str, letter: str) -> Optional[Tuple[GameSnapshot, bool]]:
        """
        Applies a letter guess.

        Args:
            game_id: Unique game identifier
            letter: Single letter A-Z, any case

        Returns:
            Tuple of (GameSnapshot, accepted) or None if the guess is invalid
        """
        is_valid, _ = self.is_valid_guess(game_id, letter)
        if not is_valid:
            return None

        game = self._get_game(game_id)
        if game is None:
            return None

        engine = game["engine"]
        accepted = engine.guess(normalize_letter(letter))

        if accepted and engine.status.is_terminal:
            state = engine.state
            game_logger.log_game_event(
                game_id, f'game_{engine.status.value}',
                round_number=engine.round_token, target_word=state.target_word,
                fails=list(state.fails)
            )

        return self.get_game_state(game_id), accepted

    def get_game_state(self, game_id: str) -> Optional[GameSnapshot]:
        """
        Returns the current state of a session.

        The word and definition are only included once the round is over.

        Args:
            game_id: Unique game identifier

        Returns:
            GameSnapshot object or None if game not found
        """
        game = self.games.get(game_id)
        if game is None:
            return None

        engine = game["engine"]
        state, round_number, last_guessed_letter = engine.snapshot()
        status = state.status
        in_round = status in IN_ROUND

        slots = []
        if in_round:
            slots = [
                letter if status.is_terminal or letter in state.guessed_letters else None
                for letter in state.target_word
            ]

        return GameSnapshot(
            game_id=game_id,
            round_number=round_number,
            status=status.value,
            word_length=WORD_LENGTH,
            slots=slots,
            guessed_letters=sorted(state.guessed_letters) if in_round else [],
            fails=list(state.fails) if in_round else [],
            fails_count=len(state.fails) if in_round else 0,
            max_fails=engine.max_fails,
            letter_status={
                letter: (engine.letter_status(letter, state) if in_round else LetterStatus.UNUSED).value
                for letter in ALPHABET
            },
            enabled_letters=[letter for letter in ALPHABET if engine.can_guess(letter, state)],
            last_guessed_letter=last_guessed_letter,
            word=state.target_word if status.is_terminal else None,
            definition=state.definition if status.is_terminal else None
        )

    def cleanup_expired_games(self, max_idle_seconds: float, now: Optional[float] = None) -> List[str]:
        """
        Removes sessions that have been idle for longer than max_idle_seconds.

        Returns:
            List of removed game IDs
        """
        now = time.time() if now is None else now

        with self._lock:
            expired = [
                game_id for game_id, game in self.games.items()
                if now - game["last_activity"] > max_idle_seconds
            ]
            for game_id in expired:
                del self.games[game_id]

        return expired

    def delete_game(self, game_id: str) -> bool:
        """
        Removes a game session from memory.

        Args:
            game_id: Unique game identifier

        Returns:
            bool: True if game was deleted, False if not found
        """
        with self._lock:
            if game_id in self.games:
                del self.games[game_id]
                return True
        return False
