"""
Game Engine

The state machine of a single game: round start, letter guesses and the
won/lost transitions.
"""

import threading
from typing import Optional, Tuple

from ..config.game_settings import ALPHABET, MAX_FAILS
from ..models.game import GameState, GameStatus, LetterStatus, WordEntry
from .word_provider import normalize_entry


class GameEngine:
    """
    Owns one GameState and applies events to it.

    A round is started in two steps so the word fetch can run elsewhere:
    begin_round() moves to "loading" and hands out a round token, and
    complete_round() applies the fetched word only if that token is still
    current. Results of superseded rounds are dropped.
    """

    def __init__(self, word_provider=None, max_fails: int = MAX_FAILS):
        self.word_provider = word_provider
        self.max_fails = max_fails
        self.state = GameState()
        self.round_token = 0
        # Display-only highlight, not part of win/loss logic
        self.last_guessed_letter: Optional[str] = None
        self._lock = threading.Lock()

    @property
    def status(self) -> GameStatus:
        return self.state.status

    def begin_round(self) -> int:
        """Enter "loading" and return the token of the new round."""
        with self._lock:
            self.round_token += 1
            self.state.status = GameStatus.LOADING
            self.last_guessed_letter = None
            return self.round_token

    def complete_round(self, token: int, entry: WordEntry) -> bool:
        """
        Start playing with the fetched word.

        Returns:
            bool: False if the token belongs to a superseded round
        """
        entry = normalize_entry(entry.word, entry.definition)

        with self._lock:
            if token != self.round_token or self.state.status != GameStatus.LOADING:
                return False

            self.state = GameState(
                target_word=entry.word,
                guessed_letters=set(),
                fails=[],
                status=GameStatus.PLAYING,
                definition=entry.definition
            )
            self.last_guessed_letter = None
            return True

    def start_round(self) -> GameState:
        """Begin a round and resolve it synchronously with the word provider."""
        if self.word_provider is None:
            raise RuntimeError("GameEngine has no word provider")

        token = self.begin_round()
        self.complete_round(token, self.word_provider.get_word())
        return self.state

    def guess(self, letter: str) -> bool:
        """
        Apply a letter guess.

        Guesses outside "playing", repeated letters and anything other than
        a single letter A-Z are ignored.

        Returns:
            bool: True if the guess changed the state
        """
        if not isinstance(letter, str):
            return False
        letter = letter.upper()

        with self._lock:
            state = self.state
            if (state.status != GameStatus.PLAYING
                    or letter not in ALPHABET
                    or letter in state.guessed_letters
                    or letter in state.fails):
                return False

            self.last_guessed_letter = letter

            if letter in state.target_word:
                state.guessed_letters.add(letter)
            else:
                state.fails.append(letter)

            if set(state.target_word) <= state.guessed_letters:
                state.status = GameStatus.WON
            elif len(state.fails) >= self.max_fails:
                state.status = GameStatus.LOST

            return True

    def snapshot(self) -> Tuple[GameState, int, Optional[str]]:
        """Copy the state, round token and highlight in one locked read."""
        with self._lock:
            state = self.state
            copy = GameState(
                target_word=state.target_word,
                guessed_letters=set(state.guessed_letters),
                fails=list(state.fails),
                status=state.status,
                definition=state.definition
            )
            return copy, self.round_token, self.last_guessed_letter

    def letter_status(self, letter: str, state: Optional[GameState] = None) -> LetterStatus:
        if state is None:
            state = self.state
        if letter in state.guessed_letters:
            return LetterStatus.HIT
        if letter in state.fails:
            return LetterStatus.MISS
        return LetterStatus.UNUSED

    def can_guess(self, letter: str, state: Optional[GameState] = None) -> bool:
        """True if the keyboard control for letter should be enabled."""
        if state is None:
            state = self.state
        return (state.status == GameStatus.PLAYING
                and self.letter_status(letter, state) == LetterStatus.UNUSED)
