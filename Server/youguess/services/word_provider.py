"""
Word Provider

Supplies the mystery word for each round. The Gemini provider asks the model
for a word and its definition as structured JSON and falls back to the local
list on any failure, so callers always get a playable WordEntry.
"""

import json
import random
from typing import Dict, List, Optional

import google.generativeai as genai

from ..config.game_settings import FALLBACK_WORDS, WORD_LENGTH, is_playable_word
from ..models.game import WordEntry
from ..utils.game_logger import game_logger

WORD_PROMPT = "Generate a common 4-letter English word and its short definition."

WORD_RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "word": {
            "type": "STRING",
            "description": "A common 4-letter English word in uppercase."
        },
        "definition": {
            "type": "STRING",
            "description": "A short one-sentence definition of the word."
        }
    },
    "required": ["word", "definition"]
}


class WordProviderError(Exception):
    """Raised when a word source returns something unusable."""


def normalize_entry(word, definition) -> WordEntry:
    """
    Normalize a raw word/definition pair into a playable WordEntry.

    The word is upper-cased, trimmed and truncated to WORD_LENGTH. Anything
    still not made of exactly WORD_LENGTH letters A-Z is rejected, as is a
    missing definition.

    Raises:
        WordProviderError: If the pair is not usable
    """
    if not isinstance(word, str):
        raise WordProviderError(f"Word must be a string, got {type(word).__name__}")
    if not isinstance(definition, str) or not definition.strip():
        raise WordProviderError("Definition is missing")

    normalized = word.upper().strip()[:WORD_LENGTH]
    if not is_playable_word(normalized):
        raise WordProviderError(f"Word '{word}' is not a playable {WORD_LENGTH}-letter word")

    return WordEntry(word=normalized, definition=definition.strip())


class FallbackWordProvider:
    """Picks uniformly at random from the local fallback list."""

    mode = 'local'

    def __init__(self, entries: Optional[List[Dict[str, str]]] = None, rng: Optional[random.Random] = None):
        self.entries = list(entries if entries is not None else FALLBACK_WORDS)
        if not self.entries:
            raise ValueError("Fallback word list cannot be empty")
        self.rng = rng or random.Random()

    def fallback_word(self) -> WordEntry:
        choice = self.rng.choice(self.entries)
        return WordEntry(word=choice['word'], definition=choice['definition'])

    def get_word(self) -> WordEntry:
        return self.fallback_word()


class GeminiWordProvider(FallbackWordProvider):
    """
    Generates words with Gemini through google-generativeai.

    The model is configured on first use so that environment variables
    loaded after import are still honored. A pre-built model can be passed
    in instead, which skips configuration entirely.
    """

    mode = 'gemini'

    def __init__(self,
                 api_key: Optional[str] = None,
                 model_name: str = 'gemini-2.5-flash',
                 timeout: float = 10,
                 max_attempts: int = 2,
                 entries: Optional[List[Dict[str, str]]] = None,
                 rng: Optional[random.Random] = None,
                 model=None):
        super().__init__(entries, rng)
        self.api_key = api_key
        self.model_name = model_name
        self.timeout = timeout
        self.max_attempts = max(1, max_attempts)
        self._model = model
        self._missing_key_logged = False

    @property
    def remote_available(self) -> bool:
        return self._model is not None or bool(self.api_key)

    def _get_model(self):
        if self._model is None:
            genai.configure(api_key=self.api_key)
            self._model = genai.GenerativeModel(
                self.model_name,
                generation_config={
                    "response_mime_type": "application/json",
                    "response_schema": WORD_RESPONSE_SCHEMA
                }
            )
        return self._model

    def fetch_remote_word(self) -> WordEntry:
        """
        Ask Gemini for a single word.

        Raises:
            WordProviderError: If the response is not the expected JSON object
            Exception: Whatever the client raises for network or API errors
        """
        response = self._get_model().generate_content(
            WORD_PROMPT,
            request_options={"timeout": self.timeout}
        )

        try:
            data = json.loads(response.text)
        except (TypeError, ValueError) as e:
            raise WordProviderError(f"Malformed response: {e}") from e

        if not isinstance(data, dict):
            raise WordProviderError("Response is not a JSON object")

        return normalize_entry(data.get('word'), data.get('definition'))

    def get_word(self) -> WordEntry:
        if not self.remote_available:
            if not self._missing_key_logged:
                game_logger.log_provider_event(
                    'remote_disabled', reason='GEMINI_API_KEY is not set'
                )
                self._missing_key_logged = True
            return self.fallback_word()

        for attempt in range(1, self.max_attempts + 1):
            try:
                entry = self.fetch_remote_word()
                game_logger.log_provider_event(
                    'remote_word_ready', model=self.model_name, attempt=attempt
                )
                return entry
            except Exception as e:
                game_logger.log_provider_event(
                    'remote_word_failed', success=False,
                    model=self.model_name, attempt=attempt,
                    error_type=type(e).__name__, error_message=str(e)
                )

        entry = self.fallback_word()
        game_logger.log_provider_event(
            'fallback_word_used', success=False,
            attempts=self.max_attempts, word=entry.word
        )
        return entry


def build_word_provider(config_class) -> FallbackWordProvider:
    """Create the provider selected by WORD_PROVIDER."""
    if config_class.WORD_PROVIDER == 'local':
        return FallbackWordProvider()

    return GeminiWordProvider(
        api_key=config_class.GEMINI_API_KEY,
        model_name=config_class.GEMINI_MODEL,
        timeout=config_class.GEMINI_TIMEOUT_SECONDS,
        max_attempts=config_class.GEMINI_MAX_ATTEMPTS
    )
