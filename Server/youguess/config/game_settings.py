"""
Game Configuration Constants Module

This module defines the game rules and the local fallback word list.
All game parameters are centralized here to enable easy modification.
"""

import json
import os
import string
from typing import Dict, List, Final

# Core Game Configuration Constants
MAX_FAILS: Final[int] = 8
"""
Number of incorrect letter guesses that ends a round as lost.
Type: Final[int] - Immutable to prevent accidental modification
"""

WORD_LENGTH: Final[int] = 4

ALPHABET: Final[List[str]] = list(string.ascii_uppercase)

MIN_FALLBACK_WORDS: Final[int] = 6


def is_playable_word(word: str) -> bool:
    """Return True if word is exactly WORD_LENGTH uppercase A-Z letters."""
    return (
        isinstance(word, str)
        and len(word) == WORD_LENGTH
        and all(char in ALPHABET for char in word)
    )


# Load fallback word list from JSON file
def _load_fallback_words() -> List[Dict[str, str]]:
    """
    Load fallback word/definition pairs from fallback_words.json.

    Returns:
        List[Dict[str, str]]: Entries with uppercase 4-letter "word" and a "definition"

    Raises:
        FileNotFoundError: If fallback_words.json file is not found
        ValueError: If the JSON is malformed, the list is empty or an entry is invalid
    """
    config_dir = os.path.dirname(os.path.abspath(__file__))
    json_file_path = os.path.join(config_dir, 'fallback_words.json')

    try:
        with open(json_file_path, 'r', encoding='utf-8') as f:
            entries = json.load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Fallback word file not found: {json_file_path}")
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in fallback_words.json: {e}")

    if not isinstance(entries, list):
        raise ValueError("JSON file must contain an array of word entries")

    if not entries:
        raise ValueError("Fallback word list cannot be empty")

    words = []
    for entry in entries:
        word = str(entry.get('word', '')).strip().upper()
        definition = str(entry.get('definition', '')).strip()
        if not is_playable_word(word):
            raise ValueError(f"Fallback word '{word}' is not {WORD_LENGTH} letters A-Z")
        if not definition:
            raise ValueError(f"Fallback word '{word}' has no definition")
        words.append({'word': word, 'definition': definition})

    return words

# Curated fallback database loaded from JSON file
FALLBACK_WORDS: Final[List[Dict[str, str]]] = _load_fallback_words()


def validate_fallback_integrity(entries: List[Dict[str, str]] = None) -> bool:
    """
    Validates the integrity and consistency of the fallback word list.

    This function performs validation to ensure:
    1. Size validation: At least MIN_FALLBACK_WORDS entries
    2. Word validation: Exactly 4 uppercase A-Z letters
    3. Definition validation: Non-empty text
    4. Uniqueness validation: No duplicate words

    Returns:
        bool: True if the list passes all validation checks

    Raises:
        ValueError: If any validation check fails with detailed error message
    """
    if entries is None:
        entries = FALLBACK_WORDS

    if len(entries) < MIN_FALLBACK_WORDS:
        raise ValueError(
            f"Fallback list needs at least {MIN_FALLBACK_WORDS} entries, got {len(entries)}"
        )

    for index, entry in enumerate(entries):
        if not is_playable_word(entry.get('word')):
            raise ValueError(f"Entry at index {index} '{entry.get('word')}' is not a playable word")
        if not entry.get('definition'):
            raise ValueError(f"Entry at index {index} '{entry['word']}' has no definition")

    words = [entry['word'] for entry in entries]
    if len(words) != len(set(words)):
        duplicates = sorted({word for word in words if words.count(word) > 1})
        raise ValueError(f"Duplicate words found in fallback list: {duplicates}")

    return True


def get_word_statistics() -> dict:
    """
    Summarizes the fallback list, reported by the health endpoint.

    Returns:
        dict: total_words, avg_unique_letters and the most common letters
    """
    if not FALLBACK_WORDS:
        return {"error": "Fallback word list is empty"}

    letter_frequency = {}
    for entry in FALLBACK_WORDS:
        for char in entry['word']:
            letter_frequency[char] = letter_frequency.get(char, 0) + 1

    unique_letters = sum(len(set(entry['word'])) for entry in FALLBACK_WORDS)

    return {
        "total_words": len(FALLBACK_WORDS),
        "avg_unique_letters": round(unique_letters / len(FALLBACK_WORDS), 2),
        "most_common_letters": sorted(letter_frequency.items(), key=lambda x: x[1], reverse=True)[:5]
    }


if __name__ == "__main__":

    try:
        validate_fallback_integrity()
        print(" Fallback list validation passed")

        stats = get_word_statistics()
        print(f" Fallback statistics: {stats}")
    except ValueError as config_error:
        print(f" Configuration validation failed: {config_error}")
        exit(1)
