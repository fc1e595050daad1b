"""
Token normalization for the map phase
Maps characters to lowercase ASCII letters and drops everything else
"""

import string
from typing import Iterable, Iterator, Optional

_LETTERS = frozenset(string.ascii_letters)


def normalize_char(ch: str) -> Optional[str]:
    """
    Normalize a single character

    Args:
        ch: One character of a token

    Returns:
        The lowercase letter, or None if the character is discarded
    """
    if ch in _LETTERS:
        return ch.lower()
    return None


def normalize_word(token: str) -> str:
    """
    Build the normalized form of a token

    Non-letters are removed, not replaced. An empty result means the token
    contributes no word.
    """
    letters = []
    for ch in token:
        normalized = normalize_char(ch)
        if normalized:
            letters.append(normalized)
    return ''.join(letters)


def normalized_words(tokens: Iterable[str]) -> Iterator[str]:
    """Yield the non-empty normalized words of a token stream"""
    for token in tokens:
        word = normalize_word(token)
        if word:
            yield word
