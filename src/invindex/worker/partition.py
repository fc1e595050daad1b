"""
Letter to reducer assignment.
"""

import string
from typing import List

ALPHABET = string.ascii_lowercase


def letter_ordinal(letter: str) -> int:
    """Position of a lowercase letter in the alphabet, 'a' -> 0."""
    if len(letter) != 1 or letter not in ALPHABET:
        raise ValueError(f"Expected a single lowercase letter, got {letter!r}")
    return ord(letter) - ord('a')


def owner_reducer(letter: str, num_reducers: int) -> int:
    """
    Reducer slot that owns a letter

    Args:
        letter: Lowercase ASCII letter
        num_reducers: Number of reducer slots, at least 1

    Returns:
        Slot index in [0, num_reducers)
    """
    if num_reducers < 1:
        raise ValueError(f"num_reducers must be at least 1, got {num_reducers}")
    return letter_ordinal(letter) % num_reducers


def letters_for_reducer(reducer_id: int, num_reducers: int) -> List[str]:
    """Letters owned by a reducer slot, in alphabetical order (empty for slots >= 26)."""
    if not 0 <= reducer_id < num_reducers:
        raise ValueError(f"reducer_id {reducer_id} outside [0, {num_reducers})")
    return [letter for letter in ALPHABET if owner_reducer(letter, num_reducers) == reducer_id]
