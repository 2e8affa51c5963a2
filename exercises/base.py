"""Shared utilities for exercise generation and input handling."""

import random
from typing import Iterable, Sequence, TypeVar

from models import DictionaryEntry

T = TypeVar("T")


def shuffled(items: Iterable[T], rng: random.Random | None = None) -> list[T]:
    """Return a uniformly shuffled copy of items."""
    result = list(items)
    (rng or random.Random()).shuffle(result)
    return result


def parse_letter_input(user_input: str, max_options: int = 4) -> int | None:
    """Parse letter (A, B, ...) or number (1, 2, ...) input to 0-based index.

    Args:
        user_input: Raw user input string.
        max_options: Maximum number of valid options.

    Returns:
        0-based index or None if input is invalid or out of bounds.
    """
    user_input = user_input.strip().upper()
    letter_map = {chr(65 + i): i for i in range(max_options)}

    if user_input in letter_map:
        index = letter_map[user_input]
    elif user_input.isdigit():
        index = int(user_input) - 1
    else:
        return None

    if index < 0 or index >= max_options:
        return None

    return index


def build_distractor_pool(entries: Iterable[DictionaryEntry]) -> list[str]:
    """Collect primary translations across the whole entry collection."""
    return [
        entry.primary_translation
        for entry in entries
        if entry.primary_translation
    ]


def pick_distractors(
    correct: str,
    pool: Sequence[str],
    count: int,
    rng: random.Random | None = None,
) -> list[str]:
    """Select wrong options for a multiple choice question.

    The pool is deduplicated and stripped of the correct answer before a
    uniformly shuffled prefix is taken, so the result never contains the
    correct answer or a repeated entry.

    Args:
        correct: The correct answer.
        pool: Candidate answers, may contain duplicates and the answer itself.
        count: Maximum number of distractors to return.
        rng: Random source used for shuffling.

    Returns:
        Up to ``count`` distractors. Fewer are returned when the pool is too
        small; that is not an error.
    """
    if count <= 0:
        return []

    unique = list(dict.fromkeys(item for item in pool if item and item != correct))
    return shuffled(unique, rng)[:count]
