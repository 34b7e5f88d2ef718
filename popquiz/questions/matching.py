"""
Answer matching.

Guesses are compared against every accepted variant of an answer after
normalization. There is no fuzzy or partial credit at this layer.
"""

from __future__ import annotations

from collections.abc import Sequence

from .base import Answer


def normalize(text: str) -> str:
    """Lower-case and trim a guess or answer variant for comparison."""
    return text.strip().lower()


def matches(answer: Sequence[str], guess: str) -> bool:
    """Return True if `guess` is equivalent to any variant of `answer`."""
    normalized = normalize(guess)
    return any(normalize(variant) == normalized for variant in answer)


def matches_any(answers: Sequence[Answer], guess: str) -> bool:
    """Return True if `guess` matches any of the answers in `answers`."""
    return match_first(answers, guess) is not None


def match_first(answers: Sequence[Answer], guess: str) -> int | None:
    """Return the index of the first answer that `guess` matches, or None."""
    for i, answer in enumerate(answers):
        if matches(answer, guess):
            return i
    return None
