"""
Run options for taking a quiz.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class TakeOptions:
    """How a quiz should be taken: which questions, in what order, how."""

    num: int | None = None  # ask at most this many
    tags: list[str] = field(default_factory=list)  # keep questions with any of these
    exclude: list[str] = field(default_factory=list)  # drop questions with any of these
    never: bool = False  # only questions never asked before
    in_order: bool = False  # keep file order instead of shuffling
    flip: bool = False  # ask flashcards back-to-front
    save: bool = True  # persist results afterwards
