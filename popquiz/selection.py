"""
Question selection: which questions to ask, and in what order.
"""

from __future__ import annotations

import random
from collections.abc import Sequence

from loguru import logger

from popquiz.options import TakeOptions
from popquiz.questions import Question


def filter_questions(questions: Sequence[Question], options: TakeOptions) -> list[Question]:
    """Apply the tag and history filters of `options`, keeping file order."""
    include = set(options.tags)
    exclude = set(options.exclude)

    selected = []
    for q in questions:
        if include and not (q.tags & include):
            continue
        if q.tags & exclude:
            continue
        if options.never and q.prior_results:
            continue
        selected.append(q)
    return selected


def choose_questions(
    questions: Sequence[Question],
    options: TakeOptions,
    rng: random.Random | None = None,
) -> list[Question]:
    """Return the questions to ask, in order. May be empty."""
    selected = filter_questions(questions, options)
    if not options.in_order:
        (rng or random.Random()).shuffle(selected)
    if options.num is not None:
        selected = selected[: options.num]

    logger.debug(f"Selected {len(selected)} of {len(questions)} questions")
    return selected
