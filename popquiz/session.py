"""
Quiz Session: orchestration layer for taking a quiz.

- Parsing -> popquiz.parser
- Question behavior -> popquiz.questions
- Selection -> popquiz.selection
- Rendering/input -> a QuizUI implementation (popquiz.ui for the terminal)
- Persistence -> popquiz.store (by the caller, after the session)
"""

from __future__ import annotations

import random
from collections.abc import Callable, Sequence

from loguru import logger

from popquiz.errors import EmptyQuizError, QuizInterrupted
from popquiz.options import TakeOptions
from popquiz.parser import Quiz
from popquiz.questions import Question, QuestionResult, QuizResult, QuizUI
from popquiz.questions.base import utcnow
from popquiz.selection import choose_questions

TIMED_WARNING = "This quiz contains timed questions!"

Chooser = Callable[[Sequence[Question], TakeOptions, random.Random], list[Question]]


def summarize(results: list[QuestionResult]) -> QuizResult:
    """Aggregate per-question results into a QuizResult."""
    total = len(results)
    total_correct = sum(1 for r in results if r.score == 1.0)
    total_partially_correct = sum(1 for r in results if 0.0 < r.score < 1.0)
    score = sum(r.score for r in results) / total * 100.0 if total else 0.0

    return QuizResult(
        time_finished=utcnow(),
        total=total,
        total_correct=total_correct,
        total_partially_correct=total_partially_correct,
        total_incorrect=total - total_correct - total_partially_correct,
        score=score,
        per_question=results,
    )


class QuizSession:
    """
    Asks a selected sequence of questions and aggregates the results.

    Ctrl-C (QuizInterrupted) ends the quiz early but keeps the answers given so
    far. Any other error aborts the session and propagates.
    """

    def __init__(
        self,
        quiz: Quiz,
        ui: QuizUI,
        options: TakeOptions | None = None,
        rng: random.Random | None = None,
        choose: Chooser = choose_questions,
    ):
        self.quiz = quiz
        self.ui = ui
        self.options = options or TakeOptions()
        self.rng = rng or random.Random()
        self.choose = choose

    def run(self) -> QuizResult:
        if self.options.flip:
            for q in self.quiz.questions:
                q.flip()

        questions = self.choose(self.quiz.questions, self.options, self.rng)
        if not questions:
            raise EmptyQuizError()

        if self.quiz.instructions:
            self.ui.show_instructions(self.quiz.instructions)

        if any(q.timed for q in questions):
            self.ui.warn(TIMED_WARNING)

        logger.info(f"Starting quiz with {len(questions)} questions")
        results: list[QuestionResult] = []
        for q in questions:
            try:
                results.append(q.ask(self.ui, self.rng))
            except QuizInterrupted:
                logger.info(f"Quiz interrupted after {len(results)} questions")
                break

        result = summarize(results)
        logger.info(f"Quiz finished: {result.total_correct}/{result.total} correct")
        self.ui.show_results(result)
        return result


def take_quiz(
    quiz: Quiz,
    ui: QuizUI,
    options: TakeOptions | None = None,
    rng: random.Random | None = None,
    choose: Chooser = choose_questions,
) -> QuizResult:
    """Take `quiz` through `ui` and return the aggregate result."""
    return QuizSession(quiz, ui, options, rng, choose).run()
