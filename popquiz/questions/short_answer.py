"""
Short answer question.

One prompt, one answer (with equivalent variants), one guess.
"""

from __future__ import annotations

import random
from dataclasses import dataclass

from .base import Answer, QuestionBase, QuestionCommon, QuestionResult, QuizUI, make_result
from .matching import matches
from .scoring import decay


def ask_single(
    ui: QuizUI, question_id: str, answer: Answer, timeout: int | None
) -> QuestionResult:
    """Read one guess for `answer`, give feedback and score it."""
    guess = ui.read_response()
    if guess is None:
        ui.show_incorrect(answer[0])
        ui.show_score(0.0, False)
        return make_result(question_id, None, 0.0)

    elapsed = ui.elapsed_since_last_prompt()
    if matches(answer, guess):
        ui.show_correct()
        score, timed_out = decay(1.0, timeout, elapsed)
    else:
        ui.show_incorrect(answer[0])
        score, timed_out = decay(0.0, timeout, elapsed)
    ui.show_score(score, timed_out)
    return make_result(question_id, guess, score)


@dataclass
class ShortAnswerQuestion(QuestionBase):
    """A prompt with a single accepted answer."""
    text: str
    answer: Answer
    common: QuestionCommon
    # Seconds for full credit; partial credit continues up to twice this.
    timeout: int | None = None

    @property
    def display_text(self) -> str:
        return self.text

    @property
    def timed(self) -> bool:
        return self.timeout is not None

    def flip(self) -> None:
        pass

    def ask(self, ui: QuizUI, rng: random.Random | None = None) -> QuestionResult:
        ui.show_prompt(self.text)
        return ask_single(ui, self.id, self.answer, self.timeout)
