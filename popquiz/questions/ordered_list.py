"""
Ordered list question.

Order-dependent recall: each position accepts only its own item. Every guess
fills one position, so a wrong guess still moves on to the next one.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field

from .base import Answer, QuestionBase, QuestionCommon, QuestionResult, QuizUI, make_list_result
from .matching import matches


@dataclass
class OrderedListQuestion(QuestionBase):
    """A prompt whose answer is a sequence of items in a fixed order."""
    text: str
    answers: list[Answer]
    common: QuestionCommon
    # Guesses acknowledged as "no credit" rather than "incorrect".
    no_credit: list[str] = field(default_factory=list)

    @property
    def display_text(self) -> str:
        return self.text

    @property
    def timed(self) -> bool:
        return False

    def flip(self) -> None:
        pass

    def ask(self, ui: QuizUI, rng: random.Random | None = None) -> QuestionResult:
        ui.show_prompt(self.text)

        ncorrect = 0
        responses: list[str] = []
        for answer in self.answers:
            guess = ui.read_response()
            if guess is None:
                ui.show_incorrect(answer[0])
                break

            responses.append(guess)
            if matches(answer, guess):
                ui.show_correct()
                ncorrect += 1
            elif matches(self.no_credit, guess):
                ui.show_no_credit()
            else:
                ui.show_incorrect(answer[0])

        score = ncorrect / len(self.answers)
        ui.show_score(score, False)
        return make_list_result(self.id, responses, score)
