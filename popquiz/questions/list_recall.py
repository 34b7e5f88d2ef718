"""
List question.

Order-independent recall: the user names the items of a list in any order.
Supports partial credit, repeats and no-credit phrases.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field

from .base import Answer, QuestionBase, QuestionCommon, QuestionResult, QuizUI, make_list_result
from .matching import match_first, matches


@dataclass
class ListQuestion(QuestionBase):
    """A prompt whose answer is an unordered list of items."""
    text: str
    answers: list[Answer]
    common: QuestionCommon
    # Guesses acknowledged without credit or penalty.
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
        """
        Read guesses until every item is named, `n` attempts are used, or input
        runs out. Correct and incorrect guesses use an attempt; repeats and
        no-credit phrases do not.
        """
        n = len(self.answers)
        satisfied = [False] * n

        ui.show_prompt(self.text)
        attempts = 0
        responses: list[str] = []
        while attempts < n:
            guess = ui.read_response()
            if guess is None:
                break
            responses.append(guess)

            index = match_first(self.answers, guess)
            if index is not None:
                if satisfied[index]:
                    ui.show_repeat()
                else:
                    satisfied[index] = True
                    ui.show_correct()
                    attempts += 1
            elif matches(self.no_credit, guess):
                ui.show_no_credit()
            else:
                ui.show_incorrect()
                attempts += 1

        missed = [answer[0] for answer, done in zip(self.answers, satisfied) if not done]
        if missed:
            ui.show_missed(missed)

        score = (n - len(missed)) / n
        ui.show_score(score, False)
        return make_list_result(self.id, responses, score)
