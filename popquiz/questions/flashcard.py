"""
Flashcard question.

The front is shown, the back must be typed. Flipping swaps the two sides so a
deck can be drilled in reverse.
"""

from __future__ import annotations

import random
from dataclasses import dataclass

from .base import Answer, QuestionBase, QuestionCommon, QuestionResult, QuizUI
from .short_answer import ask_single


@dataclass
class FlashcardQuestion(QuestionBase):
    """Two-sided card; both sides are answers so either can be asked for."""
    front: Answer
    back: Answer
    common: QuestionCommon
    front_context: str | None = None
    back_context: str | None = None
    timeout: int | None = None

    @property
    def display_text(self) -> str:
        return self.front[0]

    @property
    def timed(self) -> bool:
        return self.timeout is not None

    def flip(self) -> None:
        """Swap front and back, along with their contexts."""
        self.front, self.back = self.back, self.front
        self.front_context, self.back_context = self.back_context, self.front_context

    def ask(self, ui: QuizUI, rng: random.Random | None = None) -> QuestionResult:
        ui.show_prompt(self.front[0], self.front_context)
        return ask_single(ui, self.id, self.back, self.timeout)
