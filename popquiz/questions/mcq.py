"""
Multiple choice question.

- Up to three distractors are drawn at random from the authored choices.
- One variant of the correct answer is drawn at random and mixed in.
- Options are labeled a, b, c, ... and answered with a single letter.
"""

from __future__ import annotations

import random
import string
from dataclasses import dataclass, field

from .base import Answer, QuestionBase, QuestionCommon, QuestionResult, QuizUI, make_result
from .matching import matches
from .scoring import decay

MAX_DISTRACTORS = 3


def option_label(index: int) -> str:
    """Letter shown next to option `index`."""
    return string.ascii_lowercase[index]


def parse_choice(guess: str, count: int) -> int | None:
    """Map a single-letter response to an option index, or None if malformed."""
    guess = guess.strip().lower()
    if len(guess) != 1 or guess not in string.ascii_lowercase[:count]:
        return None
    return string.ascii_lowercase.index(guess)


@dataclass
class MultipleChoiceQuestion(QuestionBase):
    """A prompt with one correct answer among randomly drawn distractors."""
    text: str
    answer: Answer
    common: QuestionCommon
    choices: list[str] = field(default_factory=list)
    timeout: int | None = None

    @property
    def display_text(self) -> str:
        return self.text

    @property
    def timed(self) -> bool:
        return self.timeout is not None

    def flip(self) -> None:
        pass

    def build_options(self, rng: random.Random) -> tuple[list[str], str]:
        """Return the shuffled options and the correct option among them."""
        options = list(self.choices)
        # Shuffle first so the same three distractors are not always picked.
        rng.shuffle(options)
        del options[MAX_DISTRACTORS:]

        correct = rng.choice(self.answer)
        options.append(correct)
        rng.shuffle(options)
        return options, correct

    def ask(self, ui: QuizUI, rng: random.Random | None = None) -> QuestionResult:
        rng = rng or random.Random()
        ui.show_prompt(self.text)

        options, correct = self.build_options(rng)
        ui.show_choices(options)

        while True:
            guess = ui.read_response()
            if guess is None:
                ui.show_incorrect(correct)
                ui.show_score(0.0, False)
                return make_result(self.id, None, 0.0)

            index = parse_choice(guess, len(options))
            if index is not None:
                break

        elapsed = ui.elapsed_since_last_prompt()
        response = options[index]
        if matches(self.answer, response):
            ui.show_correct()
            score, timed_out = decay(1.0, self.timeout, elapsed)
        else:
            ui.show_incorrect(correct)
            score, timed_out = decay(0.0, self.timeout, elapsed)
        ui.show_score(score, timed_out)
        return make_result(self.id, response, score)
