"""
Question variants for popquiz.

Each variant (short answer, flashcard, list, ordered list, multiple choice)
has its own module with the same capability set:
- ask(): Prompt the user, read response(s), give feedback, return a result
- display_text: The text shown when the question is asked
- timed: Whether a timeout applies
- flip(): Swap sides (flashcards only; a no-op elsewhere)
"""

from enum import Enum
from typing import Union

from .base import (
    Answer,
    Location,
    QuestionCommon,
    QuestionResult,
    QuizResult,
    QuizUI,
)
from .flashcard import FlashcardQuestion
from .list_recall import ListQuestion
from .matching import match_first, matches, matches_any, normalize
from .mcq import MultipleChoiceQuestion
from .ordered_list import OrderedListQuestion
from .scoring import decay
from .short_answer import ShortAnswerQuestion


class QuestionType(str, Enum):
    """Supported question types."""
    SHORT_ANSWER = "short_answer"
    FLASHCARD = "flashcard"
    LIST = "list"
    ORDERED_LIST = "ordered_list"
    MULTIPLE_CHOICE = "multiple_choice"


Question = Union[
    ShortAnswerQuestion,
    FlashcardQuestion,
    ListQuestion,
    OrderedListQuestion,
    MultipleChoiceQuestion,
]

QUESTION_CLASSES: dict[QuestionType, type] = {
    QuestionType.SHORT_ANSWER: ShortAnswerQuestion,
    QuestionType.FLASHCARD: FlashcardQuestion,
    QuestionType.LIST: ListQuestion,
    QuestionType.ORDERED_LIST: OrderedListQuestion,
    QuestionType.MULTIPLE_CHOICE: MultipleChoiceQuestion,
}


def question_type(question: Question) -> QuestionType:
    """Get the QuestionType of a question instance."""
    for qtype, cls in QUESTION_CLASSES.items():
        if type(question) is cls:
            return qtype
    raise TypeError(f"not a question: {question!r}")


__all__ = [
    "Answer",
    "FlashcardQuestion",
    "ListQuestion",
    "Location",
    "MultipleChoiceQuestion",
    "OrderedListQuestion",
    "QUESTION_CLASSES",
    "Question",
    "QuestionCommon",
    "QuestionResult",
    "QuestionType",
    "QuizResult",
    "QuizUI",
    "ShortAnswerQuestion",
    "decay",
    "match_first",
    "matches",
    "matches_any",
    "normalize",
    "question_type",
]
