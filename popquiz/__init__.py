"""
popquiz: author quizzes in plain text and take them in the terminal.

Components:
- parser: Quiz file format -> question records
- questions: Question variants, answer matching and scoring
- session: Asks selected questions and aggregates results
- store: Quiz files and historical results on disk
- ui / cli: rich terminal front end and typer commands
"""

from .errors import EmptyQuizError, ParseError, QuizError, QuizInterrupted
from .options import TakeOptions
from .parser import Quiz, load_quiz_file, parse, parse_quiz
from .session import QuizSession, take_quiz

__version__ = "1.0.0"

__all__ = [
    "EmptyQuizError",
    "ParseError",
    "Quiz",
    "QuizError",
    "QuizInterrupted",
    "QuizSession",
    "TakeOptions",
    "load_quiz_file",
    "parse",
    "parse_quiz",
    "take_quiz",
]
