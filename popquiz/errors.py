"""
Exception taxonomy for popquiz.

Only the CLI turns these into exit codes; everything below it raises.
"""

from __future__ import annotations

from pathlib import Path


class QuizError(Exception):
    """Base class for all popquiz errors."""


class ParseError(QuizError):
    """A quiz file could not be parsed."""

    def __init__(self, line: int, reason: str, path: Path | str | None = None):
        self.line = line
        self.reason = reason
        self.path = path
        where = f"{path}, line {line}" if path else f"line {line}"
        super().__init__(f"{where}: {reason}")


class EmptyQuizError(QuizError):
    """Question selection produced nothing to ask."""

    def __init__(self, message: str = "no questions to ask"):
        super().__init__(message)


class QuizInterrupted(QuizError):
    """The user cancelled input (Ctrl-C) in the middle of a quiz."""


class QuizNotFoundError(QuizError):
    """No quiz file exists under the requested name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"quiz '{name}' does not exist")


class QuizExistsError(QuizError):
    """A quiz file already exists under the requested name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"quiz '{name}' already exists")


class ResultsFormatError(QuizError):
    """A stored results file could not be decoded."""
