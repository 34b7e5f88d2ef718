"""
Shared types for question variants: answers, results and the UI protocol.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Protocol

# Each member is an equivalent answer, e.g. ("Mount Everest", "Everest"), not a
# different answer to the same question. The first member is canonical and is
# used for display.
Answer = tuple[str, ...]


@dataclass(frozen=True)
class Location:
    """Where a question was defined, for diagnostics."""
    path: Path | None
    line: int

    def __str__(self) -> str:
        return f"{self.path}:{self.line}" if self.path else f"line {self.line}"


@dataclass(frozen=True)
class QuestionResult:
    """Result of answering a question on a particular occasion."""
    id: str
    time_asked: datetime
    score: float
    response: str | None = None  # short answer, flashcard, multiple choice
    response_list: list[str] | None = None  # list and ordered list

    def to_dict(self) -> dict[str, Any]:
        """Serialize for the results file. The id is the key, so it is omitted."""
        data: dict[str, Any] = {"time_asked": self.time_asked.isoformat()}
        if self.response is not None:
            data["response"] = self.response
        if self.response_list is not None:
            data["response_list"] = list(self.response_list)
        data["score"] = self.score
        return data

    @classmethod
    def from_dict(cls, id: str, data: dict[str, Any]) -> "QuestionResult":
        """Create from a results-file entry stored under `id`."""
        return cls(
            id=id,
            time_asked=datetime.fromisoformat(data["time_asked"]),
            score=float(data["score"]),
            response=data.get("response"),
            response_list=data.get("response_list"),
        )


@dataclass(frozen=True)
class QuizResult:
    """Results of taking a quiz on a particular occasion."""
    time_finished: datetime
    total: int
    total_correct: int
    total_partially_correct: int
    total_incorrect: int
    score: float  # percentage, 0-100
    per_question: list[QuestionResult]


@dataclass
class QuestionCommon:
    """Fields shared by every question variant."""
    id: str
    prior_results: list[QuestionResult] = field(default_factory=list)
    tags: set[str] = field(default_factory=set)
    location: Location | None = None


class QuestionBase:
    """Accessors over `common` shared by all variants."""

    common: QuestionCommon

    @property
    def id(self) -> str:
        return self.common.id

    @property
    def tags(self) -> set[str]:
        return self.common.tags

    @property
    def prior_results(self) -> list[QuestionResult]:
        return self.common.prior_results


class QuizUI(Protocol):
    """Everything a question or session needs from the user interface."""

    def show_instructions(self, text: str) -> None:
        ...

    def warn(self, text: str) -> None:
        ...

    def show_prompt(self, text: str, context: str | None = None) -> None:
        """Display a question. Starts the clock for elapsed_since_last_prompt()."""
        ...

    def read_response(self) -> str | None:
        """Read one response. None means no input; raises QuizInterrupted on cancel."""
        ...

    def show_correct(self) -> None:
        ...

    def show_incorrect(self, expected: str | None = None) -> None:
        ...

    def show_repeat(self) -> None:
        ...

    def show_no_credit(self) -> None:
        ...

    def show_missed(self, missed: list[str]) -> None:
        ...

    def show_score(self, score: float, timed_out: bool) -> None:
        ...

    def show_choices(self, choices: list[str]) -> None:
        ...

    def elapsed_since_last_prompt(self) -> timedelta:
        ...

    def show_results(self, result: QuizResult) -> None:
        ...


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def make_result(id: str, response: str | None, score: float) -> QuestionResult:
    """Construct a QuestionResult for a single-response question."""
    return QuestionResult(id=id, time_asked=utcnow(), score=score, response=response)


def make_list_result(id: str, responses: list[str], score: float) -> QuestionResult:
    """Construct a QuestionResult with a list of responses."""
    return QuestionResult(id=id, time_asked=utcnow(), score=score, response_list=responses)
