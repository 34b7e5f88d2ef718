"""
Quiz and results persistence.

Quizzes are plain-text files directly inside the data directory. Results are
stored as JSON files in ~/.popquiz/results/, one per quiz, mapping each
question id to the ever-growing list of its past results.
"""

from __future__ import annotations

import json
from pathlib import Path

from loguru import logger

from popquiz.errors import QuizExistsError, QuizNotFoundError, ResultsFormatError
from popquiz.parser import Quiz, load_quiz_file
from popquiz.questions import QuestionResult, QuizResult

StoredResults = dict[str, list[QuestionResult]]


class QuizStore:
    """
    Manages quiz files and their results.

    Results files are named {quiz_name}_results.json and live in the
    results subdirectory of the data directory.
    """

    def __init__(self, data_dir: Path, results_dirname: str = "results"):
        self.data_dir = Path(data_dir)
        self.results_dir = self.data_dir / results_dirname
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def quiz_path(self, name: str) -> Path:
        return self.data_dir / name

    def results_path(self, name: str) -> Path:
        return self.results_dir / f"{name}_results.json"

    def exists(self, name: str) -> bool:
        return self.quiz_path(name).is_file()

    def require(self, name: str) -> Path:
        """Return the path of quiz `name`, failing if it does not exist."""
        path = self.quiz_path(name)
        if not path.is_file():
            raise QuizNotFoundError(name)
        return path

    # =========================================================================
    # Loading
    # =========================================================================

    def load_quiz(self, name: str) -> Quiz:
        """Parse quiz `name` and attach each question's stored history."""
        quiz = load_quiz_file(self.require(name))
        history = self.load_results(name)
        attach_history(quiz, history)
        logger.debug(f"Loaded quiz '{name}' ({len(quiz.questions)} questions)")
        return quiz

    def load_results(self, name: str) -> StoredResults:
        """Load stored results for quiz `name`. Missing file means no history."""
        filepath = self.results_path(name)
        if not filepath.exists():
            return {}

        try:
            with open(filepath, "r", encoding="utf-8") as f:
                data = json.load(f)
            return {
                qid: [QuestionResult.from_dict(qid, entry) for entry in entries]
                for qid, entries in data.items()
            }
        except (json.JSONDecodeError, AttributeError, KeyError, TypeError, ValueError) as e:
            raise ResultsFormatError(f"cannot read results file {filepath}: {e}") from e

    # =========================================================================
    # Saving
    # =========================================================================

    def save_results(self, name: str, result: QuizResult) -> Path:
        """Append `result` to the stored results of quiz `name`."""
        history = self.load_results(name)
        for qr in result.per_question:
            history.setdefault(qr.id, []).append(qr)

        self.results_dir.mkdir(parents=True, exist_ok=True)
        filepath = self.results_path(name)
        serialized = {
            qid: [qr.to_dict() for qr in entries] for qid, entries in history.items()
        }
        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(serialized, f, indent=2, sort_keys=True, ensure_ascii=False)

        logger.info(f"Saved {len(result.per_question)} results to {filepath}")
        return filepath

    # =========================================================================
    # File management
    # =========================================================================

    def list_quizzes(self) -> list[str]:
        """Names of all quizzes in the data directory."""
        return sorted(
            p.name
            for p in self.data_dir.iterdir()
            if p.is_file() and not p.name.startswith(".")
        )

    def remove_quiz(self, name: str) -> None:
        """Delete quiz `name` and its results."""
        self.require(name).unlink()
        results = self.results_path(name)
        if results.exists():
            results.unlink()
        logger.info(f"Removed quiz '{name}'")

    def move_quiz(self, old: str, new: str) -> Path:
        """Rename quiz `old` to `new`, carrying its results along."""
        source = self.require(old)
        if self.exists(new):
            raise QuizExistsError(new)

        target = source.rename(self.quiz_path(new))
        results = self.results_path(old)
        if results.exists():
            results.rename(self.results_path(new))
        logger.info(f"Renamed quiz '{old}' to '{new}'")
        return target


def attach_history(quiz: Quiz, history: StoredResults) -> None:
    """Give each question the stored results recorded under its id."""
    for q in quiz.questions:
        q.common.prior_results = list(history.get(q.id, []))
