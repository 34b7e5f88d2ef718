"""
Parser for quiz files in the plain-text format.

A quiz file is a sequence of blank-line separated entries. Each entry is a
group of `field: value` lines and becomes one question:

    q: What is the capital of Peru?
    a: Lima
    - tag: geography
    - timeout: 10

    Capital of France: Paris/Paris, France

An entry led by `q` is a short answer question (one answer line) or a list
question (several answer lines). Any other entry is a flashcard whose front is
the field and whose back is the value. Lines prefixed with `- ` carry
metadata. Slashes separate equivalent variants of an answer. Lines starting
with `#` are comments. An entry whose first line is dashed is a quiz header.

Only two things are errors: a line without a colon, and a `q` entry with no
answer. Anything else the parser does not understand is logged and skipped.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from loguru import logger

from popquiz.errors import ParseError
from popquiz.questions import (
    Answer,
    FlashcardQuestion,
    ListQuestion,
    Location,
    MultipleChoiceQuestion,
    OrderedListQuestion,
    Question,
    QuestionCommon,
    ShortAnswerQuestion,
)

DASH_MARKER = "- "
BOM = "\ufeff"
TRUE_VALUES = {"true", "yes"}
FALSE_VALUES = {"false", "no"}


@dataclass
class AttributeLine:
    """One `field: value` line of a quiz file."""

    field: str
    value: str
    line: int
    # Preceded by a dash, i.e. metadata rather than content.
    dashed: bool = False


@dataclass
class Quiz:
    """Result of parsing a quiz file."""

    questions: list[Question] = field(default_factory=list)
    instructions: str | None = None
    path: Path | None = None


@dataclass
class _Draft:
    """A question under construction, before metadata decides its final type."""

    first: AttributeLine
    text: str = ""
    answers: list[Answer] = field(default_factory=list)
    flashcard: bool = False
    timeout: int | None = None
    ordered: bool = False
    no_credit: list[str] = field(default_factory=list)
    choices: list[str] = field(default_factory=list)
    front_context: str | None = None
    back_context: str | None = None
    tags: set[str] = field(default_factory=set)


def split_answer(value: str) -> Answer:
    """Split a value on slashes into equivalent answer variants."""
    return tuple(v.strip() for v in value.split("/") if v.strip())


class QuizParser:
    """Parser for quiz text. Pure: the same text always yields the same quiz."""

    def __init__(self, path: Path | str | None = None):
        self.path = Path(path) if path is not None else None

    def parse(self, text: str) -> Quiz:
        """Parse quiz text into a Quiz. Aborts on the first error."""
        quiz = Quiz(path=self.path)
        for entry in self.read_entries(text.removeprefix(BOM)):
            if entry[0].dashed:
                self._parse_header(entry, quiz)
                continue

            if len(entry) < 2 and entry[0].field == "q":
                logger.debug(f"Skipping incomplete entry at line {entry[0].line}")
                continue

            question = self._parse_entry(entry)
            if question is not None:
                quiz.questions.append(question)

        logger.debug(f"Parsed {len(quiz.questions)} questions from {self.path or '<text>'}")
        return quiz

    def read_entries(self, text: str) -> list[list[AttributeLine]]:
        """Group non-comment lines into blank-line delimited entries."""
        entries: list[list[AttributeLine]] = []
        current: list[AttributeLine] = []

        for line_number, raw in enumerate(text.splitlines(), start=1):
            stripped = raw.strip()
            if stripped.startswith("#"):
                continue

            if not stripped:
                if current:
                    entries.append(current)
                    current = []
                continue

            current.append(self.parse_line(stripped, line_number))

        if current:
            entries.append(current)
        return entries

    def parse_line(self, line: str, line_number: int) -> AttributeLine:
        """Split one line at its first colon into field and value."""
        field_part, colon, value = line.partition(":")
        if not colon:
            raise ParseError(line_number, "expected 'field: value'", self.path)

        field_part = field_part.strip()
        dashed = field_part.startswith(DASH_MARKER)
        if dashed:
            field_part = field_part[len(DASH_MARKER):].strip()

        return AttributeLine(
            field=field_part,
            value=value.strip(),
            line=line_number,
            dashed=dashed,
        )

    # =========================================================================
    # Entries
    # =========================================================================

    def _parse_entry(self, entry: list[AttributeLine]) -> Question | None:
        first = entry[0]
        draft = _Draft(first=first)

        if first.field == "q":
            draft.text = first.value
            i = 1
            while i < len(entry) and not entry[i].dashed:
                attr = entry[i]
                if attr.field == "q":
                    # Alternate phrasings are accepted but only the first is used.
                    logger.debug(f"Ignoring alternate prompt at line {attr.line}")
                elif answer := split_answer(attr.value):
                    draft.answers.append(answer)
                else:
                    self._ignore(attr, "empty answer")
                i += 1

            if not draft.answers:
                raise ParseError(first.line, "question has no answer", self.path)
        else:
            answer = split_answer(first.value)
            if not answer:
                self._ignore(first, "flashcard has no back")
                return None
            draft.flashcard = True
            draft.text = first.field
            draft.answers.append(answer)
            i = 1

        for attr in entry[i:]:
            if attr.dashed:
                self._apply_metadata(draft, attr)
            else:
                self._ignore(attr, "only dashed metadata may follow")

        return self._finish(draft)

    def _parse_header(self, entry: list[AttributeLine], quiz: Quiz) -> None:
        for attr in entry:
            if attr.dashed and attr.field == "instructions":
                quiz.instructions = attr.value
            else:
                self._ignore(attr, "not a quiz header field")

    def _ignore(self, attr: AttributeLine, reason: str) -> None:
        where = f"{self.path}, line {attr.line}" if self.path else f"line {attr.line}"
        logger.warning(f"Ignoring '{attr.field}' at {where}: {reason}")

    # =========================================================================
    # Metadata
    # =========================================================================

    def _apply_metadata(self, draft: _Draft, attr: AttributeLine) -> None:
        """Attach one dashed field to the draft. Misfits are skipped, not fatal."""
        name = attr.field
        is_list = not draft.flashcard and len(draft.answers) > 1

        if name == "tag":
            draft.tags.update(t.strip() for t in attr.value.split(",") if t.strip())
        elif name == "timeout":
            if is_list:
                self._ignore(attr, "list questions cannot be timed")
            elif (timeout := self._positive_int(attr)) is not None:
                draft.timeout = timeout
        elif name == "ordered":
            if not is_list:
                self._ignore(attr, "only list questions can be ordered")
            elif (ordered := self._boolean(attr)) is not None:
                draft.ordered = ordered
        elif name == "no-credit":
            if not is_list:
                self._ignore(attr, "only list questions take no-credit phrases")
            else:
                draft.no_credit.extend(split_answer(attr.value))
        elif name == "choice":
            if draft.flashcard or is_list:
                self._ignore(attr, "only short answer questions take choices")
            else:
                draft.choices.extend(split_answer(attr.value))
        elif name in ("front-context", "back-context"):
            if not draft.flashcard:
                self._ignore(attr, "only flashcards take a context")
            elif name == "front-context":
                draft.front_context = attr.value or None
            else:
                draft.back_context = attr.value or None
        else:
            self._ignore(attr, "unknown field")

    def _positive_int(self, attr: AttributeLine) -> int | None:
        try:
            value = int(attr.value)
        except ValueError:
            value = 0
        if value <= 0:
            self._ignore(attr, f"expected a positive integer, got '{attr.value}'")
            return None
        return value

    def _boolean(self, attr: AttributeLine) -> bool | None:
        value = attr.value.lower()
        if value in TRUE_VALUES:
            return True
        if value in FALSE_VALUES:
            return False
        self._ignore(attr, f"expected true or false, got '{attr.value}'")
        return None

    # =========================================================================
    # Construction
    # =========================================================================

    def _finish(self, draft: _Draft) -> Question:
        common = QuestionCommon(
            id=draft.text,
            tags=draft.tags,
            location=Location(self.path, draft.first.line),
        )

        if draft.flashcard:
            return FlashcardQuestion(
                front=(draft.text,),
                back=draft.answers[0],
                common=common,
                front_context=draft.front_context,
                back_context=draft.back_context,
                timeout=draft.timeout,
            )

        if len(draft.answers) == 1:
            if draft.choices:
                return MultipleChoiceQuestion(
                    text=draft.text,
                    answer=draft.answers[0],
                    common=common,
                    choices=draft.choices,
                    timeout=draft.timeout,
                )
            return ShortAnswerQuestion(
                text=draft.text,
                answer=draft.answers[0],
                common=common,
                timeout=draft.timeout,
            )

        if draft.ordered:
            return OrderedListQuestion(
                text=draft.text,
                answers=draft.answers,
                common=common,
                no_credit=draft.no_credit,
            )
        return ListQuestion(
            text=draft.text,
            answers=draft.answers,
            common=common,
            no_credit=draft.no_credit,
        )


def parse_quiz(text: str, path: Path | str | None = None) -> Quiz:
    """Parse quiz text, keeping quiz-level header fields."""
    return QuizParser(path).parse(text)


def parse(text: str, path: Path | str | None = None) -> list[Question]:
    """Parse quiz text into its questions."""
    return parse_quiz(text, path).questions


def load_quiz_file(path: Path | str) -> Quiz:
    """Read and parse a UTF-8 quiz file, with or without a byte-order mark."""
    path = Path(path)
    data = path.read_bytes()
    try:
        text = data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        line = data.count(b"\n", 0, e.start) + 1
        raise ParseError(line, "file is not valid UTF-8", path) from e
    return parse_quiz(text, path)
