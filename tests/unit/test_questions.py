"""
Unit tests for question variants.

Tests the ask() flow of each variant against a scripted UI.
"""
from datetime import timedelta

import pytest

from popquiz.parser import parse
from popquiz.questions import (
    FlashcardQuestion,
    ListQuestion,
    MultipleChoiceQuestion,
    OrderedListQuestion,
    QuestionCommon,
    QuestionType,
    ShortAnswerQuestion,
    question_type,
)
from popquiz.questions.mcq import option_label, parse_choice


def common(qid="q"):
    return QuestionCommon(id=qid)


class TestShortAnswer:
    """Test short answer questions."""

    @pytest.fixture
    def question(self):
        return parse("q: What is 2+2?\na: 4/four\n")[0]

    def test_correct_variant(self, question, make_ui):
        ui = make_ui("Four")
        result = question.ask(ui)

        assert result.score == 1.0
        assert result.response == "Four"
        assert result.response_list is None
        assert result.id == "What is 2+2?"
        assert ui.events[0] == ("prompt", "What is 2+2?", None)
        assert ("correct",) in ui.events
        assert ui.events[-1] == ("score", 1.0, False)

    def test_incorrect(self, question, make_ui):
        ui = make_ui("5")
        result = question.ask(ui)

        assert result.score == 0.0
        assert result.response == "5"
        assert ("incorrect", "4") in ui.events

    def test_no_input(self, question, make_ui):
        ui = make_ui()
        result = question.ask(ui)

        assert result.score == 0.0
        assert result.response is None
        assert ("incorrect", "4") in ui.events

    def test_timed_decay(self, make_ui):
        question = ShortAnswerQuestion("Q", ("a",), common(), timeout=10)
        ui = make_ui("a", elapsed=timedelta(seconds=15))
        result = question.ask(ui)

        assert result.score == pytest.approx(0.5)
        assert ui.events[-1][2] is True

    def test_fast_answer_keeps_full_credit(self, make_ui):
        question = ShortAnswerQuestion("Q", ("a",), common(), timeout=10)
        result = question.ask(make_ui("a", elapsed=timedelta(seconds=3)))
        assert result.score == 1.0

    def test_capabilities(self, question):
        assert question.timed is False
        assert question.display_text == "What is 2+2?"
        question.flip()
        assert question.text == "What is 2+2?"


class TestFlashcard:
    """Test flashcard questions."""

    @pytest.fixture
    def card(self):
        return FlashcardQuestion(
            front=("Capital of France",),
            back=("Paris", "Paris, France"),
            common=common("Capital of France"),
            front_context="geography",
        )

    def test_ask(self, card, make_ui):
        ui = make_ui("paris, france")
        result = card.ask(ui)

        assert result.score == 1.0
        assert ui.events[0] == ("prompt", "Capital of France", "geography")

    def test_incorrect_shows_canonical_back(self, card, make_ui):
        ui = make_ui("Lyon")
        card.ask(ui)
        assert ("incorrect", "Paris") in ui.events

    def test_flip(self, card, make_ui):
        card.flip()
        assert card.front == ("Paris", "Paris, France")
        assert card.back == ("Capital of France",)
        assert card.front_context is None
        assert card.back_context == "geography"
        assert card.display_text == "Paris"

        ui = make_ui("capital of france")
        assert card.ask(ui).score == 1.0
        assert ui.events[0] == ("prompt", "Paris", None)

    def test_flip_twice_restores(self, card):
        card.flip()
        card.flip()
        assert card.front == ("Capital of France",)
        assert card.front_context == "geography"

    def test_flip_keeps_identity(self, card):
        card.flip()
        assert card.id == "Capital of France"

    def test_parsed_flashcard_flip(self):
        card = parse("Capital of France: Paris/Paris, France\n")[0]
        card.flip()
        assert card.front == ("Paris", "Paris, France")
        assert card.back == ("Capital of France",)


class TestList:
    """Test unordered list questions."""

    @pytest.fixture
    def question(self):
        return ListQuestion(
            text="Primary colors of light?",
            answers=[("red",), ("green",), ("blue",)],
            common=common(),
            no_credit=["yellow"],
        )

    def test_all_correct(self, question, make_ui):
        ui = make_ui("blue", "Red", "green")
        result = question.ask(ui)

        assert result.score == 1.0
        assert result.response_list == ["blue", "Red", "green"]
        assert result.response is None
        assert ui.count("correct") == 3
        assert ui.count("missed") == 0

    def test_repeats_and_no_credit_are_free(self, question, make_ui):
        ui = make_ui("red", "red", "yellow", "RED", "green", "yellow", "blue")
        result = question.ask(ui)

        assert result.score == 1.0
        assert ui.count("repeat") == 2
        assert ui.count("no_credit") == 2
        assert len(result.response_list) == 7

    def test_incorrect_guesses_use_attempts(self, question, make_ui):
        ui = make_ui("red", "purple", "orange", "green")
        result = question.ask(ui)

        # Three attempts used (red, purple, orange); "green" is never read.
        assert result.score == pytest.approx(1 / 3)
        assert result.response_list == ["red", "purple", "orange"]
        assert ui.count("incorrect") == 2
        assert ("missed", ["green", "blue"]) in ui.events

    def test_input_exhausted(self, question, make_ui):
        ui = make_ui("green")
        result = question.ask(ui)

        assert result.score == pytest.approx(1 / 3)
        assert ("missed", ["red", "blue"]) in ui.events

    def test_no_input(self, question, make_ui):
        result = question.ask(make_ui())
        assert result.score == 0.0
        assert result.response_list == []

    def test_variants_match_same_item(self, make_ui):
        question = ListQuestion("Q", [("USA", "United States"), ("UK",)], common())
        ui = make_ui("united states", "usa", "uk")
        result = question.ask(ui)

        assert result.score == 1.0
        assert ui.count("repeat") == 1

    def test_never_timed(self, question):
        assert question.timed is False


class TestOrderedList:
    """Test ordered list questions."""

    @pytest.fixture
    def question(self):
        return OrderedListQuestion(
            text="First three planets?",
            answers=[("Mercury",), ("Venus",), ("Earth", "Terra")],
            common=common(),
            no_credit=["the sun"],
        )

    def test_exact_order(self, question, make_ui):
        ui = make_ui("mercury", "venus", "terra")
        result = question.ask(ui)

        assert result.score == 1.0
        assert ui.count("correct") == 3

    def test_mismatch_advances(self, question, make_ui):
        ui = make_ui("venus", "venus", "earth")
        result = question.ask(ui)

        assert result.score == pytest.approx(2 / 3)
        assert ui.events[1] == ("incorrect", "Mercury")
        assert ui.count("correct") == 2

    def test_wrong_order_scores_by_position(self, question, make_ui):
        result = question.ask(make_ui("earth", "mercury", "venus"))
        assert result.score == 0.0

    def test_input_exhausted(self, question, make_ui):
        ui = make_ui("mercury")
        result = question.ask(ui)

        assert result.score == pytest.approx(1 / 3)
        assert ("incorrect", "Venus") in ui.events
        assert result.response_list == ["mercury"]

    def test_no_credit_phrase_still_fills_its_position(self, question, make_ui):
        ui = make_ui("the sun", "venus", "earth", "mars")
        result = question.ask(ui)

        assert result.score == pytest.approx(2 / 3)
        assert ui.count("no_credit") == 1
        assert ui.count("incorrect") == 0
        assert result.response_list == ["the sun", "venus", "earth"]

    def test_every_guess_advances(self, make_ui):
        question = OrderedListQuestion("Q", [("a",), ("b",)], common(), no_credit=["x"])
        ui = make_ui("x", "b")
        result = question.ask(ui)

        assert result.score == pytest.approx(0.5)
        assert ui.count("prompt") == 1


class TestMultipleChoice:
    """Test multiple choice questions."""

    @pytest.fixture
    def question(self):
        return MultipleChoiceQuestion(
            text="Largest planet?",
            answer=("Jupiter",),
            common=common(),
            choices=["Saturn", "Neptune", "Uranus", "Mars", "Venus"],
        )

    def _options(self, ui):
        return next(e[1] for e in ui.events if e[0] == "choices")

    def test_at_most_four_options(self, question, make_ui, rng):
        ui = make_ui()
        question.ask(ui, rng)
        options = self._options(ui)

        assert len(options) == 4
        assert "Jupiter" in options
        assert set(options) - {"Jupiter"} <= set(question.choices)
        assert len(set(options)) == 4

    def test_few_distractors(self, make_ui, rng):
        question = MultipleChoiceQuestion("Q", ("yes",), common(), choices=["no"])
        ui = make_ui()
        question.ask(ui, rng)
        assert sorted(self._options(ui)) == ["no", "yes"]

    def test_correct_letter(self, question, make_ui, rng):
        options, correct = question.build_options(rng)
        letter = option_label(options.index(correct))

        # Same seed replays the same draw inside ask().
        rng.seed(1234)
        ui = make_ui(letter.upper())
        result = question.ask(ui, rng)

        assert result.score == 1.0
        assert result.response == "Jupiter"
        assert ("correct",) in ui.events

    def test_incorrect_letter(self, question, make_ui, rng):
        options, correct = question.build_options(rng)
        wrong = next(i for i, o in enumerate(options) if o != correct)

        rng.seed(1234)
        ui = make_ui(option_label(wrong))
        result = question.ask(ui, rng)

        assert result.score == 0.0
        assert result.response == options[wrong]
        assert ("incorrect", "Jupiter") in ui.events

    def test_malformed_input_reprompts(self, question, make_ui, rng):
        options, correct = question.build_options(rng)
        letter = option_label(options.index(correct))

        rng.seed(1234)
        ui = make_ui("jupiter", "z", "", "ab", letter)
        result = question.ask(ui, rng)

        assert result.score == 1.0
        assert ui.count("incorrect") == 0

    def test_no_input(self, question, make_ui, rng):
        ui = make_ui()
        result = question.ask(ui, rng)

        assert result.score == 0.0
        assert result.response is None
        assert ui.events[-1] == ("score", 0.0, False)

    def test_picks_a_variant_of_the_answer(self, make_ui, rng):
        question = MultipleChoiceQuestion("Q", ("Everest", "Mount Everest"), common(), choices=["K2"])
        ui = make_ui()
        question.ask(ui, rng)
        options = self._options(ui)
        assert len(set(options) & {"Everest", "Mount Everest"}) == 1

    def test_timed(self, make_ui, rng):
        question = MultipleChoiceQuestion("Q", ("yes",), common(), choices=["no"], timeout=2)
        options, correct = question.build_options(rng)

        rng.seed(1234)
        ui = make_ui(option_label(options.index(correct)), elapsed=timedelta(seconds=5))
        result = question.ask(ui, rng)

        assert question.timed is True
        assert result.score == 0.0
        assert ui.events[-1] == ("score", 0.0, True)

    def test_parse_choice(self):
        assert parse_choice("a", 4) == 0
        assert parse_choice(" D ", 4) == 3
        assert parse_choice("e", 4) is None
        assert parse_choice("1", 4) is None
        assert parse_choice("ab", 4) is None


class TestQuestionType:
    """Test the question type lookup."""

    def test_each_parsed_type(self, sample_quiz_text):
        types = [question_type(q) for q in parse(sample_quiz_text)]
        assert types == [
            QuestionType.SHORT_ANSWER,
            QuestionType.FLASHCARD,
            QuestionType.LIST,
            QuestionType.ORDERED_LIST,
            QuestionType.MULTIPLE_CHOICE,
        ]

    def test_not_a_question(self):
        with pytest.raises(TypeError):
            question_type("not a question")
