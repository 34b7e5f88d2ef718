"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
"""
import random
import sys
from datetime import timedelta
from pathlib import Path

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "smoke: Smoke tests for CLI commands")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "smoke" in str(item.fspath):
            item.add_marker(pytest.mark.smoke)


class ScriptedUI:
    """
    QuizUI that replays canned responses and records every call.

    Responses run out as end of input (None). An exception in the script is
    raised when reached, e.g. QuizInterrupted() to simulate Ctrl+C.
    `elapsed` is what elapsed_since_last_prompt() reports.
    """

    def __init__(self, responses=(), elapsed=timedelta(0)):
        self.responses = list(responses)
        self.elapsed = elapsed
        self.events = []
        self.results = None

    def names(self):
        return [event[0] for event in self.events]

    def count(self, name):
        return self.names().count(name)

    def show_instructions(self, text):
        self.events.append(("instructions", text))

    def warn(self, text):
        self.events.append(("warn", text))

    def show_prompt(self, text, context=None):
        self.events.append(("prompt", text, context))

    def read_response(self):
        if not self.responses:
            return None
        response = self.responses.pop(0)
        if isinstance(response, BaseException):
            raise response
        return response

    def show_correct(self):
        self.events.append(("correct",))

    def show_incorrect(self, expected=None):
        self.events.append(("incorrect", expected))

    def show_repeat(self):
        self.events.append(("repeat",))

    def show_no_credit(self):
        self.events.append(("no_credit",))

    def show_missed(self, missed):
        self.events.append(("missed", list(missed)))

    def show_score(self, score, timed_out):
        self.events.append(("score", score, timed_out))

    def show_choices(self, choices):
        self.events.append(("choices", list(choices)))

    def elapsed_since_last_prompt(self):
        return self.elapsed

    def show_results(self, result):
        self.events.append(("results", result))
        self.results = result


@pytest.fixture
def make_ui():
    """Factory for scripted UIs."""
    def _make(*responses, elapsed=timedelta(0)):
        return ScriptedUI(responses, elapsed)
    return _make


@pytest.fixture
def rng():
    """Deterministic random source."""
    return random.Random(1234)


@pytest.fixture
def sample_quiz_text():
    """Provide a quiz file exercising every question type."""
    return """\
# Sample quiz
- instructions: Answer every question.

q: What is 2+2?
a: 4/four

Capital of France: Paris/Paris, France
- tag: geography

q: Name the primary colors of light.
a: red
a: green
a: blue
- no-credit: yellow
- tag: science

q: List the first three planets from the sun.
a: Mercury
a: Venus
a: Earth
- ordered: true
- tag: science, astronomy

q: What is the largest planet?
a: Jupiter
- choice: Saturn
- choice: Neptune/Uranus
- choice: Mars
- timeout: 10
- tag: astronomy
"""
