"""
Terminal UI for popquiz, built on rich.

Implements the QuizUI protocol used by questions and sessions.
"""

from __future__ import annotations

import time
from datetime import timedelta

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.style import Style
from rich.table import Table

from popquiz.errors import QuizInterrupted
from popquiz.questions import QuestionResult, QuizResult
from popquiz.questions.mcq import option_label

THEME = {
    "primary": "cyan",
    "success": "green",
    "warning": "yellow",
    "error": "red",
    "dim": "bright_black",
}

STYLES = {
    "success": Style(color=THEME["success"], bold=True),
    "warning": Style(color=THEME["warning"], bold=True),
    "error": Style(color=THEME["error"], bold=True),
    "dim": Style(color=THEME["dim"]),
}

INPUT_PROMPT = "[cyan]>[/cyan] "


def format_score(score: float) -> str:
    return f"{score * 100:.1f}%"


class TerminalUI:
    """Interactive console front end for taking a quiz."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()
        self._prompted_at = time.monotonic()

    def show_instructions(self, text: str) -> None:
        self.console.print(
            Panel(escape(text), title="[bold]INSTRUCTIONS[/bold]", border_style=THEME["primary"])
        )

    def warn(self, text: str) -> None:
        self.console.print(f"[bold yellow]Warning:[/bold yellow] {text}")

    def show_prompt(self, text: str, context: str | None = None) -> None:
        body = escape(text)
        if context:
            body += f" [dim]\\[{escape(context)}][/dim]"
        self.console.print()
        self.console.print(
            Panel(body, border_style=THEME["primary"], box=box.HEAVY, padding=(0, 2))
        )
        self._prompted_at = time.monotonic()

    def read_response(self) -> str | None:
        """Blank input and end of input both mean no answer."""
        try:
            response = self.console.input(INPUT_PROMPT)
        except EOFError:
            self.console.print()
            return None
        except KeyboardInterrupt:
            self.console.print()
            raise QuizInterrupted() from None

        return response.strip() or None

    def show_correct(self) -> None:
        self.console.print("Correct!", style=STYLES["success"])

    def show_incorrect(self, expected: str | None = None) -> None:
        if expected is not None:
            self.console.print(
                f"[bold red]Incorrect.[/bold red] The correct answer was [bold]{escape(expected)}[/bold]."
            )
        else:
            self.console.print("Incorrect.", style=STYLES["error"])

    def show_repeat(self) -> None:
        self.console.print("You already said that.", style=STYLES["warning"])

    def show_no_credit(self) -> None:
        self.console.print("No credit.", style=STYLES["warning"])

    def show_missed(self, missed: list[str]) -> None:
        self.console.print(f"[bold red]You missed:[/bold red] {escape(', '.join(missed))}")

    def show_score(self, score: float, timed_out: bool) -> None:
        message = f"Score for this question: {format_score(score)}"
        if timed_out:
            message += " [yellow](exceeded time limit)[/yellow]"
        self.console.print(message, style=STYLES["dim"])

    def show_choices(self, choices: list[str]) -> None:
        table = Table(box=box.MINIMAL, show_header=False)
        table.add_column("Label", style=THEME["primary"], justify="right", width=4)
        table.add_column("Option")
        for i, choice in enumerate(choices):
            table.add_row(f"({option_label(i)})", escape(choice))
        self.console.print(table)

    def elapsed_since_last_prompt(self) -> timedelta:
        return timedelta(seconds=time.monotonic() - self._prompted_at)

    def show_results(self, result: QuizResult) -> None:
        table = Table(box=box.SIMPLE, show_header=False)
        table.add_column("Label", style="bold")
        table.add_column("Value", justify="right")
        table.add_row("Score", f"{result.score:.1f}%")
        table.add_row("Correct", f"{result.total_correct}/{result.total}", style=THEME["success"])
        table.add_row("Partially correct", str(result.total_partially_correct), style=THEME["warning"])
        table.add_row("Incorrect", str(result.total_incorrect), style=THEME["error"])

        self.console.print()
        self.console.print(
            Panel(table, title="[bold]RESULTS[/bold]", border_style=THEME["primary"], box=box.HEAVY)
        )


def history_table(history: dict[str, list[QuestionResult]]) -> Table:
    """Per-question summary of stored results, weakest questions first."""
    table = Table(box=box.SIMPLE_HEAVY)
    table.add_column("Question", style="white")
    table.add_column("Asked", justify="right")
    table.add_column("Average", justify="right")
    table.add_column("Last", justify="right")
    table.add_column("Last asked", style=THEME["dim"])

    rows = []
    for qid, results in history.items():
        if not results:
            continue
        average = sum(r.score for r in results) / len(results)
        last = max(results, key=lambda r: r.time_asked)
        rows.append((average, qid, len(results), last))

    for average, qid, count, last in sorted(rows, key=lambda row: (row[0], row[1])):
        table.add_row(
            escape(qid),
            str(count),
            format_score(average),
            format_score(last.score),
            last.time_asked.strftime("%Y-%m-%d %H:%M"),
        )
    return table
