"""
popquiz CLI - take quizzes from the command line.

Usage:
    popquiz take capitals             # Take a quiz
    popquiz take capitals -n 10 -t europe --flip
    popquiz count capitals            # How many questions
    popquiz results capitals          # Per-question history
    popquiz ls                        # List quizzes
    popquiz edit capitals             # Open in $EDITOR
    popquiz path capitals             # Where the file lives
    popquiz rm capitals               # Delete quiz and results
    popquiz mv capitals world         # Rename quiz and results
"""

from __future__ import annotations

from collections import Counter
from contextlib import contextmanager
from pathlib import Path
from typing import Annotated, Iterator

import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from popquiz.config import Settings, configure_logging, get_settings
from popquiz.errors import QuizError
from popquiz.options import TakeOptions
from popquiz.parser import load_quiz_file
from popquiz.questions import question_type
from popquiz.selection import filter_questions
from popquiz.session import take_quiz
from popquiz.store import QuizStore
from popquiz.ui import TerminalUI, history_table

# =============================================================================
# CLI Setup
# =============================================================================

app = typer.Typer(
    name="popquiz",
    help="Take pop quizzes from the command line.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()


@contextmanager
def _handle_errors() -> Iterator[None]:
    """Report popquiz errors and exit with status 2."""
    try:
        yield
    except QuizError as e:
        logger.debug(f"{type(e).__name__}: {e}")
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}", highlight=False)
        raise typer.Exit(code=2) from None


def _store(ctx: typer.Context) -> QuizStore:
    settings: Settings = ctx.obj
    return QuizStore(settings.data_dir, settings.results_dirname)


@app.callback()
def main(
    ctx: typer.Context,
    data_dir: Annotated[
        Path | None,
        typer.Option("--data-dir", envvar="POPQUIZ_DATA_DIR", help="Directory holding quizzes"),
    ] = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Log debug output to stderr")
    ] = False,
) -> None:
    """Load settings and configure logging for every command."""
    settings = get_settings()
    updates: dict = {}
    if data_dir is not None:
        updates["data_dir"] = data_dir
    if verbose:
        updates["log_level"] = "DEBUG"
    if updates:
        settings = settings.model_copy(update=updates)

    configure_logging(settings)
    ctx.obj = settings


# =============================================================================
# Quiz Commands
# =============================================================================


@app.command()
def take(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Name of the quiz")],
    num: Annotated[
        int | None, typer.Option("--num", "-n", min=1, help="Ask at most this many questions")
    ] = None,
    tag: Annotated[
        list[str] | None, typer.Option("--tag", "-t", help="Only questions with this tag")
    ] = None,
    exclude: Annotated[
        list[str] | None, typer.Option("--exclude", "-x", help="Skip questions with this tag")
    ] = None,
    never: Annotated[
        bool, typer.Option("--never", help="Only questions never asked before")
    ] = False,
    in_order: Annotated[
        bool, typer.Option("--in-order", help="Ask in file order instead of shuffling")
    ] = False,
    flip: Annotated[
        bool, typer.Option("--flip", help="Show the back of flashcards and ask for the front")
    ] = False,
    save: Annotated[
        bool, typer.Option("--save/--no-save", help="Record the results")
    ] = True,
) -> None:
    """
    Take a quiz.

    Press Ctrl+C to stop early; answers given so far still count.
    """
    options = TakeOptions(
        num=num,
        tags=tag or [],
        exclude=exclude or [],
        never=never,
        in_order=in_order,
        flip=flip,
        save=save,
    )

    with _handle_errors():
        store = _store(ctx)
        quiz = store.load_quiz(name)
        result = take_quiz(quiz, TerminalUI(console), options)

        if options.save and result.total:
            store.save_results(name, result)


@app.command()
def count(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Name of the quiz")],
    tag: Annotated[
        list[str] | None, typer.Option("--tag", "-t", help="Only count questions with this tag")
    ] = None,
    by_type: Annotated[
        bool, typer.Option("--by-type", help="Break the count down by question type")
    ] = False,
) -> None:
    """Count the questions in a quiz."""
    with _handle_errors():
        quiz = load_quiz_file(_store(ctx).require(name))
        questions = filter_questions(quiz.questions, TakeOptions(tags=tag or []))

    if not by_type:
        console.print(str(len(questions)), highlight=False)
        return

    counts = Counter(question_type(q).value for q in questions)
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Type")
    table.add_column("Count", justify="right")
    for qtype, n in sorted(counts.items()):
        table.add_row(qtype, str(n))
    table.add_row("[bold]total[/bold]", f"[bold]{len(questions)}[/bold]")
    console.print(table)


@app.command()
def results(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Name of the quiz")],
) -> None:
    """Show past results for each question of a quiz."""
    with _handle_errors():
        store = _store(ctx)
        store.require(name)
        history = store.load_results(name)

    if not history:
        console.print("[dim]No results yet.[/dim]")
        return
    console.print(history_table(history))


# =============================================================================
# File Commands
# =============================================================================


@app.command("ls")
def list_quizzes(ctx: typer.Context) -> None:
    """List all quizzes."""
    for name in _store(ctx).list_quizzes():
        console.print(name, highlight=False, markup=False)


@app.command()
def path(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Name of the quiz")],
) -> None:
    """Print the path to a quiz file (it need not exist yet)."""
    console.print(str(_store(ctx).quiz_path(name)), highlight=False, markup=False, soft_wrap=True)


@app.command()
def edit(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Name of the quiz")],
) -> None:
    """Open a quiz in your editor, creating it if necessary."""
    settings: Settings = ctx.obj
    quiz_path = _store(ctx).quiz_path(name)
    typer.edit(filename=str(quiz_path), editor=settings.editor)

    if quiz_path.exists():
        with _handle_errors():
            quiz = load_quiz_file(quiz_path)
        console.print(f"[green]{len(quiz.questions)} questions in '{escape(name)}'[/green]")


@app.command()
def rm(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Name of the quiz")],
    force: Annotated[
        bool, typer.Option("--force", "-f", help="Do not ask for confirmation")
    ] = False,
) -> None:
    """Delete a quiz and its results."""
    with _handle_errors():
        store = _store(ctx)
        store.require(name)
        if not force and not typer.confirm(f"Delete quiz '{name}' and its results?"):
            raise typer.Abort()
        store.remove_quiz(name)
    console.print(f"Removed '{name}'.", highlight=False)


@app.command()
def mv(
    ctx: typer.Context,
    old: Annotated[str, typer.Argument(help="Current name")],
    new: Annotated[str, typer.Argument(help="New name")],
) -> None:
    """Rename a quiz and its results."""
    with _handle_errors():
        _store(ctx).move_quiz(old, new)
    console.print(f"Renamed '{old}' to '{new}'.", highlight=False)


def run() -> None:
    """Console-script entry point."""
    app()


if __name__ == "__main__":
    run()
