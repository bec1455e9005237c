"""Shared utilities for CLI commands: console, bounded prompts, rendering."""

from collections.abc import Iterator
from contextlib import contextmanager
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

import typer
from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt
from sqlmodel import Session

from supermarket.core.models.outcome import Outcome
from supermarket.core.services.database import DbManageService, DbSessionService

console = Console(highlight=False)

RULE = "-" * 45


def prompt_text(label: str, min_length: int = 0, max_length: int = 255, default: str | None = None) -> str:
    """Ask until the answer has between ``min_length`` and ``max_length`` characters."""
    while True:
        answer = Prompt.ask(f"[cyan]{label}", default=default or "", show_default=bool(default), console=console)
        if min_length <= len(answer) <= max_length:
            return answer
        if min_length == max_length:
            console.print(f"[red]Exactly {min_length} characters are required.[/red]")
        else:
            console.print(f"[red]Between {min_length} and {max_length} characters are required.[/red]")


def prompt_non_negative_int(label: str) -> int:
    """Ask for a whole number >= 0."""
    while True:
        answer = Prompt.ask(f"[cyan]{label}", console=console).strip()
        try:
            value = int(answer)
        except ValueError:
            console.print("[red]Enter a whole number.[/red]")
            continue
        if value >= 0:
            return value
        console.print("[red]The number cannot be negative.[/red]")


def prompt_non_negative_decimal(label: str, places: int = 2) -> Decimal:
    """Ask for a number >= 0, rounded to ``places`` decimals."""
    quantum = Decimal(1).scaleb(-places)
    while True:
        answer = Prompt.ask(f"[cyan]{label}", console=console).strip().replace(",", ".")
        try:
            value = Decimal(answer)
        except InvalidOperation:
            console.print("[red]Enter a number.[/red]")
            continue
        if value.is_finite() and value >= 0:
            return value.quantize(quantum, rounding=ROUND_HALF_UP)
        console.print("[red]The number cannot be negative.[/red]")


def format_money(value: Decimal) -> str:
    return f"{value:,.2f}€"


def format_salary(value: int) -> str:
    return f"{value:,d}€"


def print_ok(message: str) -> None:
    console.print(f"[green]OK: {escape(message)}[/green]")


def print_error(message: str) -> None:
    console.print(f"[red]ERROR: {escape(message)}[/red]")


def report(outcome: Outcome, success_message: str, failure_message: str) -> None:
    """Print an outcome between rules; exit with status 1 if it failed."""
    console.print(RULE)
    for warning in outcome.warnings:
        console.print(f"[yellow]  --> {escape(warning)}[/yellow]")
    if outcome.ok:
        print_ok(success_message)
        console.print(RULE)
        return

    print_error(failure_message)
    for problem in outcome.problems:
        console.print(f"[red]  --> {escape(problem.message)}[/red]")
    console.print(RULE)
    raise typer.Exit(code=1)


def fail_on(outcome: Outcome) -> None:
    """Print the problems of a failed read-only outcome and exit."""
    if outcome.ok:
        return
    for problem in outcome.problems:
        print_error(problem.message)
    raise typer.Exit(code=1)


@contextmanager
def open_session() -> Iterator[Session]:
    """Session for one console action, creating the schema on first use."""
    db = DbSessionService()
    DbManageService(db.engine).create_all()
    try:
        with db.session_scope() as session:
            yield session
    finally:
        db.dispose()
