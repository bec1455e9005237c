"""Section management CLI commands."""

import typer
from rich.prompt import Confirm
from rich.table import Table

from supermarket.core.services.section_service import CASCADE_WARNING, SectionService

from .utils import console, fail_on, open_session, prompt_text, report

section_app = typer.Typer(help="Store sections")


@section_app.command("add")
def add_section(
    code: str | None = typer.Option(None, "--code", "-c", help="Two-character section code"),
    description: str | None = typer.Option(None, "--description", "-d", help="Description (max 50)"),
) -> None:
    """Insert a new section."""
    code = code if code is not None else prompt_text("Section code", 2, 2)
    description = description if description is not None else prompt_text("Description", 0, 50)

    with open_session() as session:
        outcome = SectionService(session).insert_section(code, description)
    report(outcome, "Section added.", "Could not insert the section.")


@section_app.command("list")
def list_sections() -> None:
    """List every section."""
    with open_session() as session:
        sections = SectionService(session).list_sections()

    table = Table(title="Sections")
    table.add_column("SECTION", style="cyan")
    table.add_column("DESCRIPTION")
    for section in sections:
        table.add_row(section.id, section.description)
    console.print(table)


@section_app.command("delete")
def delete_section(
    code: str | None = typer.Option(None, "--code", "-c", help="Two-character section code"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation prompt"),
) -> None:
    """Delete a section together with its products."""
    console.print(f"[yellow]{CASCADE_WARNING}[/yellow]")
    code = code if code is not None else prompt_text("Section code", 2, 2)
    if not yes and not Confirm.ask(f"Delete section {code}?", console=console):
        console.print("[yellow]Deletion cancelled[/yellow]")
        return

    with open_session() as session:
        outcome = SectionService(session).delete_section(code)
    report(outcome, "Section deleted.", "Could not delete the section.")


@section_app.command("update")
def update_section(
    code: str | None = typer.Option(None, "--code", "-c", help="Two-character section code"),
    description: str | None = typer.Option(None, "--description", "-d", help="New description, empty keeps it"),
) -> None:
    """Change the description of a section."""
    code = code if code is not None else prompt_text("Section code", 2, 2)

    with open_session() as session:
        current = SectionService(session).get_section(code)
    fail_on(current)

    if description is None:
        console.print(f"Current description: {current.value.description}")
        description = prompt_text("New description (Enter keeps it)", 0, 50)

    with open_session() as session:
        outcome = SectionService(session).update_section(code, description)
    report(outcome, "Section updated.", "Could not update the section.")
