"""Database maintenance commands."""

import typer
from rich.prompt import Confirm

from supermarket.core.services.database import DbManageService, DbSessionService
from supermarket.runtime.context import get_config

from .utils import console

db_app = typer.Typer(help="Database maintenance")


@db_app.command("init")
def init_db() -> None:
    """Create the section, product and employee tables."""
    db = DbSessionService()
    try:
        manager = DbManageService(db.engine)
        manager.create_all()
        console.print(f"[green]✅ Tables ready: {', '.join(manager.table_names())}[/green]")
    finally:
        db.dispose()


@db_app.command("reset")
def reset_db(
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation prompt"),
) -> None:
    """Drop and recreate every table."""
    url = get_config().database.url
    if not force and not Confirm.ask(f"Delete ALL data in {url}?", console=console):
        console.print("[yellow]Reset cancelled[/yellow]")
        return

    db = DbSessionService()
    try:
        manager = DbManageService(db.engine)
        manager.drop_all()
        manager.create_all()
    finally:
        db.dispose()
    console.print("[green]✅ Database reset[/green]")


@db_app.command("check")
def check_db() -> None:
    """Check that the database answers."""
    db = DbSessionService()
    try:
        healthy = db.health_check()
    finally:
        db.dispose()

    if not healthy:
        console.print("[red]❌ Database is not reachable[/red]")
        raise typer.Exit(code=1)
    console.print("[green]✅ Database is reachable[/green]")
