"""Main CLI application module."""

import typer

from supermarket.runtime.app_startup import configure_logging

from .db_commands import db_app
from .employee_commands import employee_app
from .menu import run_menu
from .product_commands import product_app
from .report_commands import report_app
from .section_commands import section_app

# Create the main CLI application
app = typer.Typer(
    help="🛒 Supermarket - sections, products, employees and stock",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# Register command groups
app.add_typer(section_app, name="section")
app.add_typer(product_app, name="product")
app.add_typer(employee_app, name="employee")
app.add_typer(report_app, name="report")
app.add_typer(db_app, name="db")


@app.callback()
def setup(
    log_level: str | None = typer.Option(None, "--log-level", help="Override the configured log level"),
) -> None:
    configure_logging(log_level)


@app.command("menu")
def menu() -> None:
    """Interactive menu with every action."""
    run_menu()


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
