"""Reports: sorted listings, stock valuation and bulk raises."""

import typer
from rich.table import Table

from supermarket.core.services.report_service import (
    EMPLOYEE_ORDER_FIELDS,
    PRODUCT_ORDER_FIELDS,
    ReportService,
)

from .utils import (
    console,
    fail_on,
    format_money,
    open_session,
    print_error,
    prompt_non_negative_decimal,
    prompt_text,
    report,
)

report_app = typer.Typer(help="Stock valuation, sorted listings and bulk raises")


@report_app.command("products-by")
def products_by(
    field: str = typer.Argument(..., help=f"One of: {', '.join(PRODUCT_ORDER_FIELDS)}"),
) -> None:
    """List every product sorted by a column."""
    with open_session() as session:
        outcome = ReportService(session).products_ordered_by(field)
    fail_on(outcome)

    table = Table(title=f"Products sorted by {field}")
    table.add_column("CODE", style="cyan")
    table.add_column("DESCRIPTION")
    table.add_column("PRICE", justify="right")
    table.add_column("STOCK", justify="right")
    table.add_column("SECTION")
    for product in outcome.value:
        table.add_row(product.id, product.description, f"{product.price:.2f}", str(product.stock), product.section_id)
    console.print(table)


@report_app.command("employees-by")
def employees_by(
    field: str = typer.Argument(..., help=f"One of: {', '.join(EMPLOYEE_ORDER_FIELDS)}"),
) -> None:
    """List every employee sorted by a column."""
    with open_session() as session:
        outcome = ReportService(session).employees_ordered_by(field)
    fail_on(outcome)

    if not outcome.value:
        console.print("[red]There are no employees in the database.[/red]")
        return

    table = Table(title=f"Employees sorted by {field}")
    table.add_column("CODE", style="cyan")
    table.add_column("NAME")
    table.add_column("ANNUAL SALARY", justify="right")
    table.add_column("SECTION")
    for employee in outcome.value:
        table.add_row(employee.id, employee.name, str(employee.salary), employee.section_id)
    console.print(table)


@report_app.command("stock-value")
def stock_value(
    section: str | None = typer.Option(None, "--section", help="Only this section"),
) -> None:
    """Value of the stock (price x units), total or for one section."""
    with open_session() as session:
        service = ReportService(session)
        outcome = service.stock_value_for_section(section) if section else service.stock_value_total()
    fail_on(outcome)

    label = f"Stock value of section {section}:" if section else "Stock value of the whole supermarket:"
    if outcome.value is None:
        console.print(f"{label} no products.")
    else:
        console.print(f"{label} {format_money(outcome.value)}")


@report_app.command("section-products")
def section_products(
    section: str | None = typer.Option(None, "--section", help="Two-character section code"),
) -> None:
    """Products of one section sorted by description."""
    section = section if section is not None else prompt_text("Section code", 2, 2)
    with open_session() as session:
        outcome = ReportService(session).products_in_section(section)
    fail_on(outcome)

    if not outcome.value:
        print_error("There are no products in this section.")
        return

    table = Table(title=f"Products of section {section}")
    table.add_column("DESCRIPTION")
    table.add_column("PRICE", justify="right")
    table.add_column("STOCK", justify="right")
    for product in outcome.value:
        table.add_row(product.description, f"{product.price:.2f}", str(product.stock))
    console.print(table)


@report_app.command("section-employees")
def section_employees(
    section: str | None = typer.Option(None, "--section", help="Two-character section code"),
) -> None:
    """Employees of one section sorted by name."""
    section = section if section is not None else prompt_text("Section code", 2, 2)
    with open_session() as session:
        outcome = ReportService(session).employees_in_section(section)
    fail_on(outcome)

    if not outcome.value:
        print_error("There are no employees in this section.")
        return

    table = Table(title=f"Employees of section {section}")
    table.add_column("CODE", style="cyan")
    table.add_column("NAME")
    table.add_column("ANNUAL SALARY", justify="right")
    for employee in outcome.value:
        table.add_row(employee.id, employee.name, str(employee.salary))
    console.print(table)


@report_app.command("raise-prices")
def raise_prices(
    section: str | None = typer.Option(None, "--section", help="Two-character section code"),
    percentage: float | None = typer.Option(None, "--percentage", "-p", help="Percentage to add"),
) -> None:
    """Raise every price of a section by a percentage."""
    section = section if section is not None else prompt_text("Section code", 2, 2)
    percentage = percentage if percentage is not None else prompt_non_negative_decimal("Percentage")
    with open_session() as session:
        outcome = ReportService(session).raise_prices(section, percentage)
    report(outcome, f"{outcome.value or 0} product prices updated.", "Prices were not updated.")


@report_app.command("raise-salaries")
def raise_salaries(
    section: str | None = typer.Option(None, "--section", help="Two-character section code"),
    percentage: float | None = typer.Option(None, "--percentage", "-p", help="Percentage to add"),
) -> None:
    """Raise every salary of a section by a positive percentage."""
    section = section if section is not None else prompt_text("Section code", 2, 2)
    percentage = percentage if percentage is not None else prompt_non_negative_decimal("Percentage")
    with open_session() as session:
        outcome = ReportService(session).raise_salaries(section, percentage)
    report(outcome, f"{outcome.value or 0} salaries updated.", "Salaries were not updated.")
