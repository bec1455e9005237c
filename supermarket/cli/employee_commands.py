"""Employee management CLI commands."""

import typer
from rich.table import Table

from supermarket.core.services.employee_service import EmployeeService

from .utils import (
    console,
    fail_on,
    format_salary,
    open_session,
    prompt_non_negative_int,
    prompt_text,
    report,
)

employee_app = typer.Typer(help="Employees and payroll")


@employee_app.command("add")
def add_employee(
    code: str | None = typer.Option(None, "--code", "-c", help="Four-character employee code"),
    name: str | None = typer.Option(None, "--name", "-n", help="Name (max 30)"),
    salary: int | None = typer.Option(None, "--salary", "-s", help="Annual salary", min=0),
    section: str | None = typer.Option(None, "--section", help="Two-character section code"),
) -> None:
    """Insert a new employee."""
    code = code if code is not None else prompt_text("Employee code", 4, 4)
    name = name if name is not None else prompt_text("Name", 0, 30)
    salary = salary if salary is not None else prompt_non_negative_int("Annual salary")
    section = section if section is not None else prompt_text("Section code", 2, 2)

    with open_session() as session:
        outcome = EmployeeService(session).insert_employee(code, name, salary, section)
    report(outcome, "Employee added.", "Could not insert the employee.")


@employee_app.command("show")
def show_employee(
    code: str | None = typer.Option(None, "--code", "-c", help="Four-character employee code"),
) -> None:
    """Show one employee."""
    code = code if code is not None else prompt_text("Employee code", 4, 4)
    with open_session() as session:
        outcome = EmployeeService(session).get_employee(code)
    fail_on(outcome)

    employee = outcome.value
    console.print("\n--- Employee details ---")
    console.print(f"ID: {employee.id}")
    console.print(f"Name: {employee.name}")
    console.print(f"Annual salary: {format_salary(employee.salary)}")
    console.print(f"Section: {employee.section_id} - {employee.section_description}")


@employee_app.command("list")
def list_employees(
    section: str | None = typer.Option(None, "--section", help="Only this section (blank for all)"),
) -> None:
    """List employees, optionally for one section."""
    section = section if section is not None else prompt_text("Section code (blank for all)", 0, 2)
    with open_session() as session:
        employees = EmployeeService(session).list_employees(section)

    if not employees:
        console.print("[red]No employees match the search.[/red]")
        return

    table = Table(title="Employees")
    table.add_column("CODE", style="cyan")
    table.add_column("NAME")
    table.add_column("ANNUAL SALARY", justify="right")
    table.add_column("SECTION")
    for employee in employees:
        table.add_row(
            employee.id,
            employee.name,
            format_salary(employee.salary),
            employee.section_description,
        )
    console.print(table)


@employee_app.command("delete")
def delete_employee(
    code: str | None = typer.Option(None, "--code", "-c", help="Four-character employee code"),
) -> None:
    """Delete an employee."""
    code = code if code is not None else prompt_text("Employee code", 4, 4)
    with open_session() as session:
        outcome = EmployeeService(session).delete_employee(code)
    report(outcome, "Employee deleted.", "Could not delete the employee.")


@employee_app.command("update")
def update_employee(
    code: str | None = typer.Option(None, "--code", "-c", help="Four-character employee code"),
    name: str | None = typer.Option(None, "--name", "-n", help="New name, empty keeps it"),
    salary: int | None = typer.Option(None, "--salary", "-s", help="New salary, 0 keeps it", min=0),
    section: str | None = typer.Option(None, "--section", help="New section, empty keeps it"),
) -> None:
    """Change an employee. Blank name/section and a salary of 0 keep the current value."""
    code = code if code is not None else prompt_text("Employee code", 4, 4)

    with open_session() as session:
        current = EmployeeService(session).get_employee(code)
    fail_on(current)
    employee = current.value

    if name is None:
        console.print(f"Current name: {employee.name}")
        name = prompt_text("New name (Enter keeps it)", 0, 30)
    if salary is None:
        console.print(f"Current annual salary: {format_salary(employee.salary)}")
        salary = prompt_non_negative_int("New annual salary (0 keeps it)")
    if section is None:
        console.print(f"Current section: {employee.section_id} - {employee.section_description}")
        section = prompt_text("New section (Enter keeps it)", 0, 2)

    with open_session() as session:
        outcome = EmployeeService(session).update_employee(code, name, salary, section)
    report(outcome, "Employee updated.", "Could not update the employee.")
