"""Interactive menu over the same commands the CLI exposes."""

from collections.abc import Callable
from functools import partial

import typer
from rich.prompt import Prompt

from . import employee_commands, product_commands, report_commands, section_commands
from .utils import RULE, console, prompt_text

PRODUCT_SORT_PROMPT = "Sort products by (id, description, price, stock, section_id)"
EMPLOYEE_SORT_PROMPT = "Sort employees by (name, id, section_id, salary)"


def _sorted_products() -> None:
    report_commands.products_by(prompt_text(PRODUCT_SORT_PROMPT, 1, 20))


def _sorted_employees() -> None:
    report_commands.employees_by(prompt_text(EMPLOYEE_SORT_PROMPT, 1, 20))


def _stock_value() -> None:
    section = prompt_text("Section code (blank for the whole supermarket)", 0, 2)
    report_commands.stock_value(section or None)


# Commands are called directly, so every Typer option is passed explicitly as None.
MENU: list[tuple[str, Callable[[], None]]] = [
    ("Insert section", partial(section_commands.add_section, None, None)),
    ("List sections", section_commands.list_sections),
    ("Delete section", partial(section_commands.delete_section, None, False)),
    ("Update section", partial(section_commands.update_section, None, None)),
    ("Insert product", partial(product_commands.add_product, None, None, None, None, None)),
    ("Show product", partial(product_commands.show_product, None)),
    ("List products", partial(product_commands.list_products, None)),
    ("Delete product", partial(product_commands.delete_product, None)),
    ("Update product", partial(product_commands.update_product, None, None, None, None, None)),
    ("Insert employee", partial(employee_commands.add_employee, None, None, None, None)),
    ("Show employee", partial(employee_commands.show_employee, None)),
    ("List employees", partial(employee_commands.list_employees, None)),
    ("Delete employee", partial(employee_commands.delete_employee, None)),
    ("Update employee", partial(employee_commands.update_employee, None, None, None, None)),
    ("Products sorted by a column", _sorted_products),
    ("Employees sorted by a column", _sorted_employees),
    ("Stock value", _stock_value),
    ("Products of a section", partial(report_commands.section_products, None)),
    ("Employees of a section", partial(report_commands.section_employees, None)),
    ("Raise prices of a section", partial(report_commands.raise_prices, None, None)),
    ("Raise salaries of a section", partial(report_commands.raise_salaries, None, None)),
]


def show_menu() -> None:
    console.print(RULE)
    console.print("[bold]SUPERMARKET[/bold]")
    console.print(RULE)
    for number, (label, _) in enumerate(MENU, start=1):
        console.print(f"{number:>2}. {label}")
    console.print(" 0. Exit")


def run_menu() -> None:
    """Loop until the user picks 0. A failed action returns to the menu."""
    choices = [str(number) for number in range(len(MENU) + 1)]
    while True:
        show_menu()
        choice = Prompt.ask("[cyan]Option", choices=choices, show_choices=False, console=console)
        if choice == "0":
            console.print("Bye.")
            return

        _, action = MENU[int(choice) - 1]
        try:
            action()
        except typer.Exit:
            pass
