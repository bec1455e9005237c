"""Product management CLI commands."""

import typer
from rich.table import Table

from supermarket.core.services.product_service import ProductService

from .utils import (
    console,
    fail_on,
    open_session,
    prompt_non_negative_decimal,
    prompt_non_negative_int,
    prompt_text,
    report,
)

product_app = typer.Typer(help="Products and stock")


@product_app.command("add")
def add_product(
    code: str | None = typer.Option(None, "--code", "-c", help="Four-character product code"),
    description: str | None = typer.Option(None, "--description", "-d", help="Description (max 40)"),
    price: float | None = typer.Option(None, "--price", "-p", help="Unit price", min=0),
    stock: int | None = typer.Option(None, "--stock", "-s", help="Units in stock", min=0),
    section: str | None = typer.Option(None, "--section", help="Two-character section code"),
) -> None:
    """Insert a new product."""
    code = code if code is not None else prompt_text("Product code", 4, 4)
    description = description if description is not None else prompt_text("Description", 0, 40)
    price = price if price is not None else prompt_non_negative_decimal("Price")
    stock = stock if stock is not None else prompt_non_negative_int("Stock")
    section = section if section is not None else prompt_text("Section code", 2, 2)

    with open_session() as session:
        outcome = ProductService(session).insert_product(code, description, price, stock, section)
    report(outcome, "Product added.", "Could not insert the product.")


@product_app.command("show")
def show_product(
    code: str | None = typer.Option(None, "--code", "-c", help="Four-character product code"),
) -> None:
    """Show one product."""
    code = code if code is not None else prompt_text("Product code", 4, 4)
    with open_session() as session:
        outcome = ProductService(session).get_product(code)
    fail_on(outcome)

    product = outcome.value
    console.print(f"Description: {product.description}")
    console.print(f"Price: {product.price:.2f}")
    console.print(f"Stock: {product.stock}")
    console.print(f"Section: {product.section_id}-{product.section_description}")


@product_app.command("list")
def list_products(
    section: str | None = typer.Option(None, "--section", help="Only this section (blank for all)"),
) -> None:
    """List products, optionally for one section."""
    section = section if section is not None else prompt_text("Section code (blank for all)", 0, 2)
    with open_session() as session:
        products = ProductService(session).list_products(section)

    table = Table(title="Products")
    table.add_column("CODE", style="cyan")
    table.add_column("DESCRIPTION")
    table.add_column("PRICE", justify="right")
    table.add_column("STOCK", justify="right")
    table.add_column("SECTION")
    for product in products:
        table.add_row(
            product.id,
            product.description,
            f"{product.price:.2f}",
            str(product.stock),
            product.section_description,
        )
    console.print(table)


@product_app.command("delete")
def delete_product(
    code: str | None = typer.Option(None, "--code", "-c", help="Four-character product code"),
) -> None:
    """Delete a product."""
    code = code if code is not None else prompt_text("Product code", 4, 4)
    with open_session() as session:
        outcome = ProductService(session).delete_product(code)
    report(outcome, "Product deleted.", "Could not delete the product.")


@product_app.command("update")
def update_product(
    code: str | None = typer.Option(None, "--code", "-c", help="Four-character product code"),
    description: str | None = typer.Option(None, "--description", "-d", help="New description, empty keeps it"),
    price: float | None = typer.Option(None, "--price", "-p", help="New unit price", min=0),
    stock: int | None = typer.Option(None, "--stock", "-s", help="New stock", min=0),
    section: str | None = typer.Option(None, "--section", help="New section, empty keeps it"),
) -> None:
    """Change a product. Price and stock are always replaced."""
    code = code if code is not None else prompt_text("Product code", 4, 4)

    with open_session() as session:
        current = ProductService(session).get_product(code)
    fail_on(current)
    product = current.value

    if description is None:
        console.print(f"Current description: {product.description}")
        description = prompt_text("New description (Enter keeps it)", 0, 40)
    if price is None:
        console.print(f"Current price: {product.price:.2f}")
        price = prompt_non_negative_decimal("New price")
    if stock is None:
        console.print(f"Current stock: {product.stock}")
        stock = prompt_non_negative_int("New stock")
    if section is None:
        console.print(f"Current section code: {product.section_id}")
        section = prompt_text("New section (Enter keeps it)", 0, 2)

    with open_session() as session:
        outcome = ProductService(session).update_product(code, description, price, stock, section)
    report(outcome, "Product updated.", "Could not update the product.")
