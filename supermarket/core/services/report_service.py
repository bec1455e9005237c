"""Aggregate reports over products and employees.

Sorting only ever uses a column name from a fixed allow-list; nothing the
user types reaches the ORDER BY clause unchecked.
"""

from decimal import ROUND_HALF_UP, Decimal

from loguru import logger
from sqlalchemy import Integer, cast, func, or_
from sqlmodel import Session

from supermarket.core.models.outcome import ErrorKind, Outcome, problem
from supermarket.core.repositories.repository import Repository
from supermarket.core.services.product_service import CENT
from supermarket.entities.employee.entity import Employee
from supermarket.entities.employee.table import EmployeeTable
from supermarket.entities.product.entity import Product
from supermarket.entities.product.table import ProductTable
from supermarket.entities.section.entity import Section

PRODUCT_ORDER_FIELDS = ("id", "description", "price", "stock", "section_id")
EMPLOYEE_ORDER_FIELDS = ("name", "id", "section_id", "salary")

# Stored prices are NUMERIC(10, 2): at most 8 digits before the point
PRICE_CEILING = 10**8


class ReportService:
    def __init__(self, db_session: Session):
        self._products = Repository(db_session, Product)
        self._employees = Repository(db_session, Employee)
        self._sections = Repository(db_session, Section)

    def products_ordered_by(self, field: str) -> Outcome[list[Product]]:
        if field not in PRODUCT_ORDER_FIELDS:
            return Outcome.invalid(f"Invalid sort field for products: {field}")
        return Outcome.success(self._products.list_all(order_by=field))

    def employees_ordered_by(self, field: str) -> Outcome[list[Employee]]:
        if field not in EMPLOYEE_ORDER_FIELDS:
            return Outcome.invalid(f"Invalid sort field for employees: {field}")
        return Outcome.success(self._employees.list_all(order_by=field))

    def stock_value_total(self) -> Outcome[Decimal]:
        """Sum of price x stock over the whole catalogue.

        The value is ``None`` when there is nothing to add up.
        """
        total = self._products.sum_of(ProductTable.price * ProductTable.stock)
        return Outcome.success(_as_money(total))

    def stock_value_for_section(self, section_id: str) -> Outcome[Decimal]:
        """Sum of price x stock for one section; ``None`` when it has no products."""
        section = self._sections.find(section_id)
        if section is None:
            return _missing_section(section_id)

        total = self._products.sum_of(
            ProductTable.price * ProductTable.stock,
            ProductTable.section_id == section_id,
        )
        return Outcome.success(_as_money(total))

    def products_in_section(self, section_id: str) -> Outcome[list[Product]]:
        if self._sections.find(section_id) is None:
            return _missing_section(section_id)
        return Outcome.success(
            self._products.list_where(ProductTable.section_id == section_id, order_by="description")
        )

    def employees_in_section(self, section_id: str) -> Outcome[list[Employee]]:
        if self._sections.find(section_id) is None:
            return _missing_section(section_id)
        return Outcome.success(
            self._employees.list_where(EmployeeTable.section_id == section_id, order_by="name")
        )

    def raise_prices(self, section_id: str, percentage: Decimal | float) -> Outcome[int]:
        """Raise every price in a section by ``percentage`` percent.

        The percentage is not range-checked, so a negative value lowers prices.
        Nothing is written when any resulting price would be negative or too
        large to store.
        """
        section = self._sections.find(section_id)
        if section is None:
            return _missing_section(section_id)

        rate = float(percentage)
        new_price = func.round(ProductTable.price + ProductTable.price * rate / 100, 2)
        in_section = ProductTable.section_id == section_id
        out_of_range = self._products.count_where(in_section, or_(new_price < 0, new_price >= PRICE_CEILING))
        if out_of_range:
            logger.warning(
                "Raising section {} by {}% leaves {} prices out of range", section_id, percentage, out_of_range
            )
            return Outcome.invalid(
                f"Raising prices in section [{section.description}] by {percentage}% would leave "
                f"{out_of_range} price(s) below 0 or above {PRICE_CEILING - 1}.99; nothing was changed."
            )

        affected = self._products.update_where({"price": new_price}, in_section)
        return _bulk_outcome(affected, section, "products")

    def raise_salaries(self, section_id: str, percentage: Decimal | float) -> Outcome[int]:
        """Raise every salary in a section by a positive ``percentage``."""
        section = self._sections.find(section_id)
        if section is None:
            return _missing_section(section_id)
        if percentage <= 0:
            return Outcome.invalid("The raise percentage must be a positive value.")

        rate = float(percentage)
        affected = self._employees.update_where(
            {
                "salary": cast(
                    func.round(EmployeeTable.salary + EmployeeTable.salary * rate / 100),
                    Integer,
                )
            },
            EmployeeTable.section_id == section_id,
        )
        return _bulk_outcome(affected, section, "employees")


def _as_money(total: object) -> Decimal | None:
    if total is None:
        return None
    return Decimal(str(total)).quantize(CENT, rounding=ROUND_HALF_UP)


def _missing_section(section_id: str) -> Outcome:
    return Outcome.failure(
        problem(ErrorKind.NOT_FOUND, f"Section '{section_id}' does not exist.")
    )


def _bulk_outcome(affected: int, section: Section, noun: str) -> Outcome[int]:
    if affected < 0:
        return Outcome.failure(
            problem(ErrorKind.STORE_FAILURE, f"Updating the {noun} of section [{section.description}] failed.")
        )
    if affected == 0:
        logger.info("Section {} has no {} to update", section.id, noun)
        return Outcome(
            ok=False,
            value=0,
            problems=[
                problem(
                    ErrorKind.NOT_FOUND,
                    f"Section [{section.description}] has no {noun} or they could not be updated.",
                )
            ],
        )
    return Outcome.success(affected)
