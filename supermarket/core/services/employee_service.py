from loguru import logger
from pydantic import TypeAdapter, ValidationError
from sqlmodel import Session

from supermarket.core.models.outcome import ErrorKind, Outcome, problem
from supermarket.core.repositories.repository import Repository
from supermarket.entities._base import EmployeeCode, SectionCode
from supermarket.entities.employee.entity import Employee
from supermarket.entities.section.entity import Section

_employee_code = TypeAdapter(EmployeeCode)
_section_code = TypeAdapter(SectionCode)


class EmployeeService:
    """Employee operations.

    Unlike products, inserts check the employee key and the section eagerly
    and stop before touching the store when either check fails.
    """

    def __init__(self, db_session: Session):
        self._employees = Repository(db_session, Employee)
        self._sections = Repository(db_session, Section)

    def insert_employee(
        self, employee_id: str, name: str, salary: int, section_id: str
    ) -> Outcome[Employee]:
        try:
            _employee_code.validate_python(employee_id)
            _section_code.validate_python(section_id)
        except ValidationError as e:
            return Outcome.invalid(e)

        if self._employees.find(employee_id) is not None:
            return Outcome.failure(
                problem(ErrorKind.ALREADY_EXISTS, f"Employee {employee_id} already exists.")
            )

        section = self._sections.find(section_id)
        if section is None:
            return Outcome.failure(
                problem(
                    ErrorKind.REFERENCE_MISSING,
                    f"Section {section_id} does not exist. The employee was not inserted.",
                )
            )

        try:
            employee = Employee(id=employee_id, name=name, salary=salary, section=section)
        except ValidationError as e:
            return Outcome.invalid(e)

        if self._employees.insert(employee):
            return Outcome.success(employee)
        return Outcome.failure(
            problem(ErrorKind.STORE_FAILURE, f"Could not insert employee {employee_id}.")
        )

    def get_employee(self, employee_id: str) -> Outcome[Employee]:
        employee = self._employees.find(employee_id)
        if employee is None:
            return Outcome.failure(
                problem(ErrorKind.NOT_FOUND, f"No employee with code {employee_id}.")
            )
        return Outcome.success(employee)

    def list_employees(self, section_filter: str = "") -> list[Employee]:
        """All employees, optionally those of one section.

        Employees without a section never match a filter.
        """
        employees = self._employees.list_all()
        if not section_filter:
            return employees
        return [
            employee
            for employee in employees
            if employee.section is not None and employee.section.id == section_filter
        ]

    def delete_employee(self, employee_id: str) -> Outcome[None]:
        try:
            _employee_code.validate_python(employee_id)
        except ValidationError as e:
            return Outcome.invalid(e)

        if self._employees.delete(employee_id):
            return Outcome.success()

        if self._employees.find(employee_id) is None:
            return Outcome.failure(
                problem(ErrorKind.NOT_FOUND, f"Employee {employee_id} does not exist.")
            )
        return Outcome.failure(
            problem(
                ErrorKind.STORE_FAILURE,
                "Possible database or referential integrity error.",
            )
        )

    def update_employee(
        self, employee_id: str, name: str = "", salary: int = 0, section_id: str = ""
    ) -> Outcome[Employee]:
        """Update an employee.

        Blank ``name`` keeps the name, a ``salary`` of 0 keeps the salary and
        a blank ``section_id`` keeps the section. A section code that does not
        resolve is reported as a warning and ignored.
        """
        employee = self._employees.find(employee_id)
        if employee is None:
            return Outcome.failure(
                problem(ErrorKind.NOT_FOUND, f"Employee {employee_id} does not exist.")
            )

        warnings = []
        try:
            if name:
                employee.name = name
            if salary != 0:
                employee.salary = salary
        except ValidationError as e:
            return Outcome.invalid(e)

        if section_id:
            section = self._sections.find(section_id)
            if section is not None:
                employee.section = section
            else:
                message = f"Section {section_id} does not exist. The employee's section was not changed."
                logger.warning(message)
                warnings.append(message)

        if self._employees.update(employee):
            return Outcome.success(employee, warnings=warnings)
        return Outcome.failure(
            problem(ErrorKind.STORE_FAILURE, f"Could not update employee {employee_id}."),
            warnings=warnings,
        )
