from loguru import logger
from pydantic import TypeAdapter, ValidationError
from sqlmodel import Session

from supermarket.core.models.outcome import ErrorKind, Outcome, problem
from supermarket.core.repositories.repository import Repository
from supermarket.entities._base import SectionCode
from supermarket.entities.employee.entity import Employee
from supermarket.entities.employee.table import EmployeeTable
from supermarket.entities.section.entity import Section

CASCADE_WARNING = "WARNING: every product of the section will be deleted too."

_section_code = TypeAdapter(SectionCode)


class SectionService:
    """Create, read, update and delete store sections."""

    def __init__(self, db_session: Session):
        self._sections = Repository(db_session, Section)
        self._employees = Repository(db_session, Employee)

    def insert_section(self, section_id: str, description: str = "") -> Outcome[Section]:
        try:
            section = Section(id=section_id, description=description)
        except ValidationError as e:
            return Outcome.invalid(e)

        if self._sections.insert(section):
            return Outcome.success(section)

        if self._sections.find(section_id) is not None:
            return Outcome.failure(
                problem(ErrorKind.ALREADY_EXISTS, f"Section {section_id} already exists.")
            )
        return Outcome.failure(
            problem(ErrorKind.STORE_FAILURE, f"Could not insert section {section_id}.")
        )

    def get_section(self, section_id: str) -> Outcome[Section]:
        section = self._sections.find(section_id)
        if section is None:
            return Outcome.failure(
                problem(ErrorKind.NOT_FOUND, f"Section {section_id} does not exist.")
            )
        return Outcome.success(section)

    def list_sections(self) -> list[Section]:
        return self._sections.list_all(order_by="id")

    def delete_section(self, section_id: str) -> Outcome[None]:
        """Delete a section and, through the store's cascade, its products.

        Callers should show ``CASCADE_WARNING`` before calling this.
        """
        try:
            _section_code.validate_python(section_id)
        except ValidationError as e:
            return Outcome.invalid(e)

        if self._sections.delete(section_id):
            return Outcome.success()

        if self._sections.find(section_id) is None:
            return Outcome.failure(
                problem(ErrorKind.NOT_FOUND, f"Section {section_id} does not exist.")
            )

        staff = self._employees.count_where(EmployeeTable.section_id == section_id)
        if staff:
            logger.warning("Section {} still has {} employees", section_id, staff)
            return Outcome.failure(
                problem(
                    ErrorKind.STORE_FAILURE,
                    f"Section {section_id} still has {staff} employee(s); reassign or delete them first.",
                )
            )
        return Outcome.failure(
            problem(ErrorKind.STORE_FAILURE, f"Could not delete section {section_id}.")
        )

    def update_section(self, section_id: str, new_description: str = "") -> Outcome[Section]:
        """Update the description; an empty ``new_description`` keeps the current one."""
        section = self._sections.find(section_id)
        if section is None:
            return Outcome.failure(
                problem(ErrorKind.NOT_FOUND, f"Section {section_id} does not exist.")
            )

        if new_description:
            try:
                section.description = new_description
            except ValidationError as e:
                return Outcome.invalid(e)

        if self._sections.update(section):
            return Outcome.success(section)
        return Outcome.failure(
            problem(ErrorKind.STORE_FAILURE, f"Could not update section {section_id}.")
        )
