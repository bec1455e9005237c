"""Employee domain entity."""

from typing import Any

from pydantic import Field

from supermarket.entities._base import EmployeeCode, Entity
from supermarket.entities.employee.table import EmployeeTable
from supermarket.entities.section.entity import Section


class Employee(Entity):
    """Staff member belonging to one section."""

    table_model = EmployeeTable

    id: EmployeeCode = Field(description="Four-character employee code")
    name: str = Field(default="", max_length=30)
    salary: int = Field(default=0, ge=0, description="Annual salary")
    section: Section | None = Field(default=None, description="Owning section")

    @property
    def section_id(self) -> str | None:
        return self.section.id if self.section is not None else None

    @property
    def section_description(self) -> str:
        return self.section.description if self.section is not None else "N/A"

    def to_record(self) -> dict[str, Any]:
        record = self.model_dump(exclude={"section"})
        record["section_id"] = self.section_id
        return record
