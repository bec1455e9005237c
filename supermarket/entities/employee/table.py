"""Employee database table model."""

from typing import Optional

from sqlmodel import Field, Relationship, SQLModel

from supermarket.entities.section.table import SectionTable


class EmployeeTable(SQLModel, table=True):
    """Database persistence model for employees.

    A section with employees cannot be deleted (``ON DELETE RESTRICT``).
    """

    __tablename__ = "employee"

    id: str = Field(primary_key=True, max_length=4)
    name: str = Field(default="", max_length=30)
    salary: int = Field(default=0)
    section_id: str | None = Field(
        default=None,
        foreign_key="section.id",
        nullable=False,
        ondelete="RESTRICT",
        max_length=2,
        index=True,
    )

    section: Optional[SectionTable] = Relationship()
