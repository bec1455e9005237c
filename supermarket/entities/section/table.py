"""Section database table model."""

from sqlmodel import Field, SQLModel


class SectionTable(SQLModel, table=True):
    """Database persistence model for sections.

    This represents how the Section entity is stored in the database.
    It's separate from the domain entity to maintain clean architecture
    while keeping related code together.
    """

    __tablename__ = "section"

    id: str = Field(primary_key=True, max_length=2)
    description: str = Field(default="", max_length=50)
