from typing import Annotated, Any, ClassVar, Self

from pydantic import BaseModel, ConfigDict, StringConstraints
from sqlmodel import SQLModel

SectionCode = Annotated[str, StringConstraints(min_length=2, max_length=2)]
ProductCode = Annotated[str, StringConstraints(min_length=4, max_length=4)]
EmployeeCode = Annotated[str, StringConstraints(min_length=4, max_length=4)]


class Entity(BaseModel):
    """Base class for domain records keyed by a business code.

    Subclasses declare ``table_model`` (the SQLModel table they persist to).
    The generic repository only relies on ``key``, ``to_record`` and
    ``from_row``, so entities with references override those two methods.
    """

    model_config = ConfigDict(validate_assignment=True)

    table_model: ClassVar[type[SQLModel]]

    id: str

    @property
    def key(self) -> str:
        """Primary key value."""
        return self.id

    def to_record(self) -> dict[str, Any]:
        """Column values for the backing table."""
        return self.model_dump()

    @classmethod
    def from_row(cls, row: SQLModel) -> Self:
        return cls.model_validate(row, from_attributes=True)

    def __eq__(self, other: Any) -> bool:
        """Records are equal when they share type and primary key."""
        if not isinstance(other, Entity) or type(other) is not type(self):
            return False
        return self.key == other.key

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.key))
