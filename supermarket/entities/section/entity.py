"""Section domain entity."""

from pydantic import Field

from supermarket.entities._base import Entity, SectionCode
from supermarket.entities.section.table import SectionTable


class Section(Entity):
    """A store department identified by a two-character code."""

    table_model = SectionTable

    id: SectionCode = Field(description="Two-character section code")
    description: str = Field(default="", max_length=50, description="Section description")
