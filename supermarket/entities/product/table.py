"""Product database table model."""

from decimal import Decimal
from typing import Optional

from sqlmodel import Field, Relationship, SQLModel

from supermarket.entities.section.table import SectionTable


class ProductTable(SQLModel, table=True):
    """Database persistence model for products.

    Products go away with their section (``ON DELETE CASCADE``).
    """

    __tablename__ = "product"

    id: str = Field(primary_key=True, max_length=4)
    description: str = Field(default="", max_length=40)
    price: Decimal = Field(default=Decimal("0.00"), max_digits=10, decimal_places=2)
    stock: int = Field(default=0)
    section_id: str | None = Field(
        default=None,
        foreign_key="section.id",
        nullable=False,
        ondelete="CASCADE",
        max_length=2,
        index=True,
    )

    section: Optional[SectionTable] = Relationship()
