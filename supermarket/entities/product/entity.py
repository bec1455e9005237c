"""Product domain entity."""

from decimal import Decimal
from typing import Any

from pydantic import Field

from supermarket.entities._base import Entity, ProductCode
from supermarket.entities.product.table import ProductTable
from supermarket.entities.section.entity import Section


class Product(Entity):
    """A sellable item belonging to one section.

    ``section`` is ``None`` only transiently, when the code typed by the user
    did not resolve; the store refuses to persist such a product.
    """

    table_model = ProductTable

    id: ProductCode = Field(description="Four-character product code")
    description: str = Field(default="", max_length=40)
    price: Decimal = Field(default=Decimal("0.00"), ge=0, max_digits=10, decimal_places=2)
    stock: int = Field(default=0, ge=0, description="Units currently in stock")
    section: Section | None = Field(default=None, description="Owning section")

    @property
    def section_id(self) -> str | None:
        return self.section.id if self.section is not None else None

    @property
    def section_description(self) -> str:
        return self.section.description if self.section is not None else "N/A"

    @property
    def stock_value(self) -> Decimal:
        return self.price * self.stock

    def to_record(self) -> dict[str, Any]:
        record = self.model_dump(exclude={"section"})
        record["section_id"] = self.section_id
        return record
