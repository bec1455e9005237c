"""Unit tests for the Section, Product and Employee domain entities."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from supermarket.entities import Employee, Product, ProductTable, Section, SectionTable


class TestSectionEntity:
    """Test Section domain entity."""

    def test_section_creation(self):
        """Should accept a two-character code and a short description."""
        section = Section(id="FR", description="Fruit")

        assert section.key == "FR"
        assert section.description == "Fruit"
        assert Section.table_model is SectionTable

    @pytest.mark.parametrize("code", ["F", "FRU", ""])
    def test_code_length_enforced(self, code):
        """Should reject codes that are not exactly two characters."""
        with pytest.raises(ValidationError):
            Section(id=code, description="Fruit")

    def test_description_length_enforced_on_assignment(self):
        """Should validate assignments as well as construction."""
        section = Section(id="FR", description="Fruit")

        with pytest.raises(ValidationError):
            section.description = "x" * 51

    def test_equality_by_key(self):
        """Should compare sections by code only."""
        assert Section(id="FR", description="Fruit") == Section(id="FR", description="Fresh fruit")
        assert Section(id="FR") != Section(id="DA")
        assert len({Section(id="FR"), Section(id="FR", description="x")}) == 1


class TestProductEntity:
    """Test Product domain entity."""

    def test_product_fields(self, apple):
        """Should expose section details and stock value."""
        assert apple.section_id == "FR"
        assert apple.section_description == "Fruit"
        assert apple.stock_value == Decimal("15.00")

    def test_product_without_section(self):
        """Should render a missing section as N/A."""
        product = Product(id="P002", description="Loose item")

        assert product.section_id is None
        assert product.section_description == "N/A"

    def test_record_uses_section_id(self, apple):
        """Should flatten the section reference into a column value."""
        record = apple.to_record()

        assert record["section_id"] == "FR"
        assert "section" not in record
        assert record["price"] == Decimal("1.50")

    @pytest.mark.parametrize(
        "field, value",
        [("price", Decimal("-1")), ("stock", -1), ("description", "x" * 41), ("id", "P1")],
    )
    def test_product_validation(self, field, value):
        """Should reject negative amounts, long descriptions and bad codes."""
        data = {"id": "P001", "description": "Apple", "price": Decimal("1.00"), "stock": 1}
        data[field] = value

        with pytest.raises(ValidationError):
            Product(**data)

    def test_from_row_reads_nested_section(self, session, fruit_section):
        """Should build the entity, nested section included, from a table row."""
        session.add(SectionTable(id="FR", description="Fruit"))
        session.add(ProductTable(id="P001", description="Apple", price=Decimal("1.50"), stock=3, section_id="FR"))
        session.commit()

        product = Product.from_row(session.get(ProductTable, "P001"))

        assert product.section == fruit_section
        assert product.section_description == "Fruit"
        assert product.price == Decimal("1.50")


class TestEmployeeEntity:
    """Test Employee domain entity."""

    def test_employee_fields(self, cashier):
        assert cashier.key == "E001"
        assert cashier.section_id == "FR"
        assert cashier.to_record() == {"id": "E001", "name": "Ana", "salary": 1000, "section_id": "FR"}

    def test_negative_salary_rejected(self):
        """Should reject a negative salary."""
        with pytest.raises(ValidationError):
            Employee(id="E001", name="Ana", salary=-5)

    def test_name_length_enforced(self):
        with pytest.raises(ValidationError):
            Employee(id="E001", name="x" * 31, salary=10)
