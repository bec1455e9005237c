"""Tests for SectionService."""

from decimal import Decimal

import pytest

from supermarket.core.models import ErrorKind
from supermarket.core.services import EmployeeService, ProductService, SectionService


@pytest.fixture
def sections(session) -> SectionService:
    return SectionService(session)


class TestInsertSection:
    def test_insert_section(self, sections):
        """Should insert a valid section."""
        outcome = sections.insert_section("FR", "Fruit")

        assert outcome.ok
        assert outcome.value.key == "FR"
        assert sections.get_section("FR").value.description == "Fruit"

    def test_insert_duplicate(self, sections):
        """Should report an existing section as ALREADY_EXISTS."""
        sections.insert_section("FR", "Fruit")

        outcome = sections.insert_section("FR", "Again")

        assert not outcome.ok
        assert outcome.kinds == {ErrorKind.ALREADY_EXISTS}

    @pytest.mark.parametrize("code, description", [("F", "Fruit"), ("FRU", "Fruit"), ("FR", "x" * 51)])
    def test_insert_invalid(self, sections, code, description):
        """Should refuse bad input before touching the store."""
        outcome = sections.insert_section(code, description)

        assert outcome.kinds == {ErrorKind.VALIDATION_FAILED}
        assert sections.list_sections() == []


class TestReadSections:
    def test_get_missing(self, sections):
        outcome = sections.get_section("ZZ")

        assert not outcome.ok
        assert outcome.kinds == {ErrorKind.NOT_FOUND}

    def test_list_sorted_by_code(self, sections):
        sections.insert_section("FR", "Fruit")
        sections.insert_section("DA", "Dairy")

        assert [s.id for s in sections.list_sections()] == ["DA", "FR"]


class TestDeleteSection:
    def test_delete_removes_products(self, session, sections):
        """Should delete the section's products along with it."""
        products = ProductService(session)
        sections.insert_section("FR", "Fruit")
        products.insert_product("P001", "Apple", Decimal("1.50"), 10, "FR")

        outcome = sections.delete_section("FR")

        assert outcome.ok
        assert not sections.get_section("FR").ok
        assert products.get_product("P001").kinds == {ErrorKind.NOT_FOUND}

    def test_delete_missing(self, sections):
        assert sections.delete_section("ZZ").kinds == {ErrorKind.NOT_FOUND}

    def test_delete_invalid_code(self, sections):
        assert sections.delete_section("ZZZ").kinds == {ErrorKind.VALIDATION_FAILED}

    def test_delete_with_employees_is_refused(self, session, sections):
        """Should keep a section that still has employees and say how many."""
        sections.insert_section("FR", "Fruit")
        EmployeeService(session).insert_employee("E001", "Ana", 1000, "FR")

        outcome = sections.delete_section("FR")

        assert outcome.kinds == {ErrorKind.STORE_FAILURE}
        assert "1 employee" in outcome.problems[0].message
        assert sections.get_section("FR").ok


class TestUpdateSection:
    def test_blank_description_keeps_current(self, sections):
        """Should leave the description alone when the new one is empty."""
        sections.insert_section("FR", "Fruit")

        outcome = sections.update_section("FR", "")

        assert outcome.ok
        assert sections.get_section("FR").value.description == "Fruit"

    def test_non_empty_description_replaces(self, sections):
        sections.insert_section("FR", "Fruit")

        sections.update_section("FR", "Fresh fruit")

        assert sections.get_section("FR").value.description == "Fresh fruit"

    def test_update_missing(self, sections):
        assert sections.update_section("ZZ", "Nothing").kinds == {ErrorKind.NOT_FOUND}

    def test_update_too_long(self, sections):
        sections.insert_section("FR", "Fruit")

        outcome = sections.update_section("FR", "x" * 51)

        assert outcome.kinds == {ErrorKind.VALIDATION_FAILED}
        assert sections.get_section("FR").value.description == "Fruit"
