"""Generic repository tests against a real in-memory SQLite database."""

from decimal import Decimal

from sqlmodel import Session

from supermarket.core.repositories import Repository
from supermarket.core.services.database import create_db_engine
from supermarket.entities import Employee, EmployeeTable, Product, ProductTable, Section
from supermarket.runtime.config.config_data import DatabaseConfig


class TestRepositoryCrud:
    """Test insert/find/update/delete through the generic repository."""

    def test_insert_and_find(self, session, fruit_section):
        """Should persist an entity and read it back by key."""
        sections = Repository(session, Section)

        assert sections.insert(fruit_section) is True
        found = sections.find("FR")

        assert found == fruit_section
        assert found.description == "Fruit"

    def test_insert_duplicate_returns_false(self, session, fruit_section):
        """Should refuse a second entity with the same key."""
        sections = Repository(session, Section)
        sections.insert(fruit_section)

        assert sections.insert(Section(id="FR", description="Other")) is False
        assert sections.find("FR").description == "Fruit"

    def test_find_missing_returns_none(self, session):
        assert Repository(session, Section).find("ZZ") is None

    def test_insert_with_dangling_reference_returns_false(self, session):
        """Should report a store refusal as False and leave nothing behind."""
        products = Repository(session, Product)
        orphan = Product(id="P404", description="Ghost", price=Decimal("1.00"), stock=1, section=None)

        assert products.insert(orphan) is False
        assert products.find("P404") is None

    def test_update(self, session, fruit_section):
        sections = Repository(session, Section)
        sections.insert(fruit_section)

        fruit_section.description = "Fresh fruit"
        assert sections.update(fruit_section) is True
        assert sections.find("FR").description == "Fresh fruit"

    def test_update_missing_returns_false(self, session):
        assert Repository(session, Section).update(Section(id="ZZ")) is False

    def test_delete(self, session, fruit_section):
        sections = Repository(session, Section)
        sections.insert(fruit_section)

        assert sections.delete("FR") is True
        assert sections.find("FR") is None
        assert sections.delete("FR") is False


class TestRepositoryReferences:
    """Test referential rules enforced by the store."""

    def test_deleting_section_cascades_to_products(self, session, fruit_section, apple):
        """Should remove a section's products together with the section."""
        Repository(session, Section).insert(fruit_section)
        products = Repository(session, Product)
        products.insert(apple)

        assert Repository(session, Section).delete("FR") is True
        assert products.find("P001") is None

    def test_section_with_employees_cannot_be_deleted(self, session, fruit_section, cashier):
        """Should keep a section that still has staff."""
        sections = Repository(session, Section)
        sections.insert(fruit_section)
        Repository(session, Employee).insert(cashier)

        assert sections.delete("FR") is False
        assert sections.find("FR") is not None

    def test_moving_product_to_another_section(self, session, fruit_section, dairy_section, apple):
        sections = Repository(session, Section)
        sections.insert(fruit_section)
        sections.insert(dairy_section)
        products = Repository(session, Product)
        products.insert(apple)

        apple.section = dairy_section
        assert products.update(apple) is True
        assert products.find("P001").section_id == "DA"


class TestRepositoryQueries:
    """Test listing, counting, aggregates and bulk updates."""

    def _seed(self, session, fruit_section, dairy_section):
        sections = Repository(session, Section)
        sections.insert(fruit_section)
        sections.insert(dairy_section)
        products = Repository(session, Product)
        products.insert(Product(id="P002", description="Pear", price=Decimal("2.00"), stock=5, section=fruit_section))
        products.insert(Product(id="P001", description="Apple", price=Decimal("1.50"), stock=10, section=fruit_section))
        products.insert(Product(id="P003", description="Milk", price=Decimal("0.90"), stock=0, section=dairy_section))
        return products

    def test_list_all_ordered(self, session, fruit_section, dairy_section):
        products = self._seed(session, fruit_section, dairy_section)

        assert [p.id for p in products.list_all(order_by="id")] == ["P001", "P002", "P003"]
        assert [p.description for p in products.list_all(order_by="description")] == ["Apple", "Milk", "Pear"]

    def test_list_where_and_count_where(self, session, fruit_section, dairy_section):
        products = self._seed(session, fruit_section, dairy_section)

        fruit = products.list_where(ProductTable.section_id == "FR", order_by="description")

        assert [p.id for p in fruit] == ["P001", "P002"]
        assert products.count_where(ProductTable.section_id == "FR") == 2
        assert products.count_where(ProductTable.section_id == "ZZ") == 0

    def test_sum_of(self, session, fruit_section, dairy_section):
        """Should add up an expression and yield None when nothing matches."""
        products = self._seed(session, fruit_section, dairy_section)
        value = ProductTable.price * ProductTable.stock

        assert Decimal(str(products.sum_of(value))) == Decimal("25")
        assert products.sum_of(value, ProductTable.section_id == "ZZ") is None

    def test_update_where_returns_rowcount(self, session, fruit_section, cashier):
        Repository(session, Section).insert(fruit_section)
        employees = Repository(session, Employee)
        employees.insert(cashier)

        affected = employees.update_where({"salary": 1200}, EmployeeTable.section_id == "FR")

        assert affected == 1
        assert employees.find("E001").salary == 1200
        assert employees.update_where({"salary": 1}, EmployeeTable.section_id == "ZZ") == 0


class TestRepositoryReadFailures:
    """Test that read paths report store errors instead of raising."""

    def test_reads_without_tables(self):
        """Should return empty results when the tables do not exist."""
        engine = create_db_engine(DatabaseConfig(url="sqlite:///:memory:"))
        try:
            with Session(engine) as session:
                products = Repository(session, Product)

                assert products.find("P001") is None
                assert products.list_all(order_by="id") == []
                assert products.list_where(ProductTable.section_id == "FR") == []
                assert products.count_where(ProductTable.section_id == "FR") == 0
                assert products.sum_of(ProductTable.price * ProductTable.stock) is None
        finally:
            engine.dispose()
