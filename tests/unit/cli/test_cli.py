"""End-to-end CLI tests against a temporary SQLite file."""

import pytest
from typer.testing import CliRunner

from supermarket.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def cli_database(file_database, monkeypatch):
    """Run every command against a throwaway database without reconfiguring loguru."""
    monkeypatch.setattr("supermarket.cli.configure_logging", lambda level=None: None)
    return file_database


def invoke(*args: str, input: str | None = None):
    return runner.invoke(app, list(args), input=input)


def seed_catalogue() -> None:
    invoke("section", "add", "--code", "FR", "--description", "Fruit")
    invoke("section", "add", "--code", "DA", "--description", "Dairy")
    invoke(
        "product", "add", "--code", "P001", "--description", "Apple",
        "--price", "1.50", "--stock", "10", "--section", "FR",
    )
    invoke("employee", "add", "--code", "E001", "--name", "Ana", "--salary", "1000", "--section", "FR")
    invoke("employee", "add", "--code", "E002", "--name", "Luis", "--salary", "2000", "--section", "FR")


class TestSectionCommands:
    def test_add_and_list(self):
        """Should add a section and show it in the listing."""
        result = invoke("section", "add", "--code", "FR", "--description", "Fruit")

        assert result.exit_code == 0
        assert "Section added." in result.output

        listing = invoke("section", "list")
        assert "FR" in listing.output
        assert "Fruit" in listing.output

    def test_add_prompts_for_missing_values(self):
        """Should re-ask until the code has exactly two characters."""
        result = invoke("section", "add", input="F\nFR\nFruit\n")

        assert result.exit_code == 0
        assert "Exactly 2 characters are required." in result.output
        assert "Fruit" in invoke("section", "list").output

    def test_duplicate_exits_with_error(self):
        invoke("section", "add", "--code", "FR", "--description", "Fruit")

        result = invoke("section", "add", "--code", "FR", "--description", "Fruit")

        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_delete_warns_about_products(self):
        seed_catalogue()
        invoke("section", "add", "--code", "EM", "--description", "Empty")

        result = invoke("section", "delete", "--code", "EM", "--yes")

        assert result.exit_code == 0
        assert "every product of the section will be deleted" in result.output

    def test_delete_cancelled(self):
        invoke("section", "add", "--code", "FR", "--description", "Fruit")

        result = invoke("section", "delete", "--code", "FR", input="n\n")

        assert "Deletion cancelled" in result.output
        assert "FR" in invoke("section", "list").output

    def test_delete_with_employees_fails(self):
        seed_catalogue()

        result = invoke("section", "delete", "--code", "FR", "--yes")

        assert result.exit_code == 1
        assert "employee" in result.output

    def test_update_with_blank_description_keeps_it(self):
        invoke("section", "add", "--code", "FR", "--description", "Fruit")

        result = invoke("section", "update", "--code", "FR", input="\n")

        assert result.exit_code == 0
        assert "Fruit" in invoke("section", "list").output


class TestProductCommands:
    def test_show_product(self):
        seed_catalogue()

        result = invoke("product", "show", "--code", "P001")

        assert result.exit_code == 0
        assert "Price: 1.50" in result.output
        assert "Section: FR-Fruit" in result.output

    def test_add_with_missing_section(self):
        invoke("section", "add", "--code", "FR", "--description", "Fruit")

        result = invoke(
            "product", "add", "--code", "P001", "--description", "Apple",
            "--price", "1", "--stock", "1", "--section", "ZZ",
        )

        assert result.exit_code == 1
        assert "Section ZZ does not exist." in result.output
        assert invoke("product", "show", "--code", "P001").exit_code == 1

    def test_update_and_delete(self):
        seed_catalogue()

        result = invoke(
            "product", "update", "--code", "P001", "--description", "",
            "--price", "2.25", "--stock", "3", "--section", "",
        )
        assert result.exit_code == 0
        assert "Price: 2.25" in invoke("product", "show", "--code", "P001").output

        assert invoke("product", "delete", "--code", "P001").exit_code == 0
        assert invoke("product", "show", "--code", "P001").exit_code == 1


class TestEmployeeCommands:
    def test_list_filtered(self):
        seed_catalogue()

        result = invoke("employee", "list", "--section", "FR")

        assert result.exit_code == 0
        assert "Ana" in result.output
        assert "Luis" in result.output

    def test_list_empty(self):
        result = invoke("employee", "list", "--section", "")

        assert "No employees match the search." in result.output

    def test_update_unknown_section_warns(self):
        seed_catalogue()

        result = invoke(
            "employee", "update", "--code", "E001", "--name", "", "--salary", "0", "--section", "ZZ",
        )

        assert result.exit_code == 0
        assert "Section ZZ does not exist" in result.output


class TestReportCommands:
    def test_sorted_listing_rejects_unknown_field(self):
        seed_catalogue()

        result = invoke("report", "products-by", "1=1")

        assert result.exit_code == 1
        assert "Invalid sort field" in result.output

    def test_stock_value(self):
        seed_catalogue()

        assert "15.00" in invoke("report", "stock-value").output
        assert "no products" in invoke("report", "stock-value", "--section", "DA").output

    def test_stock_value_of_empty_catalogue(self):
        assert "no products" in invoke("report", "stock-value").output

    def test_raise_salaries(self):
        seed_catalogue()

        result = invoke("report", "raise-salaries", "--section", "FR", "--percentage", "10")

        assert result.exit_code == 0
        assert "2 salaries updated." in result.output
        listing = invoke("employee", "list", "--section", "FR").output
        assert "1,100" in listing
        assert "2,200" in listing

    def test_raise_prices_in_section_without_products(self):
        seed_catalogue()

        result = invoke("report", "raise-prices", "--section", "DA", "--percentage", "5")

        assert result.exit_code == 1
        assert "Section [Dairy] has no products" in result.output

    def test_raise_prices_below_zero_is_refused(self):
        seed_catalogue()

        result = invoke("report", "raise-prices", "--section", "FR", "--percentage=-150")

        assert result.exit_code == 1
        assert "Price: 1.50" in invoke("product", "show", "--code", "P001").output


class TestDbCommands:
    def test_init_and_check(self):
        result = invoke("db", "init")

        assert result.exit_code == 0
        assert "employee" in result.output
        assert invoke("db", "check").exit_code == 0

    def test_reset(self):
        seed_catalogue()

        result = invoke("db", "reset", "--force")

        assert result.exit_code == 0
        assert "Fruit" not in invoke("section", "list").output


class TestMenu:
    def test_menu_runs_an_action_and_exits(self):
        invoke("section", "add", "--code", "FR", "--description", "Fruit")

        result = invoke("menu", input="2\n0\n")

        assert result.exit_code == 0
        assert "Fruit" in result.output
        assert "Bye." in result.output

    def test_menu_survives_failed_action(self):
        """Should return to the menu after an action fails."""
        result = invoke("menu", input="6\nP404\n0\n")

        assert result.exit_code == 0
        assert "No product with code P404." in result.output
        assert "Bye." in result.output
