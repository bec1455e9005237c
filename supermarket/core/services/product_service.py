from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from pydantic import TypeAdapter, ValidationError
from sqlmodel import Session

from supermarket.core.models.outcome import ErrorKind, Outcome, problem
from supermarket.core.repositories.repository import Repository
from supermarket.entities._base import ProductCode, SectionCode
from supermarket.entities.product.entity import Product
from supermarket.entities.section.entity import Section

CENT = Decimal("0.01")

_product_code = TypeAdapter(ProductCode)
_section_code = TypeAdapter(SectionCode)


def to_money(value: Decimal | float | int | str) -> Decimal:
    """Round a price to cents (half up)."""
    try:
        return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation as e:
        raise ValueError(f"Not a valid amount: {value!r}") from e


class ProductService:
    """Product operations plus the section reference checks around them."""

    def __init__(self, db_session: Session):
        self._products = Repository(db_session, Product)
        self._sections = Repository(db_session, Section)

    def insert_product(
        self,
        product_id: str,
        description: str,
        price: Decimal | float | str,
        stock: int,
        section_id: str,
    ) -> Outcome[Product]:
        """Insert a product.

        A section code that does not resolve still goes to the store; the
        failure is then attributed by checking both the product key and the
        section, and every cause found is reported.
        """
        try:
            _section_code.validate_python(section_id)
            product = Product(
                id=product_id,
                description=description,
                price=to_money(price),
                stock=stock,
                section=self._sections.find(section_id),
            )
        except ValueError as e:
            # pydantic.ValidationError is a ValueError
            return Outcome.invalid(e if isinstance(e, ValidationError) else str(e))

        if self._products.insert(product):
            return Outcome.success(product)

        problems = []
        if self._products.find(product_id) is not None:
            problems.append(problem(ErrorKind.ALREADY_EXISTS, f"Product {product_id} already exists."))
        if self._sections.find(section_id) is None:
            problems.append(problem(ErrorKind.REFERENCE_MISSING, f"Section {section_id} does not exist."))
        if not problems:
            problems.append(problem(ErrorKind.STORE_FAILURE, f"Could not insert product {product_id}."))
        return Outcome.failure(*problems)

    def get_product(self, product_id: str) -> Outcome[Product]:
        product = self._products.find(product_id)
        if product is None:
            return Outcome.failure(
                problem(ErrorKind.NOT_FOUND, f"No product with code {product_id}.")
            )
        return Outcome.success(product)

    def list_products(self, section_filter: str = "") -> list[Product]:
        """All products, optionally only those of one section (exact code match)."""
        products = self._products.list_all()
        if not section_filter:
            return products
        return [product for product in products if product.section_id == section_filter]

    def delete_product(self, product_id: str) -> Outcome[None]:
        try:
            _product_code.validate_python(product_id)
        except ValidationError as e:
            return Outcome.invalid(e)

        if self._products.delete(product_id):
            return Outcome.success()

        if self._products.find(product_id) is None:
            return Outcome.failure(
                problem(ErrorKind.NOT_FOUND, f"Product {product_id} does not exist.")
            )
        return Outcome.failure(
            problem(ErrorKind.STORE_FAILURE, f"Could not delete product {product_id}.")
        )

    def update_product(
        self,
        product_id: str,
        description: str,
        price: Decimal | float | str,
        stock: int,
        section_id: str = "",
    ) -> Outcome[Product]:
        """Update a product.

        Blank ``description`` keeps the current one; ``price`` and ``stock``
        are always overwritten. A non-empty ``section_id`` moves the product
        only if that section exists; otherwise the section is left as is.
        """
        product = self._products.find(product_id)
        if product is None:
            return Outcome.failure(
                problem(ErrorKind.NOT_FOUND, f"Product {product_id} does not exist.")
            )

        try:
            if description:
                product.description = description
            product.price = to_money(price)
            product.stock = stock
        except ValueError as e:
            return Outcome.invalid(e if isinstance(e, ValidationError) else str(e))

        if section_id:
            section = self._sections.find(section_id)
            if section is not None:
                product.section = section

        if self._products.update(product):
            return Outcome.success(product)

        problems = [problem(ErrorKind.STORE_FAILURE, f"Could not update product {product_id}.")]
        if section_id and self._sections.find(section_id) is None:
            problems.append(problem(ErrorKind.REFERENCE_MISSING, f"Section {section_id} does not exist."))
        return Outcome.failure(*problems)
