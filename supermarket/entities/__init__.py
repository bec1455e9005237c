"""Entities module with an entity-centric structure.

Each entity has its own package containing:
- entity.py: Domain model with validation
- table.py: Database persistence model

Importing this package registers every table with ``SQLModel.metadata``.
"""

from .employee import Employee, EmployeeTable
from .product import Product, ProductTable
from .section import Section, SectionTable

__all__ = [
    "Section",
    "SectionTable",
    "Product",
    "ProductTable",
    "Employee",
    "EmployeeTable",
]
