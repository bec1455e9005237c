"""Supermarket inventory and payroll manager.

Sections, products and employees are persisted through a generic SQLModel
repository; the service layer enforces the referential rules between them and
the CLI drives everything from the console.
"""

__version__ = "0.1.0"
