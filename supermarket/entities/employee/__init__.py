"""Entity package: Employee."""

from .entity import Employee
from .table import EmployeeTable

__all__ = ["Employee", "EmployeeTable"]
