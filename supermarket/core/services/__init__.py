"""Core services exports."""

# Database Service
from .database.db_manage import DbManageService
from .database.db_session import DbSessionService

# Domain Services
from .employee_service import EmployeeService
from .product_service import ProductService
from .report_service import ReportService
from .section_service import SectionService

__all__ = [
    # Database Service
    "DbManageService",
    "DbSessionService",
    # Domain Services
    "EmployeeService",
    "ProductService",
    "ReportService",
    "SectionService",
]
