"""Entity package: Product."""

from .entity import Product
from .table import ProductTable

__all__ = ["Product", "ProductTable"]
