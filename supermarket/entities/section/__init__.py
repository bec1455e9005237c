"""Entity package: Section."""

from .entity import Section
from .table import SectionTable

__all__ = ["Section", "SectionTable"]
