"""Schema management for the supermarket database."""

from loguru import logger
from sqlalchemy import Engine, inspect
from sqlmodel import SQLModel

import supermarket.entities  # noqa: F401  (registers every table with the metadata)


class DbManageService:
    def __init__(self, engine: Engine):
        self._engine = engine

    def create_all(self) -> None:
        """Create all database tables that do not exist yet."""
        SQLModel.metadata.create_all(self._engine)
        logger.debug("Database initialized with tables.")

    def drop_all(self) -> None:
        """Drop every table, products and employees first."""
        SQLModel.metadata.drop_all(self._engine)
        logger.info("Database tables dropped.")

    def table_names(self) -> list[str]:
        return sorted(inspect(self._engine).get_table_names())
