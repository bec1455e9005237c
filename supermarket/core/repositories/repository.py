from typing import Any, Generic, TypeVar

from loguru import logger
from sqlalchemy import ColumnElement, func, update
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from supermarket.entities._base import Entity

EntityT = TypeVar("EntityT", bound=Entity)


class Repository(Generic[EntityT]):
    """Generic data-access layer for one entity type.

    Store failures are logged and reported as ``False``/``None``/``[]``; callers
    re-query with ``find`` to work out why a mutation did not happen. Every
    mutating call commits (or rolls back) on its own.
    """

    def __init__(self, session: Session, entity_type: type[EntityT]) -> None:
        self._session = session
        self._entity_type = entity_type
        self._table = entity_type.table_model

    @property
    def entity_name(self) -> str:
        return self._entity_type.__name__

    def insert(self, entity: EntityT) -> bool:
        if self._session.get(self._table, entity.key) is not None:
            logger.debug("{} {} already exists", self.entity_name, entity.key)
            return False

        self._session.add(self._table(**entity.to_record()))
        return self._commit("insert", entity.key)

    def find(self, key: str) -> EntityT | None:
        try:
            row = self._session.get(self._table, key)
        except SQLAlchemyError as e:
            self._read_failed("find", e)
            return None
        if row is None:
            logger.debug("{} {} not found", self.entity_name, key)
            return None
        return self._entity_type.from_row(row)

    def update(self, entity: EntityT) -> bool:
        row = self._session.get(self._table, entity.key)
        if row is None:
            logger.debug("{} {} not found for update", self.entity_name, entity.key)
            return False

        row.sqlmodel_update(entity.to_record())
        self._session.add(row)
        return self._commit("update", entity.key)

    def delete(self, key: str) -> bool:
        row = self._session.get(self._table, key)
        if row is None:
            logger.debug("{} {} not found for delete", self.entity_name, key)
            return False

        self._session.delete(row)
        return self._commit("delete", key)

    def list_all(self, order_by: str | None = None) -> list[EntityT]:
        """Every stored entity; unordered unless a column name is given."""
        statement = select(self._table)
        if order_by is not None:
            statement = statement.order_by(getattr(self._table, order_by).asc())
        return self._rows(statement)

    def list_where(self, *criteria: ColumnElement[bool], order_by: str | None = None) -> list[EntityT]:
        statement = select(self._table).where(*criteria)
        if order_by is not None:
            statement = statement.order_by(getattr(self._table, order_by).asc())
        return self._rows(statement)

    def count_where(self, *criteria: ColumnElement[bool]) -> int:
        """Number of matching rows; 0 when the store cannot be read."""
        statement = select(func.count()).select_from(self._table).where(*criteria)
        try:
            return self._session.exec(statement).one()
        except SQLAlchemyError as e:
            self._read_failed("count", e)
            return 0

    def sum_of(self, expression: ColumnElement[Any], *criteria: ColumnElement[bool]) -> Any | None:
        """SUM(expression) over the matching rows; ``None`` when SQL yields NULL."""
        statement = select(func.sum(expression)).select_from(self._table).where(*criteria)
        try:
            return self._session.exec(statement).one()
        except SQLAlchemyError as e:
            self._read_failed("sum", e)
            return None

    def update_where(self, values: dict[str, Any], *criteria: ColumnElement[bool]) -> int:
        """Run one bulk UPDATE and return the affected row count (-1 on failure)."""
        statement = update(self._table.__table__).where(*criteria).values(**values)
        try:
            result = self._session.connection().execute(statement)
            self._session.commit()
        except SQLAlchemyError as e:
            self._session.rollback()
            logger.warning(
                "Bulk update of {} failed",
                self.entity_name,
                error_type=type(e).__name__,
                error_message=str(e),
            )
            return -1

        logger.info("Bulk update touched {} {} rows", result.rowcount, self.entity_name)
        return result.rowcount

    def _rows(self, statement: Any) -> list[EntityT]:
        try:
            rows = self._session.exec(statement).all()
        except SQLAlchemyError as e:
            self._read_failed("list", e)
            return []
        return [self._entity_type.from_row(row) for row in rows]

    def _read_failed(self, action: str, error: SQLAlchemyError) -> None:
        self._session.rollback()
        logger.warning(
            "Could not {} {} rows",
            action,
            self.entity_name,
            error_type=type(error).__name__,
            error_message=str(error),
        )

    def _commit(self, action: str, key: str) -> bool:
        try:
            self._session.commit()
        except SQLAlchemyError as e:
            self._session.rollback()
            logger.warning(
                "Could not {} {} {}",
                action,
                self.entity_name,
                key,
                error_type=type(e).__name__,
                error_message=str(e),
            )
            return False

        logger.info("{} {}: {}", self.entity_name, key, action)
        return True
