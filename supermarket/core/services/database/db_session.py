"""Database engine and session factory used across the application."""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from loguru import logger
from sqlalchemy import Engine, StaticPool, event, text
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, create_engine

from supermarket.runtime.config.config_data import DatabaseConfig
from supermarket.runtime.context import get_config


def _enable_sqlite_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
    # SQLite ignores REFERENCES/ON DELETE unless asked per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(db_config: DatabaseConfig) -> Engine:
    """Build an engine for ``db_config`` with per-dialect tuning."""
    engine_kwargs: dict[str, Any] = {"echo": db_config.echo}

    if db_config.is_sqlite:
        engine_kwargs["connect_args"] = {
            "check_same_thread": False,
            "timeout": 20,  # Lock timeout
        }
        if db_config.is_memory:
            # One shared connection, otherwise every checkout sees an empty database
            engine_kwargs["poolclass"] = StaticPool
    else:
        engine_kwargs.update(
            {
                "pool_size": db_config.pool_size,
                "max_overflow": db_config.max_overflow,
                "pool_timeout": db_config.pool_timeout,
                "pool_recycle": db_config.pool_recycle,
                "pool_pre_ping": True,
            }
        )

    logger.debug("Creating database engine for {}", db_config.url)
    engine = create_engine(db_config.url, **engine_kwargs)

    if db_config.is_sqlite:
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)

    return engine


class DbSessionService:
    def __init__(self, engine: Engine | None = None):
        """Use ``engine`` or build one from the current configuration."""
        if engine is None:
            main_config = get_config()
            if main_config.database.is_sqlite and main_config.app.environment == "production":
                logger.warning(
                    "SQLite is not recommended for production use. "
                    "Consider PostgreSQL for better performance and reliability."
                )
            engine = create_db_engine(main_config.database)
        self._engine = engine

    @property
    def engine(self) -> Engine:
        return self._engine

    def get_session(self) -> Session:
        """Return a new SQLModel session bound to the shared engine."""
        # expire_on_commit stays on: a cascade in the database must not leave
        # stale rows in the identity map
        return Session(self._engine, autoflush=True)

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """One session per console action."""
        db = self.get_session()
        try:
            yield db
            db.commit()
        except Exception as e:
            db.rollback()
            logger.error(
                "Database transaction failed",
                error_type=type(e).__name__,
                error_message=str(e),
            )
            raise
        finally:
            db.close()

    def health_check(self) -> bool:
        """Perform a health check on the database connection."""
        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
                return True
        except SQLAlchemyError as e:
            logger.error(
                "Database health check failed",
                error_type=type(e).__name__,
                error_message=str(e),
            )
            return False

    def dispose(self) -> None:
        self._engine.dispose()
