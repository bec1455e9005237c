"""Process start-up: loguru sinks and routing of stdlib logging."""

import logging
import sys
from pathlib import Path
from typing import Any

from loguru import logger

from supermarket.runtime.config.config_data import LoggingConfig
from supermarket.runtime.context import get_config

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)

# stdlib loggers that stay at WARNING whatever the configured level
NOISY_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool")


class InterceptHandler(logging.Handler):
    """Forward stdlib ``logging`` records (SQLAlchemy mostly) to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        logger.opt(depth=2, exception=record.exc_info).bind(logger_name=record.name).log(
            level, record.getMessage()
        )


def _file_sink(cfg: LoggingConfig, level: str, diagnose: bool) -> dict[str, Any]:
    path = Path(cfg.file)
    path.parent.mkdir(parents=True, exist_ok=True)
    as_json = cfg.format == "json"
    return {
        "sink": str(path),
        "level": level,
        "format": "{message}" if as_json else LOG_FORMAT,
        "serialize": as_json,
        "rotation": f"{cfg.max_size_mb} MB",
        "retention": cfg.backup_count,
        "backtrace": diagnose,
        "diagnose": diagnose,
    }


def _route_stdlib_logging() -> None:
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in list(logging.root.manager.loggerDict):
        existing = logging.getLogger(name)
        existing.handlers = []
        existing.propagate = True
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def configure_logging(level: str | None = None) -> None:
    """(Re)install loguru sinks from the current configuration.

    ``level`` wins over ``logging.level`` (the CLI's ``--log-level``).
    Tracebacks include variable values everywhere except production.
    """
    config = get_config()
    level = (level or config.logging.level).upper()
    diagnose = config.app.environment != "production"

    logger.remove()
    logger.add(sys.stderr, level=level, format=LOG_FORMAT, colorize=True, backtrace=diagnose, diagnose=diagnose)
    if config.logging.file:
        logger.add(**_file_sink(config.logging, level, diagnose))
    _route_stdlib_logging()

    logger.debug(
        "Logging configured",
        app_level=level,
        app_format=config.logging.format,
        app_file=config.logging.file,
        environment=config.app.environment,
    )
