"""Process-wide application context.

The active ``ConfigData`` lives in a ``ContextVar`` so tests and nested
callers can swap it for a block of code with ``with_context`` without
touching global state.
"""

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from loguru import logger
from pydantic import BaseModel

from supermarket.runtime.config.config_data import ConfigData
from supermarket.runtime.config.config_template import load_templated_yaml
from supermarket.runtime.settings import EnvironmentVariables


@dataclass
class AppContext:
    """Application-wide state; today only the configuration."""

    config: ConfigData


def load_default_config(env: EnvironmentVariables | None = None) -> ConfigData:
    """Load the YAML named by ``SUPERMARKET_CONFIG`` (``config.yaml``).

    Without a file the built-in defaults are used, adjusted by the
    environment and log level from the process environment.
    """
    env = env or EnvironmentVariables()
    path = Path(env.config_file)
    if path.exists():
        return load_templated_yaml(path)

    logger.debug("No configuration file at {}, using defaults", path)
    config = ConfigData()
    config.app.environment = env.environment
    config.logging.level = env.log_level
    return config


_app_context: ContextVar[AppContext] = ContextVar(
    "app_context", default=AppContext(config=load_default_config())
)


def get_context() -> AppContext:
    return _app_context.get()


def set_context(context: AppContext) -> Token[AppContext]:
    """Make ``context`` current; keep the token to restore the previous one."""
    return _app_context.set(context)


def get_config() -> ConfigData:
    return get_context().config


def set_config(config: ConfigData) -> None:
    """Replace the whole configuration of the current context."""
    set_context(replace(get_context(), config=config))


def _explicit_fields(model: BaseModel) -> dict[str, Any]:
    """Values that were given to ``model`` (or any model nested in it).

    A nested model counts when it was passed in explicitly or when any of
    its own fields were.
    """
    explicit: dict[str, Any] = {}
    for name in type(model).model_fields:
        value = getattr(model, name)
        if isinstance(value, BaseModel):
            nested = _explicit_fields(value)
            if nested:
                explicit[name] = nested
            elif name in model.model_fields_set:
                explicit[name] = value.model_dump()
        elif name in model.model_fields_set:
            explicit[name] = value
    return explicit


def _deep_merge(base: dict[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, Mapping):
            merged[key] = _deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def _merge_configs(base_config: ConfigData, override_config: ConfigData) -> ConfigData:
    merged = _deep_merge(base_config.model_dump(), _explicit_fields(override_config))
    return ConfigData.model_validate(merged)


@contextmanager
def with_context(config_override: ConfigData | None = None) -> Iterator[None]:
    """Run a block with ``config_override`` layered over the current config.

    Only explicitly given fields win; everything else is inherited.

    Example:
        with with_context(ConfigData(database=DatabaseConfig(url="sqlite://"))):
            assert get_config().database.url == "sqlite://"
    """
    if config_override is None:
        yield
        return

    if not isinstance(config_override, ConfigData):
        raise ValueError(f"config_override must be ConfigData or None, got {type(config_override)}")

    current = get_context()
    token = set_context(replace(current, config=_merge_configs(current.config, config_override)))
    try:
        yield
    finally:
        _app_context.reset(token)
