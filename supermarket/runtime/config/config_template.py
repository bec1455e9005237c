"""Load config.yaml with ``${...}`` environment placeholders.

Placeholder forms:

- ``${NAME}``: the variable must be set.
- ``${NAME:-fallback}``: ``fallback`` when the variable is unset.
- ``${NAME:?hint}``: the variable must be set; ``hint`` goes into the error.

Placeholders are resolved in string values after the YAML is parsed.
Before that, variables named ``<ENV>_NAME`` for the active
``APP_ENVIRONMENT`` are copied onto ``NAME``.
"""

import os
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from loguru import logger
from pydantic import ValidationError

from supermarket.runtime.config.config_data import ConfigData

PLACEHOLDER = re.compile(r"\$\{(?P<name>[^}:]+)(?::(?P<op>[-?])(?P<arg>[^}]*))?\}")


def _resolve(match: re.Match[str]) -> str:
    name, op, arg = match.group("name"), match.group("op"), match.group("arg")
    value = os.getenv(name)
    if value is not None:
        return value
    if op == "-":
        return arg
    if op == "?":
        raise ValueError(f"Required environment variable {name}: {arg}")
    raise ValueError(f"Required environment variable {name} not set")


def substitute_env_vars(text: str) -> str:
    """Replace every placeholder in ``text`` from the process environment."""
    return PLACEHOLDER.sub(_resolve, text)


def substitute_values(node: Any) -> Any:
    """Substitute placeholders in every string of a parsed YAML tree.

    Keys and non-string scalars are left alone, and comments never reach
    this point.
    """
    if isinstance(node, dict):
        return {key: substitute_values(value) for key, value in node.items()}
    if isinstance(node, list):
        return [substitute_values(item) for item in node]
    if isinstance(node, str):
        return substitute_env_vars(node)
    return node


def environment_overrides(env_mode: str, environ: Mapping[str, str] | None = None) -> dict[str, str]:
    """Unprefixed name -> value for every ``<ENV>_`` variable of ``env_mode``."""
    environ = os.environ if environ is None else environ
    prefix = f"{env_mode.upper()}_"
    return {name.removeprefix(prefix): value for name, value in environ.items() if name.startswith(prefix)}


def apply_environment_overrides(env_mode: str) -> None:
    overrides = environment_overrides(env_mode)
    if overrides:
        logger.info("Applying {} overrides: {}", env_mode, sorted(overrides))
    os.environ.update(overrides)


def _parse_document(text: str) -> dict[str, Any]:
    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing YAML: {e}") from e
    if not isinstance(document, dict):
        raise ValueError("Configuration file is empty or not a mapping")
    return document


def load_templated_yaml(file_path: Path) -> ConfigData:
    """Read ``file_path`` and validate its ``config:`` section.

    Raises:
        ValueError: a required variable is missing, or the YAML or its
            values are invalid.
        FileNotFoundError: ``file_path`` does not exist.
    """
    env_mode = os.getenv("APP_ENVIRONMENT", "development")
    logger.debug("Loading {} for environment {}", file_path, env_mode)
    apply_environment_overrides(env_mode)

    document = _parse_document(Path(file_path).read_text())
    try:
        return ConfigData.model_validate(substitute_values(document.get("config") or {}))
    except ValidationError as e:
        raise ValueError(f"Invalid configuration: {e}") from e
