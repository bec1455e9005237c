"""Shared pytest fixtures for database, entity and CLI tests."""

from .core import *  # noqa: F401,F403
