"""Shared pytest fixtures for test modules."""

import logging
import sqlite3
from collections.abc import Generator

import pytest

from baseball_analytics.db.connection import create_connection


@pytest.fixture
def conn() -> Generator[sqlite3.Connection]:
    connection = create_connection(":memory:")
    yield connection
    connection.close()


@pytest.fixture(autouse=True)
def _restore_root_logger() -> Generator[None]:
    """CLI tests reconfigure the root logger; put it back so caplog keeps working."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
