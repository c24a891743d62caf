"""Fixtures for provisioning infrastructure tests."""

from __future__ import annotations

import pytest
from sqlalchemy.exc import DBAPIError


class FakeDriverError(Exception):
    """Stands in for a driver exception carrying a SQLSTATE code."""

    def __init__(self, message: str, sqlstate: str | None = None):
        super().__init__(message)
        self.sqlstate = sqlstate


@pytest.fixture
def make_db_error():
    """Build SQLAlchemy DBAPIErrors wrapping a driver error with a SQLSTATE."""

    def _make(message: str, sqlstate: str | None = None) -> DBAPIError:
        return DBAPIError("SQL statement", {}, FakeDriverError(message, sqlstate))

    return _make


@pytest.fixture
def result_returning():
    """Build a mock execute() result whose scalar_one_or_none returns a value."""
    from unittest.mock import MagicMock

    def _make(value):
        result = MagicMock()
        result.scalar_one_or_none.return_value = value
        return result

    return _make
