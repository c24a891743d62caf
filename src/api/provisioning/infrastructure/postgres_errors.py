"""Helpers for reading PostgreSQL error details off SQLAlchemy exceptions."""

from __future__ import annotations

from sqlalchemy.exc import DBAPIError

UNDEFINED_COLUMN = "42703"
UNIQUE_VIOLATION = "23505"
INVALID_TEXT_REPRESENTATION = "22P02"


def sqlstate_of(error: DBAPIError) -> str | None:
    """Return the SQLSTATE code behind a DBAPI error, if the driver exposes one.

    The asyncpg adapter carries it as `sqlstate` (or `pgcode`) on the wrapped
    exception, and older releases only on the original asyncpg exception
    chained as its cause.
    """
    orig = error.orig
    for candidate in (orig, getattr(orig, "__cause__", None)):
        if candidate is None:
            continue
        code = getattr(candidate, "sqlstate", None) or getattr(candidate, "pgcode", None)
        if code:
            return str(code)
    return None


def message_of(error: DBAPIError) -> str:
    """Return the server's message without SQLAlchemy's statement dump."""
    orig = error.orig
    cause = getattr(orig, "__cause__", None)
    for candidate in (cause, orig):
        if candidate is not None and str(candidate):
            return str(candidate)
    return str(error)
