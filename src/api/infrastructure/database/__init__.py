"""Database infrastructure - shared engine, session and model primitives."""

from infrastructure.database.dependencies import (
    close_database_connections,
    get_write_session,
)
from infrastructure.database.models import Base, TimestampMixin

__all__ = [
    "Base",
    "TimestampMixin",
    "close_database_connections",
    "get_write_session",
]
