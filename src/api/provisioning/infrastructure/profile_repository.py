"""PostgreSQL implementation of IProfileStore.

Profiles live in the hosted backend's `profiles` table. Writes name only the
columns they are given, so an upsert never clears a column it did not set
and a table missing an optional column rejects only writes that name it.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy import func, literal, select, update
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession

from provisioning.infrastructure.models import ProfileModel
from provisioning.infrastructure.observability import (
    DefaultProfileRepositoryProbe,
    ProfileRepositoryProbe,
)
from provisioning.infrastructure.postgres_errors import (
    UNDEFINED_COLUMN,
    UNIQUE_VIOLATION,
    message_of,
    sqlstate_of,
)
from provisioning.ports.exceptions import ProfileWriteError, ProfileWriteErrorKind
from provisioning.ports.repositories import IProfileStore

_KIND_BY_SQLSTATE = {
    UNDEFINED_COLUMN: ProfileWriteErrorKind.UNKNOWN_COLUMN,
    UNIQUE_VIOLATION: ProfileWriteErrorKind.CONFLICT,
}


class ProfileRepository(IProfileStore):
    """PostgreSQL-backed profile store.

    Each operation runs in its own short transaction, so a rejected write
    leaves the session usable for the next row of a batch.
    """

    def __init__(
        self, session: AsyncSession, probe: ProfileRepositoryProbe | None = None
    ) -> None:
        """Initialize repository with database session and probe.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultProfileRepositoryProbe()

    async def get_role(self, user_id: str) -> str | None:
        """Read the role recorded on a user's profile.

        Args:
            user_id: Identity id of the user

        Returns:
            The raw role value, or None if the user has no profile
        """
        stmt = select(ProfileModel.role).where(ProfileModel.user_id == user_id)
        async with self._session.begin():
            result = await self._session.execute(stmt)
            role = result.scalar_one_or_none()

        if role is None:
            self._probe.role_not_found(user_id)
        return role

    async def upsert(self, columns: Mapping[str, Any]) -> None:
        """Insert or update a profile keyed by user_id.

        Args:
            columns: Column values including user_id

        Raises:
            ProfileWriteError: If the database rejects the write
        """
        values = dict(columns)
        user_id = str(values["user_id"])
        stmt = pg_insert(ProfileModel).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[ProfileModel.user_id],
            set_={
                column: stmt.excluded[column]
                for column in values
                if column != "user_id"
            },
        )

        try:
            async with self._session.begin():
                await self._session.execute(stmt)
        except DBAPIError as e:
            raise self._write_error(user_id, e) from e

        self._probe.profile_upserted(user_id, sorted(values))

    async def merge_preferences(self, user_id: str, values: Mapping[str, Any]) -> None:
        """Merge keys into the profile's preferences without overwriting.

        Args:
            user_id: Identity id of the user
            values: Preference keys to add

        Raises:
            ProfileWriteError: If the database rejects the write
        """
        # jsonb `||` keeps the right-hand value for duplicate keys.
        merged = literal(dict(values), type_=JSONB).op("||")(
            func.coalesce(ProfileModel.preferences, literal({}, type_=JSONB))
        )
        stmt = (
            update(ProfileModel)
            .where(ProfileModel.user_id == user_id)
            .values(preferences=merged)
        )

        try:
            async with self._session.begin():
                await self._session.execute(stmt)
        except DBAPIError as e:
            raise self._write_error(user_id, e) from e

        self._probe.preferences_merged(user_id, sorted(values))

    def _write_error(self, user_id: str, error: DBAPIError) -> ProfileWriteError:
        sqlstate = sqlstate_of(error)
        kind = _KIND_BY_SQLSTATE.get(sqlstate or "", ProfileWriteErrorKind.OTHER)
        message = message_of(error)
        self._probe.profile_write_rejected(
            user_id=user_id, kind=kind.value, sqlstate=sqlstate, error=message
        )
        return ProfileWriteError(kind, message)
