"""PostgreSQL implementation of ITeamStore."""

from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession

from provisioning.domain.value_objects import MembershipOutcome
from provisioning.infrastructure.models import TeamMembershipModel, TeamModel
from provisioning.infrastructure.observability import (
    DefaultTeamRepositoryProbe,
    TeamRepositoryProbe,
)
from provisioning.infrastructure.postgres_errors import (
    INVALID_TEXT_REPRESENTATION,
    UNIQUE_VIOLATION,
    message_of,
    sqlstate_of,
)
from provisioning.ports.exceptions import MembershipWriteError
from provisioning.ports.repositories import ITeamStore


class TeamRepository(ITeamStore):
    """PostgreSQL-backed store of teams and team memberships.

    Team ids are UUIDs. An id that is not a well-formed UUID cannot name a
    team and is reported as missing instead of raising.
    """

    def __init__(
        self, session: AsyncSession, probe: TeamRepositoryProbe | None = None
    ) -> None:
        """Initialize repository with database session and probe.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultTeamRepositoryProbe()

    async def find_team_id_by_name(self, name: str) -> str | None:
        """Find a team by exact name, taking the first match.

        Args:
            name: Team name

        Returns:
            The team id, or None if no team has that name
        """
        stmt = select(TeamModel.id).where(TeamModel.name == name).limit(1)
        async with self._session.begin():
            result = await self._session.execute(stmt)
            team_id = result.scalar_one_or_none()

        self._probe.team_lookup(reference=name, by="name", found=team_id is not None)
        return str(team_id) if team_id is not None else None

    async def team_exists(self, team_id: str) -> bool:
        """Check that a team id refers to an existing team.

        Args:
            team_id: Candidate team id, possibly malformed

        Returns:
            True if the team exists
        """
        if not _is_uuid(team_id):
            self._probe.team_lookup(reference=team_id, by="id", found=False)
            return False

        stmt = select(TeamModel.id).where(TeamModel.id == team_id)
        try:
            async with self._session.begin():
                result = await self._session.execute(stmt)
                found = result.scalar_one_or_none() is not None
        except DBAPIError as e:
            if sqlstate_of(e) != INVALID_TEXT_REPRESENTATION:
                raise
            found = False

        self._probe.team_lookup(reference=team_id, by="id", found=found)
        return found

    async def insert_membership(self, team_id: str, user_id: str) -> MembershipOutcome:
        """Add a user to a team.

        Args:
            team_id: Team to join
            user_id: Identity id of the member

        Returns:
            CREATED, or ALREADY_MEMBER if the pair already existed

        Raises:
            MembershipWriteError: For any failure other than a duplicate
        """
        stmt = pg_insert(TeamMembershipModel).values(team_id=team_id, user_id=user_id)
        try:
            async with self._session.begin():
                await self._session.execute(stmt)
        except DBAPIError as e:
            sqlstate = sqlstate_of(e)
            if sqlstate == UNIQUE_VIOLATION:
                self._probe.membership_already_exists(team_id, user_id)
                return MembershipOutcome.ALREADY_MEMBER
            message = message_of(e)
            self._probe.membership_write_failed(
                team_id=team_id, user_id=user_id, sqlstate=sqlstate, error=message
            )
            raise MembershipWriteError(message) from e

        self._probe.membership_created(team_id, user_id)
        return MembershipOutcome.CREATED


def _is_uuid(value: str) -> bool:
    try:
        uuid.UUID(value)
    except ValueError:
        return False
    return True
