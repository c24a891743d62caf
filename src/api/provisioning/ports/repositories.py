"""Repository protocols (ports) for the provisioning bounded context.

The profile and team stores are tables of the hosted backend. Application
services depend only on these protocols so that sequencing logic can be
tested with fakes.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from provisioning.domain.value_objects import MembershipOutcome


@runtime_checkable
class IProfileStore(Protocol):
    """Store of application-level user profiles keyed by identity id."""

    async def get_role(self, user_id: str) -> str | None:
        """Look up the role recorded on a user's profile.

        Args:
            user_id: Identity id of the user

        Returns:
            The raw role value, or None if the user has no profile
        """
        ...

    async def upsert(self, columns: Mapping[str, Any]) -> None:
        """Insert or update a profile, keyed by `columns["user_id"]`.

        Only the given columns are written; existing values of other
        columns are preserved.

        Args:
            columns: Column values including user_id

        Raises:
            ProfileWriteError: If the write is rejected
        """
        ...

    async def merge_preferences(self, user_id: str, values: Mapping[str, Any]) -> None:
        """Merge keys into the profile's preferences document.

        Keys that already hold a value are left unchanged.

        Args:
            user_id: Identity id of the user
            values: Preference keys to add

        Raises:
            ProfileWriteError: If the write is rejected
        """
        ...


@runtime_checkable
class ITeamStore(Protocol):
    """Store of team definitions and (team, user) memberships."""

    async def find_team_id_by_name(self, name: str) -> str | None:
        """Find a team by exact name.

        Args:
            name: Team name

        Returns:
            The team id, or None if no team has that name
        """
        ...

    async def team_exists(self, team_id: str) -> bool:
        """Check that a team id refers to an existing team.

        Args:
            team_id: Candidate team id (may be malformed)

        Returns:
            True if the team exists
        """
        ...

    async def insert_membership(self, team_id: str, user_id: str) -> MembershipOutcome:
        """Add a user to a team.

        Args:
            team_id: Team to join
            user_id: Identity id of the member

        Returns:
            CREATED, or ALREADY_MEMBER if the pair already existed

        Raises:
            MembershipWriteError: For any other failure
        """
        ...
