from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.database.dependencies import get_write_session
from provisioning.infrastructure import ProfileRepository, TeamRepository
from provisioning.ports.repositories import IProfileStore, ITeamStore


def get_profile_repository(
    session: Annotated[AsyncSession, Depends(get_write_session)],
) -> IProfileStore:
    """Get ProfileRepository instance.

    Args:
        session: Async database session

    Returns:
        ProfileRepository instance
    """
    return ProfileRepository(session=session)


def get_team_repository(
    session: Annotated[AsyncSession, Depends(get_write_session)],
) -> ITeamStore:
    """Get TeamRepository instance.

    Args:
        session: Async database session (shared with the profile repository
            via FastAPI dependency caching)

    Returns:
        TeamRepository instance
    """
    return TeamRepository(session=session)
