"""Infrastructure adapters for the provisioning bounded context."""

from provisioning.infrastructure.identity_provider import GoTrueIdentityProvider
from provisioning.infrastructure.profile_repository import ProfileRepository
from provisioning.infrastructure.team_repository import TeamRepository

__all__ = [
    "GoTrueIdentityProvider",
    "ProfileRepository",
    "TeamRepository",
]
