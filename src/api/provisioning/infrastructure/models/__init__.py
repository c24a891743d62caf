"""SQLAlchemy ORM models for the provisioning bounded context.

These models mirror tables owned by the hosted backend and are used by
repository implementations.
"""

from provisioning.infrastructure.models.profile import ProfileModel
from provisioning.infrastructure.models.team import TeamMembershipModel, TeamModel

__all__ = [
    "ProfileModel",
    "TeamMembershipModel",
    "TeamModel",
]
