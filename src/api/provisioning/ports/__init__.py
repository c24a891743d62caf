"""Ports (interfaces) for the provisioning bounded context.

Ports define the contracts for the identity provider and the backend's
tables without specifying implementation details. This allows for dependency
inversion and makes the application layer independent of infrastructure.
"""

from provisioning.ports.exceptions import (
    IdentityProviderError,
    MembershipWriteError,
    ProfileWriteError,
    ProfileWriteErrorKind,
)
from provisioning.ports.identity import IIdentityProvider
from provisioning.ports.repositories import IProfileStore, ITeamStore

__all__ = [
    "IIdentityProvider",
    "IProfileStore",
    "ITeamStore",
    "IdentityProviderError",
    "MembershipWriteError",
    "ProfileWriteError",
    "ProfileWriteErrorKind",
]
