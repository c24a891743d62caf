"""Domain probes for provisioning infrastructure adapters."""

from provisioning.infrastructure.observability.identity_provider_probe import (
    DefaultIdentityProviderProbe,
    IdentityProviderProbe,
)
from provisioning.infrastructure.observability.repository_probe import (
    DefaultProfileRepositoryProbe,
    DefaultTeamRepositoryProbe,
    ProfileRepositoryProbe,
    TeamRepositoryProbe,
)

__all__ = [
    "DefaultIdentityProviderProbe",
    "DefaultProfileRepositoryProbe",
    "DefaultTeamRepositoryProbe",
    "IdentityProviderProbe",
    "ProfileRepositoryProbe",
    "TeamRepositoryProbe",
]
