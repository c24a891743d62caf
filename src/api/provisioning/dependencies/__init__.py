"""FastAPI dependency providers for the provisioning bounded context."""

from provisioning.dependencies.authorization import (
    bearer_scheme,
    get_admin_caller,
    get_observation_context,
    get_route_probe,
)
from provisioning.dependencies.identity import (
    get_bearer_token_validator,
    get_identity_provider,
)
from provisioning.dependencies.repositories import (
    get_profile_repository,
    get_team_repository,
)
from provisioning.dependencies.services import (
    get_bulk_import_service,
    get_caller_authorization_service,
    get_user_provisioning_service,
)

__all__ = [
    "bearer_scheme",
    "get_admin_caller",
    "get_bearer_token_validator",
    "get_bulk_import_service",
    "get_caller_authorization_service",
    "get_identity_provider",
    "get_observation_context",
    "get_profile_repository",
    "get_route_probe",
    "get_team_repository",
    "get_user_provisioning_service",
]
