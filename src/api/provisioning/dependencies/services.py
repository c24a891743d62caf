from typing import Annotated

from fastapi import Depends

from infrastructure.settings import get_import_settings
from provisioning.application.observability import (
    BulkImportProbe,
    CallerAuthorizationProbe,
    DefaultBulkImportProbe,
    DefaultCallerAuthorizationProbe,
    DefaultUserProvisioningProbe,
    UserProvisioningProbe,
)
from provisioning.application.services import (
    BulkImportService,
    CallerAuthorizationService,
    UserProvisioningService,
)
from provisioning.dependencies.identity import get_identity_provider
from provisioning.dependencies.repositories import (
    get_profile_repository,
    get_team_repository,
)
from provisioning.ports.identity import IIdentityProvider
from provisioning.ports.repositories import IProfileStore, ITeamStore


def get_caller_authorization_probe() -> CallerAuthorizationProbe:
    """Get CallerAuthorizationProbe instance.

    Returns:
        DefaultCallerAuthorizationProbe instance for observability
    """
    return DefaultCallerAuthorizationProbe()


def get_bulk_import_probe() -> BulkImportProbe:
    """Get BulkImportProbe instance.

    Returns:
        DefaultBulkImportProbe instance for observability
    """
    return DefaultBulkImportProbe()


def get_user_provisioning_probe() -> UserProvisioningProbe:
    """Get UserProvisioningProbe instance.

    Returns:
        DefaultUserProvisioningProbe instance for observability
    """
    return DefaultUserProvisioningProbe()


def get_caller_authorization_service(
    identity_provider: Annotated[IIdentityProvider, Depends(get_identity_provider)],
    profile_store: Annotated[IProfileStore, Depends(get_profile_repository)],
    probe: Annotated[CallerAuthorizationProbe, Depends(get_caller_authorization_probe)],
) -> CallerAuthorizationService:
    """Get CallerAuthorizationService instance.

    Args:
        identity_provider: Resolves caller tokens
        profile_store: Source of caller roles
        probe: Caller authorization probe for observability

    Returns:
        CallerAuthorizationService instance
    """
    return CallerAuthorizationService(
        identity_provider=identity_provider,
        profile_store=profile_store,
        probe=probe,
    )


def get_bulk_import_service(
    identity_provider: Annotated[IIdentityProvider, Depends(get_identity_provider)],
    profile_store: Annotated[IProfileStore, Depends(get_profile_repository)],
    team_store: Annotated[ITeamStore, Depends(get_team_repository)],
    probe: Annotated[BulkImportProbe, Depends(get_bulk_import_probe)],
) -> BulkImportService:
    """Get BulkImportService instance with limits from import settings.

    Args:
        identity_provider: Invites or creates identities
        profile_store: Profile repository
        team_store: Team repository
        probe: Bulk import probe for observability

    Returns:
        BulkImportService instance
    """
    settings = get_import_settings()
    return BulkImportService(
        identity_provider=identity_provider,
        profile_store=profile_store,
        team_store=team_store,
        row_timeout_seconds=settings.row_timeout_seconds,
        batch_timeout_seconds=settings.batch_timeout_seconds,
        probe=probe,
    )


def get_user_provisioning_service(
    identity_provider: Annotated[IIdentityProvider, Depends(get_identity_provider)],
    profile_store: Annotated[IProfileStore, Depends(get_profile_repository)],
    team_store: Annotated[ITeamStore, Depends(get_team_repository)],
    probe: Annotated[UserProvisioningProbe, Depends(get_user_provisioning_probe)],
) -> UserProvisioningService:
    """Get UserProvisioningService instance.

    Args:
        identity_provider: Invites or creates identities
        profile_store: Profile repository
        team_store: Team repository
        probe: User provisioning probe for observability

    Returns:
        UserProvisioningService instance
    """
    return UserProvisioningService(
        identity_provider=identity_provider,
        profile_store=profile_store,
        team_store=team_store,
        probe=probe,
    )
