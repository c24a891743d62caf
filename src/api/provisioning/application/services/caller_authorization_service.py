"""Caller authorization for privileged provisioning functions."""

from __future__ import annotations

from provisioning.application.exceptions import (
    CallerForbiddenError,
    CallerUnauthenticatedError,
)
from provisioning.application.observability import (
    CallerAuthorizationProbe,
    DefaultCallerAuthorizationProbe,
)
from provisioning.application.value_objects import AuthorizedCaller
from provisioning.domain.value_objects import AppRole
from provisioning.ports.identity import IIdentityProvider
from provisioning.ports.repositories import IProfileStore


class CallerAuthorizationService:
    """Admits only owners and admins to provisioning functions.

    The caller's identity comes from the identity provider and their role
    from the profile store, so both must agree before any user is touched.
    """

    def __init__(
        self,
        identity_provider: IIdentityProvider,
        profile_store: IProfileStore,
        probe: CallerAuthorizationProbe | None = None,
    ):
        """Initialize CallerAuthorizationService with dependencies.

        Args:
            identity_provider: Resolves bearer tokens to identities
            profile_store: Source of the caller's role
            probe: Optional domain probe for observability
        """
        self._identity_provider = identity_provider
        self._profile_store = profile_store
        self._probe = probe or DefaultCallerAuthorizationProbe()

    async def authorize_admin(self, token: str | None) -> AuthorizedCaller:
        """Resolve the caller and require an administrative role.

        Args:
            token: Bearer token from the request, if any

        Returns:
            The authorized caller

        Raises:
            CallerUnauthenticatedError: If the token is missing or not accepted
            CallerForbiddenError: If the caller's profile role is not owner/admin
        """
        if not token:
            self._probe.caller_unauthenticated(reason="missing bearer token")
            raise CallerUnauthenticatedError("Unauthorized")

        caller_id = await self._identity_provider.resolve_caller_identity(token)
        if not caller_id:
            self._probe.caller_unauthenticated(reason="token not accepted")
            raise CallerUnauthenticatedError("Unauthorized")

        raw_role = await self._profile_store.get_role(caller_id)
        role = _admin_role(raw_role)
        if role is None:
            self._probe.caller_forbidden(caller_id=caller_id, role=raw_role)
            raise CallerForbiddenError("Forbidden")

        self._probe.caller_authorized(caller_id=caller_id, role=role.value)
        return AuthorizedCaller(user_id=caller_id, role=role)


def _admin_role(raw_role: str | None) -> AppRole | None:
    # AppRole.parse defaults to learner, so compare against the exact values.
    if raw_role is None:
        return None
    try:
        role = AppRole(raw_role.strip().lower())
    except ValueError:
        return None
    return role if role.can_administer() else None
