"""Single-user provisioning for the provisioning bounded context.

Backs the create-user and invite-user functions used by the admin console
for one person at a time.
"""

from __future__ import annotations

from provisioning.application.exceptions import ProfileLinkError, TeamAssignmentError
from provisioning.application.observability import (
    DefaultUserProvisioningProbe,
    UserProvisioningProbe,
)
from provisioning.application.profile_linker import ProfileLinker
from provisioning.application.value_objects import (
    CreateUserCommand,
    InviteUserCommand,
    ProvisionedUser,
)
from provisioning.domain.profile import ProfileDraft
from provisioning.domain.value_objects import ProfileColumnTier
from provisioning.ports.exceptions import (
    IdentityProviderError,
    MembershipWriteError,
    ProfileWriteError,
)
from provisioning.ports.identity import IIdentityProvider
from provisioning.ports.repositories import IProfileStore, ITeamStore
from shared_kernel.observability_context import ObservationContext

CREATE_PROFILE_TIERS = (
    ProfileColumnTier.EXTENDED,
    ProfileColumnTier.REDUCED,
    ProfileColumnTier.MINIMAL,
)
INVITE_PROFILE_TIERS = (ProfileColumnTier.MINIMAL,)


class UserProvisioningService:
    """Application service for creating or inviting a single user."""

    def __init__(
        self,
        identity_provider: IIdentityProvider,
        profile_store: IProfileStore,
        team_store: ITeamStore,
        probe: UserProvisioningProbe | None = None,
        profile_linker: ProfileLinker | None = None,
    ):
        """Initialize UserProvisioningService with dependencies.

        Args:
            identity_provider: Invites or creates identities
            profile_store: Holds application profiles
            team_store: Holds team memberships
            probe: Optional domain probe for observability
            profile_linker: Optional profile writer, built over profile_store
                when omitted
        """
        self._identity_provider = identity_provider
        self._profile_store = profile_store
        self._team_store = team_store
        self._probe = probe or DefaultUserProvisioningProbe()
        self._profile_linker = profile_linker or ProfileLinker(profile_store)

    def with_context(self, context: ObservationContext) -> UserProvisioningService:
        """Create a service whose events carry the given observation context."""
        return UserProvisioningService(
            identity_provider=self._identity_provider,
            profile_store=self._profile_store,
            team_store=self._team_store,
            probe=self._probe.with_context(context),
            profile_linker=self._profile_linker.with_context(context),
        )

    async def create_user(self, command: CreateUserCommand) -> ProvisionedUser:
        """Create an unconfirmed user with a profile and optional team.

        The profile is written with the largest column set the profile table
        accepts. If that set had no room for the mobile number, it is kept in
        the profile's preferences instead, best-effort.

        Args:
            command: Validated request

        Returns:
            The created user

        Raises:
            IdentityProviderError: If the identity provider refuses the user
            ProfileLinkError: If no profile could be written
            TeamAssignmentError: If the requested team membership failed
        """
        try:
            user_id = await self._identity_provider.create_identity(command.email)
        except IdentityProviderError as e:
            self._probe.identity_provisioning_failed(email=command.email, error=str(e))
            raise

        draft = ProfileDraft(
            user_id=user_id,
            role=command.role,
            full_name=command.full_name,
            first_name=command.first_name,
            last_name=command.last_name,
            mobile_number=command.mobile_number,
            is_active=True,
        )
        try:
            tier = await self._profile_linker.link(draft, CREATE_PROFILE_TIERS)
        except ProfileWriteError as e:
            raise ProfileLinkError(user_id=user_id, reason=str(e)) from e

        if draft.drops_mobile_number(tier):
            await self._keep_mobile_number(user_id, command.mobile_number)

        if command.team_id:
            try:
                await self._team_store.insert_membership(command.team_id, user_id)
            except MembershipWriteError as e:
                self._probe.team_assignment_failed(
                    user_id=user_id, team_id=command.team_id, error=str(e)
                )
                raise TeamAssignmentError(user_id=user_id, reason=str(e)) from e

        self._probe.user_created(
            user_id=user_id, email=command.email, team_id=command.team_id or None
        )
        return ProvisionedUser(user_id=user_id, email=command.email)

    async def invite_user(self, command: InviteUserCommand) -> ProvisionedUser:
        """Invite a user by email and record their role.

        A profile write failure does not fail the invitation, which has
        already been sent by then.

        Args:
            command: Validated request

        Returns:
            The invited user

        Raises:
            IdentityProviderError: If the identity provider refuses the invitation
        """
        try:
            user_id = await self._identity_provider.invite_identity(command.email)
        except IdentityProviderError as e:
            self._probe.identity_provisioning_failed(email=command.email, error=str(e))
            raise

        draft = ProfileDraft(
            user_id=user_id, role=command.role, full_name=command.full_name
        )
        try:
            await self._profile_linker.link(draft, INVITE_PROFILE_TIERS)
        except ProfileWriteError as e:
            self._probe.invite_profile_write_failed(user_id=user_id, error=str(e))

        self._probe.user_invited(user_id=user_id, email=command.email)
        return ProvisionedUser(user_id=user_id, email=command.email)

    async def _keep_mobile_number(self, user_id: str, mobile_number: str) -> None:
        try:
            await self._profile_store.merge_preferences(
                user_id, {"mobile_number": mobile_number}
            )
        except ProfileWriteError as e:
            self._probe.mobile_number_preference_failed(user_id=user_id, error=str(e))
            return
        self._probe.mobile_number_preference_saved(user_id=user_id)
