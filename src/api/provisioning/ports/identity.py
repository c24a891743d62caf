"""Identity provider protocol (port) for the provisioning bounded context."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class IIdentityProvider(Protocol):
    """Owner of login credentials.

    Each provisioning call yields a fresh identity; deduplication against
    existing accounts is left to the provider.
    """

    async def resolve_caller_identity(self, token: str) -> str | None:
        """Resolve the identity behind a caller's bearer token.

        Args:
            token: Access token presented by the caller

        Returns:
            The caller's user id, or None if the token is not accepted

        Raises:
            IdentityProviderError: If the provider could not be reached
        """
        ...

    async def create_identity(self, email: str) -> str:
        """Create an unconfirmed identity for an email address.

        Args:
            email: Address of the new user

        Returns:
            The new identity's user id

        Raises:
            IdentityProviderError: If the provider refuses or fails
        """
        ...

    async def invite_identity(self, email: str) -> str:
        """Send an invitation email, provisioning the identity it activates.

        Args:
            email: Address to invite

        Returns:
            The invited identity's user id

        Raises:
            IdentityProviderError: If the provider refuses or fails
        """
        ...
