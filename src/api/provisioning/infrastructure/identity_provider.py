"""GoTrue implementation of IIdentityProvider.

Talks to the hosted backend's auth server over its HTTP API. Caller
resolution uses the public (anon) key together with the caller's own token;
user creation and invitation use the service-role key.
"""

from __future__ import annotations

from typing import Any

import httpx

from provisioning.infrastructure.observability import (
    DefaultIdentityProviderProbe,
    IdentityProviderProbe,
)
from provisioning.ports.exceptions import IdentityProviderError
from provisioning.ports.identity import IIdentityProvider
from shared_kernel.auth import (
    BearerTokenValidator,
    InvalidTokenError,
    JWKSUnavailableError,
)

_ERROR_FIELDS = ("msg", "message", "error_description", "error")


class GoTrueIdentityProvider(IIdentityProvider):
    """Identity provider backed by a GoTrue-compatible auth server."""

    def __init__(
        self,
        base_url: str,
        anon_key: str,
        service_role_key: str,
        timeout: float = 10.0,
        token_validator: BearerTokenValidator | None = None,
        probe: IdentityProviderProbe | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Base URL of the hosted backend (the auth API lives under /auth/v1)
            anon_key: Public API key
            service_role_key: Privileged API key for admin operations
            timeout: HTTP timeout per request in seconds
            token_validator: When given, caller tokens are verified locally
                against the provider's JWKS instead of calling the provider
            probe: Optional domain probe for observability
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self._base_url = base_url.rstrip("/")
        self._anon_key = anon_key
        self._service_role_key = service_role_key
        self._timeout = timeout
        self._token_validator = token_validator
        self._probe = probe or DefaultIdentityProviderProbe()
        self._transport = transport

    async def resolve_caller_identity(self, token: str) -> str | None:
        """Resolve the identity behind a caller's bearer token.

        Args:
            token: Access token presented by the caller

        Returns:
            The caller's user id, or None if the token is not accepted

        Raises:
            IdentityProviderError: If the provider, or its signing keys, could
                not be reached
        """
        if self._token_validator is not None:
            try:
                claims = await self._token_validator.validate_token(token)
            except InvalidTokenError as e:
                self._probe.caller_rejected(status_code=None, reason=str(e))
                return None
            except JWKSUnavailableError as e:
                self._probe.provider_request_failed(
                    operation="resolve_caller", status_code=None, error=str(e)
                )
                raise IdentityProviderError(str(e)) from e
            self._probe.caller_resolved(user_id=claims.sub, verified_locally=True)
            return claims.sub

        response = await self._send(
            "resolve_caller",
            "GET",
            "/auth/v1/user",
            headers={"apikey": self._anon_key, "Authorization": f"Bearer {token}"},
        )
        if response.status_code in (401, 403):
            self._probe.caller_rejected(
                status_code=response.status_code, reason=_error_message(response)
            )
            return None
        self._raise_for_error("resolve_caller", response)

        user_id = _user_id(_json_body(response))
        if not user_id:
            self._probe.caller_rejected(
                status_code=response.status_code, reason="No user in response"
            )
            return None
        self._probe.caller_resolved(user_id=user_id, verified_locally=False)
        return user_id

    async def create_identity(self, email: str) -> str:
        """Create an unconfirmed identity for an email address.

        Args:
            email: Address of the new user

        Returns:
            The new identity's user id

        Raises:
            IdentityProviderError: If the provider refuses or fails
        """
        return await self._provision(
            "create",
            "/auth/v1/admin/users",
            {"email": email, "email_confirm": False},
        )

    async def invite_identity(self, email: str) -> str:
        """Send an invitation email, provisioning the identity it activates.

        Args:
            email: Address to invite

        Returns:
            The invited identity's user id

        Raises:
            IdentityProviderError: If the provider refuses or fails
        """
        return await self._provision("invite", "/auth/v1/invite", {"email": email})

    async def _provision(self, operation: str, path: str, payload: dict[str, Any]) -> str:
        response = await self._send(
            operation,
            "POST",
            path,
            headers={
                "apikey": self._service_role_key,
                "Authorization": f"Bearer {self._service_role_key}",
            },
            json=payload,
        )
        self._raise_for_error(operation, response)

        user_id = _user_id(_json_body(response))
        if not user_id:
            self._probe.provider_request_failed(
                operation=operation,
                status_code=response.status_code,
                error="No user id returned",
            )
            raise IdentityProviderError("No user id returned")

        self._probe.identity_provisioned(operation=operation, user_id=user_id)
        return user_id

    async def _send(
        self,
        operation: str,
        method: str,
        path: str,
        headers: dict[str, str],
        json: dict[str, Any] | None = None,
    ) -> httpx.Response:
        try:
            async with httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                return await client.request(method, path, headers=headers, json=json)
        except httpx.HTTPError as e:
            self._probe.provider_request_failed(
                operation=operation, status_code=None, error=str(e)
            )
            raise IdentityProviderError(
                f"Identity provider request failed: {e}"
            ) from e

    def _raise_for_error(self, operation: str, response: httpx.Response) -> None:
        if not response.is_error:
            return
        message = _error_message(response)
        self._probe.provider_request_failed(
            operation=operation, status_code=response.status_code, error=message
        )
        raise IdentityProviderError(message)


def _json_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


def _user_id(body: Any) -> str | None:
    """Read the user id from a user object, bare or wrapped in {"user": ...}."""
    if not isinstance(body, dict):
        return None
    user = body.get("user") if isinstance(body.get("user"), dict) else body
    user_id = user.get("id")
    return str(user_id) if user_id else None


def _error_message(response: httpx.Response) -> str:
    body = _json_body(response)
    if isinstance(body, dict):
        for field_name in _ERROR_FIELDS:
            value = body.get(field_name)
            if isinstance(value, str) and value:
                return value
    return f"Identity provider returned HTTP {response.status_code}"
