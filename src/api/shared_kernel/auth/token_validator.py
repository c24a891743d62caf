"""Local validation of identity-provider access tokens.

Validates the caller's bearer token against the provider's published JWKS,
avoiding a network round-trip to the provider for every request.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Any

import httpx
from jose import JWTError, jwt
from jose.exceptions import ExpiredSignatureError, JWTClaimsError

if TYPE_CHECKING:
    from shared_kernel.auth.observability import BearerTokenValidatorProbe

SUPPORTED_ALGORITHMS = ["RS256", "ES256"]


@dataclass(frozen=True)
class TokenClaims:
    """Validated access-token claims."""

    sub: str


class InvalidTokenError(Exception):
    """Raised when an access token cannot be trusted."""

    pass


class JWKSUnavailableError(Exception):
    """Raised when the signing keys cannot be obtained from the provider."""

    pass


class BearerTokenValidator:
    """Validates access tokens using the identity provider's JWKS.

    The JWKS document lives at `<issuer>/.well-known/jwks.json` and is cached
    for the configured TTL. Signature, expiry, issuer and audience are checked.
    """

    def __init__(
        self,
        issuer_url: str,
        audience: str,
        probe: BearerTokenValidatorProbe,
        jwks_cache_ttl: timedelta = timedelta(hours=1),
        http_timeout: float = 10.0,
    ):
        """Initialize the validator.

        Args:
            issuer_url: Issuer of the tokens (e.g. https://xyz.supabase.co/auth/v1).
            audience: Expected audience claim value.
            probe: Observability probe for logging events.
            jwks_cache_ttl: How long to cache JWKS keys.
            http_timeout: Timeout for the JWKS request.
        """
        self._issuer_url = issuer_url.rstrip("/")
        self._audience = audience
        self._probe = probe
        self._jwks_cache_ttl = jwks_cache_ttl
        self._http_timeout = http_timeout

        self._jwks: dict[str, Any] | None = None
        self._jwks_fetched_at: datetime | None = None
        self._jwks_lock = asyncio.Lock()

    @property
    def jwks_url(self) -> str:
        """URL of the provider's JSON Web Key Set."""
        return f"{self._issuer_url}/.well-known/jwks.json"

    async def validate_token(self, token: str) -> TokenClaims:
        """Validate a bearer token and return its claims.

        Args:
            token: The encoded JWT.

        Returns:
            TokenClaims for the authenticated subject.

        Raises:
            InvalidTokenError: If the token is malformed, expired or not trusted.
            JWKSUnavailableError: If the signing keys could not be fetched.
        """
        try:
            header = jwt.get_unverified_header(token)
        except JWTError as e:
            self._probe.token_rejected(reason=f"Malformed token: {e}")
            raise InvalidTokenError(f"Invalid token format: {e}") from e

        if not header:
            self._probe.token_rejected(reason="Missing token header")
            raise InvalidTokenError("Invalid token: missing header")

        jwks = await self._get_jwks()

        try:
            claims = jwt.decode(
                token=token,
                key=jwks,
                algorithms=SUPPORTED_ALGORITHMS,
                audience=self._audience,
                issuer=self._issuer_url,
            )
        except ExpiredSignatureError as e:
            self._probe.token_rejected(reason="Token expired")
            raise InvalidTokenError("Token has expired") from e
        except JWTClaimsError as e:
            self._probe.token_rejected(reason=f"Claims error: {e}")
            raise InvalidTokenError(f"Invalid token claims: {e}") from e
        except JWTError as e:
            self._probe.token_rejected(reason=f"JWT error: {e}")
            raise InvalidTokenError(f"Invalid token: {e}") from e

        subject = claims.get("sub")
        if not subject:
            self._probe.token_rejected(reason="Missing sub claim")
            raise InvalidTokenError("Missing required claim: sub")

        self._probe.token_accepted(user_id=str(subject))
        return TokenClaims(sub=str(subject))

    async def _get_jwks(self) -> dict[str, Any]:
        """Get JWKS, fetching from the provider if the cache expired."""
        if self._is_cache_valid():
            self._probe.jwks_cache_hit()
            return self._jwks  # type: ignore[return-value]

        async with self._jwks_lock:
            if self._is_cache_valid():
                self._probe.jwks_cache_hit()
                return self._jwks  # type: ignore[return-value]

            return await self._fetch_jwks()

    def _is_cache_valid(self) -> bool:
        """Check if the JWKS cache is still valid."""
        if self._jwks is None or self._jwks_fetched_at is None:
            return False

        now = datetime.now(tz=timezone.utc)
        return (now - self._jwks_fetched_at) < self._jwks_cache_ttl

    async def _fetch_jwks(self) -> dict[str, Any]:
        """Fetch the JWKS document.

        Raises:
            JWKSUnavailableError: If JWKS cannot be fetched or has no keys.
        """
        try:
            async with httpx.AsyncClient(timeout=self._http_timeout) as client:
                response = await client.get(self.jwks_url)
                response.raise_for_status()
                jwks = response.json()
        except httpx.HTTPError as e:
            self._probe.jwks_fetch_failed(error=str(e))
            raise JWKSUnavailableError(f"Failed to fetch JWKS: {e}") from e

        keys = jwks.get("keys") if isinstance(jwks, dict) else None
        if not keys:
            self._probe.jwks_fetch_failed(error="JWKS document has no keys")
            raise JWKSUnavailableError("Identity provider published no signing keys")

        self._jwks = jwks
        self._jwks_fetched_at = datetime.now(tz=timezone.utc)
        self._probe.jwks_fetched(key_count=len(keys))
        return jwks
