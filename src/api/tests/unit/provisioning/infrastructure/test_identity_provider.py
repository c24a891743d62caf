"""Unit tests for GoTrueIdentityProvider.

HTTP traffic is served by httpx.MockTransport handlers that record each
request, so no auth server is needed.
"""

from __future__ import annotations

import json
from unittest.mock import create_autospec

import httpx
import pytest

from provisioning.infrastructure.identity_provider import GoTrueIdentityProvider
from provisioning.infrastructure.observability import IdentityProviderProbe
from provisioning.ports.exceptions import IdentityProviderError
from provisioning.ports.identity import IIdentityProvider
from shared_kernel.auth import (
    BearerTokenValidator,
    InvalidTokenError,
    JWKSUnavailableError,
    TokenClaims,
)

BASE_URL = "https://project.supabase.co"


class RecordingHandler:
    """MockTransport handler returning a canned response and keeping requests."""

    def __init__(self, status_code: int = 200, body=None, raises: Exception | None = None):
        self.status_code = status_code
        self.body = body
        self.raises = raises
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.raises is not None:
            raise self.raises
        if self.body is None:
            return httpx.Response(self.status_code)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def mock_probe():
    """Create mock identity provider probe."""
    return create_autospec(IdentityProviderProbe, instance=True)


def make_provider(handler, probe=None, token_validator=None) -> GoTrueIdentityProvider:
    return GoTrueIdentityProvider(
        base_url=BASE_URL + "/",
        anon_key="anon-key",
        service_role_key="service-key",
        token_validator=token_validator,
        probe=probe,
        transport=httpx.MockTransport(handler),
    )


class TestProtocolCompliance:
    """Tests for protocol compliance."""

    def test_implements_protocol(self):
        assert isinstance(make_provider(RecordingHandler()), IIdentityProvider)


class TestResolveCallerIdentity:
    """Tests for resolve_caller_identity."""

    @pytest.mark.asyncio
    async def test_returns_user_id_and_uses_anon_key(self, mock_probe):
        handler = RecordingHandler(body={"id": "caller-1", "email": "admin@x.com"})
        provider = make_provider(handler, probe=mock_probe)

        user_id = await provider.resolve_caller_identity("caller-token")

        assert user_id == "caller-1"
        request = handler.last
        assert request.method == "GET"
        assert str(request.url) == f"{BASE_URL}/auth/v1/user"
        assert request.headers["apikey"] == "anon-key"
        assert request.headers["authorization"] == "Bearer caller-token"
        mock_probe.caller_resolved.assert_called_once_with(
            user_id="caller-1", verified_locally=False
        )

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status_code", [401, 403])
    async def test_rejected_token_returns_none(self, status_code):
        handler = RecordingHandler(status_code, {"msg": "invalid JWT"})

        assert await make_provider(handler).resolve_caller_identity("bad") is None

    @pytest.mark.asyncio
    async def test_missing_user_returns_none(self):
        handler = RecordingHandler(body={})

        assert await make_provider(handler).resolve_caller_identity("token") is None

    @pytest.mark.asyncio
    async def test_server_error_raises(self):
        handler = RecordingHandler(500, {"message": "database unavailable"})

        with pytest.raises(IdentityProviderError, match="database unavailable"):
            await make_provider(handler).resolve_caller_identity("token")

    @pytest.mark.asyncio
    async def test_network_error_raises(self, mock_probe):
        handler = RecordingHandler(raises=httpx.ConnectError("connection refused"))

        with pytest.raises(IdentityProviderError, match="Identity provider request failed"):
            await make_provider(handler, probe=mock_probe).resolve_caller_identity("t")

        mock_probe.provider_request_failed.assert_called_once()

    @pytest.mark.asyncio
    async def test_local_validation_skips_http(self, mock_probe):
        handler = RecordingHandler()
        validator = create_autospec(BearerTokenValidator, instance=True)
        validator.validate_token.return_value = TokenClaims(sub="caller-1")
        provider = make_provider(handler, probe=mock_probe, token_validator=validator)

        assert await provider.resolve_caller_identity("jwt") == "caller-1"
        assert handler.requests == []
        mock_probe.caller_resolved.assert_called_once_with(
            user_id="caller-1", verified_locally=True
        )

    @pytest.mark.asyncio
    async def test_local_validation_failure_returns_none(self):
        validator = create_autospec(BearerTokenValidator, instance=True)
        validator.validate_token.side_effect = InvalidTokenError("Token has expired")
        provider = make_provider(RecordingHandler(), token_validator=validator)

        assert await provider.resolve_caller_identity("jwt") is None

    @pytest.mark.asyncio
    async def test_unreachable_signing_keys_raise(self, mock_probe):
        validator = create_autospec(BearerTokenValidator, instance=True)
        validator.validate_token.side_effect = JWKSUnavailableError(
            "Failed to fetch JWKS: connection refused"
        )
        provider = make_provider(
            RecordingHandler(), probe=mock_probe, token_validator=validator
        )

        with pytest.raises(IdentityProviderError, match="Failed to fetch JWKS"):
            await provider.resolve_caller_identity("jwt")

        mock_probe.provider_request_failed.assert_called_once_with(
            operation="resolve_caller",
            status_code=None,
            error="Failed to fetch JWKS: connection refused",
        )
        mock_probe.caller_rejected.assert_not_called()


class TestCreateIdentity:
    """Tests for create_identity."""

    @pytest.mark.asyncio
    async def test_creates_unconfirmed_user_with_service_key(self, mock_probe):
        handler = RecordingHandler(body={"id": "user-1", "email": "a@x.com"})
        provider = make_provider(handler, probe=mock_probe)

        user_id = await provider.create_identity("a@x.com")

        assert user_id == "user-1"
        request = handler.last
        assert request.method == "POST"
        assert request.url.path == "/auth/v1/admin/users"
        assert request.headers["apikey"] == "service-key"
        assert request.headers["authorization"] == "Bearer service-key"
        assert json.loads(request.content) == {"email": "a@x.com", "email_confirm": False}
        mock_probe.identity_provisioned.assert_called_once_with(
            operation="create", user_id="user-1"
        )

    @pytest.mark.asyncio
    async def test_accepts_wrapped_user_body(self):
        handler = RecordingHandler(body={"user": {"id": "user-1"}})

        assert await make_provider(handler).create_identity("a@x.com") == "user-1"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body,expected",
        [
            ({"msg": "A user with this email address has already been registered"},
             "A user with this email address has already been registered"),
            ({"error_description": "Email rate limit exceeded"}, "Email rate limit exceeded"),
            ({"error": "invalid_request"}, "invalid_request"),
            (None, "Identity provider returned HTTP 422"),
        ],
    )
    async def test_error_message_comes_from_provider(self, body, expected):
        handler = RecordingHandler(422, body)

        with pytest.raises(IdentityProviderError) as exc_info:
            await make_provider(handler).create_identity("a@x.com")

        assert str(exc_info.value) == expected

    @pytest.mark.asyncio
    async def test_missing_user_id_raises(self):
        handler = RecordingHandler(body={"email": "a@x.com"})

        with pytest.raises(IdentityProviderError, match="No user id returned"):
            await make_provider(handler).create_identity("a@x.com")


class TestInviteIdentity:
    """Tests for invite_identity."""

    @pytest.mark.asyncio
    async def test_invites_with_service_key(self):
        handler = RecordingHandler(body={"id": "user-2", "email": "b@x.com"})

        user_id = await make_provider(handler).invite_identity("b@x.com")

        assert user_id == "user-2"
        assert handler.last.url.path == "/auth/v1/invite"
        assert handler.last.headers["apikey"] == "service-key"
        assert json.loads(handler.last.content) == {"email": "b@x.com"}

    @pytest.mark.asyncio
    async def test_timeout_raises_provider_error(self):
        handler = RecordingHandler(raises=httpx.ReadTimeout("timed out"))

        with pytest.raises(IdentityProviderError, match="timed out"):
            await make_provider(handler).invite_identity("b@x.com")
