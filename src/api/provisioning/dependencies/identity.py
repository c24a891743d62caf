"""Identity provider dependencies for the provisioning bounded context."""

from datetime import timedelta
from functools import lru_cache

from infrastructure.settings import get_identity_provider_settings
from provisioning.infrastructure import GoTrueIdentityProvider
from provisioning.ports.identity import IIdentityProvider
from shared_kernel.auth import BearerTokenValidator
from shared_kernel.auth.observability import DefaultBearerTokenValidatorProbe


@lru_cache
def get_bearer_token_validator() -> BearerTokenValidator | None:
    """Get cached bearer token validator, when local verification is enabled.

    Uses lru_cache so the instance-level JWKS cache survives across requests.

    Returns:
        BearerTokenValidator instance, or None when tokens are checked by
        calling the identity provider
    """
    settings = get_identity_provider_settings()
    if not settings.verify_tokens_locally:
        return None
    return BearerTokenValidator(
        issuer_url=settings.issuer_url,
        audience=settings.jwt_audience,
        probe=DefaultBearerTokenValidatorProbe(),
        jwks_cache_ttl=timedelta(seconds=settings.jwks_cache_ttl_seconds),
        http_timeout=settings.request_timeout_seconds,
    )


@lru_cache
def get_identity_provider() -> IIdentityProvider:
    """Get cached identity provider client.

    Returns:
        GoTrueIdentityProvider configured from identity provider settings
    """
    settings = get_identity_provider_settings()
    return GoTrueIdentityProvider(
        base_url=settings.url,
        anon_key=settings.anon_key.get_secret_value(),
        service_role_key=settings.service_role_key.get_secret_value(),
        timeout=settings.request_timeout_seconds,
        token_validator=get_bearer_token_validator(),
    )
