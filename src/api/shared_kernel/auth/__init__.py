"""Authentication shared kernel module."""

from shared_kernel.auth.observability import (
    BearerTokenValidatorProbe,
    DefaultBearerTokenValidatorProbe,
)
from shared_kernel.auth.token_validator import (
    BearerTokenValidator,
    InvalidTokenError,
    JWKSUnavailableError,
    TokenClaims,
)

__all__ = [
    "BearerTokenValidator",
    "BearerTokenValidatorProbe",
    "DefaultBearerTokenValidatorProbe",
    "InvalidTokenError",
    "JWKSUnavailableError",
    "TokenClaims",
]
