"""Domain probe for bearer-token validation.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events related to access-token validation.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class BearerTokenValidatorProbe(Protocol):
    """Domain probe for bearer-token validation operations."""

    def token_accepted(self, user_id: str) -> None:
        """Record that a token was successfully validated."""
        ...

    def token_rejected(self, reason: str) -> None:
        """Record that token validation failed."""
        ...

    def jwks_fetched(self, key_count: int) -> None:
        """Record that JWKS was fetched from the identity provider."""
        ...

    def jwks_cache_hit(self) -> None:
        """Record that JWKS was served from cache."""
        ...

    def jwks_fetch_failed(self, error: str) -> None:
        """Record that JWKS fetch failed."""
        ...

    def with_context(self, context: ObservationContext) -> BearerTokenValidatorProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultBearerTokenValidatorProbe:
    """Default implementation of BearerTokenValidatorProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(
        self, context: ObservationContext
    ) -> DefaultBearerTokenValidatorProbe:
        """Create a new probe with observation context bound."""
        return DefaultBearerTokenValidatorProbe(logger=self._logger, context=context)

    def token_accepted(self, user_id: str) -> None:
        self._logger.debug(
            "bearer_token_accepted",
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def token_rejected(self, reason: str) -> None:
        self._logger.warning(
            "bearer_token_rejected",
            reason=reason,
            **self._get_context_kwargs(),
        )

    def jwks_fetched(self, key_count: int) -> None:
        self._logger.info(
            "jwks_fetched",
            key_count=key_count,
            **self._get_context_kwargs(),
        )

    def jwks_cache_hit(self) -> None:
        self._logger.debug(
            "jwks_cache_hit",
            **self._get_context_kwargs(),
        )

    def jwks_fetch_failed(self, error: str) -> None:
        self._logger.error(
            "jwks_fetch_failed",
            error=error,
            **self._get_context_kwargs(),
        )
