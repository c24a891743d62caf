"""Domain probe for identity provider calls."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class IdentityProviderProbe(Protocol):
    """Domain probe for identity provider operations."""

    def identity_provisioned(self, operation: str, user_id: str) -> None:
        """Record that the provider created or invited an identity."""
        ...

    def caller_resolved(self, user_id: str, verified_locally: bool) -> None:
        """Record that a bearer token resolved to an identity."""
        ...

    def caller_rejected(self, status_code: int | None, reason: str) -> None:
        """Record that a bearer token was not accepted."""
        ...

    def provider_request_failed(
        self, operation: str, status_code: int | None, error: str
    ) -> None:
        """Record that a provider request failed."""
        ...

    def with_context(self, context: ObservationContext) -> IdentityProviderProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultIdentityProviderProbe:
    """Default implementation of IdentityProviderProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultIdentityProviderProbe:
        """Create a new probe with observation context bound."""
        return DefaultIdentityProviderProbe(logger=self._logger, context=context)

    def identity_provisioned(self, operation: str, user_id: str) -> None:
        self._logger.info(
            "identity_provisioned",
            operation=operation,
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def caller_resolved(self, user_id: str, verified_locally: bool) -> None:
        self._logger.debug(
            "identity_caller_resolved",
            user_id=user_id,
            verified_locally=verified_locally,
            **self._get_context_kwargs(),
        )

    def caller_rejected(self, status_code: int | None, reason: str) -> None:
        self._logger.info(
            "identity_caller_rejected",
            status_code=status_code,
            reason=reason,
            **self._get_context_kwargs(),
        )

    def provider_request_failed(
        self, operation: str, status_code: int | None, error: str
    ) -> None:
        self._logger.warning(
            "identity_provider_request_failed",
            operation=operation,
            status_code=status_code,
            error=error,
            **self._get_context_kwargs(),
        )
