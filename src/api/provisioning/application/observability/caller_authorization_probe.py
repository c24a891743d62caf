"""Protocol for caller authorization observability.

Captures who was allowed (or refused) to run a provisioning function.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class CallerAuthorizationProbe(Protocol):
    """Domain probe for caller authorization."""

    def caller_authorized(self, caller_id: str, role: str) -> None:
        """Record that an owner or admin was admitted."""
        ...

    def caller_unauthenticated(self, reason: str) -> None:
        """Record that no caller identity could be resolved."""
        ...

    def caller_forbidden(self, caller_id: str, role: str | None) -> None:
        """Record that a resolved caller lacks an administrative role."""
        ...

    def with_context(self, context: ObservationContext) -> CallerAuthorizationProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultCallerAuthorizationProbe:
    """Default implementation of CallerAuthorizationProbe using structlog."""

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
    ) -> DefaultCallerAuthorizationProbe:
        """Create a new probe with observation context bound."""
        return DefaultCallerAuthorizationProbe(logger=self._logger, context=context)

    def caller_authorized(self, caller_id: str, role: str) -> None:
        self._logger.info(
            "provisioning_caller_authorized",
            caller_id=caller_id,
            role=role,
            **self._get_context_kwargs(),
        )

    def caller_unauthenticated(self, reason: str) -> None:
        self._logger.warning(
            "provisioning_caller_unauthenticated",
            reason=reason,
            **self._get_context_kwargs(),
        )

    def caller_forbidden(self, caller_id: str, role: str | None) -> None:
        self._logger.warning(
            "provisioning_caller_forbidden",
            caller_id=caller_id,
            role=role,
            **self._get_context_kwargs(),
        )
