"""Domain probe for provisioning HTTP routes."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class ProvisioningRouteProbe(Protocol):
    """Domain probe for provisioning route handlers."""

    def request_rejected(self, operation: str, status_code: int, reason: str) -> None:
        """Record that a request was answered with a client error."""
        ...

    def request_failed(self, operation: str, error: Exception) -> None:
        """Record that a request failed with an unexpected exception."""
        ...

    def with_context(self, context: ObservationContext) -> ProvisioningRouteProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultProvisioningRouteProbe:
    """Default implementation of ProvisioningRouteProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultProvisioningRouteProbe:
        """Create a new probe with observation context bound."""
        return DefaultProvisioningRouteProbe(logger=self._logger, context=context)

    def request_rejected(self, operation: str, status_code: int, reason: str) -> None:
        self._logger.info(
            "provisioning_request_rejected",
            operation=operation,
            status_code=status_code,
            reason=reason,
            **self._get_context_kwargs(),
        )

    def request_failed(self, operation: str, error: Exception) -> None:
        self._logger.error(
            "provisioning_request_failed",
            operation=operation,
            error=str(error),
            error_type=type(error).__name__,
            exc_info=error,
            **self._get_context_kwargs(),
        )
