"""Protocol for profile linkage observability.

Profile writes step down through column tiers when the profile table lacks
optional columns; this probe makes each step visible.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class ProfileLinkProbe(Protocol):
    """Domain probe for linking a profile to a provisioned identity."""

    def profile_linked(self, user_id: str, tier: str) -> None:
        """Record that a profile was written at the given column tier."""
        ...

    def profile_tier_rejected(self, user_id: str, tier: str, error: str) -> None:
        """Record that a tier was rejected for an unknown column."""
        ...

    def profile_link_failed(self, user_id: str, error: str) -> None:
        """Record that no tier could be written."""
        ...

    def with_context(self, context: ObservationContext) -> ProfileLinkProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultProfileLinkProbe:
    """Default implementation of ProfileLinkProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultProfileLinkProbe:
        """Create a new probe with observation context bound."""
        return DefaultProfileLinkProbe(logger=self._logger, context=context)

    def profile_linked(self, user_id: str, tier: str) -> None:
        """Record that a profile was written at the given column tier."""
        self._logger.info(
            "profile_linked",
            user_id=user_id,
            tier=tier,
            **self._get_context_kwargs(),
        )

    def profile_tier_rejected(self, user_id: str, tier: str, error: str) -> None:
        """Record that a tier was rejected for an unknown column."""
        self._logger.warning(
            "profile_tier_rejected",
            user_id=user_id,
            tier=tier,
            error=error,
            **self._get_context_kwargs(),
        )

    def profile_link_failed(self, user_id: str, error: str) -> None:
        """Record that no tier could be written."""
        self._logger.error(
            "profile_link_failed",
            user_id=user_id,
            error=error,
            **self._get_context_kwargs(),
        )
