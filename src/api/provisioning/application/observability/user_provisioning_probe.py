"""Protocol for single-user provisioning observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class UserProvisioningProbe(Protocol):
    """Domain probe for the create-user and invite-user operations."""

    def user_created(self, user_id: str, email: str, team_id: str | None) -> None:
        """Record that a user was created directly."""
        ...

    def user_invited(self, user_id: str, email: str) -> None:
        """Record that a user was invited."""
        ...

    def identity_provisioning_failed(self, email: str, error: str) -> None:
        """Record that the identity provider refused a user."""
        ...

    def invite_profile_write_failed(self, user_id: str, error: str) -> None:
        """Record that an invited user's profile could not be written."""
        ...

    def mobile_number_preference_saved(self, user_id: str) -> None:
        """Record that a mobile number was kept in profile preferences."""
        ...

    def mobile_number_preference_failed(self, user_id: str, error: str) -> None:
        """Record that keeping the mobile number in preferences failed."""
        ...

    def team_assignment_failed(self, user_id: str, team_id: str, error: str) -> None:
        """Record that a created user could not be added to a team."""
        ...

    def with_context(self, context: ObservationContext) -> UserProvisioningProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultUserProvisioningProbe:
    """Default implementation of UserProvisioningProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultUserProvisioningProbe:
        """Create a new probe with observation context bound."""
        return DefaultUserProvisioningProbe(logger=self._logger, context=context)

    def user_created(self, user_id: str, email: str, team_id: str | None) -> None:
        self._logger.info(
            "user_created",
            user_id=user_id,
            email=email,
            team_id=team_id,
            **self._get_context_kwargs(),
        )

    def user_invited(self, user_id: str, email: str) -> None:
        self._logger.info(
            "user_invited",
            user_id=user_id,
            email=email,
            **self._get_context_kwargs(),
        )

    def identity_provisioning_failed(self, email: str, error: str) -> None:
        self._logger.warning(
            "identity_provisioning_failed",
            email=email,
            error=error,
            **self._get_context_kwargs(),
        )

    def invite_profile_write_failed(self, user_id: str, error: str) -> None:
        self._logger.error(
            "invite_profile_write_failed",
            user_id=user_id,
            error=error,
            **self._get_context_kwargs(),
        )

    def mobile_number_preference_saved(self, user_id: str) -> None:
        self._logger.info(
            "mobile_number_preference_saved",
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def mobile_number_preference_failed(self, user_id: str, error: str) -> None:
        self._logger.warning(
            "mobile_number_preference_failed",
            user_id=user_id,
            error=error,
            **self._get_context_kwargs(),
        )

    def team_assignment_failed(self, user_id: str, team_id: str, error: str) -> None:
        self._logger.warning(
            "team_assignment_failed",
            user_id=user_id,
            team_id=team_id,
            error=error,
            **self._get_context_kwargs(),
        )
