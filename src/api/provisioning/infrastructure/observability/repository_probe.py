"""Domain probes for provisioning repository operations.

Following Domain-Oriented Observability patterns, these probes capture
domain-significant events related to profile and team persistence.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class ProfileRepositoryProbe(Protocol):
    """Domain probe for profile repository operations."""

    def profile_upserted(self, user_id: str, columns: list[str]) -> None:
        """Record that a profile was written with the given columns."""
        ...

    def profile_write_rejected(
        self, user_id: str, kind: str, sqlstate: str | None, error: str
    ) -> None:
        """Record that the database rejected a profile write."""
        ...

    def preferences_merged(self, user_id: str, keys: list[str]) -> None:
        """Record that keys were merged into a profile's preferences."""
        ...

    def role_not_found(self, user_id: str) -> None:
        """Record that a user has no profile to read a role from."""
        ...

    def with_context(self, context: ObservationContext) -> ProfileRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class TeamRepositoryProbe(Protocol):
    """Domain probe for team repository operations."""

    def team_lookup(self, reference: str, by: str, found: bool) -> None:
        """Record the outcome of looking up a team by name or id."""
        ...

    def membership_created(self, team_id: str, user_id: str) -> None:
        """Record that a user was added to a team."""
        ...

    def membership_already_exists(self, team_id: str, user_id: str) -> None:
        """Record that a membership insert hit an existing membership."""
        ...

    def membership_write_failed(
        self, team_id: str, user_id: str, sqlstate: str | None, error: str
    ) -> None:
        """Record that a membership insert failed."""
        ...

    def with_context(self, context: ObservationContext) -> TeamRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultProfileRepositoryProbe:
    """Default implementation of ProfileRepositoryProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultProfileRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultProfileRepositoryProbe(logger=self._logger, context=context)

    def profile_upserted(self, user_id: str, columns: list[str]) -> None:
        """Record that a profile was written with the given columns."""
        self._logger.debug(
            "profile_upserted",
            user_id=user_id,
            columns=columns,
            **self._get_context_kwargs(),
        )

    def profile_write_rejected(
        self, user_id: str, kind: str, sqlstate: str | None, error: str
    ) -> None:
        """Record that the database rejected a profile write."""
        self._logger.warning(
            "profile_write_rejected",
            user_id=user_id,
            kind=kind,
            sqlstate=sqlstate,
            error=error,
            **self._get_context_kwargs(),
        )

    def preferences_merged(self, user_id: str, keys: list[str]) -> None:
        """Record that keys were merged into a profile's preferences."""
        self._logger.debug(
            "profile_preferences_merged",
            user_id=user_id,
            keys=keys,
            **self._get_context_kwargs(),
        )

    def role_not_found(self, user_id: str) -> None:
        """Record that a user has no profile to read a role from."""
        self._logger.debug(
            "profile_role_not_found",
            user_id=user_id,
            **self._get_context_kwargs(),
        )


class DefaultTeamRepositoryProbe:
    """Default implementation of TeamRepositoryProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultTeamRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultTeamRepositoryProbe(logger=self._logger, context=context)

    def team_lookup(self, reference: str, by: str, found: bool) -> None:
        """Record the outcome of looking up a team by name or id."""
        self._logger.debug(
            "team_lookup",
            reference=reference,
            by=by,
            found=found,
            **self._get_context_kwargs(),
        )

    def membership_created(self, team_id: str, user_id: str) -> None:
        """Record that a user was added to a team."""
        self._logger.info(
            "team_membership_created",
            team_id=team_id,
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def membership_already_exists(self, team_id: str, user_id: str) -> None:
        """Record that a membership insert hit an existing membership."""
        self._logger.info(
            "team_membership_already_exists",
            team_id=team_id,
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def membership_write_failed(
        self, team_id: str, user_id: str, sqlstate: str | None, error: str
    ) -> None:
        """Record that a membership insert failed."""
        self._logger.warning(
            "team_membership_write_failed",
            team_id=team_id,
            user_id=user_id,
            sqlstate=sqlstate,
            error=error,
            **self._get_context_kwargs(),
        )
