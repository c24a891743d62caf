"""Protocol for bulk import observability.

Defines the interface for domain probes that capture domain events of the
bulk import orchestrator: batch lifecycle, per-row outcomes, and team
resolution.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class BulkImportProbe(Protocol):
    """Domain probe for bulk import operations."""

    def batch_started(self, total: int, mode: str, team_match: str) -> None:
        """Record that a batch began processing."""
        ...

    def batch_completed(self, total: int, succeeded: int, failed: int) -> None:
        """Record that every row of a batch has a result."""
        ...

    def batch_deadline_exceeded(self, remaining: int, timeout_seconds: float) -> None:
        """Record that the batch ran out of time with rows left unprocessed."""
        ...

    def row_provisioned(self, email: str, user_id: str, team_assigned: bool) -> None:
        """Record that a row was provisioned."""
        ...

    def row_failed(self, email: str, reason: str) -> None:
        """Record that a row failed for an expected reason."""
        ...

    def row_crashed(self, email: str, error: Exception) -> None:
        """Record that a row failed with an unexpected exception."""
        ...

    def row_timed_out(self, email: str, timeout_seconds: float) -> None:
        """Record that a row exceeded its time limit."""
        ...

    def identity_orphaned(self, email: str, user_id: str, reason: str) -> None:
        """Record an identity left without a profile, for manual reconciliation."""
        ...

    def team_resolved(self, reference: str, team_id: str, cached: bool) -> None:
        """Record that a team reference resolved to an existing team."""
        ...

    def team_not_found(self, reference: str, team_match: str) -> None:
        """Record that a team reference did not match any team."""
        ...

    def team_lookup_failed(self, reference: str, error: Exception) -> None:
        """Record that looking up a team raised an error."""
        ...

    def membership_failed(self, team_id: str, user_id: str, error: str) -> None:
        """Record that team assignment failed for a provisioned row."""
        ...

    def with_context(self, context: ObservationContext) -> BulkImportProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultBulkImportProbe:
    """Default implementation of BulkImportProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultBulkImportProbe:
        """Create a new probe with observation context bound."""
        return DefaultBulkImportProbe(logger=self._logger, context=context)

    def batch_started(self, total: int, mode: str, team_match: str) -> None:
        """Record that a batch began processing."""
        self._logger.info(
            "bulk_import_started",
            total=total,
            mode=mode,
            team_match=team_match,
            **self._get_context_kwargs(),
        )

    def batch_completed(self, total: int, succeeded: int, failed: int) -> None:
        """Record that every row of a batch has a result."""
        self._logger.info(
            "bulk_import_completed",
            total=total,
            succeeded=succeeded,
            failed=failed,
            **self._get_context_kwargs(),
        )

    def batch_deadline_exceeded(self, remaining: int, timeout_seconds: float) -> None:
        """Record that the batch ran out of time with rows left unprocessed."""
        self._logger.warning(
            "bulk_import_deadline_exceeded",
            remaining=remaining,
            timeout_seconds=timeout_seconds,
            **self._get_context_kwargs(),
        )

    def row_provisioned(self, email: str, user_id: str, team_assigned: bool) -> None:
        """Record that a row was provisioned."""
        self._logger.info(
            "bulk_import_row_provisioned",
            email=email,
            user_id=user_id,
            team_assigned=team_assigned,
            **self._get_context_kwargs(),
        )

    def row_failed(self, email: str, reason: str) -> None:
        """Record that a row failed for an expected reason."""
        self._logger.warning(
            "bulk_import_row_failed",
            email=email,
            reason=reason,
            **self._get_context_kwargs(),
        )

    def row_crashed(self, email: str, error: Exception) -> None:
        """Record that a row failed with an unexpected exception."""
        self._logger.error(
            "bulk_import_row_crashed",
            email=email,
            error=str(error),
            error_type=type(error).__name__,
            exc_info=error,
            **self._get_context_kwargs(),
        )

    def row_timed_out(self, email: str, timeout_seconds: float) -> None:
        """Record that a row exceeded its time limit."""
        self._logger.warning(
            "bulk_import_row_timed_out",
            email=email,
            timeout_seconds=timeout_seconds,
            **self._get_context_kwargs(),
        )

    def identity_orphaned(self, email: str, user_id: str, reason: str) -> None:
        """Record an identity left without a profile, for manual reconciliation."""
        self._logger.warning(
            "bulk_import_identity_orphaned",
            email=email,
            user_id=user_id,
            reason=reason,
            **self._get_context_kwargs(),
        )

    def team_resolved(self, reference: str, team_id: str, cached: bool) -> None:
        """Record that a team reference resolved to an existing team."""
        self._logger.debug(
            "bulk_import_team_resolved",
            reference=reference,
            team_id=team_id,
            cached=cached,
            **self._get_context_kwargs(),
        )

    def team_not_found(self, reference: str, team_match: str) -> None:
        """Record that a team reference did not match any team."""
        self._logger.info(
            "bulk_import_team_not_found",
            reference=reference,
            team_match=team_match,
            **self._get_context_kwargs(),
        )

    def team_lookup_failed(self, reference: str, error: Exception) -> None:
        """Record that looking up a team raised an error."""
        self._logger.warning(
            "bulk_import_team_lookup_failed",
            reference=reference,
            error=str(error),
            **self._get_context_kwargs(),
        )

    def membership_failed(self, team_id: str, user_id: str, error: str) -> None:
        """Record that team assignment failed for a provisioned row."""
        self._logger.warning(
            "bulk_import_membership_failed",
            team_id=team_id,
            user_id=user_id,
            error=error,
            **self._get_context_kwargs(),
        )
